# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Semantic version values with strict parsing, ordering, and bump rules.

Parsing accepts ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` after trimming
surrounding whitespace and nothing else: a missing or non-numeric component,
a ``v`` prefix, or a numeric core component with a leading zero (``01.2.3``)
is rejected rather than coerced.

Ordering compares the numeric triple first. A version carrying a prerelease
sorts before the same triple without one, and two prereleases compare as
plain strings. Build metadata never affects ordering but does take part in
equality.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from versync._internal.exceptions import VersyncValidationError
from versync.compat import assert_never
from versync.core.model_types import BumpKind

_IDENTIFIERS: Final[str] = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_NUMERIC: Final[str] = r"0|[1-9][0-9]*"
VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?"
    rf"(?:\+(?P<build>{_IDENTIFIERS}))?$",
)


class InvalidVersionFormatError(VersyncValidationError):
    """Raised when text is not a strict ``MAJOR.MINOR.PATCH`` semantic version."""

    def __init__(self, text: str, *, source: str | None = None) -> None:
        """Initialise the error with the rejected text.

        Args:
            text: The text that failed to parse.
            source: Optional description of where the text came from.
        """
        self.text = text
        self.source = source
        location = f" in {source}" if source else ""
        super().__init__(f"Invalid semantic version{location}: '{text}'")


@dataclass(slots=True, frozen=True)
class VersionValue:
    """Immutable semantic version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        prerelease: Text after ``-`` (without the dash), if any.
        build: Text after ``+`` (without the plus), if any.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"{name} must be a non-negative integer (got {value!r})"
                raise VersyncValidationError(msg)

    @classmethod
    def parse(cls, text: str, *, source: str | None = None) -> VersionValue:
        """Parse ``text`` into a version.

        Args:
            text: Candidate version text; surrounding whitespace is ignored.
            source: Optional description used in error messages.

        Returns:
            The parsed ``VersionValue``.

        Raises:
            InvalidVersionFormatError: If the trimmed text is not a strict semantic version.
        """
        candidate = text.strip()
        match = VERSION_PATTERN.match(candidate)
        if match is None:
            raise InvalidVersionFormatError(candidate, source=source)
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    def bump(self, kind: BumpKind | str) -> VersionValue:
        """Return the next version for ``kind``; prerelease and build are dropped."""
        bump_kind = kind if isinstance(kind, BumpKind) else BumpKind.from_str(kind)
        if bump_kind is BumpKind.MAJOR:
            return VersionValue(self.major + 1, 0, 0)
        if bump_kind is BumpKind.MINOR:
            return VersionValue(self.major, self.minor + 1, 0)
        if bump_kind is BumpKind.PATCH:
            return VersionValue(self.major, self.minor, self.patch + 1)
        assert_never(bump_kind)

    def _precedence_key(self) -> tuple[int, int, int, int, str]:
        # releases (1) sort after prereleases (0) of the same triple
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, "")
        return (self.major, self.minor, self.patch, 0, self.prerelease)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self._precedence_key() <= other._precedence_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self._precedence_key() > other._precedence_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VersionValue):
            return NotImplemented
        return self._precedence_key() >= other._precedence_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text = f"{text}-{self.prerelease}"
        if self.build is not None:
            text = f"{text}+{self.build}"
        return text


def parse_version(text: str, *, source: str | None = None) -> VersionValue:
    """Module-level alias for :meth:`VersionValue.parse`."""
    return VersionValue.parse(text, source=source)


def compare_versions(left: VersionValue, right: VersionValue) -> int:
    """Return ``-1``, ``0`` or ``1`` according to version precedence.

    Build metadata is ignored, so ``1.0.0+a`` and ``1.0.0+b`` compare as ``0``
    even though they are not equal.
    """
    left_key = left._precedence_key()  # noqa: SLF001
    right_key = right._precedence_key()  # noqa: SLF001
    return (left_key > right_key) - (left_key < right_key)


__all__ = [
    "VERSION_PATTERN",
    "InvalidVersionFormatError",
    "VersionValue",
    "compare_versions",
    "parse_version",
]
