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

"""Git-style ignore rules evaluated while walking a tree.

Each ``.gitignore`` contributes a rule set anchored at its own directory.
Rule sets are consulted from the root downwards and patterns in file order,
so the last matching pattern wins: deeper files override shallower ones and
``!pattern`` re-includes. Patterns are compiled with ``pathspec``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

import pathspec

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pathspec.pattern import Pattern

GITIGNORE_FILENAME: Final[str] = ".gitignore"
VCS_DIRNAME: Final[str] = ".git"
_PATTERN_STYLE: Final[str] = "gitignore"


@dataclass(slots=True, frozen=True)
class IgnoreRuleSet:
    """Compiled patterns anchored at ``base``."""

    base: Path
    patterns: tuple[Pattern, ...]
    source: Path | None = None

    @classmethod
    def from_lines(cls, base: Path, lines: Iterable[str], *, source: Path | None = None) -> IgnoreRuleSet:
        """Compile gitignore-style ``lines`` relative to ``base``."""
        spec = pathspec.PathSpec.from_lines(_PATTERN_STYLE, lines)
        patterns = tuple(pattern for pattern in spec.patterns if pattern.include is not None)
        return cls(base=base, patterns=patterns, source=source)

    def verdict(self, path: Path, *, is_dir: bool) -> bool | None:
        """Return ``True`` (ignored), ``False`` (re-included) or ``None`` (no match)."""
        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if is_dir:
            relative = f"{relative}/"
        result: bool | None = None
        for pattern in self.patterns:
            if pattern.match_file(relative) is not None:
                result = bool(pattern.include)
        return result


class IgnoreMatcher:
    """Stack of rule sets applying to one directory during a walk."""

    __slots__ = ("_rule_sets",)

    def __init__(self, rule_sets: Iterable[IgnoreRuleSet] = ()) -> None:
        self._rule_sets: tuple[IgnoreRuleSet, ...] = tuple(rule_sets)

    @property
    def rule_sets(self) -> tuple[IgnoreRuleSet, ...]:
        return self._rule_sets

    def with_rules(self, rule_set: IgnoreRuleSet | None) -> IgnoreMatcher:
        """Return a matcher extended with ``rule_set`` (unchanged when ``None``)."""
        if rule_set is None or not rule_set.patterns:
            return self
        return IgnoreMatcher((*self._rule_sets, rule_set))

    def is_ignored(self, path: Path, *, is_dir: bool) -> bool:
        ignored = False
        for rule_set in self._rule_sets:
            verdict = rule_set.verdict(path, is_dir=is_dir)
            if verdict is not None:
                ignored = verdict
        return ignored


def load_ignore_file(path: Path, *, base: Path) -> IgnoreRuleSet | None:
    """Read an ignore file into a rule set anchored at ``base``.

    Returns:
        The compiled rule set, or ``None`` when the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    if not path.is_file():
        return None
    text = path.read_bytes().decode("utf-8", errors="replace")
    return IgnoreRuleSet.from_lines(base, text.splitlines(), source=path)


def vcs_root_rules(root: Path) -> IgnoreRuleSet | None:
    """Return the repository-wide exclude rules stored under ``.git/info``."""
    return load_ignore_file(root / VCS_DIRNAME / "info" / "exclude", base=root)


def has_vcs_metadata(root: Path) -> bool:
    """Return whether ``root`` carries a ``.git`` directory (or worktree file)."""
    return (root / VCS_DIRNAME).exists()


__all__ = [
    "GITIGNORE_FILENAME",
    "VCS_DIRNAME",
    "IgnoreMatcher",
    "IgnoreRuleSet",
    "has_vcs_metadata",
    "load_ignore_file",
    "vcs_root_rules",
]
