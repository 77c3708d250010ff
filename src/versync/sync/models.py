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

"""Value types exchanged between the synchronisation engine and its callers."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from versync._internal.exceptions import VersyncValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from versync.core.model_types import ManifestFormat, Operation
    from versync.version import VersionValue


def _display_path(path: Path, root: Path | None) -> str:
    if root is None:
        return path.as_posix()
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


@dataclass(slots=True, frozen=True)
class ManifestEntry:
    """A manifest read during validation.

    Attributes:
        path: Location of the file.
        format: Adapter format that parsed it.
        declared: Version text exactly as declared in the file.
        content: Full decoded file content at read time.
    """

    path: Path
    format: ManifestFormat
    declared: str
    content: str

    def matches(self, version: VersionValue) -> bool:
        """Return whether the declared text equals the canonical ``version``."""
        return self.declared.strip() == str(version)


@dataclass(slots=True, frozen=True)
class Mismatch:
    path: Path
    format: ManifestFormat
    declared: str
    expected: str


class VersionMismatchError(VersyncValidationError):
    """Raised when manifests disagree with the root version before a bump or reset."""

    def __init__(self, mismatches: Sequence[Mismatch]) -> None:
        """Initialise the error.

        Args:
            mismatches: Every manifest whose declared version differs from the root.
        """
        self.mismatches: tuple[Mismatch, ...] = tuple(mismatches)
        lines = [f"{item.path}: {item.declared!r} (expected {item.expected!r})" for item in self.mismatches]
        rendered = "; ".join(lines)
        super().__init__(f"Manifest versions do not match the root VERSION: {rendered}. Run `versync sync` first.")


@dataclass(slots=True, frozen=True)
class StagedChange:
    """An in-memory rewrite of one file awaiting commit."""

    path: Path
    format: ManifestFormat
    original: str
    updated: str
    old_version: str
    new_version: str

    def diff(self, *, root: Path | None = None) -> str:
        """Render the change as a unified diff, paths relative to ``root`` when given."""
        name = _display_path(self.path, root)
        return "".join(
            difflib.unified_diff(
                self.original.splitlines(keepends=True),
                self.updated.splitlines(keepends=True),
                fromfile=f"a/{name}",
                tofile=f"b/{name}",
            ),
        )


@dataclass(slots=True, frozen=True)
class SyncResult:
    """Outcome of a mutating operation (bump, sync or reset)."""

    operation: Operation
    root: Path
    previous_version: VersionValue
    new_version: VersionValue
    cascade: bool
    dry_run: bool
    changes: tuple[StagedChange, ...] = ()
    committed: tuple[Path, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.changes)

    def render_diff(self) -> str:
        return "".join(change.diff(root=self.root) for change in self.changes)


@dataclass(slots=True, frozen=True)
class VerifyReport:
    """Read-only comparison of every manifest against the root version."""

    root: Path
    root_version: VersionValue
    cascade: bool
    entries: tuple[ManifestEntry, ...] = ()
    mismatches: tuple[Mismatch, ...] = ()

    @property
    def in_sync(self) -> bool:
        return not self.mismatches


__all__ = [
    "ManifestEntry",
    "Mismatch",
    "StagedChange",
    "SyncResult",
    "VerifyReport",
    "VersionMismatchError",
]
