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

"""All-or-nothing commit of staged changes with best-effort rollback.

Writes happen in the staged order. Before each write the file is re-read and
compared with the content captured at staging time. If any step fails, every
file written so far is restored to its captured original in reverse order.
There is no retry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from versync._internal.exceptions import VersyncError
from versync._internal.logging_utils import structured_extra
from versync.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .models import StagedChange
    from .store import FileStore

logger: logging.Logger = logging.getLogger("versync.engine")


class CommitError(VersyncError):
    """Base error for failures while writing staged changes."""


class ConcurrentModificationDetectedError(CommitError):
    """Raised when a file changed on disk between staging and commit."""

    def __init__(self, path: Path) -> None:
        """Initialise the error.

        Args:
            path: File whose on-disk content no longer matches the staged original.
        """
        self.path = path
        super().__init__(f"{path} was modified by another process during the update; no changes were kept")


class PartialWriteRecoveredError(CommitError):
    """Raised when a commit failed part-way and every written file was restored."""

    def __init__(self, path: Path, restored: Sequence[Path]) -> None:
        """Initialise the error.

        Args:
            path: File whose write failed.
            restored: Files that were rolled back to their original content.
        """
        self.path = path
        self.restored: tuple[Path, ...] = tuple(restored)
        super().__init__(
            f"Failed to write {path}; restored {len(self.restored)} file(s) to their original content",
        )


class PartialWriteUnrecoverableError(CommitError):
    """Raised when rollback itself failed and files remain modified."""

    def __init__(self, modified: Sequence[Path]) -> None:
        """Initialise the error.

        Args:
            modified: Every file left with updated (or unknown) content.
        """
        self.modified: tuple[Path, ...] = tuple(modified)
        listing = ", ".join(str(path) for path in self.modified)
        super().__init__(f"Update failed and could not be rolled back; manual repair required for: {listing}")


def _left_modified(change: StagedChange, store: FileStore) -> bool:
    # A refused write leaves the original in place; only a torn or unreadable file needs restoring.
    try:
        return store.read_text(change.path) != change.original
    except (OSError, UnicodeError):
        return True


def _restore(changes: Sequence[StagedChange], store: FileStore) -> list[Path]:
    failed: list[Path] = []
    for change in reversed(changes):
        try:
            store.write_text(change.path, change.original)
        except OSError as exc:
            logger.error(
                "Could not restore %s: %s",
                change.path,
                exc,
                extra=structured_extra(LogComponent.ENGINE, path=change.path),
            )
            failed.append(change.path)
        else:
            logger.info(
                "Restored %s",
                change.path,
                extra=structured_extra(LogComponent.ENGINE, path=change.path),
            )
    return failed


def commit_changes(changes: Sequence[StagedChange], store: FileStore) -> tuple[Path, ...]:
    """Write ``changes`` in order, rolling everything back on the first failure.

    Args:
        changes: Staged rewrites in commit order.
        store: File access used for the verification read, the write and rollback.

    Returns:
        Paths written, in commit order.

    Raises:
        ConcurrentModificationDetectedError: A file changed since staging; earlier
            writes were restored.
        PartialWriteRecoveredError: A read or write failed; earlier writes were restored.
        PartialWriteUnrecoverableError: Rollback failed for at least one file.
    """
    written: list[StagedChange] = []
    for change in changes:
        write_attempted = False
        try:
            current = store.read_text(change.path)
            if current != change.original:
                raise ConcurrentModificationDetectedError(change.path)
            write_attempted = True
            store.write_text(change.path, change.updated)
        except (OSError, UnicodeError, ConcurrentModificationDetectedError) as exc:
            logger.warning(
                "Commit failed at %s: %s",
                change.path,
                exc,
                extra=structured_extra(
                    LogComponent.ENGINE,
                    path=change.path,
                    counts={"written": len(written), "staged": len(changes)},
                ),
            )
            to_restore = list(written)
            if write_attempted and _left_modified(change, store):
                to_restore.append(change)
            failed = _restore(to_restore, store)
            if failed:
                raise PartialWriteUnrecoverableError(failed) from exc
            if isinstance(exc, ConcurrentModificationDetectedError):
                raise
            raise PartialWriteRecoveredError(change.path, [item.path for item in to_restore]) from exc
        written.append(change)
    return tuple(change.path for change in written)


__all__ = [
    "CommitError",
    "ConcurrentModificationDetectedError",
    "PartialWriteRecoveredError",
    "PartialWriteUnrecoverableError",
    "commit_changes",
]
