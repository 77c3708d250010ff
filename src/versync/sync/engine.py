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

"""The synchronisation engine.

Every operation runs one pass of the state machine::

    idle -> discovering -> validating -> staging -> committing -> done

with ``failed`` reachable from any step. Discovery and validation finish
before anything is staged, so policy or parse errors never touch the disk.
Read-only operations stop after validation.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from versync._internal.logging_utils import structured_extra
from versync.cascade.policies import ReadFailure, UnreadableManifestError, enforce_manifest_readability
from versync.config.constants import DEFAULT_RESET_VERSION
from versync.config.models import Config
from versync.core.model_types import BumpKind, EngineState, LogComponent, ManifestFormat, Operation
from versync.discovery.service import discover
from versync.manifest.base import ManifestError
from versync.manifest.registry import adapter_for
from versync.version import InvalidVersionFormatError, VersionValue

from .commit import commit_changes
from .models import ManifestEntry, Mismatch, StagedChange, SyncResult, VerifyReport, VersionMismatchError
from .store import LocalFileStore

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from versync.discovery.models import DiscoveryResult

    from .store import FileStore

logger: logging.Logger = logging.getLogger("versync.engine")


@dataclass(slots=True, frozen=True)
class _Snapshot:
    discovery: DiscoveryResult
    root_content: str
    root_version: VersionValue
    entries: tuple[ManifestEntry, ...]


def _mismatches(entries: Sequence[ManifestEntry], expected: VersionValue) -> tuple[Mismatch, ...]:
    return tuple(
        Mismatch(path=entry.path, format=entry.format, declared=entry.declared, expected=str(expected))
        for entry in entries
        if not entry.matches(expected)
    )


class SyncEngine:
    """Keep the root ``VERSION`` and every discovered manifest in agreement.

    Args:
        root: Project root; never inferred from the working directory.
        config: Discovery defaults (cascade mode, ignore handling, excludes).
        store: File access, replaceable in tests to inject failures.
    """

    def __init__(
        self,
        root: Path,
        *,
        config: Config | None = None,
        store: FileStore | None = None,
    ) -> None:
        self.root = root.resolve()
        self.config = config or Config()
        self.store: FileStore = store or LocalFileStore()
        self.state = EngineState.IDLE
        self.history: list[EngineState] = [EngineState.IDLE]

    def _transition(self, state: EngineState, operation: Operation) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(
            "%s: entering %s",
            operation,
            state,
            extra=structured_extra(LogComponent.ENGINE, operation=operation, state=state),
        )

    @contextmanager
    def _run(self, operation: Operation) -> Iterator[None]:
        self.state = EngineState.IDLE
        self.history = [EngineState.IDLE]
        try:
            yield
        except Exception:
            self._transition(EngineState.FAILED, operation)
            raise

    def _cascade(self, cascade: bool | None) -> bool:
        return self.config.cascade if cascade is None else cascade

    def _discover(self, operation: Operation, cascade: bool) -> DiscoveryResult:
        self._transition(EngineState.DISCOVERING, operation)
        return discover(
            self.root,
            cascade=cascade,
            respect_gitignore=self.config.respect_gitignore,
            extra_excludes=self.config.exclude,
        )

    def _read_root(self, discovery: DiscoveryResult) -> tuple[str, VersionValue]:
        path = discovery.root_record
        try:
            content = self.store.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise UnreadableManifestError([path], [str(exc)]) from exc
        try:
            declared = adapter_for(ManifestFormat.VERSION_FILE).read_version(content)
        except ManifestError as exc:
            raise InvalidVersionFormatError(content.strip(), source=str(path)) from exc
        return content, VersionValue.parse(declared, source=str(path))

    def _read_entries(self, discovery: DiscoveryResult) -> tuple[ManifestEntry, ...]:
        entries: list[ManifestEntry] = []
        failures: list[ReadFailure] = []
        for location in discovery.manifests:
            try:
                content = self.store.read_text(location.path)
                declared = adapter_for(location.format).read_version(content)
            except (OSError, UnicodeDecodeError, ManifestError) as exc:
                failures.append(ReadFailure(path=location.path, reason=str(exc)))
                continue
            entries.append(
                ManifestEntry(path=location.path, format=location.format, declared=declared, content=content),
            )
        enforce_manifest_readability(failures)
        for entry in entries:
            _ = VersionValue.parse(entry.declared, source=str(entry.path))
        return tuple(entries)

    def _load(self, operation: Operation, cascade: bool) -> _Snapshot:
        discovery = self._discover(operation, cascade)
        self._transition(EngineState.VALIDATING, operation)
        root_content, root_version = self._read_root(discovery)
        entries = self._read_entries(discovery)
        return _Snapshot(
            discovery=discovery,
            root_content=root_content,
            root_version=root_version,
            entries=entries,
        )

    def _stage(
        self,
        operation: Operation,
        snapshot: _Snapshot,
        target: VersionValue,
        *,
        write_root: bool,
    ) -> tuple[StagedChange, ...]:
        self._transition(EngineState.STAGING, operation)
        new_text = str(target)
        changes: list[StagedChange] = []
        if write_root:
            root_path = snapshot.discovery.root_record
            updated = adapter_for(ManifestFormat.VERSION_FILE).write_version(snapshot.root_content, new_text)
            if updated != snapshot.root_content:
                changes.append(
                    StagedChange(
                        path=root_path,
                        format=ManifestFormat.VERSION_FILE,
                        original=snapshot.root_content,
                        updated=updated,
                        old_version=str(snapshot.root_version),
                        new_version=new_text,
                    ),
                )
        for entry in snapshot.entries:
            updated = adapter_for(entry.format).write_version(entry.content, new_text)
            if updated == entry.content:
                continue
            changes.append(
                StagedChange(
                    path=entry.path,
                    format=entry.format,
                    original=entry.content,
                    updated=updated,
                    old_version=entry.declared,
                    new_version=new_text,
                ),
            )
        return tuple(changes)

    def _apply(
        self,
        operation: Operation,
        snapshot: _Snapshot,
        target: VersionValue,
        *,
        cascade: bool,
        dry_run: bool,
        write_root: bool,
    ) -> SyncResult:
        started = time.perf_counter()
        changes = self._stage(operation, snapshot, target, write_root=write_root)
        committed: tuple[Path, ...] = ()
        if not dry_run:
            self._transition(EngineState.COMMITTING, operation)
            committed = commit_changes(changes, self.store)
        self._transition(EngineState.DONE, operation)
        logger.info(
            "%s %s -> %s: %d file(s) %s",
            operation,
            snapshot.root_version,
            target,
            len(changes),
            "staged" if dry_run else "written",
            extra=structured_extra(
                LogComponent.ENGINE,
                operation=operation,
                state=EngineState.DONE,
                version=target,
                cascade=cascade,
                dry_run=dry_run,
                counts={"staged": len(changes), "written": len(committed), "manifests": len(snapshot.entries)},
                duration_ms=(time.perf_counter() - started) * 1000,
            ),
        )
        return SyncResult(
            operation=operation,
            root=self.root,
            previous_version=snapshot.root_version,
            new_version=target,
            cascade=cascade,
            dry_run=dry_run,
            changes=changes,
            committed=committed,
        )

    def _require_in_sync(self, snapshot: _Snapshot) -> None:
        mismatches = _mismatches(snapshot.entries, snapshot.root_version)
        if mismatches:
            raise VersionMismatchError(mismatches)

    def bump(
        self,
        kind: BumpKind | str,
        *,
        cascade: bool | None = None,
        dry_run: bool = False,
    ) -> SyncResult:
        """Increment the root version and write it to every manifest.

        Args:
            kind: Component to increment.
            cascade: Walk the whole tree; ``None`` uses the configured default.
            dry_run: Stage and report changes without writing.

        Returns:
            The staged (and, unless ``dry_run``, committed) changes.

        Raises:
            VersionMismatchError: If any manifest disagrees with the root version.
            CascadePolicyError: If discovery finds an unsafe layout.
            CommitError: If writing fails; see ``commit_changes``.
        """
        bump_kind = kind if isinstance(kind, BumpKind) else BumpKind.from_str(kind)
        use_cascade = self._cascade(cascade)
        with self._run(Operation.BUMP):
            snapshot = self._load(Operation.BUMP, use_cascade)
            self._require_in_sync(snapshot)
            target = snapshot.root_version.bump(bump_kind)
            return self._apply(
                Operation.BUMP,
                snapshot,
                target,
                cascade=use_cascade,
                dry_run=dry_run,
                write_root=True,
            )

    def sync(self, *, cascade: bool | None = None, dry_run: bool = False) -> SyncResult:
        """Write the root version into every manifest; the root file is never changed."""
        use_cascade = self._cascade(cascade)
        with self._run(Operation.SYNC):
            snapshot = self._load(Operation.SYNC, use_cascade)
            return self._apply(
                Operation.SYNC,
                snapshot,
                snapshot.root_version,
                cascade=use_cascade,
                dry_run=dry_run,
                write_root=False,
            )

    def reset(
        self,
        target: VersionValue | str = DEFAULT_RESET_VERSION,
        *,
        cascade: bool | None = None,
        dry_run: bool = False,
    ) -> SyncResult:
        """Set the root and every manifest to ``target`` (``0.0.0`` by default).

        Raises:
            InvalidVersionFormatError: If ``target`` is not a valid version.
            VersionMismatchError: If any manifest disagrees with the current root version.
        """
        use_cascade = self._cascade(cascade)
        with self._run(Operation.RESET):
            version = target if isinstance(target, VersionValue) else VersionValue.parse(target, source="reset target")
            snapshot = self._load(Operation.RESET, use_cascade)
            self._require_in_sync(snapshot)
            return self._apply(
                Operation.RESET,
                snapshot,
                version,
                cascade=use_cascade,
                dry_run=dry_run,
                write_root=True,
            )

    def _report(self, operation: Operation, cascade: bool | None) -> VerifyReport:
        use_cascade = self._cascade(cascade)
        with self._run(operation):
            snapshot = self._load(operation, use_cascade)
            mismatches = _mismatches(snapshot.entries, snapshot.root_version)
            self._transition(EngineState.DONE, operation)
            logger.info(
                "%s: %d manifest(s), %d mismatch(es)",
                operation,
                len(snapshot.entries),
                len(mismatches),
                extra=structured_extra(
                    LogComponent.ENGINE,
                    operation=operation,
                    version=snapshot.root_version,
                    cascade=use_cascade,
                    counts={"manifests": len(snapshot.entries), "mismatches": len(mismatches)},
                ),
            )
            return VerifyReport(
                root=self.root,
                root_version=snapshot.root_version,
                cascade=use_cascade,
                entries=snapshot.entries,
                mismatches=mismatches,
            )

    def verify(self, *, cascade: bool | None = None) -> VerifyReport:
        """Compare every manifest with the root version without writing anything."""
        return self._report(Operation.VERIFY, cascade)

    def status(self, *, cascade: bool | None = None) -> VerifyReport:
        return self._report(Operation.STATUS, cascade)

    def current_version(self, *, cascade: bool | None = None) -> VersionValue:
        """Return the version declared by the root record after the layout checks pass."""
        use_cascade = self._cascade(cascade)
        with self._run(Operation.SHOW):
            discovery = self._discover(Operation.SHOW, use_cascade)
            self._transition(EngineState.VALIDATING, Operation.SHOW)
            _, version = self._read_root(discovery)
            self._transition(EngineState.DONE, Operation.SHOW)
            return version


__all__ = ["SyncEngine"]
