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

"""Tree traversal that locates version records and manifests.

The walker never reads versions. It classifies paths and records anything it
refuses to use so that the policy layer can fail closed on it.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from versync._internal.logging_utils import structured_extra
from versync.core.model_types import LogComponent, ManifestFormat, RejectionReason
from versync.manifest.registry import MANIFEST_FILENAMES, detect_format

from .ignore import (
    GITIGNORE_FILENAME,
    IgnoreMatcher,
    IgnoreRuleSet,
    has_vcs_metadata,
    load_ignore_file,
    vcs_root_rules,
)
from .models import DiscoveryResult, ManifestLocation, RejectedPath

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger("versync.discovery")


@dataclass(slots=True)
class _WalkState:
    root: Path
    excludes: IgnoreRuleSet | None
    manifests: list[ManifestLocation] = field(default_factory=list)
    version_records: list[Path] = field(default_factory=list)
    rejected: list[RejectedPath] = field(default_factory=list)

    def excluded(self, path: Path, *, is_dir: bool) -> bool:
        if self.excludes is None:
            return False
        return bool(self.excludes.verdict(path, is_dir=is_dir))

    def reject(self, path: Path, reason: RejectionReason, detail: str = "") -> None:
        self.rejected.append(RejectedPath(path=path, reason=reason, detail=detail))

    def classify(self, path: Path, manifest_format: ManifestFormat) -> None:
        if manifest_format is ManifestFormat.VERSION_FILE:
            self.version_records.append(path)
            if path.parent != self.root:
                self.reject(path, RejectionReason.NESTED_VERSION_RECORD, "version record below the root")
        else:
            self.manifests.append(ManifestLocation(path=path, format=manifest_format))

    def result(self, *, ignore_rules_active: bool) -> DiscoveryResult:
        return DiscoveryResult(
            root=self.root,
            manifests=tuple(self.manifests),
            version_records=tuple(self.version_records),
            rejected=tuple(self.rejected),
            ignore_rules_active=ignore_rules_active,
        )


def _exclude_rules(root: Path, patterns: Sequence[str]) -> IgnoreRuleSet | None:
    cleaned = [pattern for pattern in patterns if pattern.strip()]
    if not cleaned:
        return None
    return IgnoreRuleSet.from_lines(root, cleaned)


def _sorted_entries(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as iterator:
        return sorted(iterator, key=lambda entry: entry.name)


def _walk_directory(
    directory: Path,
    matcher: IgnoreMatcher | None,
    state: _WalkState,
) -> None:
    if matcher is not None:
        try:
            matcher = matcher.with_rules(load_ignore_file(directory / GITIGNORE_FILENAME, base=directory))
        except OSError as exc:
            state.reject(directory / GITIGNORE_FILENAME, RejectionReason.UNREADABLE, str(exc))
    try:
        entries = _sorted_entries(directory)
    except OSError as exc:
        state.reject(directory, RejectionReason.UNREADABLE, str(exc))
        return

    subdirectories: list[Path] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        path = Path(entry.path)
        is_symlink = entry.is_symlink()
        is_dir = not is_symlink and entry.is_dir(follow_symlinks=False)
        if state.excluded(path, is_dir=is_dir):
            continue
        if matcher is not None and matcher.is_ignored(path, is_dir=is_dir):
            logger.debug(
                "Skipping ignored path %s",
                path,
                extra=structured_extra(LogComponent.DISCOVERY, path=path),
            )
            continue
        if is_dir:
            subdirectories.append(path)
            continue
        manifest_format = detect_format(entry.name)
        if manifest_format is None:
            continue
        if is_symlink:
            target = os.readlink(path)
            state.reject(path, RejectionReason.SYMLINK, f"symlink to {target}")
            continue
        state.classify(path, manifest_format)

    for subdirectory in subdirectories:
        _walk_directory(subdirectory, matcher, state)


def walk_tree(
    root: Path,
    *,
    respect_gitignore: bool = True,
    extra_excludes: Sequence[str] = (),
) -> DiscoveryResult:
    """Walk ``root`` depth-first and classify every manifest beneath it.

    Files of a directory are classified before its subdirectories are entered,
    and entries are visited in name order so results are deterministic.

    Args:
        root: Directory to walk.
        respect_gitignore: Honour ``.gitignore`` and ``.git/info/exclude`` when
            ``root`` is a git checkout.
        extra_excludes: Root-relative gitignore-style patterns always excluded.

    Returns:
        The classified manifests, version records and rejected paths.

    Raises:
        NotADirectoryError: If ``root`` is not a directory.
    """
    resolved = root.resolve()
    if not resolved.is_dir():
        message = f"Discovery root {root} is not a directory"
        raise NotADirectoryError(message)

    started = time.perf_counter()
    state = _WalkState(root=resolved, excludes=_exclude_rules(resolved, extra_excludes))
    ignore_rules_active = respect_gitignore and has_vcs_metadata(resolved)
    matcher: IgnoreMatcher | None = None
    if ignore_rules_active:
        matcher = IgnoreMatcher()
        try:
            matcher = matcher.with_rules(vcs_root_rules(resolved))
        except OSError as exc:
            state.reject(resolved / ".git" / "info" / "exclude", RejectionReason.UNREADABLE, str(exc))

    _walk_directory(resolved, matcher, state)
    result = state.result(ignore_rules_active=ignore_rules_active)
    logger.info(
        "Discovered %d manifest(s) and %d version record(s) under %s",
        len(result.manifests),
        len(result.version_records),
        resolved,
        extra=structured_extra(
            LogComponent.DISCOVERY,
            path=resolved,
            cascade=True,
            counts={
                "manifests": len(result.manifests),
                "version_records": len(result.version_records),
                "rejected": len(result.rejected),
            },
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return result


def standard_locations(root: Path) -> DiscoveryResult:
    """Return the fixed single-project layout rooted at ``root``.

    Only files directly inside ``root`` are considered; nothing is walked.
    """
    resolved = root.resolve()
    state = _WalkState(root=resolved, excludes=None)
    for filename in MANIFEST_FILENAMES:
        path = resolved / filename
        if path.is_symlink():
            state.reject(path, RejectionReason.SYMLINK, f"symlink to {os.readlink(path)}")
            continue
        if not path.is_file():
            continue
        manifest_format = detect_format(filename)
        if manifest_format is not None:
            state.classify(path, manifest_format)
    return state.result(ignore_rules_active=False)


__all__ = ["standard_locations", "walk_tree"]
