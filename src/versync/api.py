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

"""Public API facade for versync operations.

Each helper loads configuration for ``root`` and runs one engine operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from versync.config import load_config
from versync.config.constants import DEFAULT_RESET_VERSION
from versync.services.tagging import create_tag
from versync.sync import SyncEngine, expand_tag_format

if TYPE_CHECKING:
    from pathlib import Path

    from versync.config import Config
    from versync.core.model_types import BumpKind
    from versync.sync import FileStore, SyncResult, VerifyReport
    from versync.version import VersionValue


def open_engine(
    root: Path,
    *,
    config: Config | None = None,
    config_path: Path | None = None,
    store: FileStore | None = None,
) -> SyncEngine:
    """Return an engine for ``root`` using ``config`` or the configuration found there."""
    resolved = root.resolve()
    return SyncEngine(resolved, config=config or load_config(resolved, config_path), store=store)


def bump(root: Path, kind: BumpKind | str, *, cascade: bool | None = None, dry_run: bool = False) -> SyncResult:
    return open_engine(root).bump(kind, cascade=cascade, dry_run=dry_run)


def sync(root: Path, *, cascade: bool | None = None, dry_run: bool = False) -> SyncResult:
    return open_engine(root).sync(cascade=cascade, dry_run=dry_run)


def verify(root: Path, *, cascade: bool | None = None) -> VerifyReport:
    return open_engine(root).verify(cascade=cascade)


def reset(
    root: Path,
    target: VersionValue | str = DEFAULT_RESET_VERSION,
    *,
    cascade: bool | None = None,
    dry_run: bool = False,
) -> SyncResult:
    return open_engine(root).reset(target, cascade=cascade, dry_run=dry_run)


def show(root: Path, *, cascade: bool | None = None) -> VersionValue:
    return open_engine(root).current_version(cascade=cascade)


def render_tag(engine: SyncEngine, version: VersionValue, *, tag_format: str | None = None) -> str:
    """Expand the tag template for ``version``; the repository name is the root directory name."""
    template = tag_format or engine.config.tag_format
    return expand_tag_format(template, version, repository_name=engine.root.name)


def tag_release(
    root: Path,
    *,
    tag_format: str | None = None,
    message: str | None = None,
    cascade: bool | None = None,
) -> str:
    """Create a git tag named after the current root version and return its name.

    Raises:
        TagFormatError: If the template cannot be expanded.
        TagCreationError: If git refuses to create the tag.
    """
    engine = open_engine(root)
    tag = render_tag(engine, engine.current_version(cascade=cascade), tag_format=tag_format)
    _ = create_tag(engine.root, tag, message=message)
    return tag


__all__ = ["bump", "open_engine", "render_tag", "reset", "show", "sync", "tag_release", "verify"]
