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

"""CLI context: project root, configuration and environment overrides."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from versync._internal.logging_utils import structured_extra
from versync._internal.precedence import resolve_with_precedence
from versync.config import Config, load_config
from versync.config.constants import DEFAULT_TAG_FORMAT, ENV_CASCADE, ENV_CONFIG, ENV_ROOT, ENV_TAG_FORMAT
from versync.core.model_types import LogComponent
from versync.runtime import resolve_project_root
from versync.sync import SyncEngine

if TYPE_CHECKING:
    from collections.abc import Mapping

    from versync.sync import FileStore

logger: logging.Logger = logging.getLogger("versync.cli")

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def parse_bool_env(name: str, raw: str | None) -> bool | None:
    """Interpret a boolean environment value; unknown values are ignored with a warning."""
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(
        "Ignoring %s=%r; expected one of %s",
        name,
        raw,
        ", ".join(sorted(_TRUE_VALUES | _FALSE_VALUES)),
        extra=structured_extra(LogComponent.CLI, details={"variable": name}),
    )
    return None


def _env_path(raw: str | None) -> Path | None:
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


@dataclass(slots=True, frozen=True)
class EnvOverrides:
    """Settings supplied through ``VERSYNC_*`` environment variables."""

    root: Path | None = None
    config_path: Path | None = None
    tag_format: str | None = None
    cascade: bool | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> EnvOverrides:
        env = os.environ if environ is None else environ
        tag_format = env.get(ENV_TAG_FORMAT)
        return cls(
            root=_env_path(env.get(ENV_ROOT)),
            config_path=_env_path(env.get(ENV_CONFIG)),
            tag_format=tag_format if tag_format and tag_format.strip() else None,
            cascade=parse_bool_env(ENV_CASCADE, env.get(ENV_CASCADE)),
        )


@dataclass(slots=True, frozen=True)
class CLIContext:
    """Resolved project root and configuration shared by CLI commands."""

    root: Path
    config: Config
    env_overrides: EnvOverrides

    @property
    def config_path(self) -> Path | None:
        return self.config.source

    def engine(self, *, store: FileStore | None = None) -> SyncEngine:
        return SyncEngine(self.root, config=self.config, store=store)

    def display(self, path: Path) -> str:
        """Render ``path`` relative to the project root when possible."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)


def _resolve_root(cli_root: Path | None, env: EnvOverrides, cwd: Path) -> Path:
    explicit = resolve_with_precedence(cli_value=cli_root, env_value=env.root, default=None)
    if explicit is None:
        return resolve_project_root(cwd)
    candidate = explicit if explicit.is_absolute() else cwd / explicit
    if not candidate.is_dir():
        message = f"[versync] project root {candidate} is not a directory"
        raise SystemExit(message)
    return candidate.resolve()


def build_cli_context(
    *,
    cli_root: Path | None = None,
    cli_config: Path | None = None,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CLIContext:
    """Build a CLI context using precedence CLI > environment > config file > default.

    Args:
        cli_root: ``--root`` value.
        cli_config: ``--config`` value.
        cwd: Working directory used for root discovery; defaults to ``Path.cwd()``.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        CLIContext: Resolved root and effective configuration.

    Raises:
        SystemExit: If an explicit root is not a directory.
    """
    env = EnvOverrides.from_environ(environ)
    working_dir = (cwd or Path.cwd()).resolve()
    root = _resolve_root(cli_root, env, working_dir)
    config_hint = resolve_with_precedence(cli_value=cli_config, env_value=env.config_path, default=None)
    loaded = load_config(root, config_hint)
    effective = dataclasses.replace(
        loaded,
        cascade=resolve_with_precedence(env_value=env.cascade, config_value=loaded.cascade, default=False),
        tag_format=resolve_with_precedence(
            env_value=env.tag_format,
            config_value=loaded.tag_format,
            default=DEFAULT_TAG_FORMAT,
        ),
    )
    logger.debug(
        "Resolved project root %s",
        root,
        extra=structured_extra(
            LogComponent.CLI,
            path=root,
            cascade=effective.cascade,
            details={"config": str(effective.source) if effective.source else "defaults"},
        ),
    )
    return CLIContext(root=root, config=effective, env_overrides=env)


__all__ = ["CLIContext", "EnvOverrides", "build_cli_context", "parse_bool_env"]
