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

"""Configuration discovery and loading for versync.

Configuration is read from the project root: ``versync.toml``, then
``.versync.toml``, then the ``[tool.versync]`` table of ``pyproject.toml``.
The first file found wins. A dedicated file may also nest its settings under
``[tool.versync]``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from versync._internal.logging_utils import structured_extra
from versync.compat import tomllib
from versync.core.model_types import LogComponent

from .constants import CONFIG_FILENAMES, CONFIG_VERSION, PYPROJECT_FILENAME, TOOL_SECTION
from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("versync.cli")


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def _tool_section(raw: dict[str, object]) -> dict[str, object] | None:
    tool_obj = raw.get("tool")
    if not isinstance(tool_obj, dict):
        return None
    section = cast("dict[str, object]", tool_obj).get(TOOL_SECTION)
    if not isinstance(section, dict):
        return None
    return cast("dict[str, object]", section)


def _validate(path: Path, raw: dict[str, object]) -> Config:
    declared = raw.get("config_version", CONFIG_VERSION)
    if isinstance(declared, int) and not isinstance(declared, bool) and declared != CONFIG_VERSION:
        raise UnsupportedConfigVersionError(declared, CONFIG_VERSION)
    try:
        model = ConfigModel.model_validate(raw)
    except ValidationError as exc:
        raise InvalidConfigFileError(path, exc) from exc
    logger.debug(
        "Loaded configuration from %s",
        path,
        extra=structured_extra(LogComponent.CLI, path=path),
    )
    return config_from_model(model, source=path)


def _load_file(path: Path) -> Config:
    raw = _read_toml(path)
    section = _tool_section(raw)
    return _validate(path, section if section is not None else raw)


def find_config_file(root: Path) -> Path | None:
    """Return the configuration file that applies to ``root``, if any."""
    for filename in CONFIG_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file() and _tool_section(_read_toml(pyproject)) is not None:
        return pyproject
    return None


def load_config(root: Path, explicit_path: Path | None = None) -> Config:
    """Load versync configuration for ``root`` or fall back to defaults.

    Args:
        root: Project root searched for configuration files.
        explicit_path: Configuration file to use instead of searching. Relative
            paths are taken relative to ``root``.

    Returns:
        The validated configuration, or ``Config()`` when no file applies.

    Raises:
        ConfigReadError: If a configuration file cannot be read or parsed as TOML.
        InvalidConfigFileError: If the configuration fails validation.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
    """
    if explicit_path is not None:
        path = explicit_path if explicit_path.is_absolute() else root / explicit_path
        if not path.is_file():
            raise ConfigReadError(path, FileNotFoundError("configuration file not found"))
        return _load_file(path)

    candidate = find_config_file(root)
    if candidate is None:
        return Config()
    if candidate.name == PYPROJECT_FILENAME:
        section = _tool_section(_read_toml(candidate))
        return _validate(candidate, section or {})
    return _load_file(candidate)


__all__ = ["find_config_file", "load_config"]
