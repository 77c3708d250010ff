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

"""Configuration models and validation for versync.

TOML data is validated with Pydantic models and then converted into a frozen
``Config`` dataclass used at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from versync._internal.exceptions import VersyncValidationError

from .constants import CONFIG_VERSION, DEFAULT_TAG_FORMAT

if TYPE_CHECKING:
    from pathlib import Path


class ConfigValidationError(VersyncValidationError):
    """Raised when configuration data contains invalid values."""


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of versync.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid versync configuration in {path}: {error}")


def _default_exclude() -> tuple[str, ...]:
    return ()


@dataclass(slots=True, frozen=True)
class Config:
    """Runtime configuration for versync.

    Attributes:
        cascade: Walk the whole tree by default instead of the root-level layout.
        respect_gitignore: Honour ``.gitignore`` rules when the root is a git checkout.
        exclude: Extra root-relative gitignore-style patterns skipped during a walk.
        tag_format: Template used to name release tags.
        source: File the configuration was loaded from, if any.
    """

    cascade: bool = False
    respect_gitignore: bool = True
    exclude: tuple[str, ...] = field(default_factory=_default_exclude)
    tag_format: str = DEFAULT_TAG_FORMAT
    source: Path | None = None


class ConfigModel(BaseModel):
    """Pydantic model for validating the versync configuration table.

    Attributes:
        config_version: Schema version number for the configuration file.
        cascade: Default discovery mode.
        respect_gitignore: Whether ignore files are honoured during a cascade walk.
        exclude: Extra exclusion patterns.
        tag_format: Release tag template.
    """

    model_config = ConfigDict(extra="forbid")

    config_version: int = Field(default=CONFIG_VERSION)
    cascade: bool = False
    respect_gitignore: bool = True
    exclude: list[str] = Field(default_factory=list)
    tag_format: str = DEFAULT_TAG_FORMAT

    @field_validator("exclude")
    @classmethod
    def _normalise_exclude(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        result: list[str] = []
        for raw in value:
            pattern = raw.strip()
            if pattern and pattern not in seen:
                seen.add(pattern)
                result.append(pattern)
        return result

    @field_validator("tag_format")
    @classmethod
    def _require_tag_format(cls, value: str) -> str:
        if not value.strip():
            msg = "tag_format must not be empty"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_version(self) -> ConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


def config_from_model(model: ConfigModel, *, source: Path | None = None) -> Config:
    return Config(
        cascade=model.cascade,
        respect_gitignore=model.respect_gitignore,
        exclude=tuple(model.exclude),
        tag_format=model.tag_format,
        source=source,
    )


__all__ = [
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "UnsupportedConfigVersionError",
    "config_from_model",
]
