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

"""Shared configuration defaults and environment variable names."""

from __future__ import annotations

from typing import Final

CONFIG_VERSION: Final[int] = 0
DEFAULT_TAG_FORMAT: Final[str] = "v{version}"
DEFAULT_RESET_VERSION: Final[str] = "0.0.0"
CONFIG_FILENAMES: Final[tuple[str, ...]] = ("versync.toml", ".versync.toml")
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
TOOL_SECTION: Final[str] = "versync"

ENV_ROOT: Final[str] = "VERSYNC_ROOT"
ENV_CONFIG: Final[str] = "VERSYNC_CONFIG"
ENV_TAG_FORMAT: Final[str] = "VERSYNC_TAG_FORMAT"
ENV_CASCADE: Final[str] = "VERSYNC_CASCADE"

__all__ = [
    "CONFIG_FILENAMES",
    "CONFIG_VERSION",
    "DEFAULT_RESET_VERSION",
    "DEFAULT_TAG_FORMAT",
    "ENV_CASCADE",
    "ENV_CONFIG",
    "ENV_ROOT",
    "ENV_TAG_FORMAT",
    "PYPROJECT_FILENAME",
    "TOOL_SECTION",
]
