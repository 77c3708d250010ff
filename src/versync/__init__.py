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

"""versync - keep one semantic version in step across a repository.

The root ``VERSION`` file is the single source of truth. versync discovers the
``Cargo.toml``, ``pyproject.toml`` and ``package.json`` manifests of a tree and
bumps, synchronises, verifies or resets their versions in one all-or-nothing
update.
"""

from __future__ import annotations

from versync.exceptions import (
    VersyncError,
    VersyncTypeError,
    VersyncValidationError,
)

from .api import bump, open_engine, render_tag, reset, show, sync, tag_release, verify
from .config import Config, load_config
from .core.model_types import BumpKind, ManifestFormat
from .sync import StagedChange, SyncEngine, SyncResult, VerifyReport
from .version import VersionValue, compare_versions, parse_version

__all__ = [
    "BumpKind",
    "Config",
    "ManifestFormat",
    "StagedChange",
    "SyncEngine",
    "SyncResult",
    "VerifyReport",
    "VersionValue",
    "VersyncError",
    "VersyncTypeError",
    "VersyncValidationError",
    "__version__",
    "bump",
    "compare_versions",
    "load_config",
    "open_engine",
    "parse_version",
    "render_tag",
    "reset",
    "show",
    "sync",
    "tag_release",
    "verify",
]

__version__ = "0.1.0"
