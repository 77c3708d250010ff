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

"""Per-format manifest adapters (``VERSION``, Cargo, pyproject, package.json)."""

from __future__ import annotations

from .base import MalformedManifestError, ManifestAdapter, ManifestError, MissingVersionFieldError
from .package_json import PackageJsonAdapter
from .registry import ADAPTERS, MANIFEST_FILENAMES, adapter_for, detect_format
from .toml import CargoAdapter, PyProjectAdapter, TomlTableAdapter
from .version_file import VersionFileAdapter

__all__ = [
    "ADAPTERS",
    "MANIFEST_FILENAMES",
    "CargoAdapter",
    "MalformedManifestError",
    "ManifestAdapter",
    "ManifestError",
    "MissingVersionFieldError",
    "PackageJsonAdapter",
    "PyProjectAdapter",
    "TomlTableAdapter",
    "VersionFileAdapter",
    "adapter_for",
    "detect_format",
]
