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

"""Semantic version model used as the single source of truth."""

from __future__ import annotations

from .semver import VERSION_PATTERN, InvalidVersionFormatError, VersionValue, compare_versions, parse_version

__all__ = [
    "VERSION_PATTERN",
    "InvalidVersionFormatError",
    "VersionValue",
    "compare_versions",
    "parse_version",
]
