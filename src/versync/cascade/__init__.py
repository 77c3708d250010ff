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

"""Policies that decide whether a discovered layout may be synchronised."""

from __future__ import annotations

from .policies import (
    CascadePolicyError,
    MissingRootVersionError,
    MultipleRootVersionsError,
    NestedVersionRecordError,
    PolicyOutcome,
    ReadFailure,
    SymlinkManifestRejectedError,
    UnreadableManifestError,
    check_manifest_readability,
    check_nested_version_records,
    check_root_version,
    check_symlinks,
    check_unreadable,
    enforce_discovery_policies,
    enforce_manifest_readability,
)

__all__ = [
    "CascadePolicyError",
    "MissingRootVersionError",
    "MultipleRootVersionsError",
    "NestedVersionRecordError",
    "PolicyOutcome",
    "ReadFailure",
    "SymlinkManifestRejectedError",
    "UnreadableManifestError",
    "check_manifest_readability",
    "check_nested_version_records",
    "check_root_version",
    "check_symlinks",
    "check_unreadable",
    "enforce_discovery_policies",
    "enforce_manifest_readability",
]
