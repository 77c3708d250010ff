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

"""Public exception types for versync.

Every error raised by versync derives from ``VersyncError``; validation
problems additionally derive from ``ValueError`` via ``VersyncValidationError``.
"""

from __future__ import annotations

from versync._internal.exceptions import VersyncError, VersyncTypeError, VersyncValidationError
from versync.cascade.policies import (
    CascadePolicyError,
    MissingRootVersionError,
    MultipleRootVersionsError,
    NestedVersionRecordError,
    SymlinkManifestRejectedError,
    UnreadableManifestError,
)
from versync.config.models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
)
from versync.manifest.base import MalformedManifestError, ManifestError, MissingVersionFieldError
from versync.services.tagging import TagCreationError
from versync.sync.commit import (
    CommitError,
    ConcurrentModificationDetectedError,
    PartialWriteRecoveredError,
    PartialWriteUnrecoverableError,
)
from versync.sync.models import VersionMismatchError
from versync.sync.tagging import TagFormatError
from versync.version.semver import InvalidVersionFormatError

__all__ = [
    "CascadePolicyError",
    "CommitError",
    "ConcurrentModificationDetectedError",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "InvalidVersionFormatError",
    "MalformedManifestError",
    "ManifestError",
    "MissingRootVersionError",
    "MissingVersionFieldError",
    "MultipleRootVersionsError",
    "NestedVersionRecordError",
    "PartialWriteRecoveredError",
    "PartialWriteUnrecoverableError",
    "SymlinkManifestRejectedError",
    "TagCreationError",
    "TagFormatError",
    "UnreadableManifestError",
    "UnsupportedConfigVersionError",
    "VersionMismatchError",
    "VersyncError",
    "VersyncTypeError",
    "VersyncValidationError",
]
