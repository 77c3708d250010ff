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

"""Stable error code registry used across versync."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

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

from .exceptions import VersyncError, VersyncTypeError, VersyncValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    VersyncError: ErrorCode("VS000"),
    VersyncValidationError: ErrorCode("VS100"),
    VersyncTypeError: ErrorCode("VS101"),
    ConfigValidationError: ErrorCode("VS110"),
    UnsupportedConfigVersionError: ErrorCode("VS111"),
    ConfigReadError: ErrorCode("VS112"),
    InvalidConfigFileError: ErrorCode("VS113"),
    InvalidVersionFormatError: ErrorCode("VS200"),
    ManifestError: ErrorCode("VS300"),
    MissingVersionFieldError: ErrorCode("VS301"),
    MalformedManifestError: ErrorCode("VS302"),
    CascadePolicyError: ErrorCode("VS400"),
    MissingRootVersionError: ErrorCode("VS401"),
    MultipleRootVersionsError: ErrorCode("VS402"),
    NestedVersionRecordError: ErrorCode("VS403"),
    SymlinkManifestRejectedError: ErrorCode("VS404"),
    UnreadableManifestError: ErrorCode("VS405"),
    VersionMismatchError: ErrorCode("VS500"),
    CommitError: ErrorCode("VS510"),
    ConcurrentModificationDetectedError: ErrorCode("VS511"),
    PartialWriteRecoveredError: ErrorCode("VS512"),
    PartialWriteUnrecoverableError: ErrorCode("VS513"),
    TagFormatError: ErrorCode("VS600"),
    TagCreationError: ErrorCode("VS601"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured versync exception."""
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("VS000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a stable mapping of fully-qualified exception names to error codes.

    Intended for diagnostics, tests, and documentation generation - avoids
    exposing the private mapping while keeping a single source of truth.
    """
    result: dict[str, ErrorCode] = {}
    for exc_type, code in _ERROR_CODES.items():
        key = f"{exc_type.__module__}.{exc_type.__name__}"
        result[key] = code
    return result


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
