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

"""Synchronisation engine, staging and commit."""

from __future__ import annotations

from .commit import (
    CommitError,
    ConcurrentModificationDetectedError,
    PartialWriteRecoveredError,
    PartialWriteUnrecoverableError,
    commit_changes,
)
from .engine import SyncEngine
from .models import ManifestEntry, Mismatch, StagedChange, SyncResult, VerifyReport, VersionMismatchError
from .store import FileStore, LocalFileStore
from .tagging import TagFormatError, expand_tag_format

__all__ = [
    "CommitError",
    "ConcurrentModificationDetectedError",
    "FileStore",
    "LocalFileStore",
    "ManifestEntry",
    "Mismatch",
    "PartialWriteRecoveredError",
    "PartialWriteUnrecoverableError",
    "StagedChange",
    "SyncEngine",
    "SyncResult",
    "TagFormatError",
    "VerifyReport",
    "VersionMismatchError",
    "commit_changes",
    "expand_tag_format",
]
