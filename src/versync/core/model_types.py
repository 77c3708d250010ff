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

"""String-valued enums shared across versync layers."""

from __future__ import annotations

from versync.compat import StrEnum


class BumpKind(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def from_str(cls, raw: str) -> BumpKind:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown bump kind '{raw}'"
            raise ValueError(msg) from exc


class ManifestFormat(StrEnum):
    """Closed set of file formats that declare a version."""

    VERSION_FILE = "version_file"
    CARGO = "cargo"
    PYPROJECT = "pyproject"
    PACKAGE_JSON = "package_json"

    @classmethod
    def from_str(cls, raw: str) -> ManifestFormat:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown manifest format '{raw}'"
            raise ValueError(msg) from exc


class RejectionReason(StrEnum):
    SYMLINK = "symlink"
    NESTED_VERSION_RECORD = "nested_version_record"
    UNREADABLE = "unreadable"


class EngineState(StrEnum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    VALIDATING = "validating"
    STAGING = "staging"
    COMMITTING = "committing"
    DONE = "done"
    FAILED = "failed"


class Operation(StrEnum):
    BUMP = "bump"
    SYNC = "sync"
    VERIFY = "verify"
    RESET = "reset"
    SHOW = "show"
    STATUS = "status"
    TAG = "tag"

    @classmethod
    def from_str(cls, raw: str) -> Operation:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown operation '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    CLI = "cli"
    DISCOVERY = "discovery"
    MANIFEST = "manifest"
    POLICY = "policy"
    ENGINE = "engine"
    SERVICES = "services"

    @classmethod
    def from_str(cls, raw: str) -> LogComponent:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log component '{raw}'"
            raise ValueError(msg) from exc


__all__ = [
    "BumpKind",
    "EngineState",
    "LogComponent",
    "LogFormat",
    "ManifestFormat",
    "Operation",
    "RejectionReason",
]
