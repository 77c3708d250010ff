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

"""Adapter for the plain-text root version record (``VERSION``)."""

from __future__ import annotations

from typing import ClassVar

from versync._internal.utils.paths import VERSION_FILENAME
from versync.compat import override
from versync.core.model_types import ManifestFormat

from .base import MalformedManifestError, ManifestAdapter, MissingVersionFieldError


class VersionFileAdapter(ManifestAdapter):
    """Single-line version record; surrounding whitespace is kept on rewrite."""

    format: ClassVar[ManifestFormat] = ManifestFormat.VERSION_FILE
    filename: ClassVar[str] = VERSION_FILENAME
    field_description: ClassVar[str] = "file contents"

    @override
    def read_version(self, content: str) -> str:
        token = content.strip()
        if not token:
            raise MissingVersionFieldError(self.filename, self.field_description)
        if len(token.split()) > 1:
            raise MalformedManifestError(self.filename, "expected a single version string")
        return token

    @override
    def write_version(self, content: str, new_version: str) -> str:
        token = content.strip()
        if not token:
            # an empty record only carries whitespace; keep a trailing newline if it had one
            suffix = "\n" if content.endswith("\n") else ""
            return f"{new_version}{suffix}"
        self.read_version(content)
        start = content.index(token)
        return f"{content[:start]}{new_version}{content[start + len(token) :]}"


__all__ = ["VersionFileAdapter"]
