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

"""Shared contract for manifest adapters.

Every supported file format is one adapter implementing the same three
operations: ``detect`` a filename, ``read_version`` from file text, and
``write_version`` into file text while leaving every other byte untouched.
Adapters never touch the filesystem.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from versync._internal.exceptions import VersyncValidationError

if TYPE_CHECKING:
    from versync.core.model_types import ManifestFormat


class ManifestError(VersyncValidationError):
    """Base error for manifest parsing and rewriting problems."""


class MissingVersionFieldError(ManifestError):
    """Raised when a manifest does not declare a string version field."""

    def __init__(self, filename: str, field: str) -> None:
        """Initialise the error.

        Args:
            filename: Manifest filename (e.g. ``Cargo.toml``).
            field: Human-readable location of the expected field.
        """
        self.filename = filename
        self.field = field
        super().__init__(f"No version found in {filename} ({field})")


class MalformedManifestError(ManifestError):
    """Raised when a manifest cannot be parsed or its version field is ambiguous."""

    def __init__(self, filename: str, reason: str) -> None:
        """Initialise the error.

        Args:
            filename: Manifest filename (e.g. ``package.json``).
            reason: Explanation of what could not be located or parsed.
        """
        self.filename = filename
        self.reason = reason
        super().__init__(f"Malformed {filename}: {reason}")


class ManifestAdapter(ABC):
    """Capability to read and rewrite the version declared by one file format."""

    format: ClassVar[ManifestFormat]
    filename: ClassVar[str]
    field_description: ClassVar[str]

    def detect(self, filename: str) -> bool:
        """Return whether ``filename`` is handled by this adapter (exact match)."""
        return filename == self.filename

    @abstractmethod
    def read_version(self, content: str) -> str:
        """Return the version text declared in ``content``.

        Raises:
            MissingVersionFieldError: If the field is absent or not a string.
            MalformedManifestError: If ``content`` cannot be parsed.
        """

    @abstractmethod
    def write_version(self, content: str, new_version: str) -> str:
        """Return ``content`` with only the version value replaced by ``new_version``.

        Raises:
            MalformedManifestError: If the field cannot be located exactly once.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self.format.value!r})"


__all__ = [
    "MalformedManifestError",
    "ManifestAdapter",
    "ManifestError",
    "MissingVersionFieldError",
]
