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

"""Result types produced by manifest discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from versync._internal.utils.paths import VERSION_FILENAME

if TYPE_CHECKING:
    from pathlib import Path

    from versync.core.model_types import ManifestFormat, RejectionReason


@dataclass(slots=True, frozen=True)
class ManifestLocation:
    """A discovered manifest file and the format that claimed it."""

    path: Path
    format: ManifestFormat


@dataclass(slots=True, frozen=True)
class RejectedPath:
    """A path discovery refused to use, with the reason why."""

    path: Path
    reason: RejectionReason
    detail: str = ""


def _no_locations() -> tuple[ManifestLocation, ...]:
    return ()


def _no_paths() -> tuple[Path, ...]:
    return ()


def _no_rejections() -> tuple[RejectedPath, ...]:
    return ()


@dataclass(slots=True, frozen=True)
class DiscoveryResult:
    """Outcome of walking a tree for version records and manifests.

    Attributes:
        root: Resolved directory the walk started from.
        manifests: Non-record manifests in deterministic walk order.
        version_records: Every ``VERSION`` file found, root or nested.
        rejected: Paths excluded from synchronisation, with reasons.
        ignore_rules_active: Whether VCS ignore files were honoured.
    """

    root: Path
    manifests: tuple[ManifestLocation, ...] = field(default_factory=_no_locations)
    version_records: tuple[Path, ...] = field(default_factory=_no_paths)
    rejected: tuple[RejectedPath, ...] = field(default_factory=_no_rejections)
    ignore_rules_active: bool = False

    @property
    def root_record(self) -> Path:
        """Expected location of the authoritative version record."""
        return self.root / VERSION_FILENAME

    @property
    def nested_records(self) -> tuple[Path, ...]:
        """Version records found anywhere other than the root directory."""
        return tuple(path for path in self.version_records if path.parent != self.root)

    def rejected_for(self, reason: RejectionReason) -> tuple[RejectedPath, ...]:
        """Return the rejections recorded for ``reason``."""
        return tuple(item for item in self.rejected if item.reason is reason)


__all__ = ["DiscoveryResult", "ManifestLocation", "RejectedPath"]
