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

"""Registry of the supported manifest adapters.

The set of formats is closed: each ``ManifestFormat`` member maps to exactly
one adapter instance, and filename detection walks the registry in order.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from versync.core.model_types import ManifestFormat

from .package_json import PackageJsonAdapter
from .toml import CargoAdapter, PyProjectAdapter
from .version_file import VersionFileAdapter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .base import ManifestAdapter

ADAPTERS: Final[tuple[ManifestAdapter, ...]] = (
    VersionFileAdapter(),
    CargoAdapter(),
    PyProjectAdapter(),
    PackageJsonAdapter(),
)

_BY_FORMAT: Final[Mapping[ManifestFormat, ManifestAdapter]] = MappingProxyType(
    {adapter.format: adapter for adapter in ADAPTERS},
)

MANIFEST_FILENAMES: Final[tuple[str, ...]] = tuple(adapter.filename for adapter in ADAPTERS)


def adapter_for(manifest_format: ManifestFormat) -> ManifestAdapter:
    """Return the adapter registered for ``manifest_format``."""
    return _BY_FORMAT[manifest_format]


def detect_format(filename: str) -> ManifestFormat | None:
    """Return the format claiming ``filename``, or ``None`` when unrecognised.

    Raises:
        RuntimeError: If more than one adapter claims the same filename.
    """
    claims = [adapter.format for adapter in ADAPTERS if adapter.detect(filename)]
    if not claims:
        return None
    if len(claims) > 1:
        msg = f"multiple manifest adapters claim {filename}: {', '.join(claims)}"
        raise RuntimeError(msg)
    return claims[0]


__all__ = ["ADAPTERS", "MANIFEST_FILENAMES", "adapter_for", "detect_format"]
