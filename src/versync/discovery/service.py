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

"""Discovery entry point that applies the layout policies before returning."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from versync._internal.logging_utils import structured_extra
from versync.cascade.policies import enforce_discovery_policies
from versync.core.model_types import LogComponent

from .walker import standard_locations, walk_tree

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from .models import DiscoveryResult

logger: logging.Logger = logging.getLogger("versync.discovery")


def discover(
    root: Path,
    *,
    cascade: bool,
    respect_gitignore: bool = True,
    extra_excludes: Sequence[str] = (),
) -> DiscoveryResult:
    """Locate the version record and manifests for ``root`` and validate the layout.

    Args:
        root: Project root directory.
        cascade: Walk the whole tree instead of the fixed root-level layout.
        respect_gitignore: Honour VCS ignore files during a cascade walk.
        extra_excludes: Additional root-relative patterns to skip.

    Returns:
        A discovery result that passed every layout policy.

    Raises:
        CascadePolicyError: If the layout is unsafe to synchronise.
    """
    if cascade:
        result = walk_tree(root, respect_gitignore=respect_gitignore, extra_excludes=extra_excludes)
    else:
        result = standard_locations(root)
    logger.debug(
        "Checking layout policies for %s",
        result.root,
        extra=structured_extra(LogComponent.DISCOVERY, path=result.root, cascade=cascade),
    )
    enforce_discovery_policies(result)
    return result


__all__ = ["discover"]
