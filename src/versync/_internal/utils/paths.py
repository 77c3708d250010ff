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

"""Filesystem helpers for locating the project root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from versync._internal.logging_utils import structured_extra
from versync.core.model_types import LogComponent

logger: logging.Logger = logging.getLogger("versync.discovery")

__all__ = ["ROOT_MARKERS", "VERSION_FILENAME", "resolve_project_root"]

VERSION_FILENAME: Final[str] = "VERSION"
ROOT_MARKERS: Final[tuple[str, ...]] = (VERSION_FILENAME,)


def resolve_project_root(start: Path | None = None) -> Path:
    """Return the nearest directory at or above ``start`` holding a root marker.

    Args:
        start: Directory (or file) to search from; defaults to the working directory.

    Returns:
        The first ancestor containing a ``VERSION`` file, or ``start`` itself when
        no ancestor does.

    Raises:
        FileNotFoundError: If an explicit ``start`` does not exist.
    """
    base = (start or Path.cwd()).resolve()
    if start is not None and not base.exists():
        message = f"Provided project root {start} does not exist."
        raise FileNotFoundError(message)
    if base.is_file():
        base = base.parent

    for candidate in (base, *base.parents):
        for marker in ROOT_MARKERS:
            if (candidate / marker).is_file():
                return candidate

    logger.debug(
        "No VERSION file found above %s; using it as project root",
        base,
        extra=structured_extra(LogComponent.DISCOVERY, path=base),
    )
    return base
