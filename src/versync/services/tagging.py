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

"""Git tag creation for released versions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from versync._internal.exceptions import VersyncError
from versync._internal.logging_utils import structured_extra
from versync._internal.utils.process import run_command
from versync.core.model_types import LogComponent, Operation

if TYPE_CHECKING:
    from pathlib import Path

    from versync._internal.utils.process import CommandOutput

logger: logging.Logger = logging.getLogger("versync.services")

GIT_EXECUTABLE: Final[str] = "git"


class TagCreationError(VersyncError):
    """Raised when ``git tag`` exits with a non-zero status."""

    def __init__(self, tag: str, exit_code: int, stderr: str) -> None:
        """Initialise the error.

        Args:
            tag: Tag name that could not be created.
            exit_code: Exit status reported by git.
            stderr: Captured standard error from git.
        """
        self.tag = tag
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {exit_code}"
        super().__init__(f"Failed to create tag {tag}: {detail}")


def tag_command(tag: str, *, message: str | None = None) -> list[str]:
    """Return the git argument vector that creates ``tag``.

    A ``message`` makes the tag annotated; otherwise a lightweight tag is created.
    """
    if message:
        return [GIT_EXECUTABLE, "tag", "-a", tag, "-m", message]
    return [GIT_EXECUTABLE, "tag", tag]


def create_tag(root: Path, tag: str, *, message: str | None = None) -> CommandOutput:
    """Create ``tag`` in the repository at ``root``.

    Raises:
        TagCreationError: If git reports a failure.
    """
    output = run_command(tag_command(tag, message=message), cwd=root, allowed={GIT_EXECUTABLE})
    if output.exit_code != 0:
        raise TagCreationError(tag, output.exit_code, output.stderr)
    logger.info(
        "Created tag %s",
        tag,
        extra=structured_extra(
            LogComponent.SERVICES,
            operation=Operation.TAG,
            path=root,
            duration_ms=output.duration_ms,
        ),
    )
    return output


__all__ = ["GIT_EXECUTABLE", "TagCreationError", "create_tag", "tag_command"]
