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

"""Subprocess helpers and typed command wrappers."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404  # JUSTIFIED: centralised wrapper for safe, allowlisted subprocess execution
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from versync._internal.logging_utils import structured_extra
from versync.core.model_types import LogComponent

logger: logging.Logger = logging.getLogger("versync.services")

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

__all__ = ["CommandOutput", "run_command"]


@dataclass(slots=True)
class CommandOutput:
    args: list[str]
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
    *,
    allowed: set[str] | None = None,
) -> CommandOutput:
    """Run a subprocess safely and return its captured output.

    Security guardrails:
    - Requires an iterable of string arguments; never uses ``shell=True``.
    - Optionally enforces an allowlist for the executable (first arg) via ``allowed``.

    Args:
        args: Command line to execute. The first element is treated as the
            executable and must be a non-empty string.
        cwd: Optional working directory for the child process.
        allowed: Optional allowlist of valid executables. When provided, the
            first element of ``args`` must match one of these entries.

    Returns:
        ``CommandOutput`` containing the executed argument vector along with the
        captured stdout/stderr, exit code, and duration in milliseconds.

    Raises:
        ValueError: If ``args`` is empty or the executable is not allowlisted.
        TypeError: If any argument is falsy (for example ``""``).
    """
    argv = list(args)
    if not argv:
        msg = "command must not be empty"
        raise ValueError(msg)
    if not all(argv):
        msg = "command arguments must be non-empty strings"
        raise TypeError(msg)
    executable = argv[0]
    if allowed is not None and executable not in allowed:
        msg = f"executable '{executable}' is not allowlisted"
        raise ValueError(msg)
    start = time.perf_counter()
    logger.debug(
        "Executing command: %s",
        " ".join(argv),
        extra=structured_extra(LogComponent.SERVICES, details={"cwd": str(cwd)} if cwd else {}),
    )
    completed = subprocess.run(  # noqa: S603 - command arguments provided by caller
        argv,
        check=False,
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
    )
    duration_ms = (time.perf_counter() - start) * 1000
    if completed.returncode != 0:
        logger.warning(
            "Command failed (exit=%s): %s",
            completed.returncode,
            " ".join(argv),
            extra=structured_extra(LogComponent.SERVICES, exit_code=completed.returncode),
        )
    return CommandOutput(
        args=argv,
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
        duration_ms=duration_ms,
    )
