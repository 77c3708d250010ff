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

"""Pytest entry point that wires shared fixtures and markers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from versync._internal.logging_utils import CHILD_LOGGERS  # noqa: E402

pytest_plugins = ("tests.fixtures.projects",)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with the custom markers used by the test suite."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (slower, multiple components)",
    )
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
    config.addinivalue_line("markers", "engine: Engine-related tests")


@pytest.fixture(autouse=True)
def _isolate_versync_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear ``VERSYNC_*`` variables and restore the package logger after each test."""
    for name in (
        "VERSYNC_ROOT",
        "VERSYNC_CONFIG",
        "VERSYNC_TAG_FORMAT",
        "VERSYNC_CASCADE",
        "VERSYNC_LOG_FORMAT",
        "VERSYNC_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    logger = logging.getLogger("versync")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    child_levels = {name: logging.getLogger(name).level for name in CHILD_LOGGERS}
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
    for name, child_level in child_levels.items():
        logging.getLogger(name).setLevel(child_level)
