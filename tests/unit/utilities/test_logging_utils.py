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

"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from versync._internal.logging_utils import JSONLogFormatter, configure_logging, structured_extra
from versync.core.model_types import EngineState, LogComponent, LogFormat, Operation
from versync.version import VersionValue

pytestmark = pytest.mark.unit


def test_structured_extra_normalises_values() -> None:
    extra = structured_extra(
        LogComponent.ENGINE,
        operation="bump",
        state="staging",
        path=Path("/repo/VERSION"),
        version=VersionValue.parse("1.2.3"),
        counts={"staged": 2},
        details={},
    )
    assert extra["component"] is LogComponent.ENGINE
    assert extra["operation"] is Operation.BUMP
    assert extra["state"] is EngineState.STAGING
    assert extra["path"] == str(Path("/repo/VERSION"))
    assert extra["version"] == "1.2.3"
    assert extra["counts"] == {"staged": 2}
    assert "details" not in extra


def test_structured_extra_skips_none() -> None:
    extra = structured_extra(LogComponent.CLI, exit_code=None, cascade=None)  # type: ignore[arg-type]
    assert extra == {"component": LogComponent.CLI}


def test_json_formatter_emits_structured_fields() -> None:
    record = logging.LogRecord("versync.engine", logging.INFO, __file__, 1, "bumped %s", ("1.2.4",), None)
    for key, value in structured_extra(LogComponent.ENGINE, operation=Operation.BUMP, dry_run=True).items():
        setattr(record, key, value)

    payload = json.loads(JSONLogFormatter().format(record))

    assert payload["message"] == "bumped 1.2.4"
    assert payload["level"] == "info"
    assert payload["logger"] == "versync.engine"
    assert payload["component"] == "engine"
    assert payload["operation"] == "bump"
    assert payload["dry_run"] is True


def test_configure_logging_prefers_explicit_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERSYNC_LOG_FORMAT", "text")
    monkeypatch.setenv("VERSYNC_LOG_LEVEL", "error")

    config = configure_logging("json", log_level="debug")

    assert config.format is LogFormat.JSON
    assert config.level == logging.DEBUG
    logger = logging.getLogger("versync")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONLogFormatter)
    assert logging.getLogger("versync.engine").level == logging.DEBUG


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERSYNC_LOG_LEVEL", "info")
    config = configure_logging()
    assert config.format is LogFormat.TEXT
    assert config.level_name == "info"


def test_configure_logging_defaults_to_warning() -> None:
    assert configure_logging().level == logging.WARNING
