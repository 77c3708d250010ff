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

"""Unit tests for the settings precedence chain."""

from __future__ import annotations

import pytest

from versync._internal.precedence import resolve_with_precedence

pytestmark = pytest.mark.unit


def test_cli_wins() -> None:
    assert resolve_with_precedence(cli_value=False, env_value=True, config_value=True, default=True) is False


def test_env_beats_config() -> None:
    assert resolve_with_precedence(env_value="env", config_value="config", default="default") == "env"


def test_config_then_default() -> None:
    assert resolve_with_precedence(config_value="config", default="default") == "config"
    assert resolve_with_precedence(default="default") == "default"
