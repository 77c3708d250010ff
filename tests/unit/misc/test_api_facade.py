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

"""Unit tests for the ``versync.api`` facade."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

import versync.api as api_module
from versync.api import open_engine, render_tag, tag_release
from versync.config import Config
from versync.version import VersionValue

if TYPE_CHECKING:
    from pathlib import Path

    from tests.fixtures.projects import ProjectTree

pytestmark = pytest.mark.unit


def test_open_engine_loads_configuration(synced_project: ProjectTree) -> None:
    _ = synced_project.write("versync.toml", "cascade = true\n")
    assert open_engine(synced_project.root).config.cascade
    assert not open_engine(synced_project.root, config=Config()).config.cascade


def test_render_tag_prefers_explicit_template(synced_project: ProjectTree) -> None:
    engine = open_engine(synced_project.root)
    version = VersionValue.parse("4.5.6")
    assert render_tag(engine, version) == "v4.5.6"
    assert render_tag(engine, version, tag_format="{repository_name}@{version}") == "demo@4.5.6"


def test_tag_release_tags_current_version(synced_project: ProjectTree, monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[tuple[Path, str, str | None]] = []

    def fake_create_tag(root: Path, tag: str, *, message: str | None = None) -> None:
        created.append((root, tag, message))

    monkeypatch.setattr(api_module, "create_tag", fake_create_tag)

    assert tag_release(synced_project.root, message="ship it") == "v1.2.3"
    assert created == [(synced_project.root, "v1.2.3", "ship it")]
