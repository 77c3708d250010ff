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

"""Unit tests for the package.json adapter."""

from __future__ import annotations

import pytest

from tests.fixtures.projects import package_manifest
from versync.manifest import MalformedManifestError, MissingVersionFieldError, PackageJsonAdapter
from versync.manifest.package_json import top_level_value_spans

pytestmark = pytest.mark.unit

ADAPTER = PackageJsonAdapter()


def test_reads_top_level_version() -> None:
    assert ADAPTER.read_version(package_manifest("4.5.6")) == "4.5.6"


def test_write_preserves_layout_and_nested_versions() -> None:
    content = (
        '{\n    "name": "x",\n    "engines": {"version": "1.0.0"},\n'
        '    "version": "1.0.0",\n    "scripts": {}\n}'
    )
    updated = ADAPTER.write_version(content, "1.0.1")
    assert updated == content.replace('"version": "1.0.0",', '"version": "1.0.1",')


def test_spans_skip_nested_objects_and_escaped_strings() -> None:
    content = '{"a": {"version": "x"}, "b": "say \\"version\\"", "version": "2.0.0"}'
    spans = top_level_value_spans(content, "version")
    assert len(spans) == 1
    start, end = spans[0]
    assert content[start:end] == "2.0.0"


def test_missing_version_field() -> None:
    with pytest.raises(MissingVersionFieldError, match="package.json"):
        _ = ADAPTER.read_version('{"name": "x"}')


def test_non_object_root_is_malformed() -> None:
    with pytest.raises(MalformedManifestError, match="not a JSON object"):
        _ = ADAPTER.read_version('["version"]')


def test_invalid_json_is_malformed() -> None:
    with pytest.raises(MalformedManifestError):
        _ = ADAPTER.read_version('{"version": "1.0.0",}')


def test_duplicate_keys_cannot_be_rewritten() -> None:
    content = '{"version": "1.0.0", "version": "1.0.0"}'
    with pytest.raises(MalformedManifestError, match="found 2"):
        _ = ADAPTER.write_version(content, "1.0.1")


def test_non_string_version_is_missing() -> None:
    with pytest.raises(MissingVersionFieldError):
        _ = ADAPTER.write_version('{"version": 1}', "1.0.1")
