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

"""Unit tests for the Cargo.toml and pyproject.toml adapters."""

from __future__ import annotations

import pytest

from tests.fixtures.projects import cargo_manifest, pyproject_manifest
from versync.manifest import CargoAdapter, MalformedManifestError, MissingVersionFieldError, PyProjectAdapter

pytestmark = pytest.mark.unit

CARGO = CargoAdapter()
PYPROJECT = PyProjectAdapter()


def test_cargo_reads_package_version() -> None:
    assert CARGO.read_version(cargo_manifest("1.2.3")) == "1.2.3"


def test_pyproject_reads_project_version() -> None:
    assert PYPROJECT.read_version(pyproject_manifest("0.9.0")) == "0.9.0"


def test_cargo_write_changes_only_the_version_value() -> None:
    original = cargo_manifest("1.2.3")
    updated = CARGO.write_version(original, "1.2.4")
    assert updated == original.replace('version = "1.2.3"', 'version = "1.2.4"')
    # dependency versions are untouched
    assert 'serde = { version = "1.0.190"' in updated


def test_pyproject_write_keeps_single_quotes() -> None:
    updated = PYPROJECT.write_version(pyproject_manifest("1.2.3"), "2.0.0")
    assert "version = '2.0.0'\n" in updated


def test_workspace_table_before_package_is_allowed() -> None:
    content = '[workspace]\nmembers = ["crates/*"]\n\n[package]\nname = "root"\nversion = "0.1.0"\n'
    updated = CARGO.write_version(content, "0.2.0")
    assert updated == content.replace('version = "0.1.0"', 'version = "0.2.0"')


def test_version_in_other_tables_is_ignored() -> None:
    content = (
        '[package]\nname = "x"\nversion = "1.0.0"\n\n'
        '[dependencies.serde]\nversion = "1.0.0"\n'
        '[package.metadata.release]\nversion = "1.0.0"\n'
    )
    updated = CARGO.write_version(content, "1.1.0")
    assert updated.count('version = "1.1.0"') == 1
    assert updated.count('version = "1.0.0"') == 2


def test_crlf_line_endings_survive() -> None:
    content = '[package]\r\nname = "x"\r\nversion = "1.0.0"\r\n'
    assert CARGO.write_version(content, "1.0.1") == '[package]\r\nname = "x"\r\nversion = "1.0.1"\r\n'


def test_missing_table_raises_missing_field() -> None:
    with pytest.raises(MissingVersionFieldError, match=r"\[package\] version"):
        _ = CARGO.read_version('[workspace]\nmembers = ["a"]\n')


def test_non_string_version_raises_missing_field() -> None:
    with pytest.raises(MissingVersionFieldError):
        _ = PYPROJECT.read_version("[project]\nversion = 3\n")


def test_invalid_toml_raises_malformed() -> None:
    with pytest.raises(MalformedManifestError, match="Cargo.toml"):
        _ = CARGO.read_version("[package\nversion = 1")


def test_dotted_key_cannot_be_located() -> None:
    content = 'package.name = "x"\npackage.version = "1.0.0"\n'
    assert CARGO.read_version(content) == "1.0.0"
    with pytest.raises(MalformedManifestError, match="no version assignment"):
        _ = CARGO.write_version(content, "1.0.1")


def test_inline_table_cannot_be_located() -> None:
    content = 'project = { name = "x", version = "1.0.0" }\n'
    with pytest.raises(MalformedManifestError):
        _ = PYPROJECT.write_version(content, "1.0.1")


def test_assignment_inside_multiline_string_is_not_a_candidate() -> None:
    content = '[package]\nname = "x"\ndescription = """\nversion = "0.0.0"\n"""\nversion = "1.0.0"\n'
    updated = CARGO.write_version(content, "1.0.1")
    assert 'version = "0.0.0"' in updated
    assert updated.endswith('version = "1.0.1"\n')


def test_detect_matches_exact_filename() -> None:
    assert CARGO.detect("Cargo.toml")
    assert not CARGO.detect("cargo.toml")
    assert not PYPROJECT.detect("pyproject.toml.bak")
