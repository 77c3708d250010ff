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

"""Unit tests for ``versync.sync.engine.SyncEngine``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fixtures.projects import cargo_manifest, package_manifest, pyproject_manifest
from versync.cascade import MissingRootVersionError, NestedVersionRecordError, UnreadableManifestError
from versync.config import Config
from versync.core.model_types import BumpKind, EngineState, ManifestFormat, Operation
from versync.sync import SyncEngine, VersionMismatchError
from versync.version import InvalidVersionFormatError, VersionValue

if TYPE_CHECKING:
    from tests.fixtures.projects import ProjectTree

pytestmark = [pytest.mark.unit, pytest.mark.engine]

HAPPY_PATH = [
    EngineState.IDLE,
    EngineState.DISCOVERING,
    EngineState.VALIDATING,
    EngineState.STAGING,
    EngineState.COMMITTING,
    EngineState.DONE,
]


def test_bump_patch_rewrites_every_root_manifest(synced_project: ProjectTree) -> None:
    engine = SyncEngine(synced_project.root)

    result = engine.bump(BumpKind.PATCH)

    assert str(result.previous_version) == "1.2.3"
    assert str(result.new_version) == "1.2.4"
    assert result.operation is Operation.BUMP
    assert [change.path.name for change in result.changes] == [
        "VERSION",
        "Cargo.toml",
        "pyproject.toml",
        "package.json",
    ]
    assert result.committed == tuple(change.path for change in result.changes)
    assert synced_project.read("VERSION") == "1.2.4\n"
    assert synced_project.read("Cargo.toml") == cargo_manifest("1.2.4")
    assert synced_project.read("pyproject.toml") == pyproject_manifest("1.2.4")
    assert synced_project.read("package.json") == package_manifest("1.2.4")
    assert engine.state is EngineState.DONE
    assert engine.history == HAPPY_PATH


@pytest.mark.parametrize(
    ("kind", "expected"),
    [("major", "2.0.0"), ("minor", "1.3.0"), ("patch", "1.2.4")],
)
def test_bump_accepts_kind_names(synced_project: ProjectTree, kind: str, expected: str) -> None:
    result = SyncEngine(synced_project.root).bump(kind)
    assert str(result.new_version) == expected
    assert synced_project.read("VERSION").strip() == expected


def test_bump_refuses_when_manifests_disagree(synced_project: ProjectTree) -> None:
    _ = synced_project.write("package.json", package_manifest("1.2.2"))
    before = synced_project.snapshot()
    engine = SyncEngine(synced_project.root)

    with pytest.raises(VersionMismatchError) as excinfo:
        _ = engine.bump(BumpKind.MINOR)

    assert [item.path.name for item in excinfo.value.mismatches] == ["package.json"]
    assert "versync sync" in str(excinfo.value)
    assert synced_project.snapshot() == before
    assert engine.state is EngineState.FAILED
    assert EngineState.STAGING not in engine.history


def test_dry_run_stages_without_writing(synced_project: ProjectTree) -> None:
    before = synced_project.snapshot()
    engine = SyncEngine(synced_project.root)

    result = engine.bump(BumpKind.MAJOR, dry_run=True)

    assert result.dry_run
    assert result.changed
    assert result.committed == ()
    assert synced_project.snapshot() == before
    assert EngineState.COMMITTING not in engine.history
    diff = result.render_diff()
    assert "--- a/VERSION" in diff
    assert "+++ b/Cargo.toml" in diff
    assert "-1.2.3" in diff
    assert "+2.0.0" in diff


def test_sync_writes_root_version_into_manifests(synced_project: ProjectTree) -> None:
    _ = synced_project.write("Cargo.toml", cargo_manifest("0.9.0"))
    _ = synced_project.write("package.json", package_manifest("1.0.0"))

    result = SyncEngine(synced_project.root).sync()

    assert str(result.new_version) == "1.2.3"
    assert sorted(change.path.name for change in result.changes) == ["Cargo.toml", "package.json"]
    assert {change.old_version for change in result.changes} == {"0.9.0", "1.0.0"}
    assert synced_project.read("Cargo.toml") == cargo_manifest("1.2.3")
    assert synced_project.read("package.json") == package_manifest("1.2.3")
    assert synced_project.read("VERSION") == "1.2.3\n"


def test_sync_is_idempotent(synced_project: ProjectTree) -> None:
    _ = synced_project.write("pyproject.toml", pyproject_manifest("0.0.1"))
    engine = SyncEngine(synced_project.root)
    _ = engine.sync()
    after_first = synced_project.snapshot()

    second = engine.sync()

    assert not second.changed
    assert second.committed == ()
    assert synced_project.snapshot() == after_first


def test_reset_defaults_to_zero(synced_project: ProjectTree) -> None:
    result = SyncEngine(synced_project.root).reset()

    assert str(result.new_version) == "0.0.0"
    assert result.operation is Operation.RESET
    assert synced_project.read("VERSION") == "0.0.0\n"
    assert synced_project.read("Cargo.toml") == cargo_manifest("0.0.0")


def test_reset_to_explicit_target(synced_project: ProjectTree) -> None:
    _ = SyncEngine(synced_project.root).reset("3.1.4-rc.1")
    assert synced_project.read("VERSION") == "3.1.4-rc.1\n"
    assert synced_project.read("package.json") == package_manifest("3.1.4-rc.1")


def test_reset_rejects_invalid_target_before_touching_disk(synced_project: ProjectTree) -> None:
    before = synced_project.snapshot()
    engine = SyncEngine(synced_project.root)
    with pytest.raises(InvalidVersionFormatError):
        _ = engine.reset("not-a-version")
    assert synced_project.snapshot() == before
    assert engine.history == [EngineState.IDLE, EngineState.FAILED]


def test_verify_reports_mismatches_without_writing(synced_project: ProjectTree) -> None:
    _ = synced_project.write("Cargo.toml", cargo_manifest("1.2.0"))
    before = synced_project.snapshot()

    report = SyncEngine(synced_project.root).verify()

    assert not report.in_sync
    assert str(report.root_version) == "1.2.3"
    assert len(report.entries) == 3
    (mismatch,) = report.mismatches
    assert mismatch.path.name == "Cargo.toml"
    assert mismatch.format is ManifestFormat.CARGO
    assert mismatch.declared == "1.2.0"
    assert mismatch.expected == "1.2.3"
    assert synced_project.snapshot() == before


@pytest.mark.parametrize("operation", ["verify", "sync", "bump"])
def test_malformed_manifest_version_names_the_file(synced_project: ProjectTree, operation: str) -> None:
    _ = synced_project.write("Cargo.toml", cargo_manifest("1.2"))
    before = synced_project.snapshot()
    engine = SyncEngine(synced_project.root)

    with pytest.raises(InvalidVersionFormatError, match="Cargo.toml"):
        if operation == "bump":
            _ = engine.bump(BumpKind.PATCH)
        else:
            _ = getattr(engine, operation)()

    assert engine.state is EngineState.FAILED
    assert EngineState.STAGING not in engine.history
    assert synced_project.snapshot() == before


def test_status_and_show_on_synced_tree(synced_project: ProjectTree) -> None:
    engine = SyncEngine(synced_project.root)
    report = engine.status()
    assert report.in_sync
    assert engine.current_version() == VersionValue.parse("1.2.3")
    assert engine.history[-1] is EngineState.DONE
    assert EngineState.STAGING not in engine.history


def test_missing_root_version(project: ProjectTree) -> None:
    _ = project.write("Cargo.toml", cargo_manifest("1.0.0"))
    engine = SyncEngine(project.root)
    with pytest.raises(MissingRootVersionError):
        _ = engine.bump(BumpKind.PATCH)
    assert engine.history == [EngineState.IDLE, EngineState.DISCOVERING, EngineState.FAILED]


def test_invalid_root_version(project: ProjectTree) -> None:
    _ = project.write("VERSION", "v1.2\n")
    with pytest.raises(InvalidVersionFormatError):
        _ = SyncEngine(project.root).current_version()


def test_root_version_is_trimmed_and_whitespace_kept(project: ProjectTree) -> None:
    _ = project.write("VERSION", "  1.2.3  \n")
    _ = SyncEngine(project.root).bump(BumpKind.PATCH)
    assert project.read("VERSION") == "  1.2.4  \n"


def test_nested_version_record_blocks_cascade(cascade_project: ProjectTree) -> None:
    _ = cascade_project.write("crates/core/VERSION", "1.2.3\n")
    before = cascade_project.snapshot()

    with pytest.raises(NestedVersionRecordError) as excinfo:
        _ = SyncEngine(cascade_project.root).bump(BumpKind.PATCH, cascade=True)

    assert excinfo.value.paths == (cascade_project.root / "crates" / "core" / "VERSION",)
    assert cascade_project.snapshot() == before


def test_cascade_default_comes_from_config(cascade_project: ProjectTree) -> None:
    engine = SyncEngine(cascade_project.root, config=Config(cascade=True))

    report = engine.verify()

    assert report.cascade
    assert len(report.entries) == 5
    assert not engine.verify(cascade=False).cascade


def test_cascade_bump_skips_ignored_directories(cascade_project: ProjectTree) -> None:
    result = SyncEngine(cascade_project.root).bump(BumpKind.PATCH, cascade=True)

    written = {path.relative_to(cascade_project.root).as_posix() for path in result.committed}
    assert written == {
        "VERSION",
        "Cargo.toml",
        "crates/cli/Cargo.toml",
        "crates/core/Cargo.toml",
        "python/pyproject.toml",
        "web/package.json",
    }
    assert cascade_project.read("build/Cargo.toml") == cargo_manifest("0.0.1", name="generated")
    assert cascade_project.read("web/node_modules/dep/package.json") == package_manifest("9.9.9", name="dep")


def test_unreadable_manifest_blocks_the_run(synced_project: ProjectTree) -> None:
    _ = synced_project.write("Cargo.toml", '[workspace]\nmembers = ["crates/*"]\n')
    before = synced_project.snapshot()

    with pytest.raises(UnreadableManifestError) as excinfo:
        _ = SyncEngine(synced_project.root).sync()

    assert excinfo.value.paths == (synced_project.root / "Cargo.toml",)
    assert synced_project.snapshot() == before


def test_crlf_line_endings_survive_a_bump(project: ProjectTree) -> None:
    _ = project.write("VERSION", "1.0.0\r\n")
    _ = project.write("Cargo.toml", cargo_manifest("1.0.0").replace("\n", "\r\n"))

    _ = SyncEngine(project.root).bump(BumpKind.MINOR)

    assert project.read("VERSION") == "1.1.0\r\n"
    assert project.read("Cargo.toml") == cargo_manifest("1.1.0").replace("\n", "\r\n")
