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

"""Unit tests for tree walking and the fixed root-level layout."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from tests.fixtures.projects import cargo_manifest, package_manifest
from versync.core.model_types import ManifestFormat, RejectionReason
from versync.discovery import standard_locations, walk_tree

if TYPE_CHECKING:
    from tests.fixtures.projects import ProjectTree

pytestmark = pytest.mark.unit

requires_symlinks = pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")


def _relative(project: ProjectTree, paths: object) -> list[str]:
    return [path.relative_to(project.root).as_posix() for path in paths]  # type: ignore[attr-defined]


def test_walk_orders_root_files_before_subdirectories(cascade_project: ProjectTree) -> None:
    result = walk_tree(cascade_project.root)
    assert _relative(cascade_project, (item.path for item in result.manifests)) == [
        "Cargo.toml",
        "crates/cli/Cargo.toml",
        "crates/core/Cargo.toml",
        "python/pyproject.toml",
        "web/package.json",
    ]
    assert [item.format for item in result.manifests][-1] is ManifestFormat.PACKAGE_JSON
    assert result.version_records == (cascade_project.root / "VERSION",)
    assert result.ignore_rules_active is True
    assert result.rejected == ()


def test_gitignore_rules_need_a_git_directory(project: ProjectTree) -> None:
    project.write_many(
        {
            "VERSION": "1.0.0\n",
            ".gitignore": "build/\n",
            "build/Cargo.toml": cargo_manifest("1.0.0"),
        },
    )
    result = walk_tree(project.root)
    assert result.ignore_rules_active is False
    assert _relative(project, (item.path for item in result.manifests)) == ["build/Cargo.toml"]


def test_respect_gitignore_can_be_disabled(cascade_project: ProjectTree) -> None:
    result = walk_tree(cascade_project.root, respect_gitignore=False)
    paths = _relative(cascade_project, (item.path for item in result.manifests))
    assert "build/Cargo.toml" in paths
    assert "web/node_modules/dep/package.json" in paths


def test_nested_gitignore_negation_reincludes(project: ProjectTree) -> None:
    project.init_git()
    project.write_many(
        {
            "VERSION": "1.0.0\n",
            ".gitignore": "package.json\n",
            "apps/a/package.json": package_manifest("1.0.0"),
            "apps/b/.gitignore": "!package.json\n",
            "apps/b/package.json": package_manifest("1.0.0"),
        },
    )
    result = walk_tree(project.root)
    assert _relative(project, (item.path for item in result.manifests)) == ["apps/b/package.json"]


def test_git_info_exclude_is_honoured(project: ProjectTree) -> None:
    project.init_git()
    project.write_many(
        {
            "VERSION": "1.0.0\n",
            ".git/info/exclude": "vendor/\n",
            "vendor/Cargo.toml": cargo_manifest("0.1.0"),
        },
    )
    assert walk_tree(project.root).manifests == ()


def test_extra_excludes_apply_without_git(project: ProjectTree) -> None:
    project.write_many(
        {
            "VERSION": "1.0.0\n",
            "fixtures/Cargo.toml": cargo_manifest("0.0.0"),
            "Cargo.toml": cargo_manifest("1.0.0"),
        },
    )
    result = walk_tree(project.root, extra_excludes=["fixtures/", "  "])
    assert _relative(project, (item.path for item in result.manifests)) == ["Cargo.toml"]


def test_hidden_directories_are_skipped(project: ProjectTree) -> None:
    project.write_many(
        {
            "VERSION": "1.0.0\n",
            ".venv/lib/pyproject.toml": "[project]\nversion = '9.9.9'\n",
        },
    )
    assert walk_tree(project.root).manifests == ()


def test_nested_version_records_are_collected_and_flagged(project: ProjectTree) -> None:
    project.write_many({"VERSION": "1.0.0\n", "sub/VERSION": "2.0.0\n"})
    result = walk_tree(project.root)
    assert result.nested_records == (project.root / "sub" / "VERSION",)
    assert [item.reason for item in result.rejected] == [RejectionReason.NESTED_VERSION_RECORD]


@requires_symlinks
def test_symlinked_manifest_is_rejected(project: ProjectTree) -> None:
    target = project.write("real/Cargo.toml", cargo_manifest("1.0.0"))
    project.write("VERSION", "1.0.0\n")
    (project.root / "linked").mkdir()
    (project.root / "linked" / "Cargo.toml").symlink_to(target)
    result = walk_tree(project.root)
    assert _relative(project, (item.path for item in result.manifests)) == ["real/Cargo.toml"]
    rejected = result.rejected_for(RejectionReason.SYMLINK)
    assert _relative(project, (item.path for item in rejected)) == ["linked/Cargo.toml"]
    assert "symlink to" in rejected[0].detail


@requires_symlinks
def test_symlinked_directories_are_not_followed(project: ProjectTree) -> None:
    project.write("VERSION", "1.0.0\n")
    project.write("elsewhere/Cargo.toml", cargo_manifest("1.0.0"))
    (project.root / "alias").symlink_to(project.root / "elsewhere", target_is_directory=True)
    result = walk_tree(project.root)
    assert _relative(project, (item.path for item in result.manifests)) == ["elsewhere/Cargo.toml"]
    assert result.rejected == ()


def test_walk_requires_a_directory(project: ProjectTree) -> None:
    path = project.write("VERSION", "1.0.0\n")
    with pytest.raises(NotADirectoryError):
        _ = walk_tree(path)


def test_standard_locations_only_considers_root_files(cascade_project: ProjectTree) -> None:
    result = standard_locations(cascade_project.root)
    assert _relative(cascade_project, (item.path for item in result.manifests)) == ["Cargo.toml"]
    assert result.version_records == (cascade_project.root / "VERSION",)
    assert result.ignore_rules_active is False


@requires_symlinks
def test_standard_locations_records_symlinks(project: ProjectTree) -> None:
    target = project.write("shared/package.json", package_manifest("1.0.0"))
    project.write("VERSION", "1.0.0\n")
    (project.root / "package.json").symlink_to(target)
    result = standard_locations(project.root)
    assert result.manifests == ()
    assert [item.reason for item in result.rejected] == [RejectionReason.SYMLINK]
