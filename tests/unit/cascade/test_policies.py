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

"""Unit tests for the layout and readability policies."""

from __future__ import annotations

from pathlib import Path

import pytest

from versync.cascade import (
    CascadePolicyError,
    MissingRootVersionError,
    MultipleRootVersionsError,
    NestedVersionRecordError,
    ReadFailure,
    SymlinkManifestRejectedError,
    UnreadableManifestError,
    check_manifest_readability,
    check_nested_version_records,
    check_root_version,
    check_symlinks,
    check_unreadable,
    enforce_discovery_policies,
    enforce_manifest_readability,
)
from versync.core.model_types import RejectionReason
from versync.discovery import DiscoveryResult, RejectedPath

pytestmark = pytest.mark.unit

ROOT = Path("/work/repo")


def _result(
    *,
    records: tuple[Path, ...] = (ROOT / "VERSION",),
    rejected: tuple[RejectedPath, ...] = (),
) -> DiscoveryResult:
    return DiscoveryResult(root=ROOT, version_records=records, rejected=rejected)


def test_clean_layout_passes_every_check() -> None:
    result = _result()
    for check in (check_root_version, check_nested_version_records, check_symlinks, check_unreadable):
        outcome = check(result)
        assert outcome.passed
        assert outcome.paths == ()
    enforce_discovery_policies(result)


def test_missing_root_record() -> None:
    outcome = check_root_version(_result(records=()))
    assert not outcome.passed
    assert outcome.reason == "missing"
    with pytest.raises(MissingRootVersionError, match="No VERSION file found"):
        enforce_discovery_policies(_result(records=()))


def test_multiple_root_records() -> None:
    records = (ROOT / "VERSION", ROOT / "VERSION")
    with pytest.raises(MultipleRootVersionsError):
        enforce_discovery_policies(_result(records=records))


def test_nested_record_names_every_offender() -> None:
    nested = (ROOT / "a" / "VERSION", ROOT / "b" / "c" / "VERSION")
    result = _result(records=(ROOT / "VERSION", *nested))
    outcome = check_nested_version_records(result)
    assert outcome.paths == nested
    with pytest.raises(NestedVersionRecordError) as excinfo:
        enforce_discovery_policies(result)
    assert excinfo.value.paths == nested
    assert str(ROOT / "b" / "c" / "VERSION") in str(excinfo.value)


def test_root_checked_before_nested_records() -> None:
    result = _result(records=(ROOT / "sub" / "VERSION",))
    with pytest.raises(MissingRootVersionError):
        enforce_discovery_policies(result)


def test_symlinked_root_record_is_reported_as_symlink() -> None:
    rejected = (RejectedPath(ROOT / "VERSION", RejectionReason.SYMLINK, "symlink to ../VERSION"),)
    result = _result(records=(), rejected=rejected)
    assert check_root_version(result).reason == "symlink"
    with pytest.raises(SymlinkManifestRejectedError):
        enforce_discovery_policies(result)


def test_symlinked_manifest_fails_closed() -> None:
    rejected = (RejectedPath(ROOT / "web" / "package.json", RejectionReason.SYMLINK),)
    with pytest.raises(SymlinkManifestRejectedError) as excinfo:
        enforce_discovery_policies(_result(rejected=rejected))
    assert excinfo.value.paths == (ROOT / "web" / "package.json",)


def test_unreadable_directory_fails_closed() -> None:
    rejected = (RejectedPath(ROOT / "locked", RejectionReason.UNREADABLE, "Permission denied"),)
    with pytest.raises(UnreadableManifestError, match="Permission denied"):
        enforce_discovery_policies(_result(rejected=rejected))


def test_manifest_readability() -> None:
    assert check_manifest_readability([]).passed
    failures = [ReadFailure(ROOT / "Cargo.toml", "No version found in Cargo.toml ([package] version)")]
    outcome = check_manifest_readability(failures)
    assert not outcome.passed
    assert outcome.paths == (ROOT / "Cargo.toml",)
    with pytest.raises(UnreadableManifestError, match=r"Cargo.toml: No version found"):
        enforce_manifest_readability(failures)


def test_policy_errors_share_a_base_class() -> None:
    for error_type in (
        MissingRootVersionError,
        MultipleRootVersionsError,
        NestedVersionRecordError,
        SymlinkManifestRejectedError,
        UnreadableManifestError,
    ):
        assert issubclass(error_type, CascadePolicyError)
        assert issubclass(error_type, ValueError)
