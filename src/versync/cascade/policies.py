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

"""Layout and readability policies gating every synchronisation run.

Each ``check_*`` function is pure and returns a ``PolicyOutcome``; the
matching ``enforce_*`` helper raises the corresponding error. All checks run
before anything is staged, so a failing policy never leaves a partial write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from versync._internal.exceptions import VersyncValidationError
from versync._internal.logging_utils import structured_extra
from versync.core.model_types import LogComponent, RejectionReason

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from versync.discovery.models import DiscoveryResult

logger: logging.Logger = logging.getLogger("versync.policy")


def _render_paths(paths: Iterable[Path]) -> str:
    return ", ".join(str(path) for path in paths)


class CascadePolicyError(VersyncValidationError):
    """Base error for layouts that are unsafe to synchronise."""

    def __init__(self, message: str, paths: Sequence[Path] = ()) -> None:
        self.paths: tuple[Path, ...] = tuple(paths)
        super().__init__(message)


class MissingRootVersionError(CascadePolicyError):
    """Raised when the root directory holds no version record."""

    def __init__(self, root: Path) -> None:
        """Initialise the error.

        Args:
            root: Directory expected to contain the ``VERSION`` file.
        """
        self.root = root
        super().__init__(f"No VERSION file found in {root}", (root,))


class MultipleRootVersionsError(CascadePolicyError):
    """Raised when more than one version record claims the root."""

    def __init__(self, paths: Sequence[Path]) -> None:
        super().__init__(f"Multiple root version records: {_render_paths(paths)}", paths)


class NestedVersionRecordError(CascadePolicyError):
    """Raised when a version record exists below the root directory."""

    def __init__(self, paths: Sequence[Path]) -> None:
        """Initialise the error.

        Args:
            paths: Every nested ``VERSION`` file that was found.
        """
        super().__init__(
            f"Nested VERSION file(s) found below the root: {_render_paths(paths)}; "
            "only the root VERSION may define the project version",
            paths,
        )


class SymlinkManifestRejectedError(CascadePolicyError):
    """Raised when a manifest or version record is a symbolic link."""

    def __init__(self, paths: Sequence[Path]) -> None:
        super().__init__(f"Refusing to follow symlinked manifest(s): {_render_paths(paths)}", paths)


class UnreadableManifestError(CascadePolicyError):
    """Raised when a manifest or directory cannot be read."""

    def __init__(self, paths: Sequence[Path], reasons: Sequence[str] = ()) -> None:
        """Initialise the error.

        Args:
            paths: Unreadable files or directories.
            reasons: Per-path explanation, aligned with ``paths`` when given.
        """
        self.reasons: tuple[str, ...] = tuple(reasons)
        if self.reasons and len(self.reasons) == len(paths):
            rendered = "; ".join(f"{path}: {reason}" for path, reason in zip(paths, self.reasons, strict=True))
        else:
            rendered = _render_paths(paths)
        super().__init__(f"Unreadable manifest(s): {rendered}", paths)


@dataclass(slots=True, frozen=True)
class PolicyOutcome:
    """Result of a single policy check."""

    passed: bool
    reason: str = ""
    paths: tuple[Path, ...] = ()

    @classmethod
    def ok(cls) -> PolicyOutcome:
        return cls(passed=True)

    @classmethod
    def fail(cls, reason: str, paths: Iterable[Path]) -> PolicyOutcome:
        return cls(passed=False, reason=reason, paths=tuple(paths))


@dataclass(slots=True, frozen=True)
class ReadFailure:
    """A manifest whose declared version could not be read."""

    path: Path
    reason: str


def _root_symlink_rejections(result: DiscoveryResult) -> tuple[Path, ...]:
    return tuple(
        item.path for item in result.rejected_for(RejectionReason.SYMLINK) if item.path == result.root_record
    )


def check_root_version(result: DiscoveryResult) -> PolicyOutcome:
    """Require exactly one version record directly inside the root."""
    symlinked = _root_symlink_rejections(result)
    if symlinked:
        return PolicyOutcome.fail("symlink", symlinked)
    at_root = tuple(path for path in result.version_records if path.parent == result.root)
    if not at_root:
        return PolicyOutcome.fail("missing", (result.root,))
    if len(at_root) > 1:
        return PolicyOutcome.fail("multiple", at_root)
    return PolicyOutcome.ok()


def check_nested_version_records(result: DiscoveryResult) -> PolicyOutcome:
    nested = result.nested_records
    if nested:
        return PolicyOutcome.fail("nested", nested)
    return PolicyOutcome.ok()


def check_symlinks(result: DiscoveryResult) -> PolicyOutcome:
    rejected = result.rejected_for(RejectionReason.SYMLINK)
    if rejected:
        return PolicyOutcome.fail("symlink", (item.path for item in rejected))
    return PolicyOutcome.ok()


def check_unreadable(result: DiscoveryResult) -> PolicyOutcome:
    rejected = result.rejected_for(RejectionReason.UNREADABLE)
    if rejected:
        return PolicyOutcome.fail("unreadable", (item.path for item in rejected))
    return PolicyOutcome.ok()


def check_manifest_readability(failures: Iterable[ReadFailure]) -> PolicyOutcome:
    """Require that every discovered manifest yielded a version."""
    collected = tuple(failures)
    if collected:
        return PolicyOutcome.fail("; ".join(item.reason for item in collected), (item.path for item in collected))
    return PolicyOutcome.ok()


def _log_failure(policy: str, outcome: PolicyOutcome) -> None:
    logger.warning(
        "Policy %s failed: %s",
        policy,
        _render_paths(outcome.paths),
        extra=structured_extra(
            LogComponent.POLICY,
            details={"policy": policy, "reason": outcome.reason, "paths": [str(p) for p in outcome.paths]},
        ),
    )


def enforce_root_version(result: DiscoveryResult) -> None:
    outcome = check_root_version(result)
    if outcome.passed:
        return
    _log_failure("root_version", outcome)
    if outcome.reason == "symlink":
        raise SymlinkManifestRejectedError(outcome.paths)
    if outcome.reason == "multiple":
        raise MultipleRootVersionsError(outcome.paths)
    raise MissingRootVersionError(result.root)


def enforce_nested_version_records(result: DiscoveryResult) -> None:
    outcome = check_nested_version_records(result)
    if not outcome.passed:
        _log_failure("nested_version_records", outcome)
        raise NestedVersionRecordError(outcome.paths)


def enforce_symlinks(result: DiscoveryResult) -> None:
    outcome = check_symlinks(result)
    if not outcome.passed:
        _log_failure("symlinks", outcome)
        raise SymlinkManifestRejectedError(outcome.paths)


def enforce_unreadable(result: DiscoveryResult) -> None:
    outcome = check_unreadable(result)
    if not outcome.passed:
        _log_failure("unreadable", outcome)
        reasons = [item.detail for item in result.rejected_for(RejectionReason.UNREADABLE)]
        raise UnreadableManifestError(outcome.paths, reasons)


def enforce_manifest_readability(failures: Iterable[ReadFailure]) -> None:
    collected = tuple(failures)
    outcome = check_manifest_readability(collected)
    if not outcome.passed:
        _log_failure("manifest_readability", outcome)
        raise UnreadableManifestError(outcome.paths, [item.reason for item in collected])


def enforce_discovery_policies(result: DiscoveryResult) -> None:
    """Run the layout policies in order: root, nested, symlink, unreadable.

    Raises:
        CascadePolicyError: The first policy that fails.
    """
    enforce_root_version(result)
    enforce_nested_version_records(result)
    enforce_symlinks(result)
    enforce_unreadable(result)


__all__ = [
    "CascadePolicyError",
    "MissingRootVersionError",
    "MultipleRootVersionsError",
    "NestedVersionRecordError",
    "PolicyOutcome",
    "ReadFailure",
    "SymlinkManifestRejectedError",
    "UnreadableManifestError",
    "check_manifest_readability",
    "check_nested_version_records",
    "check_root_version",
    "check_symlinks",
    "check_unreadable",
    "enforce_discovery_policies",
    "enforce_manifest_readability",
]
