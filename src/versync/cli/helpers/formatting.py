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

"""Rendering of engine results for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from versync.core.model_types import Operation

from .io import echo

if TYPE_CHECKING:
    from versync.sync import SyncResult, VerifyReport

    from .context import CLIContext

_VERBS: dict[Operation, str] = {
    Operation.BUMP: "Bumped",
    Operation.SYNC: "Synchronised",
    Operation.RESET: "Reset",
}


def print_sync_result(result: SyncResult, context: CLIContext) -> None:
    """Summarise a mutating operation; dry runs include a unified diff."""
    verb = _VERBS.get(result.operation, str(result.operation).capitalize())
    if result.operation is Operation.SYNC:
        headline = f"[versync] {verb} manifests to {result.new_version}"
    else:
        headline = f"[versync] {verb} {result.previous_version} -> {result.new_version}"
    if not result.changes:
        echo(f"{headline} (nothing to change)")
        return
    if result.dry_run:
        echo(f"{headline} (dry run, {len(result.changes)} file(s) would change)")
        echo(result.render_diff(), newline=False)
        return
    echo(f"{headline} ({len(result.committed)} file(s) updated)")
    for path in result.committed:
        echo(f"  updated {context.display(path)}")


def print_mismatches(report: VerifyReport, context: CLIContext) -> None:
    for mismatch in report.mismatches:
        echo(
            f"  {context.display(mismatch.path)}: {mismatch.declared} (expected {mismatch.expected})",
        )


def print_status_table(report: VerifyReport, context: CLIContext) -> None:
    """Print one row per file: path, declared version and whether it matches."""
    rows = [("VERSION", str(report.root_version), "root")]
    mismatched = {item.path for item in report.mismatches}
    rows.extend(
        (
            context.display(entry.path),
            entry.declared,
            "mismatch" if entry.path in mismatched else "ok",
        )
        for entry in report.entries
    )
    path_width = max(len(row[0]) for row in rows)
    version_width = max(len(row[1]) for row in rows)
    for path, declared, state in rows:
        echo(f"{path:<{path_width}}  {declared:<{version_width}}  {state}")


__all__ = ["print_mismatches", "print_status_table", "print_sync_result"]
