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

"""Read-only commands: ``verify``, ``status`` and ``show``."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from versync.cli.helpers import (
    echo,
    print_mismatches,
    print_status_table,
    register_cascade_flag,
    register_quiet_flag,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from versync.cli.helpers import CLIContext
    from versync.cli.types import SubparserCollection


def register_verify_commands(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach ``verify``, ``status`` and ``show`` to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common flags.
    """
    verify = subparsers.add_parser(
        "verify",
        help="Check that every manifest matches the root VERSION (exit 1 otherwise)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=list(parents or []),
    )
    register_cascade_flag(verify)
    register_quiet_flag(verify)

    status = subparsers.add_parser(
        "status",
        help="List every discovered file with its declared version",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=list(parents or []),
    )
    register_cascade_flag(status)

    show = subparsers.add_parser(
        "show",
        help="Print the current root version",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=list(parents or []),
    )
    register_cascade_flag(show)


def execute_verify(args: argparse.Namespace, context: CLIContext) -> int:
    """Return ``0`` when every manifest matches the root version, ``1`` otherwise."""
    report = context.engine().verify(cascade=args.cascade)
    if report.in_sync:
        if not args.quiet:
            echo(f"[versync] {len(report.entries)} manifest(s) match {report.root_version}")
        return 0
    if not args.quiet:
        echo(f"[versync] {len(report.mismatches)} manifest(s) differ from {report.root_version}:")
        print_mismatches(report, context)
        echo("Run `versync sync` to fix them.")
    return 1


def execute_status(args: argparse.Namespace, context: CLIContext) -> int:
    report = context.engine().status(cascade=args.cascade)
    print_status_table(report, context)
    return 0


def execute_show(args: argparse.Namespace, context: CLIContext) -> int:
    echo(str(context.engine().current_version(cascade=args.cascade)))
    return 0


__all__ = ["execute_show", "execute_status", "execute_verify", "register_verify_commands"]
