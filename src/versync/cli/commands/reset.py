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

"""``versync reset``: set every version back to a fixed value."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from versync.cli.helpers import mutation_parent, print_sync_result, register_argument
from versync.config.constants import DEFAULT_RESET_VERSION

if TYPE_CHECKING:
    from collections.abc import Sequence

    from versync.cli.helpers import CLIContext
    from versync.cli.types import SubparserCollection


def register_reset_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    reset = subparsers.add_parser(
        "reset",
        help="Reset the root VERSION and every manifest to a version",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=[*(parents or []), mutation_parent()],
    )
    register_argument(
        reset,
        "target",
        nargs="?",
        default=DEFAULT_RESET_VERSION,
        help="Version to reset to.",
    )


def execute_reset(args: argparse.Namespace, context: CLIContext) -> int:
    result = context.engine().reset(args.target, cascade=args.cascade, dry_run=args.dry_run)
    if not args.quiet:
        print_sync_result(result, context)
    return 0


__all__ = ["execute_reset", "register_reset_command"]
