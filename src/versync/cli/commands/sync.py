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

"""``versync sync``: write the root version into every manifest."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from versync.cli.helpers import mutation_parent, print_sync_result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from versync.cli.helpers import CLIContext
    from versync.cli.types import SubparserCollection


def register_sync_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    _ = subparsers.add_parser(
        "sync",
        help="Copy the root VERSION into every manifest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=[*(parents or []), mutation_parent()],
    )


def execute_sync(args: argparse.Namespace, context: CLIContext) -> int:
    result = context.engine().sync(cascade=args.cascade, dry_run=args.dry_run)
    if not args.quiet:
        print_sync_result(result, context)
    return 0


__all__ = ["execute_sync", "register_sync_command"]
