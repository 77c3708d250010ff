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

"""``versync tag``: create a git tag for the current version."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from versync.api import render_tag
from versync.cli.helpers import echo, register_argument, register_cascade_flag
from versync.services.tagging import create_tag

if TYPE_CHECKING:
    from collections.abc import Sequence

    from versync.cli.helpers import CLIContext
    from versync.cli.types import SubparserCollection


def register_tag_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    tag = subparsers.add_parser(
        "tag",
        help="Create a git tag named after the current version",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=list(parents or []),
    )
    register_cascade_flag(tag)
    register_argument(
        tag,
        "--tag-format",
        default=None,
        help="Tag name template (default from configuration, normally v{version}).",
    )
    register_argument(
        tag,
        "-m",
        "--message",
        default=None,
        help="Create an annotated tag with this message.",
    )
    register_argument(
        tag,
        "--dry-run",
        action="store_true",
        help="Print the tag name without creating it.",
    )


def execute_tag(args: argparse.Namespace, context: CLIContext) -> int:
    engine = context.engine()
    name = render_tag(engine, engine.current_version(cascade=args.cascade), tag_format=args.tag_format)
    if args.dry_run:
        echo(name)
        return 0
    _ = create_tag(context.root, name, message=args.message)
    echo(f"[versync] Created tag {name}")
    return 0


__all__ = ["execute_tag", "register_tag_command"]
