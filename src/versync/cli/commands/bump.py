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

"""``versync bump`` and its ``major``/``minor``/``patch`` shortcuts."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from versync.api import render_tag
from versync.cli.helpers import echo, mutation_parent, print_sync_result, register_argument
from versync.core.model_types import BumpKind
from versync.services.tagging import create_tag

if TYPE_CHECKING:
    from collections.abc import Sequence

    from versync.cli.helpers import CLIContext
    from versync.cli.types import SubparserCollection

BUMP_ALIASES: tuple[str, ...] = tuple(kind.value for kind in BumpKind)


def _register_tag_options(parser: argparse.ArgumentParser) -> None:
    register_argument(
        parser,
        "--tag",
        action="store_true",
        help="Create a git tag for the new version after a successful bump.",
    )
    register_argument(
        parser,
        "--tag-format",
        default=None,
        help="Tag name template (placeholders: {version}, {major}, {minor}, {patch}, {repository_name}).",
    )
    register_argument(
        parser,
        "--tag-message",
        default=None,
        help="Create an annotated tag with this message.",
    )


def register_bump_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach ``bump`` and the per-component shortcuts to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying common flags.
    """
    shared = [*(parents or []), mutation_parent()]
    bump = subparsers.add_parser(
        "bump",
        help="Increment the version and write it to every manifest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=shared,
    )
    register_argument(bump, "kind", choices=BUMP_ALIASES, help="Version component to increment.")
    _register_tag_options(bump)
    for alias in BUMP_ALIASES:
        parser = subparsers.add_parser(
            alias,
            help=f"Shortcut for `versync bump {alias}`",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
            parents=shared,
        )
        _register_tag_options(parser)


def execute_bump(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute a bump.

    Args:
        args: Parsed CLI namespace; ``kind`` is taken from the command name for shortcuts.
        context: Resolved project root and configuration.

    Returns:
        ``0`` on success.
    """
    kind = BumpKind.from_str(getattr(args, "kind", None) or args.command)
    engine = context.engine()
    tag: str | None = None
    if args.tag:
        # the template must expand before any manifest is rewritten
        target = engine.current_version(cascade=args.cascade).bump(kind)
        tag = render_tag(engine, target, tag_format=args.tag_format)
    result = engine.bump(kind, cascade=args.cascade, dry_run=args.dry_run)
    if not args.quiet:
        print_sync_result(result, context)
    if tag is None:
        return 0
    if args.dry_run:
        if not args.quiet:
            echo(f"[versync] would create tag {tag}")
        return 0
    _ = create_tag(context.root, tag, message=args.tag_message)
    if not args.quiet:
        echo(f"[versync] Created tag {tag}")
    return 0


__all__ = ["BUMP_ALIASES", "execute_bump", "register_bump_command"]
