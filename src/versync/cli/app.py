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

"""CLI entry point and orchestration for versync commands."""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable, Sequence
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING, Final

from versync import __version__
from versync.cli.commands import bump as bump_command
from versync.cli.commands import reset as reset_command
from versync.cli.commands import sync as sync_command
from versync.cli.commands import tag as tag_command
from versync.cli.commands import verify as verify_command
from versync.cli.helpers import CLIContext, build_cli_context, echo, register_argument
from versync.core.model_types import LogComponent
from versync.error_codes import error_code_for
from versync.exceptions import PartialWriteUnrecoverableError, VersyncError
from versync.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from versync.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("versync.cli")

VERSYNC_VERSION: Final[str] = __version__

CommandHandler = Callable[[argparse.Namespace, CLIContext], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the versync command-line interface.

    Parses command-line arguments, configures logging, resolves the project root
    and configuration, and dispatches to the command handler. Any ``VersyncError``
    is reported on stderr with its error code and turned into exit status ``1``.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the executed command handler (0 for success, non-zero for failure).
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"versync {VERSYNC_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")

    started = time.perf_counter()
    try:
        context = build_cli_context(cli_root=args.root, cli_config=args.config)
        exit_code = handler(args, context)
    except VersyncError as exc:
        _report_error(exc)
        exit_code = 1
    logger.debug(
        "Command %s finished",
        args.command,
        extra=structured_extra(
            LogComponent.CLI,
            exit_code=exit_code,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return exit_code


def _report_error(exc: VersyncError) -> None:
    code = error_code_for(exc)
    echo(f"[versync] error {code}: {exc}", err=True)
    if isinstance(exc, PartialWriteUnrecoverableError):
        echo("[versync] files left modified:", err=True)
        for path in exc.modified:
            echo(f"  {path}", err=True)


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and every subcommand.

    Returns:
        argparse.ArgumentParser: Fully configured argument parser ready to parse CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="versync",
        description="Keep the root VERSION file and every build manifest on the same semantic version.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the versync version and exit.",
    )
    register_argument(
        parser,
        "--root",
        type=Path,
        default=None,
        help="Project root (default: $VERSYNC_ROOT, else the nearest directory holding VERSION).",
    )
    register_argument(
        parser,
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: $VERSYNC_CONFIG, else versync.toml, .versync.toml or pyproject.toml).",
    )
    register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Logging output format (default: $VERSYNC_LOG_FORMAT or text).",
    )
    register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging verbosity (default: $VERSYNC_LOG_LEVEL or warning).",
    )
    subparsers: SubparserCollection = parser.add_subparsers(dest="command")

    bump_command.register_bump_command(subparsers)
    sync_command.register_sync_command(subparsers)
    reset_command.register_reset_command(subparsers)
    verify_command.register_verify_commands(subparsers)
    tag_command.register_tag_command(subparsers)
    return parser


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    """Configure logging; failures are suppressed (best-effort initialization)."""
    with suppress(ValueError):
        _ = configure_logging(log_format, log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    handlers: dict[str, CommandHandler] = {
        "bump": bump_command.execute_bump,
        "reset": reset_command.execute_reset,
        "show": verify_command.execute_show,
        "status": verify_command.execute_status,
        "sync": sync_command.execute_sync,
        "tag": tag_command.execute_tag,
        "verify": verify_command.execute_verify,
    }
    for alias in bump_command.BUMP_ALIASES:
        handlers[alias] = bump_command.execute_bump
    return handlers


__all__ = ["main"]
