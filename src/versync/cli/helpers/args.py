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

# ignore JUSTIFIED: argument helpers mirror argparse signatures and allow passthrough
# typing without constraining caller kwargs
# ruff: noqa: ANN401  # pylint: disable=redundant-returns-doc,unnecessary-ellipsis

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

import argparse
from typing import Any, Protocol

from versync.runtime import consume


class ArgumentRegistrar(Protocol):
    """Interface shared by ``argparse.ArgumentParser`` and argument groups."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically.

        Args:
            *args: Positional argument configuration passed through to ``add_argument``.
            **kwargs: Keyword options forwarded to ``add_argument``.

        Returns:
            argparse.Action: The action object created for the registered argument.
        """
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def register_cascade_flag(registrar: ArgumentRegistrar) -> None:
    register_argument(
        registrar,
        "--cascade",
        action="store_true",
        default=None,
        help="Walk the whole tree for manifests instead of the root-level files only.",
    )


def register_quiet_flag(registrar: ArgumentRegistrar) -> None:
    register_argument(
        registrar,
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress normal output.",
    )


def mutation_parent() -> argparse.ArgumentParser:
    """Return a parent parser carrying the flags shared by every mutating command."""
    parent = argparse.ArgumentParser(add_help=False)
    register_cascade_flag(parent)
    register_argument(
        parent,
        "--dry-run",
        action="store_true",
        help="Show the changes that would be made without writing any file.",
    )
    register_quiet_flag(parent)
    return parent


__all__ = [
    "ArgumentRegistrar",
    "mutation_parent",
    "register_argument",
    "register_cascade_flag",
    "register_quiet_flag",
]
