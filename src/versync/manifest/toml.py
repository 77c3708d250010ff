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

"""Adapters for TOML manifests that keep their version inside a named table."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, ClassVar, Final

from versync.compat import override, tomllib
from versync.core.model_types import ManifestFormat

from .base import MalformedManifestError, ManifestAdapter, MissingVersionFieldError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger("versync.manifest")

_TABLE_HEADER: Final[re.Pattern[str]] = re.compile(r"^\s*\[(?!\[)(?P<name>[^\[\]]+)\]\s*(?:#.*)?$")
_ARRAY_HEADER: Final[re.Pattern[str]] = re.compile(r"^\s*\[\[(?P<name>[^\[\]]+)\]\]\s*(?:#.*)?$")
_VERSION_ASSIGNMENT: Final[re.Pattern[str]] = re.compile(
    r"""^(?P<prefix>\s*(?:version|"version"|'version')\s*=\s*)(?P<quote>["'])(?P<value>[^"'\\\r\n]*)(?P=quote)""",
)
_MULTILINE_DELIMITERS: Final[tuple[str, str]] = ('"""', "'''")


def _normalise_table_name(raw: str) -> str:
    parts = [part.strip().strip("\"'") for part in raw.split(".")]
    return ".".join(parts)


class TomlTableAdapter(ManifestAdapter):
    """Read/write ``version`` under a single top-level TOML table.

    Rewrites are line-based so comments, ordering, and quoting survive. The
    assignment must appear exactly once, directly under the table header;
    inline tables and dotted keys are reported as malformed.
    """

    table: ClassVar[str]

    @override
    def read_version(self, content: str) -> str:
        data = self._parse(content)
        table = data.get(self.table)
        if not isinstance(table, dict):
            raise MissingVersionFieldError(self.filename, self.field_description)
        version = table.get("version")
        if not isinstance(version, str):
            raise MissingVersionFieldError(self.filename, self.field_description)
        return version

    @override
    def write_version(self, content: str, new_version: str) -> str:
        lines = content.splitlines(keepends=True)
        matches = self._locate(lines)
        if not matches:
            msg = f"no version assignment found directly under [{self.table}]"
            raise MalformedManifestError(self.filename, msg)
        if len(matches) > 1:
            msg = f"{len(matches)} version assignments found under [{self.table}]"
            raise MalformedManifestError(self.filename, msg)
        index, match = matches[0]
        line = lines[index]
        lines[index] = f"{line[: match.start('value')]}{new_version}{line[match.end('value') :]}"
        updated = "".join(lines)
        self._verify(updated, new_version)
        return updated

    def _parse(self, content: str) -> dict[str, object]:
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise MalformedManifestError(self.filename, str(exc)) from exc

    def _locate(self, lines: Sequence[str]) -> list[tuple[int, re.Match[str]]]:
        matches: list[tuple[int, re.Match[str]]] = []
        current_table: str | None = None
        open_delimiter: str | None = None
        for index, line in enumerate(lines):
            if open_delimiter is not None:
                if line.count(open_delimiter) % 2 == 1:
                    open_delimiter = None
                continue
            header = _ARRAY_HEADER.match(line) or _TABLE_HEADER.match(line)
            if header is not None:
                current_table = _normalise_table_name(header.group("name"))
                continue
            if current_table == self.table:
                assignment = _VERSION_ASSIGNMENT.match(line)
                if assignment is not None:
                    matches.append((index, assignment))
            for delimiter in _MULTILINE_DELIMITERS:
                if line.count(delimiter) % 2 == 1:
                    open_delimiter = delimiter
                    break
        return matches

    def _verify(self, updated: str, new_version: str) -> None:
        try:
            written = self.read_version(updated)
        except MissingVersionFieldError as exc:
            raise MalformedManifestError(self.filename, "rewrite lost the version field") from exc
        if written != new_version:
            logger.debug("Rewritten %s declares %s instead of %s", self.filename, written, new_version)
            msg = f"rewrite produced version '{written}' instead of '{new_version}'"
            raise MalformedManifestError(self.filename, msg)


class CargoAdapter(TomlTableAdapter):
    """``Cargo.toml``: version under ``[package]``."""

    format: ClassVar[ManifestFormat] = ManifestFormat.CARGO
    filename: ClassVar[str] = "Cargo.toml"
    table: ClassVar[str] = "package"
    field_description: ClassVar[str] = "[package] version"


class PyProjectAdapter(TomlTableAdapter):
    """``pyproject.toml``: version under ``[project]``."""

    format: ClassVar[ManifestFormat] = ManifestFormat.PYPROJECT
    filename: ClassVar[str] = "pyproject.toml"
    table: ClassVar[str] = "project"
    field_description: ClassVar[str] = "[project] version"


__all__ = ["CargoAdapter", "PyProjectAdapter", "TomlTableAdapter"]
