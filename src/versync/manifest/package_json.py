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

"""Adapter for ``package.json`` manifests (top-level ``"version"`` field)."""

from __future__ import annotations

import json
from typing import ClassVar, Final

from versync.compat import override
from versync.core.model_types import ManifestFormat

from .base import MalformedManifestError, ManifestAdapter, MissingVersionFieldError

_WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n")


def _string_end(content: str, start: int) -> int:
    """Return the index just past the JSON string opening at ``start``."""
    index = start + 1
    length = len(content)
    while index < length:
        char = content[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return index + 1
        index += 1
    msg = "unterminated string"
    raise ValueError(msg)


def _skip_whitespace(content: str, index: int) -> int:
    while index < len(content) and content[index] in _WHITESPACE:
        index += 1
    return index


def top_level_value_spans(content: str, key: str) -> list[tuple[int, int]]:
    """Locate the string values bound to ``key`` in the root JSON object.

    Args:
        content: JSON document text.
        key: Member name to look for at depth one.

    Returns:
        ``(start, end)`` offsets of each matching value's characters, quotes
        excluded. Non-string values are reported with ``start == end == -1``.
    """
    spans: list[tuple[int, int]] = []
    depth = 0
    index = 0
    expecting_key = False
    length = len(content)
    while index < length:
        char = content[index]
        if char in "{[":
            depth += 1
            expecting_key = char == "{" and depth == 1
            index += 1
            continue
        if char in "}]":
            depth -= 1
            index += 1
            continue
        if char == "," and depth == 1:
            expecting_key = True
            index += 1
            continue
        if char != '"':
            index += 1
            continue
        end = _string_end(content, index)
        if depth == 1 and expecting_key:
            expecting_key = False
            name = json.loads(content[index:end])
            colon = _skip_whitespace(content, end)
            value_start = _skip_whitespace(content, colon + 1)
            if name == key:
                if value_start < length and content[value_start] == '"':
                    spans.append((value_start + 1, _string_end(content, value_start) - 1))
                else:
                    spans.append((-1, -1))
            index = value_start
            continue
        index = end
    return spans


class PackageJsonAdapter(ManifestAdapter):
    """``package.json``: rewrites the top-level ``"version"`` string in place."""

    format: ClassVar[ManifestFormat] = ManifestFormat.PACKAGE_JSON
    filename: ClassVar[str] = "package.json"
    field_description: ClassVar[str] = 'top-level "version"'

    @override
    def read_version(self, content: str) -> str:
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MalformedManifestError(self.filename, str(exc)) from exc
        if not isinstance(payload, dict):
            raise MalformedManifestError(self.filename, "root is not a JSON object")
        version = payload.get("version")
        if not isinstance(version, str):
            raise MissingVersionFieldError(self.filename, self.field_description)
        return version

    @override
    def write_version(self, content: str, new_version: str) -> str:
        self.read_version(content)
        try:
            spans = top_level_value_spans(content, "version")
        except ValueError as exc:
            raise MalformedManifestError(self.filename, str(exc)) from exc
        if len(spans) != 1:
            msg = f"expected one top-level version field, found {len(spans)}"
            raise MalformedManifestError(self.filename, msg)
        start, end = spans[0]
        if start < 0:
            raise MalformedManifestError(self.filename, "version is not a string")
        encoded = json.dumps(new_version)[1:-1]
        return f"{content[:start]}{encoded}{content[end:]}"


__all__ = ["PackageJsonAdapter", "top_level_value_spans"]
