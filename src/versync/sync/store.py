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

"""File access used by the engine, swappable for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class FileStore(Protocol):
    """Read and write whole files as UTF-8 text without newline translation."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...


class LocalFileStore:
    """``FileStore`` backed by the local filesystem.

    Bytes are decoded and encoded directly so ``\\r\\n`` line endings are kept.
    """

    def read_text(self, path: Path) -> str:
        return path.read_bytes().decode("utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_bytes(content.encode("utf-8"))


__all__ = ["FileStore", "LocalFileStore"]
