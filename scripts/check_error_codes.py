#!/usr/bin/env python3
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

"""Check that the error-code registry and ``docs/EXCEPTIONS.md`` agree.

Each registry entry maps an exception class to a ``VSnnn`` code; the document
carries one table row per code naming that class. The check fails on duplicate
codes, codes missing from either side, or a row naming a different class.

This script must work whether the package is installed or not. It prepends the
repo's ``src/`` directory to ``sys.path`` before importing internal modules.
"""

from __future__ import annotations

import argparse
import importlib
import re
import sys
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

REPO_ROOT: Final[Path] = Path(__file__).resolve().parents[1]
ROW_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\|\s*(VS\d{3})\s*\|\s*`([A-Za-z_][A-Za-z0-9_]*)`")


def _emit(message: str, *, error: bool = False) -> None:
    stream = sys.stderr if error else sys.stdout
    _ = stream.write(f"[versync] {message}\n")


def _load_registry(src_path: Path) -> dict[str, list[str]]:
    """Return ``code -> [exception class names]`` from the live registry."""
    src_str = str(src_path)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)
    module = importlib.import_module("versync._internal.error_codes")
    registry: dict[str, list[str]] = {}
    for qualified_name, code in module.error_code_catalog().items():
        registry.setdefault(str(code), []).append(qualified_name.rsplit(".", 1)[-1])
    return registry


def _load_documented_rows(doc_path: Path) -> list[tuple[str, str]]:
    """Return ``(code, exception name)`` pairs from the table rows of ``doc_path``.

    Raises:
        FileNotFoundError: If the documentation file is missing.
    """
    if not doc_path.exists():
        msg = f"documentation missing: {doc_path}"
        raise FileNotFoundError(msg)
    rows: list[tuple[str, str]] = []
    for line in doc_path.read_text(encoding="utf-8").splitlines():
        match = ROW_PATTERN.match(line.strip())
        if match:
            rows.append((match.group(1), match.group(2)))
    return rows


def compare(registry: Mapping[str, Sequence[str]], rows: Sequence[tuple[str, str]]) -> list[str]:
    """Return human-readable problems; an empty list means the two sources agree."""
    problems: list[str] = []
    duplicate_registry = sorted(code for code, names in registry.items() if len(names) > 1)
    if duplicate_registry:
        problems.append("duplicate codes in registry: " + ", ".join(duplicate_registry))
    counts = Counter(code for code, _ in rows)
    duplicate_docs = sorted(code for code, count in counts.items() if count > 1)
    if duplicate_docs:
        problems.append("duplicate rows in docs: " + ", ".join(duplicate_docs))
    documented = dict(rows)
    missing = sorted(set(registry) - set(documented))
    if missing:
        problems.append("missing codes in docs: " + ", ".join(missing))
    unknown = sorted(set(documented) - set(registry))
    if unknown:
        problems.append("unknown codes in docs: " + ", ".join(unknown))
    for code in sorted(set(registry) & set(documented)):
        if documented[code] not in registry[code]:
            expected = ", ".join(registry[code])
            problems.append(f"{code} documents {documented[code]} but the registry maps {expected}")
    return problems


def main(argv: Sequence[str] | None = None) -> int:
    """Validate that the error-code registry matches the public docs.

    Args:
        argv: Optional CLI arguments; ``--docs`` selects another document.

    Returns:
        ``0`` when registry and documentation agree, ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0] if __doc__ else None)
    _ = parser.add_argument(
        "--docs",
        type=Path,
        default=REPO_ROOT / "docs" / "EXCEPTIONS.md",
        help="Exceptions document to compare against.",
    )
    args = parser.parse_args(list(argv) if argv is not None else [])

    try:
        registry = _load_registry(REPO_ROOT / "src")
        rows = _load_documented_rows(args.docs)
    except (FileNotFoundError, ImportError) as exc:
        _emit(str(exc), error=True)
        return 1

    problems = compare(registry, rows)
    if problems:
        for line in problems:
            _emit(line, error=True)
        return 1

    _emit(f"error code registry and documentation are in sync ({len(registry)} codes)")
    return 0


# ignore JUSTIFIED: CLI entrypoint is trivial and only used when invoking the
# script directly; logic is fully covered by unit tests
if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main(sys.argv[1:]))
