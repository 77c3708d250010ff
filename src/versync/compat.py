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

"""Cross-version compatibility names used throughout versync.

versync supports Python 3.10+, so a handful of names must come from backports
on the oldest interpreter:

- ``tomllib``: stdlib TOML parser on 3.11+, the ``tomli`` distribution on 3.10.
- ``StrEnum``: stdlib ``enum.StrEnum`` on 3.11+, a ``str``/``Enum`` mixin otherwise.
- ``UTC``: ``datetime.UTC`` when present, ``timezone.utc`` otherwise.
- Typing helpers (``Self``, ``override``, ``TypedDict``, ``Unpack``, ...) from
  ``typing`` or ``typing_extensions``.

Modules should import these names from here instead of repeating version checks.
"""

from __future__ import annotations

import datetime as _dt
import enum as _enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tomli as tomllib
    from typing_extensions import Never, NotRequired, Self, TypedDict, Unpack, assert_never, override
else:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:  # py<3.11
        import tomli as tomllib

    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    try:
        from typing import Never, NotRequired, Self, Unpack, assert_never  # py>=3.11
    except ImportError:  # py<3.11
        from typing_extensions import Never, NotRequired, Self, Unpack, assert_never

UTC = getattr(_dt, "UTC", _dt.timezone.utc)

if TYPE_CHECKING:

    class StrEnum(str, _enum.Enum):
        """Type-checker view of ``enum.StrEnum``."""

else:
    StrEnum = getattr(_enum, "StrEnum", None)
    if StrEnum is None:

        class StrEnum(str, _enum.Enum):
            """Backport of ``enum.StrEnum`` for Python 3.10."""

            def __str__(self) -> str:
                return str(self.value)


__all__ = [
    "UTC",
    "Never",
    "NotRequired",
    "Self",
    "StrEnum",
    "TypedDict",
    "Unpack",
    "assert_never",
    "override",
    "tomllib",
]
