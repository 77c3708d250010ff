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

"""Release tag name expansion."""

from __future__ import annotations

import string
from typing import TYPE_CHECKING, Final

from versync._internal.exceptions import VersyncValidationError

if TYPE_CHECKING:
    from versync.version import VersionValue

TAG_PLACEHOLDERS: Final[tuple[str, ...]] = ("version", "major", "minor", "patch", "repository_name")


class TagFormatError(VersyncValidationError):
    """Raised when a tag template is malformed or uses an unknown placeholder."""

    def __init__(self, template: str, reason: str) -> None:
        """Initialise the error.

        Args:
            template: The rejected template.
            reason: What is wrong with it.
        """
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid tag format '{template}': {reason}")


def expand_tag_format(template: str, version: VersionValue, *, repository_name: str) -> str:
    """Render ``template`` for ``version``.

    Supported placeholders are ``{version}``, ``{major}``, ``{minor}``, ``{patch}``
    and ``{repository_name}``; ``{{`` and ``}}`` produce literal braces.

    Raises:
        TagFormatError: If the template is malformed, uses another placeholder
            or expands to an empty or whitespace-containing name.
    """
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as exc:
        raise TagFormatError(template, str(exc)) from exc
    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in TAG_PLACEHOLDERS or format_spec or conversion:
            raise TagFormatError(template, f"unsupported placeholder '{{{field_name}}}'")
    rendered = template.format_map({
        "version": str(version),
        "major": version.major,
        "minor": version.minor,
        "patch": version.patch,
        "repository_name": repository_name,
    })
    if not rendered or any(char.isspace() for char in rendered):
        raise TagFormatError(template, f"expands to an invalid tag name '{rendered}'")
    return rendered


__all__ = ["TAG_PLACEHOLDERS", "TagFormatError", "expand_tag_format"]
