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

"""Precedence chain resolution for versync settings.

CLI flags win over environment variables, which win over the configuration
file, which wins over built-in defaults.
"""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def resolve_with_precedence(
    *,
    cli_value: T | None = None,
    env_value: T | None = None,
    config_value: T | None = None,
    default: T,
) -> T:
    """Resolve a value using versync's standard precedence chain.

    Args:
        cli_value: Value from a CLI argument.
        env_value: Value from an environment variable.
        config_value: Value from the configuration file.
        default: Fallback default value.

    Returns:
        The highest-precedence non-None value, or default.

    Example:
        >>> resolve_with_precedence(cli_value=None, env_value=True, config_value=False, default=False)
        True
    """
    if cli_value is not None:
        return cli_value
    if env_value is not None:
        return env_value
    if config_value is not None:
        return config_value
    return default


__all__ = ["resolve_with_precedence"]
