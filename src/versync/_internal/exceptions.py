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

"""Common exception hierarchy for versync."""

from __future__ import annotations

__all__ = ["VersyncError", "VersyncTypeError", "VersyncValidationError"]


class VersyncError(Exception):
    """Base error for all versync exceptions."""


class VersyncValidationError(VersyncError, ValueError):
    """Raised when input data fails validation checks."""


class VersyncTypeError(VersyncError, TypeError):
    """Raised when input data has an unexpected type."""
