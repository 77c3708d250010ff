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

"""Hypothesis strategies shared by the property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

from versync.version import VersionValue

_IDENTIFIER_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-"


def version_components() -> st.SearchStrategy[int]:
    return st.integers(min_value=0, max_value=10_000)


def dotted_identifiers() -> st.SearchStrategy[str]:
    """Non-empty dot-separated identifiers as allowed in prerelease and build text."""
    part = st.text(alphabet=_IDENTIFIER_ALPHABET, min_size=1, max_size=8)
    return st.lists(part, min_size=1, max_size=3).map(".".join)


def versions() -> st.SearchStrategy[VersionValue]:
    return st.builds(
        VersionValue,
        major=version_components(),
        minor=version_components(),
        patch=version_components(),
        prerelease=st.none() | dotted_identifiers(),
        build=st.none() | dotted_identifiers(),
    )


__all__ = ["dotted_identifiers", "version_components", "versions"]
