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

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

import string

from hypothesis import strategies as st

__all__ = [
    "PROFILE_ALPHABET",
    "extra_keys",
    "invalid_profile_names",
    "safe_dir_names",
    "valid_profile_names",
]

PROFILE_ALPHABET = string.ascii_letters + string.digits + "-"
_SAFE_DIR_ALPHABET = string.ascii_letters + string.digits + "-_."


def valid_profile_names(max_size: int = 24) -> st.SearchStrategy[str]:
    """Return a strategy that yields names matching ``^[A-Za-z0-9-]+$``."""
    return st.text(alphabet=PROFILE_ALPHABET, min_size=1, max_size=max_size)


def invalid_profile_names(max_size: int = 24) -> st.SearchStrategy[str]:
    """Return a strategy that yields names containing at least one forbidden character.

    Returns:
        Hypothesis strategy splicing a forbidden character (space, ``@``,
        separators, NUL, ``.`` or any non-ASCII letter) into a valid name.
    """
    forbidden = st.one_of(
        st.sampled_from([" ", "@", "/", "\\", "\x00", ".", "_", "\n"]),
        st.characters(exclude_characters=PROFILE_ALPHABET),
    )
    return st.tuples(
        st.text(alphabet=PROFILE_ALPHABET, max_size=max_size),
        forbidden,
        st.text(alphabet=PROFILE_ALPHABET, max_size=max_size),
    ).map(lambda parts: "".join(parts))


def safe_dir_names(max_size: int = 16) -> st.SearchStrategy[str]:
    """Return a strategy that yields relative directory names that pass path validation."""
    segment = st.text(alphabet=_SAFE_DIR_ALPHABET, min_size=1, max_size=max_size)
    segment = segment.filter(lambda value: value not in {".", ".."})
    return st.lists(segment, min_size=1, max_size=3).map("/".join)


def extra_keys() -> st.SearchStrategy[str]:
    """Keys that never collide with the typed configuration fields."""
    return st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8).map(lambda key: f"x_{key}")
