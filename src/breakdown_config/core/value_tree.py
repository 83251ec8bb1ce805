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

"""Generic parsed-but-unvalidated configuration trees.

A ``ValueTree`` is what the structured-text parser hands back: null, booleans,
numbers, strings, sequences and string-keyed mappings. Validation and merging
operate on this shape only, never on raw text. Trees produced here are frozen
(read-only mapping proxies and tuples) so a parsed document cannot be mutated
after the fact.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from types import MappingProxyType
from typing import TypeAlias, cast

ValueTree: TypeAlias = "None | bool | int | float | str | Sequence[ValueTree] | Mapping[str, ValueTree]"
TreeMapping: TypeAlias = "Mapping[str, ValueTree]"

EMPTY_MAPPING: TreeMapping = MappingProxyType({})


def freeze_tree(value: object) -> ValueTree:
    """Normalise parser output into an immutable ``ValueTree``.

    Mapping keys are coerced to strings, sequences become tuples and scalars
    outside the tree shape (for example YAML timestamps) are rendered as
    strings.

    Args:
        value: Raw object produced by a parser.

    Returns:
        Frozen tree with the same structure.
    """
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, Mapping):
        return freeze_mapping(cast("Mapping[object, object]", value))
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray):
        return tuple(freeze_tree(item) for item in cast("Sequence[object]", value))
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, set | frozenset):
        return tuple(freeze_tree(item) for item in sorted(value, key=str))
    return str(value)


def freeze_mapping(value: Mapping[object, object]) -> TreeMapping:
    """Freeze a mapping, coercing keys to strings.

    Args:
        value: Mapping to freeze.

    Returns:
        Read-only mapping proxy over a fresh dictionary.
    """
    return MappingProxyType({str(key): freeze_tree(item) for key, item in value.items()})


def thaw_tree(value: ValueTree) -> object:
    """Return a mutable deep copy of ``value`` built from dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw_tree(item) for key, item in value.items()}
    if isinstance(value, tuple | list):
        return [thaw_tree(item) for item in value]
    return value


def tree_type_name(value: object) -> str:
    """Return the structured-text type name of ``value``.

    Used when reporting validation violations so messages speak in terms of the
    configuration file (``string``, ``mapping``) rather than Python classes.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, Sequence):
        return "sequence"
    return type(value).__name__


__all__ = [
    "EMPTY_MAPPING",
    "TreeMapping",
    "ValueTree",
    "freeze_mapping",
    "freeze_tree",
    "thaw_tree",
    "tree_type_name",
]
