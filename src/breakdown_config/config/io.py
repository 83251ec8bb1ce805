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

"""Read and parse collaborators used by the layer loaders."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import yaml

from breakdown_config._internal.exceptions import ConfigSyntaxError
from breakdown_config.core.value_tree import EMPTY_MAPPING, freeze_tree

if TYPE_CHECKING:
    from pathlib import Path

    from breakdown_config.core.value_tree import ValueTree


@runtime_checkable
class ConfigReader(Protocol):
    """Asynchronous byte source for configuration files.

    Implementations raise ``FileNotFoundError`` for missing files and other
    ``OSError`` subclasses for every other failure.
    """

    async def read_bytes(self, path: Path) -> bytes: ...


class DefaultConfigReader:
    """Read files from the local filesystem without blocking the event loop."""

    async def read_bytes(self, path: Path) -> bytes:
        return await asyncio.to_thread(path.read_bytes)


def _problem_position(exc: yaml.YAMLError) -> tuple[int | None, int | None]:
    mark = getattr(exc, "problem_mark", None)
    if mark is None:
        return None, None
    # PyYAML marks are 0-based.
    return mark.line + 1, mark.column + 1


def parse_structured_text(data: bytes) -> ValueTree:
    """Parse UTF-8 YAML (or JSON) bytes into a frozen ``ValueTree``.

    An empty document yields an empty mapping.

    Args:
        data: Raw file contents.

    Returns:
        The parsed, frozen tree.

    Raises:
        ConfigSyntaxError: If the bytes are not UTF-8 or not well-formed YAML.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        reason = f"invalid UTF-8 at byte {exc.start}"
        raise ConfigSyntaxError(reason) from exc
    try:
        loaded: object = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        line, column = _problem_position(exc)
        reason = str(getattr(exc, "problem", None) or exc)
        raise ConfigSyntaxError(reason, line=line, column=column) from exc
    if loaded is None:
        return EMPTY_MAPPING
    return freeze_tree(loaded)


__all__ = ["ConfigReader", "DefaultConfigReader", "parse_structured_text"]
