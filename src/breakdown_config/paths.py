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

"""Lexical safety checks for configuration-supplied paths.

Directory fields in configuration files are always interpreted relative to a
base directory. The helpers here reject values that could escape that base or
that are not portable file names. None of them touch the filesystem.
"""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING, Final

from breakdown_config.core.model_types import PathErrorReason
from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import PathValidationError

if TYPE_CHECKING:
    from breakdown_config.core.result import Result
    from breakdown_config.errors import UnifiedError

RESERVED_CHARACTERS: Final[frozenset[str]] = frozenset('<>:"|?*')
_DRIVE_LETTER: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:")
_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\\/]")


def _has_traversal(candidate: str) -> bool:
    return any(part == ".." for part in _SEPARATORS.split(candidate))


def _is_absolute(candidate: str) -> bool:
    # Covers POSIX roots and UNC shares (``//server`` and ``\\server``).
    return candidate.startswith(("/", "\\\\"))


def _invalid_character(candidate: str) -> str | None:
    for char in candidate:
        if char in RESERVED_CHARACTERS or ord(char) < 0x20:  # noqa: PLR2004
            return char
    return None


def _classify(candidate: str) -> PathErrorReason | None:
    if not candidate.strip():
        return PathErrorReason.EMPTY_PATH
    if _has_traversal(candidate):
        return PathErrorReason.PATH_TRAVERSAL
    if _is_absolute(candidate):
        return PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED
    if _DRIVE_LETTER.match(candidate):
        return PathErrorReason.DRIVE_LETTER_NOT_ALLOWED
    if _invalid_character(candidate) is not None:
        return PathErrorReason.INVALID_CHARACTERS
    return None


def validate_path(candidate: str, field: str) -> Result[str, UnifiedError]:
    """Check that ``candidate`` is a safe relative path for ``field``.

    Checks run in a fixed order (empty, traversal, absolute, drive letter,
    characters) so the reported reason is deterministic.

    Args:
        candidate: Raw path value from a configuration layer.
        field: Dotted configuration field the value came from.

    Returns:
        ``Ok`` with the trimmed path, or ``Err(PathValidationError)``.
    """
    reason = _classify(candidate)
    if reason is not None:
        return Err(PathValidationError(path=candidate, reason=reason, field=field))
    return Ok(candidate.strip())


def safe_join(base: str, *segments: str, field: str = "path") -> Result[str, UnifiedError]:
    """Join validated segments onto ``base`` and normalise the result.

    Empty segments are skipped. Every remaining segment, the base and the
    joined result must pass :func:`validate_path`.
    """
    base_check = validate_path(base, field)
    if isinstance(base_check, Err):
        return base_check
    parts: list[str] = []
    for segment in segments:
        if not segment.strip():
            continue
        checked = validate_path(segment, field)
        if isinstance(checked, Err):
            return checked
        parts.append(checked.value)
    joined = posixpath.normpath(posixpath.join(base_check.value, *parts))
    return validate_path(joined, field)


def ensure_within_base(base: str, target: str, *, field: str = "path") -> Result[str, UnifiedError]:
    """Confirm that ``target`` stays inside ``base`` after normalisation.

    Both values are validated first. Containment is decided on whole path
    components, so ``prompts-old`` is not inside ``prompts``.
    """
    base_check = validate_path(base, field)
    if isinstance(base_check, Err):
        return base_check
    target_check = validate_path(target, field)
    if isinstance(target_check, Err):
        return target_check
    normal_base = posixpath.normpath(base_check.value.replace("\\", "/"))
    normal_target = posixpath.normpath(target_check.value.replace("\\", "/"))
    if normal_base == "." or normal_target == normal_base or normal_target.startswith(f"{normal_base}/"):
        return Ok(target_check.value)
    return Err(PathValidationError(path=target, reason=PathErrorReason.OUTSIDE_BASE, field=field))


__all__ = ["RESERVED_CHARACTERS", "ensure_within_base", "safe_join", "validate_path"]
