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

"""Closed taxonomy of configuration resolution errors.

Every fallible operation returns ``Err(error)`` where ``error`` is one of the
frozen dataclasses below; ``UnifiedError`` is their union. Callers branch on the
concrete class with ``match`` (or on the stable ``kind`` tag when the error
has been serialised with ``to_dict``) and never need to parse messages.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final, TypeAlias

from breakdown_config.core.model_types import ConfigLayer, FileOperation, PathErrorReason

if TYPE_CHECKING:
    from breakdown_config.core.value_tree import ValueTree

PROFILE_NAME_PATTERN: Final[str] = "^[A-Za-z0-9-]+$"
PROFILE_NAME_EXAMPLES: Final[tuple[str, ...]] = ("development", "production", "test", "staging")
LOAD_SUGGESTION: Final[str] = "Call load_config_safe() before accessing configuration values"


class ErrorKind(StrEnum):
    """Stable discriminator tags for ``UnifiedError`` variants."""

    CONFIG_FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    CONFIG_VALIDATION_ERROR = "CONFIG_VALIDATION_ERROR"
    PATH_VALIDATION_ERROR = "PATH_VALIDATION_ERROR"
    INVALID_PROFILE_NAME = "INVALID_PROFILE_NAME"
    CONFIG_NOT_LOADED = "CONFIG_NOT_LOADED"
    FILE_SYSTEM_ERROR = "FILE_SYSTEM_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(slots=True, frozen=True)
class ValidationViolation:
    """One structural problem found while validating a configuration layer.

    Attributes:
        field: Dotted path of the offending field (``<root>`` for the document).
        value: Value found at ``field``; ``None`` when the field is missing.
        expected_type: Type the field must have.
        actual_type: Type actually found (``missing`` when absent).
        constraint: Additional rule that was broken, if any.
    """

    field: str
    value: ValueTree
    expected_type: str
    actual_type: str
    constraint: str | None = None

    def describe(self) -> str:
        """Return a one-line human readable description."""
        text = f"{self.field}: expected {self.expected_type}, got {self.actual_type}"
        if self.constraint:
            text = f"{text} ({self.constraint})"
        return text

    def to_dict(self) -> dict[str, object]:
        """Return the violation as plain data."""
        return {
            "field": self.field,
            "value": _plain(self.value),
            "expected_type": self.expected_type,
            "actual_type": self.actual_type,
            "constraint": self.constraint,
        }


class _ErrorBase(ABC):
    """Shared behaviour for error variants.

    Variants provide ``kind`` and implement ``describe``; ``message``, ``code``
    and ``to_dict`` are derived from them.
    """

    __slots__ = ()

    kind: ClassVar[ErrorKind]

    @property
    def message(self) -> str:
        return f"{self.code}: {self.describe()}"

    @property
    def code(self) -> str:
        """Stable error code from the registry."""
        from breakdown_config._internal.error_codes import error_code_for  # noqa: PLC0415

        return error_code_for(self)  # pyright: ignore[reportArgumentType]

    @abstractmethod
    def describe(self) -> str:
        """Return the human-readable detail without the code prefix."""

    def to_dict(self) -> dict[str, object]:
        """Return ``kind``, ``code``, ``message`` and every payload field."""
        payload: dict[str, object] = {"kind": self.kind.value, "code": self.code, "message": self.message}
        for item in fields(self):  # pyright: ignore[reportArgumentType]
            payload[item.name] = _plain(getattr(self, item.name))
        return payload


@dataclass(slots=True, frozen=True)
class ConfigFileNotFoundError(_ErrorBase):
    """A mandatory configuration file does not exist."""

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_FILE_NOT_FOUND

    path: Path
    config_type: ConfigLayer
    searched_locations: tuple[Path, ...] = ()

    def describe(self) -> str:
        label = "Application" if self.config_type is ConfigLayer.APP else "User"
        return f"{label} configuration file not found at: {self.path}"


@dataclass(slots=True, frozen=True)
class ConfigParseError(_ErrorBase):
    """A configuration file exists but is not well-formed structured text."""

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_PARSE_ERROR

    path: Path
    reason: str
    line: int | None = None
    column: int | None = None

    def describe(self) -> str:
        location = ""
        if self.line is not None:
            location = f" (line {self.line}" + (f", column {self.column})" if self.column is not None else ")")
        return f"Failed to parse configuration file at {self.path}{location}: {self.reason}"


@dataclass(slots=True, frozen=True)
class ConfigValidationError(_ErrorBase):
    """A configuration value breaks the structural contract.

    ``path`` names the validated source: a file path for layer validation or a
    logical name (``merged_config``) for post-merge checks.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_VALIDATION_ERROR

    path: str
    violations: tuple[ValidationViolation, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        """Dotted names of every offending field, in report order."""
        return tuple(violation.field for violation in self.violations)

    def describe(self) -> str:
        details = "; ".join(violation.describe() for violation in self.violations)
        return f"Configuration validation failed for {self.path}: {len(self.violations)} violation(s): {details}"


@dataclass(slots=True, frozen=True)
class PathValidationError(_ErrorBase):
    """A path value is unsafe for the field it was supplied to."""

    kind: ClassVar[ErrorKind] = ErrorKind.PATH_VALIDATION_ERROR

    path: str
    reason: PathErrorReason
    field: str

    def describe(self) -> str:
        return f'Invalid path "{_printable(self.path)}" in field "{self.field}": {self.reason.value}'


@dataclass(slots=True, frozen=True)
class InvalidProfileNameError(_ErrorBase):
    """A profile name contains characters outside the allowed set."""

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_PROFILE_NAME

    provided: str
    pattern: str = PROFILE_NAME_PATTERN
    valid_examples: tuple[str, ...] = PROFILE_NAME_EXAMPLES

    def describe(self) -> str:
        return f'Invalid profile name "{_printable(self.provided)}". Must match pattern: {self.pattern}'


@dataclass(slots=True, frozen=True)
class ConfigNotLoadedError(_ErrorBase):
    """Configuration was read before a successful load."""

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIG_NOT_LOADED

    requested_operation: str
    suggestion: str = LOAD_SUGGESTION

    def describe(self) -> str:
        return f"Configuration not loaded. Cannot perform operation: {self.requested_operation}"


@dataclass(slots=True, frozen=True)
class FileSystemError(_ErrorBase):
    """A filesystem call failed for a reason other than absence."""

    kind: ClassVar[ErrorKind] = ErrorKind.FILE_SYSTEM_ERROR

    operation: FileOperation
    path: Path
    detail: str

    def describe(self) -> str:
        return f"File system {self.operation.value} operation failed for {self.path}: {self.detail}"


@dataclass(slots=True, frozen=True)
class UnknownError(_ErrorBase):
    """Wrapper for an unexpected exception raised by a collaborator."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_ERROR

    wrapped: BaseException | object
    context: str | None = None

    def describe(self) -> str:
        where = f" in {self.context}" if self.context else ""
        return f"Unknown error occurred{where}: {self.wrapped}"


UnifiedError: TypeAlias = (
    ConfigFileNotFoundError
    | ConfigParseError
    | ConfigValidationError
    | PathValidationError
    | InvalidProfileNameError
    | ConfigNotLoadedError
    | FileSystemError
    | UnknownError
)

ERROR_TYPES: Final[tuple[type[_ErrorBase], ...]] = (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    PathValidationError,
    InvalidProfileNameError,
    ConfigNotLoadedError,
    FileSystemError,
    UnknownError,
)


def _printable(text: str) -> str:
    return text.encode("unicode_escape").decode("ascii")


def _plain(value: object) -> object:
    if isinstance(value, StrEnum):
        return value.value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, ValidationViolation):
        return value.to_dict()
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, dict | tuple | list) or hasattr(value, "items"):
        from breakdown_config.core.value_tree import thaw_tree  # noqa: PLC0415

        thawed = thaw_tree(value)  # pyright: ignore[reportArgumentType]
        if isinstance(thawed, list):
            return [_plain(item) for item in thawed]
        if isinstance(thawed, dict):
            return {key: _plain(item) for key, item in thawed.items()}
        return thawed
    return value


__all__ = [
    "ERROR_TYPES",
    "LOAD_SUGGESTION",
    "PROFILE_NAME_EXAMPLES",
    "PROFILE_NAME_PATTERN",
    "ConfigFileNotFoundError",
    "ConfigNotLoadedError",
    "ConfigParseError",
    "ConfigValidationError",
    "ErrorKind",
    "FileSystemError",
    "InvalidProfileNameError",
    "PathValidationError",
    "UnifiedError",
    "UnknownError",
    "ValidationViolation",
]
