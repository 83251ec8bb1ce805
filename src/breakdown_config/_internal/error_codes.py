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

"""Stable error code registry used across breakdown_config."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final, NewType, assert_never

from breakdown_config.core.model_types import ConfigLayer, PathErrorReason
from breakdown_config.errors import (
    ConfigFileNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigValidationError,
    FileSystemError,
    InvalidProfileNameError,
    PathValidationError,
    UnknownError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from breakdown_config.errors import UnifiedError, ValidationViolation

USER_FILE_SUFFIX: Final[str] = "user.yml"

ErrorCode = NewType("ErrorCode", str)

APP_CONFIG_NOT_FOUND: Final = ErrorCode("ERR1001")
APP_CONFIG_INVALID: Final = ErrorCode("ERR1002")
USER_CONFIG_NOT_FOUND: Final = ErrorCode("ERR1003")
USER_CONFIG_INVALID: Final = ErrorCode("ERR1004")
REQUIRED_FIELD_MISSING: Final = ErrorCode("ERR1005")
INVALID_FIELD_TYPE: Final = ErrorCode("ERR1006")
INVALID_PATH_FORMAT: Final = ErrorCode("ERR1007")
PATH_TRAVERSAL_DETECTED: Final = ErrorCode("ERR1008")
ABSOLUTE_PATH_NOT_ALLOWED: Final = ErrorCode("ERR1009")
CONFIG_NOT_LOADED: Final = ErrorCode("ERR1010")
INVALID_PROFILE_NAME: Final = ErrorCode("ERR1011")
FILE_SYSTEM_FAILURE: Final = ErrorCode("ERR1012")
UNKNOWN_ERROR: Final = ErrorCode("ERR9999")

_CATALOG: dict[str, ErrorCode] = {
    "APP_CONFIG_NOT_FOUND": APP_CONFIG_NOT_FOUND,
    "APP_CONFIG_INVALID": APP_CONFIG_INVALID,
    "USER_CONFIG_NOT_FOUND": USER_CONFIG_NOT_FOUND,
    "USER_CONFIG_INVALID": USER_CONFIG_INVALID,
    "REQUIRED_FIELD_MISSING": REQUIRED_FIELD_MISSING,
    "INVALID_FIELD_TYPE": INVALID_FIELD_TYPE,
    "INVALID_PATH_FORMAT": INVALID_PATH_FORMAT,
    "PATH_TRAVERSAL_DETECTED": PATH_TRAVERSAL_DETECTED,
    "ABSOLUTE_PATH_NOT_ALLOWED": ABSOLUTE_PATH_NOT_ALLOWED,
    "CONFIG_NOT_LOADED": CONFIG_NOT_LOADED,
    "INVALID_PROFILE_NAME": INVALID_PROFILE_NAME,
    "FILE_SYSTEM_FAILURE": FILE_SYSTEM_FAILURE,
    "UNKNOWN_ERROR": UNKNOWN_ERROR,
}


def error_code_for(error: UnifiedError) -> ErrorCode:
    """Return the stable error code for a structured error.

    Codes depend on the variant and, for some variants, on the payload: a
    missing file maps to the application or user code depending on its layer,
    and a path error maps to traversal, absolute-path or format codes depending
    on its reason.

    Args:
        error: Error value returned by a safe operation.

    Returns:
        Error code for ``error``.
    """
    match error:
        case ConfigFileNotFoundError(config_type=ConfigLayer.APP):
            return APP_CONFIG_NOT_FOUND
        case ConfigFileNotFoundError():
            return USER_CONFIG_NOT_FOUND
        case ConfigParseError():
            return APP_CONFIG_INVALID
        case ConfigValidationError(violations=violations):
            return _validation_code(error, violations)
        case PathValidationError(reason=PathErrorReason.PATH_TRAVERSAL | PathErrorReason.OUTSIDE_BASE):
            return PATH_TRAVERSAL_DETECTED
        case PathValidationError(
            reason=PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED | PathErrorReason.DRIVE_LETTER_NOT_ALLOWED,
        ):
            return ABSOLUTE_PATH_NOT_ALLOWED
        case PathValidationError():
            return INVALID_PATH_FORMAT
        case InvalidProfileNameError():
            return INVALID_PROFILE_NAME
        case ConfigNotLoadedError():
            return CONFIG_NOT_LOADED
        case FileSystemError():
            return FILE_SYSTEM_FAILURE
        case UnknownError():
            return UNKNOWN_ERROR
        case _:
            assert_never(error)


def _validation_code(error: ConfigValidationError, violations: tuple[ValidationViolation, ...]) -> ErrorCode:
    if violations and all(violation.actual_type == "missing" for violation in violations):
        return REQUIRED_FIELD_MISSING
    if violations and all(violation.constraint is None for violation in violations):
        return INVALID_FIELD_TYPE
    if Path(error.path).name.endswith(USER_FILE_SUFFIX):
        return USER_CONFIG_INVALID
    return APP_CONFIG_INVALID


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a stable mapping of code names to error codes.

    Intended for diagnostics, tests, and documentation generation - avoids
    exposing the private mapping while keeping a single source of truth.

    Returns:
        Mapping of code names (``APP_CONFIG_NOT_FOUND``) to codes (``ERR1001``).
    """
    return dict(_CATALOG)


__all__ = [
    "ABSOLUTE_PATH_NOT_ALLOWED",
    "APP_CONFIG_INVALID",
    "APP_CONFIG_NOT_FOUND",
    "CONFIG_NOT_LOADED",
    "FILE_SYSTEM_FAILURE",
    "INVALID_FIELD_TYPE",
    "INVALID_PATH_FORMAT",
    "INVALID_PROFILE_NAME",
    "PATH_TRAVERSAL_DETECTED",
    "REQUIRED_FIELD_MISSING",
    "UNKNOWN_ERROR",
    "USER_CONFIG_INVALID",
    "USER_CONFIG_NOT_FOUND",
    "ErrorCode",
    "error_code_catalog",
    "error_code_for",
]
