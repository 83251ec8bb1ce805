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

"""Unit tests for the error code registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from breakdown_config._internal.error_codes import error_code_catalog, error_code_for
from breakdown_config.core.model_types import ConfigLayer, FileOperation, PathErrorReason
from breakdown_config.errors import (
    ConfigFileNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigValidationError,
    FileSystemError,
    InvalidProfileNameError,
    PathValidationError,
    UnifiedError,
    UnknownError,
    ValidationViolation,
)

pytestmark = pytest.mark.unit

MISSING = ValidationViolation(field="working_dir", value=None, expected_type="string", actual_type="missing")
WRONG_TYPE = ValidationViolation(field="working_dir", value=1, expected_type="string", actual_type="number")
BLANK = ValidationViolation(
    field="working_dir",
    value="",
    expected_type="string",
    actual_type="string",
    constraint="non-empty",
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (ConfigFileNotFoundError(path=Path("app.yml"), config_type=ConfigLayer.APP), "ERR1001"),
        (ConfigFileNotFoundError(path=Path("user.yml"), config_type=ConfigLayer.USER), "ERR1003"),
        (ConfigParseError(path=Path("app.yml"), reason="bad"), "ERR1002"),
        (ConfigValidationError(path="app.yml", violations=(MISSING,)), "ERR1005"),
        (ConfigValidationError(path="app.yml", violations=(WRONG_TYPE, MISSING)), "ERR1006"),
        (ConfigValidationError(path="cfg/app.yml", violations=(BLANK,)), "ERR1002"),
        (ConfigValidationError(path="cfg/prod-user.yml", violations=(BLANK,)), "ERR1004"),
        (PathValidationError(path="", reason=PathErrorReason.EMPTY_PATH, field="f"), "ERR1007"),
        (PathValidationError(path="a|b", reason=PathErrorReason.INVALID_CHARACTERS, field="f"), "ERR1007"),
        (PathValidationError(path="..", reason=PathErrorReason.PATH_TRAVERSAL, field="f"), "ERR1008"),
        (PathValidationError(path="x", reason=PathErrorReason.OUTSIDE_BASE, field="f"), "ERR1008"),
        (PathValidationError(path="/x", reason=PathErrorReason.ABSOLUTE_PATH_NOT_ALLOWED, field="f"), "ERR1009"),
        (PathValidationError(path="C:x", reason=PathErrorReason.DRIVE_LETTER_NOT_ALLOWED, field="f"), "ERR1009"),
        (ConfigNotLoadedError(requested_operation="get_config"), "ERR1010"),
        (InvalidProfileNameError(provided="a b"), "ERR1011"),
        (FileSystemError(operation=FileOperation.READ, path=Path("app.yml"), detail="denied"), "ERR1012"),
        (UnknownError(wrapped=RuntimeError("x")), "ERR9999"),
    ],
)
def test_error_code_for_each_variant(error: UnifiedError, code: str) -> None:
    assert error_code_for(error) == code
    assert error.code == code
    assert error.message.startswith(f"{code}: ")


def test_error_code_catalog_uniqueness() -> None:
    catalog = error_code_catalog()
    codes = list(catalog.values())
    assert len(set(codes)) == len(codes)
    assert catalog["APP_CONFIG_NOT_FOUND"] == "ERR1001"
    assert catalog["UNKNOWN_ERROR"] == "ERR9999"


def test_error_code_catalog_returns_a_copy() -> None:
    catalog = error_code_catalog()
    assert isinstance(catalog, dict)
    catalog["APP_CONFIG_NOT_FOUND"] = "changed"  # type: ignore[index]
    assert error_code_catalog()["APP_CONFIG_NOT_FOUND"] == "ERR1001"
