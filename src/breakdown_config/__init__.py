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

"""breakdown_config - layered application configuration.

Resolves a mandatory application layer and an optional user layer, optionally
scoped by a profile name, into one immutable configuration. Every fallible
operation returns an ``Ok`` / ``Err`` result; a legacy raising facade is kept
for callers that prefer exceptions.
"""

from __future__ import annotations

from breakdown_config._internal.error_codes import error_code_catalog, error_code_for
from breakdown_config._internal.exceptions import (
    BreakdownConfigError,
    ConfigResultError,
    ConfigSyntaxError,
    ResultUnwrapError,
)
from breakdown_config._internal.logging_utils import configure_logging

from .config import ConfigProfile, MergedConfig, merge_configs
from .core.model_types import ConfigLayer, LoadStatus, PathErrorReason, ProfileKind
from .core.result import Err, Ok, Result
from .errors import (
    ConfigFileNotFoundError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigValidationError,
    ErrorKind,
    FileSystemError,
    InvalidProfileNameError,
    PathValidationError,
    UnifiedError,
    UnknownError,
    ValidationViolation,
)
from .manager import ConfigManager
from .paths import ensure_within_base, safe_join, validate_path
from .profile import ProfileName, validate_profile
from .session import BreakdownConfig, Loaded, SessionState, Unloaded

__all__ = [
    "BreakdownConfig",
    "BreakdownConfigError",
    "ConfigFileNotFoundError",
    "ConfigLayer",
    "ConfigManager",
    "ConfigNotLoadedError",
    "ConfigParseError",
    "ConfigProfile",
    "ConfigResultError",
    "ConfigSyntaxError",
    "ConfigValidationError",
    "Err",
    "ErrorKind",
    "FileSystemError",
    "InvalidProfileNameError",
    "LoadStatus",
    "Loaded",
    "MergedConfig",
    "Ok",
    "PathErrorReason",
    "PathValidationError",
    "ProfileKind",
    "ProfileName",
    "Result",
    "ResultUnwrapError",
    "SessionState",
    "UnifiedError",
    "UnknownError",
    "Unloaded",
    "ValidationViolation",
    "__version__",
    "configure_logging",
    "ensure_within_base",
    "error_code_catalog",
    "error_code_for",
    "merge_configs",
    "safe_join",
    "validate_path",
    "validate_profile",
]

__version__ = "0.1.0"
