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

"""Enumerations shared across breakdown_config.

This module collects the closed vocabularies used by the resolution engine:

- configuration layers (application and user)
- path validation failure reasons
- filesystem operations reported in errors
- session load states
- log formats and logging components
"""

from __future__ import annotations

from enum import StrEnum


class ConfigLayer(StrEnum):
    """Configuration source layers.

    Attributes:
        APP: Mandatory application layer supplying every default.
        USER: Optional user layer overriding application values.
    """

    APP = "app"
    USER = "user"

    @classmethod
    def from_str(cls, raw: str) -> ConfigLayer:
        """Create a ConfigLayer enum from a string value.

        Args:
            raw: String representation of the layer.

        Returns:
            ConfigLayer enum value.

        Raises:
            ValueError: If the string does not match any ConfigLayer value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown config layer '{raw}'"
            raise ValueError(msg) from exc


class PathErrorReason(StrEnum):
    """Reasons a candidate path is rejected by the path validator.

    Attributes:
        EMPTY_PATH: The path is empty or whitespace only.
        PATH_TRAVERSAL: A ``..`` component would escape the base root.
        ABSOLUTE_PATH_NOT_ALLOWED: An absolute or UNC path was given where a
            relative path is required.
        DRIVE_LETTER_NOT_ALLOWED: The path starts with a platform drive letter.
        INVALID_CHARACTERS: The path holds NUL, control or reserved characters.
        OUTSIDE_BASE: A joined or target path leaves its base directory.
    """

    EMPTY_PATH = "EMPTY_PATH"
    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    ABSOLUTE_PATH_NOT_ALLOWED = "ABSOLUTE_PATH_NOT_ALLOWED"
    DRIVE_LETTER_NOT_ALLOWED = "DRIVE_LETTER_NOT_ALLOWED"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"
    OUTSIDE_BASE = "OUTSIDE_BASE"


class FileOperation(StrEnum):
    """Filesystem operations that may surface in a ``FileSystemError``."""

    READ = "read"
    STAT = "stat"


class LoadStatus(StrEnum):
    """Lifecycle of one configuration resolution.

    Attributes:
        NOT_REQUESTED: No load has been attempted yet.
        LOADING: A load is in flight.
        LOADED: The last load succeeded and its result is cached.
        FAILED: The last load returned an error.
    """

    NOT_REQUESTED = "not_requested"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class ProfileKind(StrEnum):
    """Shape of a resolved configuration profile."""

    APP_ONLY = "app-only"
    MERGED = "merged"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable components.

    Attributes:
        PROFILE: Profile name validation.
        LOADER: Layer file discovery, parsing and validation.
        MERGER: Two-layer merge.
        MANAGER: Load orchestration and caching.
        SESSION: Facade lifecycle.
    """

    PROFILE = "profile"
    LOADER = "loader"
    MERGER = "merger"
    MANAGER = "manager"
    SESSION = "session"

    @classmethod
    def from_str(cls, raw: str) -> LogComponent:
        """Create a LogComponent enum from a string value.

        Args:
            raw: String representation of the component.

        Returns:
            LogComponent enum value.

        Raises:
            ValueError: If the string does not match any LogComponent value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log component '{raw}'"
            raise ValueError(msg) from exc


__all__ = [
    "ConfigLayer",
    "FileOperation",
    "LoadStatus",
    "LogComponent",
    "LogFormat",
    "PathErrorReason",
    "ProfileKind",
]
