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

"""Directory and file-name conventions for configuration layers."""

from __future__ import annotations

from typing import Final

from breakdown_config.errors import PROFILE_NAME_PATTERN

DEFAULT_NAMESPACE: Final[str] = "climpt"
AGENT_DIRNAME: Final[str] = ".agent"
CONFIG_DIRNAME: Final[str] = "config"
APP_STEM: Final[str] = "app"
USER_STEM: Final[str] = "user"
CONFIG_EXTENSION: Final[str] = ".yml"
MERGED_CONFIG_SOURCE: Final[str] = "merged_config"

WORKING_DIR_FIELD: Final[str] = "working_dir"
PROMPT_SECTION: Final[str] = "app_prompt"
SCHEMA_SECTION: Final[str] = "app_schema"
BASE_DIR_KEY: Final[str] = "base_dir"
PROMPT_BASE_DIR_FIELD: Final[str] = f"{PROMPT_SECTION}.{BASE_DIR_KEY}"
SCHEMA_BASE_DIR_FIELD: Final[str] = f"{SCHEMA_SECTION}.{BASE_DIR_KEY}"

# Order in which directory fields are path-checked and reported.
DIRECTORY_FIELDS: Final[tuple[str, ...]] = (
    WORKING_DIR_FIELD,
    PROMPT_BASE_DIR_FIELD,
    SCHEMA_BASE_DIR_FIELD,
)
SECTION_NAMES: Final[tuple[str, ...]] = (PROMPT_SECTION, SCHEMA_SECTION)

CONFIG_DIR_PARTS: Final[tuple[str, ...]] = (AGENT_DIRNAME, DEFAULT_NAMESPACE, CONFIG_DIRNAME)

__all__ = [
    "AGENT_DIRNAME",
    "APP_STEM",
    "BASE_DIR_KEY",
    "CONFIG_DIRNAME",
    "CONFIG_DIR_PARTS",
    "CONFIG_EXTENSION",
    "DEFAULT_NAMESPACE",
    "DIRECTORY_FIELDS",
    "MERGED_CONFIG_SOURCE",
    "PROFILE_NAME_PATTERN",
    "PROMPT_BASE_DIR_FIELD",
    "PROMPT_SECTION",
    "SCHEMA_BASE_DIR_FIELD",
    "SCHEMA_SECTION",
    "SECTION_NAMES",
    "USER_STEM",
    "WORKING_DIR_FIELD",
]
