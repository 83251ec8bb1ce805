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

"""Configuration layers: file conventions, models, loading and merging.

The application layer is mandatory; the user layer is an optional overlay.
Both live under ``{base_dir}/.agent/climpt/config/``.
"""

from __future__ import annotations

from .io import ConfigReader, DefaultConfigReader, parse_structured_text
from .loader import AppConfigLoader, ConfigLoader, UserConfigLoader, config_dir
from .merge import merge_configs
from .models import (
    AppConfig,
    AppLayerModel,
    ConfigProfile,
    DirectorySection,
    MergedConfig,
    SectionOverlay,
    UserConfig,
    UserLayerModel,
    validate_app_layer,
    validate_user_layer,
)

__all__ = [
    "AppConfig",
    "AppConfigLoader",
    "AppLayerModel",
    "ConfigLoader",
    "ConfigProfile",
    "ConfigReader",
    "DefaultConfigReader",
    "DirectorySection",
    "MergedConfig",
    "SectionOverlay",
    "UserConfig",
    "UserConfigLoader",
    "UserLayerModel",
    "config_dir",
    "merge_configs",
    "parse_structured_text",
    "validate_app_layer",
    "validate_user_layer",
]
