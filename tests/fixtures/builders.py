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

"""Builders for configuration layer files and trees used across the suite."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from breakdown_config.config.constants import CONFIG_DIR_PARTS

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "APP_DEFAULTS",
    "ConfigTreeBuilder",
    "app_payload",
    "layer_file_name",
]

APP_DEFAULTS: dict[str, Any] = {
    "working_dir": "workspace",
    "app_prompt": {"base_dir": "prompts"},
    "app_schema": {"base_dir": "schemas"},
}


def app_payload(**overrides: Any) -> dict[str, Any]:
    """Return a valid application layer with top-level ``overrides`` applied."""
    payload: dict[str, Any] = {
        "working_dir": APP_DEFAULTS["working_dir"],
        "app_prompt": dict(APP_DEFAULTS["app_prompt"]),
        "app_schema": dict(APP_DEFAULTS["app_schema"]),
    }
    payload.update(overrides)
    return payload


def layer_file_name(stem: str, profile: str | None = None) -> str:
    return f"{profile}-{stem}.yml" if profile else f"{stem}.yml"


@dataclass(slots=True)
class ConfigTreeBuilder:
    """Write ``app``/``user`` layer files below ``base_dir``."""

    base_dir: Path

    @property
    def config_dir(self) -> Path:
        return self.base_dir.joinpath(*CONFIG_DIR_PARTS)

    def path_for(self, stem: str, profile: str | None = None) -> Path:
        return self.config_dir / layer_file_name(stem, profile)

    def write_text(self, stem: str, text: str, *, profile: str | None = None) -> Path:
        path = self.path_for(stem, profile)
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(text, encoding="utf-8")
        return path

    def write_app(self, payload: object | None = None, *, profile: str | None = None) -> Path:
        data = app_payload() if payload is None else payload
        return self.write_text("app", yaml.safe_dump(data, sort_keys=False), profile=profile)

    def write_user(self, payload: object, *, profile: str | None = None) -> Path:
        return self.write_text("user", yaml.safe_dump(payload, sort_keys=False), profile=profile)
