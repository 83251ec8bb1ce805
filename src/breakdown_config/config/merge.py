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

"""Two-layer merge of application and user configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breakdown_config._internal.logging_utils import structured_extra
from breakdown_config.config.models import DirectorySection, MergedConfig
from breakdown_config.core.model_types import LogComponent
from breakdown_config.core.value_tree import freeze_mapping

if TYPE_CHECKING:
    from breakdown_config.config.models import AppConfig, SectionOverlay, UserConfig

logger: logging.Logger = logging.getLogger("breakdown_config.config.merge")


def _merge_section(base: DirectorySection, overlay: SectionOverlay | None) -> DirectorySection:
    if overlay is None:
        return DirectorySection(base_dir=base.base_dir, extras=base.extras)
    base_dir = overlay.base_dir if overlay.base_dir is not None else base.base_dir
    return DirectorySection(base_dir=base_dir, extras=freeze_mapping({**base.extras, **overlay.extras}))


def merge_configs(app: AppConfig, user: UserConfig | None) -> MergedConfig:
    """Merge the user overlay onto the application layer.

    Top-level keys merge shallowly; ``app_prompt`` and ``app_schema`` merge one
    level deep so sibling keys survive. A key present in the user layer always
    wins, even when its value is an empty string. The result is always a new
    value.

    Args:
        app: Validated application layer.
        user: Validated user layer, or ``None`` when there is no user file.

    Returns:
        The merged configuration.
    """
    if user is None:
        merged = MergedConfig(
            working_dir=app.working_dir,
            app_prompt=_merge_section(app.app_prompt, None),
            app_schema=_merge_section(app.app_schema, None),
            extras=freeze_mapping(dict(app.extras)),
        )
    else:
        merged = MergedConfig(
            working_dir=user.working_dir if user.working_dir is not None else app.working_dir,
            app_prompt=_merge_section(app.app_prompt, user.app_prompt),
            app_schema=_merge_section(app.app_schema, user.app_schema),
            extras=freeze_mapping({**app.extras, **user.extras}),
        )
    logger.debug(
        "Merged configuration layers",
        extra=structured_extra(
            component=LogComponent.MERGER,
            details={"user_layer": user is not None, "extra_keys": sorted(merged.extras)},
        ),
    )
    return merged


__all__ = ["merge_configs"]
