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

"""Load orchestration and caching for one configuration session."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from breakdown_config._internal.logging_utils import structured_extra
from breakdown_config.config.constants import (
    MERGED_CONFIG_SOURCE,
    PROMPT_BASE_DIR_FIELD,
    SCHEMA_BASE_DIR_FIELD,
    WORKING_DIR_FIELD,
)
from breakdown_config.config.loader import AppConfigLoader, UserConfigLoader
from breakdown_config.config.merge import merge_configs
from breakdown_config.config.models import NON_EMPTY_CONSTRAINT, ConfigProfile
from breakdown_config.core.model_types import LoadStatus, LogComponent, ProfileKind
from breakdown_config.core.result import Err, Ok
from breakdown_config.core.value_tree import tree_type_name
from breakdown_config.errors import ConfigNotLoadedError, ConfigValidationError, ValidationViolation

if TYPE_CHECKING:
    from pathlib import Path

    from breakdown_config.config.models import MergedConfig
    from breakdown_config.core.result import Result
    from breakdown_config.errors import UnifiedError
    from breakdown_config.profile import ProfileName

logger: logging.Logger = logging.getLogger("breakdown_config.manager")


def check_merged(config: MergedConfig) -> Result[MergedConfig, UnifiedError]:
    """Require the three directory fields to be non-empty after trimming."""
    violations = tuple(
        ValidationViolation(
            field=field,
            value=value,
            expected_type="string",
            actual_type=tree_type_name(value),
            constraint=NON_EMPTY_CONSTRAINT,
        )
        for field, value in (
            (WORKING_DIR_FIELD, config.working_dir),
            (PROMPT_BASE_DIR_FIELD, config.app_prompt.base_dir),
            (SCHEMA_BASE_DIR_FIELD, config.app_schema.base_dir),
        )
        if not value.strip()
    )
    if violations:
        return Err(ConfigValidationError(path=MERGED_CONFIG_SOURCE, violations=violations))
    return Ok(config)


class ConfigManager:
    """Resolve, merge and cache the configuration for one base directory and profile.

    Loads are serialised by a per-manager lock: a caller that arrives while a
    load is in flight waits for it and then reuses its cached result. Failed
    loads are not cached.
    """

    def __init__(
        self,
        base_dir: Path,
        profile: ProfileName,
        *,
        app_loader: AppConfigLoader | None = None,
        user_loader: UserConfigLoader | None = None,
    ) -> None:
        self.base_dir = base_dir
        self.profile = profile
        self.app_loader = app_loader if app_loader is not None else AppConfigLoader()
        self.user_loader = user_loader if user_loader is not None else UserConfigLoader()
        self._lock = asyncio.Lock()
        self._status = LoadStatus.NOT_REQUESTED
        self._cached: ConfigProfile | None = None
        self._last_error: UnifiedError | None = None

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def last_error(self) -> UnifiedError | None:
        return self._last_error

    async def get_config_safe(self) -> Result[MergedConfig, UnifiedError]:
        """Return the cached configuration, loading it on first use."""
        async with self._lock:
            if self._cached is not None:
                logger.debug(
                    "Serving cached configuration",
                    extra=structured_extra(component=LogComponent.MANAGER, cached=True),
                )
                return Ok(self._cached.config)
            return await self._load_locked()

    async def reload_safe(self) -> Result[MergedConfig, UnifiedError]:
        """Drop the cached configuration and load it again."""
        async with self._lock:
            self._cached = None
            return await self._load_locked()

    def get_profile_safe(self) -> Result[ConfigProfile, UnifiedError]:
        """Return the provenance of the last successful load."""
        if self._cached is None:
            return Err(ConfigNotLoadedError(requested_operation="get_profile"))
        return Ok(self._cached)

    async def _load_locked(self) -> Result[MergedConfig, UnifiedError]:
        self._status = LoadStatus.LOADING
        started = time.perf_counter()
        logger.info(
            "Loading configuration from %s",
            self.base_dir,
            extra=structured_extra(
                component=LogComponent.MANAGER,
                path=self.base_dir,
                profile=self.profile.value,
            ),
        )

        app = await self.app_loader.load(self.base_dir, self.profile)
        if isinstance(app, Err):
            return self._fail(app.error)
        user = await self.user_loader.load(self.base_dir, self.profile)
        if isinstance(user, Err):
            return self._fail(user.error)

        checked = check_merged(merge_configs(app.value, user.value))
        if isinstance(checked, Err):
            return self._fail(checked.error)

        self._cached = ConfigProfile(
            kind=ProfileKind.MERGED if user.value is not None else ProfileKind.APP_ONLY,
            profile=self.profile,
            app_path=self.app_loader.file_path(self.base_dir, self.profile),
            user_path=self.user_loader.file_path(self.base_dir, self.profile),
            user_exists=user.value is not None,
            config=checked.value,
        )
        self._status = LoadStatus.LOADED
        self._last_error = None
        logger.info(
            "Configuration loaded",
            extra=structured_extra(
                component=LogComponent.MANAGER,
                profile=self.profile.value,
                cached=False,
                duration_ms=(time.perf_counter() - started) * 1000.0,
                details={"kind": self._cached.kind.value},
            ),
        )
        return Ok(checked.value)

    def _fail(self, error: UnifiedError) -> Err[UnifiedError]:
        self._status = LoadStatus.FAILED
        self._last_error = error
        logger.warning(
            "Configuration load failed: %s",
            error.message,
            extra=structured_extra(
                component=LogComponent.MANAGER,
                profile=self.profile.value,
                error_kind=error.kind.value,
                error_code=error.code,
            ),
        )
        return Err(error)


__all__ = ["ConfigManager", "check_merged"]
