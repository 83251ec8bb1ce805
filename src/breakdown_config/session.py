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

"""Public facade over configuration resolution.

``BreakdownConfig`` exposes a total API whose methods return ``Result`` values,
plus a thin legacy adapter whose methods return the plain value or raise
``ConfigResultError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from breakdown_config._internal.exceptions import ConfigResultError
from breakdown_config._internal.logging_utils import structured_extra
from breakdown_config.config.loader import AppConfigLoader, UserConfigLoader
from breakdown_config.core.model_types import FileOperation, LogComponent
from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import ConfigNotLoadedError, FileSystemError
from breakdown_config.manager import ConfigManager
from breakdown_config.profile import validate_profile

if TYPE_CHECKING:
    from breakdown_config.config.io import ConfigReader
    from breakdown_config.config.models import ConfigProfile, MergedConfig
    from breakdown_config.core.result import Result
    from breakdown_config.errors import UnifiedError
    from breakdown_config.profile import ProfileName

logger: logging.Logger = logging.getLogger("breakdown_config.session")

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Unloaded:
    """No configuration has been loaded into the session yet."""


@dataclass(slots=True, frozen=True)
class Loaded:
    """The session holds a successfully merged configuration."""

    config: MergedConfig
    provenance: ConfigProfile


SessionState: TypeAlias = Unloaded | Loaded


def _resolve(base: Path, relative: str) -> Path:
    return Path(os.path.abspath(os.path.join(base, relative)))  # noqa: PTH100, PTH118


def _raise_on_err(result: Result[T, UnifiedError]) -> T:
    if isinstance(result, Err):
        raise ConfigResultError(result.error)
    return result.value


class BreakdownConfig:
    """Layered configuration for one base directory and profile.

    Create instances with :meth:`create` (or :meth:`create_legacy`), then call
    :meth:`load_config_safe` before reading values.
    """

    def __init__(self, base_dir: Path, profile: ProfileName, manager: ConfigManager) -> None:
        self._base_dir = base_dir
        self._profile = profile
        self._manager = manager
        self._state: SessionState = Unloaded()

    @classmethod
    def create(
        cls,
        profile: str | None = None,
        base_dir: str | os.PathLike[str] | None = None,
        *,
        reader: ConfigReader | None = None,
    ) -> Result[BreakdownConfig, UnifiedError]:
        """Validate the inputs and build a session without touching configuration files.

        Args:
            profile: Optional profile name selecting ``{profile}-app.yml`` and
                ``{profile}-user.yml``.
            base_dir: Directory containing ``.agent/``. Empty or ``None`` means
                the current working directory at creation time.
            reader: Alternative byte source for configuration files.

        Returns:
            ``Ok(BreakdownConfig)`` or ``Err(InvalidProfileNameError)``.
        """
        validated = validate_profile(profile)
        if isinstance(validated, Err):
            return validated
        try:
            root = Path(os.path.abspath(base_dir)) if base_dir else Path.cwd()  # noqa: PTH100
        except OSError as exc:
            return Err(FileSystemError(operation=FileOperation.STAT, path=Path(), detail=str(exc)))
        manager = ConfigManager(
            root,
            validated.value,
            app_loader=AppConfigLoader(reader),
            user_loader=UserConfigLoader(reader),
        )
        logger.debug(
            "Created configuration session",
            extra=structured_extra(component=LogComponent.SESSION, path=root, profile=validated.value.value),
        )
        return Ok(cls(root, validated.value, manager))

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def profile(self) -> ProfileName:
        return self._profile

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    async def load_config_safe(self) -> Result[None, UnifiedError]:
        """Read, validate and merge both layers.

        The session becomes loaded only on success; a failed reload keeps the
        previously loaded configuration.
        """
        result = await self._manager.reload_safe()
        if isinstance(result, Err):
            return Err(result.error)
        provenance = self._manager.get_profile_safe()
        if isinstance(provenance, Err):
            return Err(provenance.error)
        self._state = Loaded(result.value, provenance.value)
        logger.debug(
            "Session loaded",
            extra=structured_extra(component=LogComponent.SESSION, profile=self._profile.value),
        )
        return Ok(None)

    def get_config_safe(self) -> Result[MergedConfig, UnifiedError]:
        """Return the loaded configuration."""
        return self._require_loaded("get_config")

    def get_working_dir_safe(self) -> Result[Path, UnifiedError]:
        """Return the absolute working directory."""
        return self._require_loaded("get_working_dir").map(lambda config: _resolve(self._base_dir, config.working_dir))

    def get_prompt_dir_safe(self) -> Result[Path, UnifiedError]:
        """Return the absolute prompt directory, resolved against the working directory."""
        return self._require_loaded("get_prompt_dir").map(
            lambda config: _resolve(_resolve(self._base_dir, config.working_dir), config.app_prompt.base_dir)
        )

    def get_schema_dir_safe(self) -> Result[Path, UnifiedError]:
        """Return the absolute schema directory, resolved against the working directory."""
        return self._require_loaded("get_schema_dir").map(
            lambda config: _resolve(_resolve(self._base_dir, config.working_dir), config.app_schema.base_dir)
        )

    def get_profile_safe(self) -> Result[ConfigProfile, UnifiedError]:
        """Return where the loaded configuration came from."""
        match self._state:
            case Loaded(provenance=provenance):
                return Ok(provenance)
            case Unloaded():
                return Err(ConfigNotLoadedError(requested_operation="get_profile"))

    def _require_loaded(self, operation: str) -> Result[MergedConfig, UnifiedError]:
        match self._state:
            case Loaded(config=config):
                return Ok(config)
            case Unloaded():
                return Err(ConfigNotLoadedError(requested_operation=operation))

    # Legacy raising API

    @classmethod
    def create_legacy(
        cls,
        profile: str | None = None,
        base_dir: str | os.PathLike[str] | None = None,
        *,
        reader: ConfigReader | None = None,
    ) -> BreakdownConfig:
        """Like :meth:`create`, but raise ``ConfigResultError`` on failure."""
        return _raise_on_err(cls.create(profile, base_dir, reader=reader))

    async def load_config(self) -> None:
        _raise_on_err(await self.load_config_safe())

    def get_config(self) -> MergedConfig:
        return _raise_on_err(self.get_config_safe())

    def get_working_dir(self) -> Path:
        return _raise_on_err(self.get_working_dir_safe())

    def get_prompt_dir(self) -> Path:
        return _raise_on_err(self.get_prompt_dir_safe())

    def get_schema_dir(self) -> Path:
        return _raise_on_err(self.get_schema_dir_safe())


__all__ = ["BreakdownConfig", "Loaded", "SessionState", "Unloaded"]
