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

"""Loaders for the application and user configuration layers.

A loader resolves the layer file for a profile, reads it once, parses it and
validates it. Every outcome is returned as a ``Result``; the loaders never
raise and never cache.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar, override

from breakdown_config._internal.exceptions import ConfigSyntaxError
from breakdown_config._internal.logging_utils import structured_extra
from breakdown_config.config.constants import (
    APP_STEM,
    CONFIG_DIR_PARTS,
    PROMPT_BASE_DIR_FIELD,
    SCHEMA_BASE_DIR_FIELD,
    USER_STEM,
    WORKING_DIR_FIELD,
)
from breakdown_config.config.io import DefaultConfigReader, parse_structured_text
from breakdown_config.config.models import AppConfig, UserConfig, validate_app_layer, validate_user_layer
from breakdown_config.core.model_types import ConfigLayer, FileOperation, LogComponent
from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import (
    ConfigFileNotFoundError,
    ConfigParseError,
    FileSystemError,
    UnknownError,
)
from breakdown_config.paths import validate_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from breakdown_config.config.io import ConfigReader
    from breakdown_config.core.result import Result
    from breakdown_config.core.value_tree import ValueTree
    from breakdown_config.errors import UnifiedError
    from breakdown_config.profile import ProfileName

logger: logging.Logger = logging.getLogger("breakdown_config.config.loader")

LayerT = TypeVar("LayerT")


def config_dir(base_dir: Path) -> Path:
    """Return the conventional configuration directory under ``base_dir``."""
    return base_dir.joinpath(*CONFIG_DIR_PARTS)


def check_directory_fields(fields: Iterable[tuple[str, str | None]]) -> Result[None, UnifiedError]:
    """Run ``validate_path`` over non-blank directory values in order.

    Absent values and values that are empty after trimming are skipped here;
    required-ness is enforced by structural validation and after merging.
    """
    for field, value in fields:
        if value is None or not value.strip():
            continue
        checked = validate_path(value, field)
        if isinstance(checked, Err):
            return checked
    return Ok(None)


class ConfigLoader(ABC, Generic[LayerT]):
    """Shared read, parse and validate pipeline for one configuration layer."""

    layer: ClassVar[ConfigLayer]
    stem: ClassVar[str]

    def __init__(
        self,
        reader: ConfigReader | None = None,
        parser: Callable[[bytes], ValueTree] = parse_structured_text,
    ) -> None:
        self.reader: ConfigReader = reader if reader is not None else DefaultConfigReader()
        self.parser = parser

    def file_path(self, base_dir: Path, profile: ProfileName) -> Path:
        return config_dir(base_dir) / profile.file_name(self.stem)

    async def load(self, base_dir: Path, profile: ProfileName) -> Result[LayerT, UnifiedError]:
        """Load, parse and validate the layer for ``profile``.

        Args:
            base_dir: Session base directory.
            profile: Validated profile name.

        Returns:
            The validated layer, or the first error encountered.
        """
        path = self.file_path(base_dir, profile)
        logger.debug(
            "Resolving %s configuration at %s",
            self.layer.value,
            path,
            extra=structured_extra(
                component=LogComponent.LOADER,
                layer=self.layer,
                path=path,
                profile=profile.value,
            ),
        )
        try:
            data = await self.reader.read_bytes(path)
        except FileNotFoundError:
            return self._on_missing(path)
        except OSError as exc:
            return self._failed(
                FileSystemError(operation=FileOperation.READ, path=path, detail=exc.strerror or str(exc)),
            )
        # ignore JUSTIFIED: injected readers are arbitrary code; their failures are
        # reported as values instead of escaping the safe API
        except Exception as exc:  # noqa: BLE001
            return self._failed(UnknownError(wrapped=exc, context=f"reading {path}"))

        try:
            tree = self.parser(data)
        except ConfigSyntaxError as exc:
            return self._failed(ConfigParseError(path=path, reason=exc.reason, line=exc.line, column=exc.column))
        # ignore JUSTIFIED: same contract as the reader for injected parsers
        except Exception as exc:  # noqa: BLE001
            return self._failed(UnknownError(wrapped=exc, context=f"parsing {path}"))

        validated = self._validate(tree, path)
        if isinstance(validated, Err):
            return self._failed(validated.error)
        logger.debug(
            "Loaded %s configuration from %s",
            self.layer.value,
            path,
            extra=structured_extra(component=LogComponent.LOADER, layer=self.layer, path=path),
        )
        return validated

    def _failed(self, error: UnifiedError) -> Err[UnifiedError]:
        logger.debug(
            "Failed to load %s configuration: %s",
            self.layer.value,
            error.message,
            extra=structured_extra(
                component=LogComponent.LOADER,
                layer=self.layer,
                error_kind=error.kind.value,
                error_code=error.code,
            ),
        )
        return Err(error)

    @abstractmethod
    def _on_missing(self, path: Path) -> Result[LayerT, UnifiedError]:
        """Return the outcome for a layer file that does not exist."""

    @abstractmethod
    def _validate(self, tree: ValueTree, path: Path) -> Result[LayerT, UnifiedError]:
        """Validate a parsed document into the layer value."""


class AppConfigLoader(ConfigLoader[AppConfig]):
    """Loader for the mandatory application layer (``app.yml``)."""

    layer: ClassVar[ConfigLayer] = ConfigLayer.APP
    stem: ClassVar[str] = APP_STEM

    @override
    def _on_missing(self, path: Path) -> Result[AppConfig, UnifiedError]:
        return self._failed(
            ConfigFileNotFoundError(path=path, config_type=ConfigLayer.APP, searched_locations=(path,)),
        )

    @override
    def _validate(self, tree: ValueTree, path: Path) -> Result[AppConfig, UnifiedError]:
        validated = validate_app_layer(tree, path)
        if isinstance(validated, Err):
            return validated
        app = validated.value
        checked = check_directory_fields(
            (
                (WORKING_DIR_FIELD, app.working_dir),
                (PROMPT_BASE_DIR_FIELD, app.app_prompt.base_dir),
                (SCHEMA_BASE_DIR_FIELD, app.app_schema.base_dir),
            )
        )
        return checked.and_then(lambda _: Ok(app))


class UserConfigLoader(ConfigLoader[UserConfig | None]):
    """Loader for the optional user layer (``user.yml``); absence is not an error."""

    layer: ClassVar[ConfigLayer] = ConfigLayer.USER
    stem: ClassVar[str] = USER_STEM

    @override
    def _on_missing(self, path: Path) -> Result[UserConfig | None, UnifiedError]:
        logger.debug(
            "No user configuration at %s",
            path,
            extra=structured_extra(component=LogComponent.LOADER, layer=self.layer, path=path),
        )
        return Ok(None)

    @override
    def _validate(self, tree: ValueTree, path: Path) -> Result[UserConfig | None, UnifiedError]:
        validated = validate_user_layer(tree, path)
        if isinstance(validated, Err):
            return validated
        user = validated.value
        checked = check_directory_fields(
            (
                (WORKING_DIR_FIELD, user.working_dir),
                (PROMPT_BASE_DIR_FIELD, user.app_prompt.base_dir if user.app_prompt else None),
                (SCHEMA_BASE_DIR_FIELD, user.app_schema.base_dir if user.app_schema else None),
            )
        )
        return checked.and_then(lambda _: Ok(user))


__all__ = ["AppConfigLoader", "ConfigLoader", "UserConfigLoader", "check_directory_fields", "config_dir"]
