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

"""Configuration layer models.

Pydantic models validate the parsed tree of each layer; validated layers are
converted to frozen dataclasses for runtime use. Unknown keys are allowed at
every level and travel alongside the typed fields as ``extras``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final, cast

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from breakdown_config.config.constants import (
    BASE_DIR_KEY,
    PROMPT_SECTION,
    SCHEMA_SECTION,
    SECTION_NAMES,
    WORKING_DIR_FIELD,
)
from breakdown_config.core.model_types import ProfileKind
from breakdown_config.core.result import Err, Ok
from breakdown_config.core.value_tree import EMPTY_MAPPING, freeze_mapping, freeze_tree, thaw_tree, tree_type_name
from breakdown_config.errors import ConfigValidationError, ValidationViolation

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from breakdown_config.core.result import Result
    from breakdown_config.core.value_tree import TreeMapping, ValueTree
    from breakdown_config.profile import ProfileName

ROOT_FIELD: Final[str] = "<root>"
NON_EMPTY_CONSTRAINT: Final[str] = "non-empty"
_NON_EMPTY_ERROR: Final[str] = "string_blank"
_MAPPING_ERRORS: Final[frozenset[str]] = frozenset({"model_type", "model_attributes_type", "dict_type"})


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError(_NON_EMPTY_ERROR, "String should not be empty after trimming")
    return value


def _reject_null(value: object, expected: str) -> object:
    # Absent keys use the default; an explicit null is a type error.
    if value is None:
        raise PydanticCustomError(f"{expected}_type", "Input should be a valid {expected}", {"expected": expected})
    return value


class AppSectionModel(BaseModel):
    """Directory section of the application layer (``app_prompt`` / ``app_schema``)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow")
    base_dir: StrictStr

    @field_validator("base_dir")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        return _reject_blank(value)


class AppLayerModel(BaseModel):
    """Pydantic model for the mandatory application layer.

    Attributes:
        working_dir: Working directory, relative to the session base directory.
        app_prompt: Prompt directory section.
        app_schema: Schema directory section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow")
    working_dir: StrictStr
    app_prompt: AppSectionModel
    app_schema: AppSectionModel

    @field_validator("working_dir")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        return _reject_blank(value)


class UserSectionModel(BaseModel):
    """Directory section overlay of the user layer."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow")
    base_dir: StrictStr | None = None

    @field_validator("base_dir", mode="before")
    @classmethod
    def _present_means_string(cls, value: object) -> object:
        return _reject_null(value, "string")


class UserLayerModel(BaseModel):
    """Pydantic model for the optional user layer; every field may be absent."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow")
    working_dir: StrictStr | None = None
    app_prompt: UserSectionModel | None = None
    app_schema: UserSectionModel | None = None

    @field_validator("working_dir", mode="before")
    @classmethod
    def _working_dir_string(cls, value: object) -> object:
        return _reject_null(value, "string")

    @field_validator("app_prompt", "app_schema", mode="before")
    @classmethod
    def _section_mapping(cls, value: object) -> object:
        return _reject_null(value, "dict")


def _expected_type(loc: tuple[int | str, ...]) -> str:
    if len(loc) == 1 and loc[0] in SECTION_NAMES:
        return "mapping"
    return "string"


def _lookup(tree: ValueTree, loc: tuple[int | str, ...]) -> ValueTree:
    current: ValueTree = tree
    for part in loc:
        if not isinstance(current, Mapping):
            return None
        current = cast("TreeMapping", current).get(str(part))
    return current


def violation_from_error(tree: ValueTree, error: ErrorDetails) -> ValidationViolation:
    """Translate one pydantic error into a ``ValidationViolation``."""
    loc = tuple(error["loc"])
    field = ".".join(str(part) for part in loc) or ROOT_FIELD
    expected = _expected_type(loc)
    kind = error["type"]
    if kind == "missing":
        return ValidationViolation(field=field, value=None, expected_type=expected, actual_type="missing")
    value = _lookup(tree, loc) if loc else tree
    if kind == _NON_EMPTY_ERROR:
        return ValidationViolation(
            field=field,
            value=value,
            expected_type=expected,
            actual_type=tree_type_name(value),
            constraint=NON_EMPTY_CONSTRAINT,
        )
    if kind in _MAPPING_ERRORS:
        expected = "mapping"
    return ValidationViolation(
        field=field,
        value=freeze_tree(value),
        expected_type=expected,
        actual_type=tree_type_name(value),
    )


def violations_from_validation_error(tree: ValueTree, exc: ValidationError) -> tuple[ValidationViolation, ...]:
    """Return every violation reported by ``exc`` in report order."""
    return tuple(violation_from_error(tree, error) for error in exc.errors())


@dataclass(slots=True, frozen=True)
class DirectorySection:
    """A resolved directory section with its passthrough keys."""

    base_dir: str
    extras: TreeMapping = EMPTY_MAPPING

    def to_dict(self) -> dict[str, object]:
        payload = cast("dict[str, object]", thaw_tree(self.extras))
        payload[BASE_DIR_KEY] = self.base_dir
        return payload


@dataclass(slots=True, frozen=True)
class SectionOverlay:
    """A user-layer directory section; ``base_dir`` is ``None`` when absent."""

    base_dir: str | None = None
    extras: TreeMapping = EMPTY_MAPPING


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Validated application layer.

    Attributes:
        working_dir: Working directory relative to the session base directory.
        app_prompt: Prompt directory section.
        app_schema: Schema directory section.
        extras: Unknown top-level keys, kept verbatim.
        source: File the layer was read from.
    """

    working_dir: str
    app_prompt: DirectorySection
    app_schema: DirectorySection
    extras: TreeMapping
    source: Path


@dataclass(slots=True, frozen=True)
class UserConfig:
    """Validated user layer overlay."""

    working_dir: str | None
    app_prompt: SectionOverlay | None
    app_schema: SectionOverlay | None
    extras: TreeMapping
    source: Path


@dataclass(slots=True, frozen=True)
class MergedConfig:
    """The effective configuration after both layers are applied."""

    working_dir: str
    app_prompt: DirectorySection
    app_schema: DirectorySection
    extras: TreeMapping = EMPTY_MAPPING

    def get(self, key: str, default: ValueTree = None) -> ValueTree:
        """Return a passthrough top-level value."""
        return self.extras.get(key, default)

    def to_dict(self) -> dict[str, object]:
        """Return a plain nested-dict view of the configuration."""
        payload = cast("dict[str, object]", thaw_tree(self.extras))
        payload[WORKING_DIR_FIELD] = self.working_dir
        payload[PROMPT_SECTION] = self.app_prompt.to_dict()
        payload[SCHEMA_SECTION] = self.app_schema.to_dict()
        return payload


@dataclass(slots=True, frozen=True)
class ConfigProfile:
    """A merged configuration together with where it came from."""

    kind: ProfileKind
    profile: ProfileName
    app_path: Path
    user_path: Path
    user_exists: bool
    config: MergedConfig


def _extras(tree: TreeMapping, known: tuple[str, ...]) -> TreeMapping:
    return freeze_mapping({key: value for key, value in tree.items() if key not in known})


def _section_tree(tree: TreeMapping, name: str) -> TreeMapping | None:
    section = tree.get(name)
    return cast("TreeMapping", section) if isinstance(section, Mapping) else None


def _root_violation(tree: ValueTree) -> ValidationViolation:
    return ValidationViolation(
        field=ROOT_FIELD,
        value=tree,
        expected_type="mapping",
        actual_type=tree_type_name(tree),
    )


def validate_app_layer(tree: ValueTree, source: Path) -> Result[AppConfig, ConfigValidationError]:
    """Validate the application layer tree and build an ``AppConfig``.

    Args:
        tree: Parsed document.
        source: File the document was read from, used in error reports.

    Returns:
        ``Ok(AppConfig)`` or ``Err(ConfigValidationError)`` listing every
        violation found.
    """
    if not isinstance(tree, Mapping):
        return Err(ConfigValidationError(path=str(source), violations=(_root_violation(tree),)))
    mapping = cast("TreeMapping", tree)
    try:
        model = AppLayerModel.model_validate(thaw_tree(mapping))
    except ValidationError as exc:
        return Err(ConfigValidationError(path=str(source), violations=violations_from_validation_error(tree, exc)))
    prompt = cast("TreeMapping", _section_tree(mapping, PROMPT_SECTION))
    schema = cast("TreeMapping", _section_tree(mapping, SCHEMA_SECTION))
    return Ok(
        AppConfig(
            working_dir=model.working_dir,
            app_prompt=DirectorySection(model.app_prompt.base_dir, _extras(prompt, (BASE_DIR_KEY,))),
            app_schema=DirectorySection(model.app_schema.base_dir, _extras(schema, (BASE_DIR_KEY,))),
            extras=_extras(mapping, (WORKING_DIR_FIELD, *SECTION_NAMES)),
            source=source,
        )
    )


def _overlay(tree: TreeMapping, name: str, model: UserSectionModel | None) -> SectionOverlay | None:
    section = _section_tree(tree, name)
    if model is None or section is None:
        return None
    return SectionOverlay(base_dir=model.base_dir, extras=_extras(section, (BASE_DIR_KEY,)))


def validate_user_layer(tree: ValueTree, source: Path) -> Result[UserConfig, ConfigValidationError]:
    """Validate the user layer tree; only fields that are present are checked."""
    if not isinstance(tree, Mapping):
        return Err(ConfigValidationError(path=str(source), violations=(_root_violation(tree),)))
    mapping = cast("TreeMapping", tree)
    try:
        model = UserLayerModel.model_validate(thaw_tree(mapping))
    except ValidationError as exc:
        return Err(ConfigValidationError(path=str(source), violations=violations_from_validation_error(tree, exc)))
    return Ok(
        UserConfig(
            working_dir=model.working_dir,
            app_prompt=_overlay(mapping, PROMPT_SECTION, model.app_prompt),
            app_schema=_overlay(mapping, SCHEMA_SECTION, model.app_schema),
            extras=_extras(mapping, (WORKING_DIR_FIELD, *SECTION_NAMES)),
            source=source,
        )
    )


__all__ = [
    "NON_EMPTY_CONSTRAINT",
    "ROOT_FIELD",
    "AppConfig",
    "AppLayerModel",
    "AppSectionModel",
    "ConfigProfile",
    "DirectorySection",
    "MergedConfig",
    "SectionOverlay",
    "UserConfig",
    "UserLayerModel",
    "UserSectionModel",
    "validate_app_layer",
    "validate_user_layer",
    "violation_from_error",
    "violations_from_validation_error",
]
