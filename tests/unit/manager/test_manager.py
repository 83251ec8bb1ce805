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

"""Unit tests for load orchestration and caching."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from breakdown_config.config.loader import AppConfigLoader, UserConfigLoader
from breakdown_config.config.models import DirectorySection, MergedConfig
from breakdown_config.core.model_types import LoadStatus, ProfileKind
from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import ConfigFileNotFoundError, ConfigNotLoadedError, ConfigValidationError
from breakdown_config.manager import ConfigManager, check_merged
from breakdown_config.profile import ProfileName
from tests.fixtures.stubs import GatedReader, InMemoryReader

pytestmark = pytest.mark.unit

BASE = Path("/srv/project")
DEFAULT = ProfileName.none()
APP_YAML = b"working_dir: ws\napp_prompt:\n  base_dir: prompts\napp_schema:\n  base_dir: schemas\n"


def _manager(reader: InMemoryReader, profile: ProfileName = DEFAULT) -> ConfigManager:
    return ConfigManager(
        BASE,
        profile,
        app_loader=AppConfigLoader(reader),
        user_loader=UserConfigLoader(reader),
    )


def _paths(profile: ProfileName = DEFAULT) -> tuple[Path, Path]:
    return AppConfigLoader().file_path(BASE, profile), UserConfigLoader().file_path(BASE, profile)


@pytest.mark.asyncio
async def test_app_only_load_is_cached() -> None:
    app_path, user_path = _paths()
    reader = InMemoryReader({app_path: APP_YAML})
    manager = _manager(reader)
    assert manager.status is LoadStatus.NOT_REQUESTED

    first = await manager.get_config_safe()
    second = await manager.get_config_safe()

    assert isinstance(first, Ok)
    assert first == second
    assert first.value.working_dir == "ws"
    assert manager.status is LoadStatus.LOADED
    assert reader.reads == [app_path, user_path]


@pytest.mark.asyncio
async def test_profile_reports_provenance() -> None:
    profile = ProfileName("prod")
    app_path, user_path = _paths(profile)
    manager = _manager(InMemoryReader({app_path: APP_YAML, user_path: b"working_dir: mine\n"}), profile)
    assert manager.get_profile_safe() == Err(ConfigNotLoadedError(requested_operation="get_profile"))

    _ = await manager.get_config_safe()
    result = manager.get_profile_safe()

    assert isinstance(result, Ok)
    provenance = result.value
    assert provenance.kind is ProfileKind.MERGED
    assert provenance.profile == profile
    assert provenance.app_path == app_path
    assert provenance.user_path == user_path
    assert provenance.user_exists
    assert provenance.config.working_dir == "mine"


@pytest.mark.asyncio
async def test_app_error_stops_before_user_layer() -> None:
    reader = InMemoryReader()
    manager = _manager(reader)
    result = await manager.get_config_safe()
    assert isinstance(result, Err)
    assert isinstance(result.error, ConfigFileNotFoundError)
    assert reader.reads == [_paths()[0]]
    assert manager.status is LoadStatus.FAILED
    assert manager.last_error == result.error


@pytest.mark.asyncio
async def test_failed_load_is_retried() -> None:
    app_path, _ = _paths()
    reader = InMemoryReader()
    manager = _manager(reader)
    assert isinstance(await manager.get_config_safe(), Err)
    reader.files[app_path] = APP_YAML
    assert isinstance(await manager.get_config_safe(), Ok)
    assert manager.last_error is None


@pytest.mark.asyncio
async def test_user_error_propagates() -> None:
    app_path, user_path = _paths()
    manager = _manager(InMemoryReader({app_path: APP_YAML, user_path: b"working_dir: 5\n"}))
    result = await manager.get_config_safe()
    assert isinstance(result, Err)
    assert isinstance(result.error, ConfigValidationError)
    assert result.error.path == str(user_path)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("user_yaml", "field"),
    [
        pytest.param(b"working_dir: ''\n", "working_dir", id="empty-working-dir"),
        pytest.param(b"working_dir: '   '\n", "working_dir", id="blank-working-dir"),
        pytest.param(b"app_prompt:\n  base_dir: '  '\n", "app_prompt.base_dir", id="blank-prompt-dir"),
        pytest.param(b"app_schema:\n  base_dir: '\t'\n", "app_schema.base_dir", id="blank-schema-dir"),
    ],
)
async def test_empty_override_fails_post_merge_check(user_yaml: bytes, field: str) -> None:
    app_path, user_path = _paths()
    manager = _manager(InMemoryReader({app_path: APP_YAML, user_path: user_yaml}))
    result = await manager.get_config_safe()
    assert isinstance(result, Err)
    assert isinstance(result.error, ConfigValidationError)
    assert result.error.path == "merged_config"
    assert result.error.fields == (field,)


@pytest.mark.asyncio
async def test_reload_rereads_files() -> None:
    app_path, _ = _paths()
    reader = InMemoryReader({app_path: APP_YAML})
    manager = _manager(reader)
    _ = await manager.get_config_safe()
    reader.files[app_path] = APP_YAML.replace(b"ws", b"ws2")
    result = await manager.reload_safe()
    assert isinstance(result, Ok)
    assert result.value.working_dir == "ws2"
    assert len(reader.reads) == 4


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_load() -> None:
    app_path, _ = _paths()
    reader = GatedReader({app_path: APP_YAML})
    manager = _manager(reader)

    first = asyncio.create_task(manager.get_config_safe())
    second = asyncio.create_task(manager.get_config_safe())
    await asyncio.sleep(0)
    assert manager.status is LoadStatus.LOADING
    reader.gate.set()
    results = await asyncio.gather(first, second)

    assert results[0] == results[1]
    assert isinstance(results[0], Ok)
    assert len(reader.reads) == 2


@pytest.mark.asyncio
async def test_load_outcomes_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="breakdown_config.manager")
    _ = await _manager(InMemoryReader()).get_config_safe()
    failures = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert failures
    assert getattr(failures[-1], "error_kind", None) == "CONFIG_FILE_NOT_FOUND"
    assert getattr(failures[-1], "error_code", None) == "ERR1001"


def test_check_merged_names_every_blank_field() -> None:
    config = MergedConfig(working_dir=" ", app_prompt=DirectorySection("p"), app_schema=DirectorySection(""))
    result = check_merged(config)
    assert isinstance(result, Err)
    assert isinstance(result.error, ConfigValidationError)
    assert result.error.fields == ("working_dir", "app_schema.base_dir")
    assert check_merged(MergedConfig("w", DirectorySection("p"), DirectorySection("s"))) == Ok(
        MergedConfig("w", DirectorySection("p"), DirectorySection("s")),
    )
