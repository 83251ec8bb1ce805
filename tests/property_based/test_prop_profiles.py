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

"""Property-based tests for profile names."""

from __future__ import annotations

import pytest
from hypothesis import given

from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import InvalidProfileNameError
from breakdown_config.profile import ProfileName
from breakdown_config.session import BreakdownConfig
from tests.property_based.strategies import invalid_profile_names, valid_profile_names

pytestmark = pytest.mark.property


@given(name=valid_profile_names())
def test_h_valid_names_create_sessions(name: str) -> None:
    result = BreakdownConfig.create(name, "/virtual")
    assert isinstance(result, Ok)
    assert result.value.profile == ProfileName(name)


@given(name=invalid_profile_names())
def test_h_invalid_names_are_rejected(name: str) -> None:
    assert BreakdownConfig.create(name, "/virtual") == Err(InvalidProfileNameError(provided=name))


@given(name=valid_profile_names())
def test_h_profile_file_names_keep_the_prefix(name: str) -> None:
    profile = ProfileName(name)
    assert profile.file_name("app") == f"{name}-app.yml"
    assert profile.file_name("user") == f"{name}-user.yml"


@given(name=valid_profile_names())
def test_h_unloaded_sessions_never_serve_config(name: str) -> None:
    session = BreakdownConfig.create(name, "/virtual").unwrap()
    assert isinstance(session.get_config_safe(), Err)
