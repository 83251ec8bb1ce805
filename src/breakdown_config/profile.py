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

"""Profile ("config set") names that select alternative configuration files."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from breakdown_config._internal.logging_utils import structured_extra
from breakdown_config.config.constants import CONFIG_EXTENSION
from breakdown_config.core.model_types import LogComponent
from breakdown_config.core.result import Err, Ok
from breakdown_config.errors import PROFILE_NAME_PATTERN, InvalidProfileNameError

if TYPE_CHECKING:
    from breakdown_config.core.result import Result
    from breakdown_config.errors import UnifiedError

logger: logging.Logger = logging.getLogger("breakdown_config.profile")

_PROFILE_RE: Final[re.Pattern[str]] = re.compile(PROFILE_NAME_PATTERN)


@dataclass(slots=True, frozen=True)
class ProfileName:
    """A validated profile name, or the default (no profile)."""

    value: str | None = None

    @classmethod
    def none(cls) -> ProfileName:
        return cls(None)

    @property
    def is_default(self) -> bool:
        return self.value is None

    def file_name(self, stem: str) -> str:
        """Return the layer file name for ``stem`` under this profile.

        >>> ProfileName("production").file_name("app")
        'production-app.yml'
        >>> ProfileName.none().file_name("user")
        'user.yml'
        """
        if self.value is None:
            return f"{stem}{CONFIG_EXTENSION}"
        return f"{self.value}-{stem}{CONFIG_EXTENSION}"

    def __str__(self) -> str:
        return self.value or ""


def is_valid_profile_name(raw: str) -> bool:
    # fullmatch so a trailing newline cannot slip past ``$``
    return _PROFILE_RE.fullmatch(raw) is not None


def validate_profile(raw: str | None) -> Result[ProfileName, UnifiedError]:
    """Validate a caller-supplied profile name.

    Absent and empty names are equivalent and select the default files.

    Args:
        raw: Profile name as given by the caller.

    Returns:
        ``Ok(ProfileName)`` or ``Err(InvalidProfileNameError)``.
    """
    if raw is None or raw == "":
        return Ok(ProfileName.none())
    if not is_valid_profile_name(raw):
        error = InvalidProfileNameError(provided=raw)
        logger.debug(
            "Rejected profile name %r",
            raw,
            extra=structured_extra(
                component=LogComponent.PROFILE,
                error_kind=error.kind.value,
                error_code=error.code,
            ),
        )
        return Err(error)
    return Ok(ProfileName(raw))


__all__ = ["ProfileName", "is_valid_profile_name", "validate_profile"]
