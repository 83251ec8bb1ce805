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

"""Exception hierarchy for the raising side of breakdown_config.

The resolution engine itself never raises; these types exist for the legacy
raising facade, for ``Result.unwrap`` on an error, and for the parser
collaborator whose failures the loader converts into ``ConfigParseError``.
"""

from __future__ import annotations

__all__ = ["BreakdownConfigError", "ConfigResultError", "ConfigSyntaxError", "ResultUnwrapError"]


class BreakdownConfigError(Exception):
    """Base error for all breakdown_config exceptions."""


class ConfigResultError(BreakdownConfigError):
    """Raised by the legacy facade when a safe operation returned an error.

    Attributes:
        error: The structured error carried by the failed result.
    """

    def __init__(self, error: object) -> None:
        """Initialise the exception from a structured error.

        Args:
            error: Structured error whose ``message`` becomes the exception text.
        """
        self.error = error
        super().__init__(getattr(error, "message", str(error)))

    @property
    def code(self) -> str | None:
        """Stable error code of the wrapped error, when it defines one."""
        return getattr(self.error, "code", None)


class ResultUnwrapError(BreakdownConfigError, ValueError):
    """Raised when a result is unwrapped on the wrong side."""

    def __init__(self, message: str, *, error: object | None = None) -> None:
        """Initialise the exception.

        Args:
            message: Human readable explanation.
            error: Error carried by the unwrapped ``Err``, if any.
        """
        self.error = error
        super().__init__(message)


class ConfigSyntaxError(BreakdownConfigError, ValueError):
    """Raised by the structured-text parser when a document cannot be parsed.

    Attributes:
        reason: Parser diagnostic.
        line: 1-based line of the problem, when known.
        column: 1-based column of the problem, when known.
    """

    def __init__(self, reason: str, *, line: int | None = None, column: int | None = None) -> None:
        """Initialise the exception with the parser diagnostic and position."""
        self.reason = reason
        self.line = line
        self.column = column
        super().__init__(reason)
