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

"""Result values for total (never-raising) operations.

Every fallible operation in breakdown_config returns ``Ok(value)`` or
``Err(error)`` instead of raising. Both are frozen dataclasses, so callers can
branch with ``match``::

    match result:
        case Ok(value=config):
            ...
        case Err(error=ConfigFileNotFoundError(path=path)):
            ...
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Literal, NoReturn, TypeAlias, TypeVar

from breakdown_config._internal.exceptions import ResultUnwrapError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_ok(self) -> Literal[True]:
        return True

    @property
    def is_err(self) -> Literal[False]:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Apply ``fn`` to the carried value."""
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[object], object]) -> Ok[T]:
        """Return ``self`` unchanged; only errors are mapped."""
        del fn
        return self

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain another fallible step on the carried value."""
        return fn(self.value)

    def or_else(self, fn: Callable[[object], object]) -> Ok[T]:
        """Return ``self`` unchanged; recovery only applies to errors."""
        del fn
        return self

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: object) -> T:
        del default
        return self.value

    def unwrap_err(self) -> NoReturn:
        message = f"Called unwrap_err() on Ok({self.value!r})"
        raise ResultUnwrapError(message)


@dataclass(slots=True, frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def is_err(self) -> Literal[True]:
        return True

    def map(self, fn: Callable[[object], object]) -> Err[E]:
        """Return ``self`` unchanged; only values are mapped."""
        del fn
        return self

    def map_err(self, fn: Callable[[E], F]) -> Err[F]:
        """Apply ``fn`` to the carried error."""
        return Err(fn(self.error))

    def and_then(self, fn: Callable[[object], object]) -> Err[E]:
        """Short-circuit: the next step never runs."""
        del fn
        return self

    def or_else(self, fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Attempt recovery from the carried error."""
        return fn(self.error)

    def unwrap(self) -> NoReturn:
        message = f"Called unwrap() on Err({self.error!r})"
        raise ResultUnwrapError(message, error=self.error)

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap_err(self) -> E:
        return self.error


Result: TypeAlias = Ok[T] | Err[E]


def collect(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Gather successful values, stopping at the first error.

    Args:
        results: Results to combine, in order.

    Returns:
        ``Ok`` with every value when all results succeeded, otherwise the first
        ``Err`` encountered.
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def partition(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split results into successful values and errors, keeping order."""
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if isinstance(result, Ok):
            values.append(result.value)
        else:
            errors.append(result.error)
    return values, errors


__all__ = ["Err", "Ok", "Result", "collect", "partition"]
