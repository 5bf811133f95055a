"""Ok / Err values for operations that fail routinely, such as parsing user input.

A parser returns ``Err`` instead of raising, and the caller decides whether
the failure means "absent" (query parameters) or is fatal (stored data).
"""

from __future__ import annotations

import dataclasses
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class Err(Generic[E]):
    """Failure carrying the exception that :meth:`unwrap` raises."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self.error


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
