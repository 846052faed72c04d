"""
Outcome values for operations that can fail in expected ways.

A ``Result`` is either a ``Success`` carrying a value or a ``Failure``
carrying a human-readable message and a machine-readable ``ErrorCode``.
The two are separate frozen types, so a failure can never hold a value
and neither can change state after construction.

Callers branch on ``is_failure`` before reading ``value``; reading
``value`` on a failure returns None rather than raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T = None  # type: ignore[assignment]

    is_success = True
    is_failure = False

    @property
    def error(self) -> None:
        return None

    @property
    def code(self) -> None:
        return None

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[str, ErrorCode], R]) -> R:
        return on_success(self.value)


@dataclass(frozen=True, slots=True)
class Failure:
    error: str
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    is_success = False
    is_failure = True

    @property
    def value(self) -> None:
        return None

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def match(self, on_success: Callable[[Any], R], on_failure: Callable[[str, ErrorCode], R]) -> R:
        return on_failure(self.error, self.code)


Result = Union[Success[T], Failure]


def success(value: T = None) -> Success[T]:  # type: ignore[assignment]
    """Wrap *value* in a ``Success``; omit it for operations with no payload."""
    return Success(value)


def failure(error: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR) -> Failure:
    return Failure(error, code)
