# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Explicit success/failure values returned by commands and value-object factories."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Generic, ParamSpec, TypeAlias, TypeVar

from .errors.base import AppError

T = TypeVar("T")
P = ParamSpec("P")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Err:
    error: AppError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error


Result: TypeAlias = Ok[T] | Err


def catch_errors(
    *error_types: type[AppError],
) -> Callable[[Callable[P, Result[T]]], Callable[P, Result[T]]]:
    """Turn the listed exceptions raised by collaborators into ``Err`` values."""

    def decorator(func: Callable[P, Result[T]]) -> Callable[P, Result[T]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            try:
                return func(*args, **kwargs)
            except error_types as exc:
                return Err(exc)

        return wrapper

    return decorator


__all__ = ["Err", "Ok", "Result", "catch_errors"]
