from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from feed.errors import CreationError, classify_exception

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def recover(self, fn: Callable[[CreationError], "Result[T]"]) -> "Result[T]":
        return self

    def fold(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[CreationError], U],
    ) -> U:
        return on_success(self.value)

    def get_or_else(self, fn: Callable[[CreationError], T]) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: CreationError

    @property
    def is_success(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def recover(self, fn: Callable[[CreationError], "Result[T]"]) -> "Result[T]":
        """Give fn a chance to turn the error into another Result."""
        return fn(self.error)

    def fold(
        self,
        on_success: Callable[[Any], U],
        on_failure: Callable[[CreationError], U],
    ) -> U:
        return on_failure(self.error)

    def get_or_else(self, fn: Callable[[CreationError], T]) -> T:
        return fn(self.error)


Result = Union[Success[T], Failure]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
    """Run fn and capture any exception as a classified Failure."""
    try:
        return Success(fn(*args, **kwargs))
    except Exception as e:
        return Failure(classify_exception(e))
