from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Optional


class ErrorKind(str, Enum):
    """Discriminant of a creation failure."""

    DUPLICATE_RESOURCE = "duplicate_resource"
    SPECIAL_CONDITION = "special_condition"
    UNCLASSIFIED = "unclassified"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class CreationError:
    """
    Failure value returned by a creator instead of raising.
    `cause` keeps the underlying exception, if there was one.
    """

    kind: ErrorKind
    message: str = ""
    cause: Optional[BaseException] = None

    @classmethod
    def duplicate(cls, message: str = "resource already exists") -> "CreationError":
        return cls(ErrorKind.DUPLICATE_RESOURCE, message)

    @classmethod
    def special(cls, message: str = "special condition") -> "CreationError":
        return cls(ErrorKind.SPECIAL_CONDITION, message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "cause": type(self.cause).__name__ if self.cause else None,
        }


class FeedError(Exception):
    """Base class for feed handling errors."""


class DuplicateResourceException(FeedError):
    def __init__(self, api_id: Hashable):
        super().__init__(f"Resource already exists for api_id={api_id!r}")
        self.api_id = api_id


class SpecialConditionException(FeedError):
    def __init__(self, api_id: Hashable, reason: str = "special condition"):
        super().__init__(f"{reason} for api_id={api_id!r}")
        self.api_id = api_id
        self.reason = reason


class ResourceNotFoundError(FeedError, LookupError):
    def __init__(self, api_id: Hashable):
        super().__init__(f"No resource stored for api_id={api_id!r}")
        self.api_id = api_id


class CreationFailed(FeedError):
    """Raise a ready-made CreationError through code that only knows exceptions."""

    def __init__(self, error: CreationError):
        super().__init__(error.message or error.kind.value)
        self.error = error


def classify_exception(exc: BaseException) -> CreationError:
    """
    Map a raised exception onto the closed error kinds. Unknown exception
    types become UNCLASSIFIED with the exception kept as cause.
    """
    if isinstance(exc, CreationFailed):
        return exc.error
    if isinstance(exc, DuplicateResourceException):
        return CreationError(ErrorKind.DUPLICATE_RESOURCE, str(exc), exc)
    if isinstance(exc, SpecialConditionException):
        return CreationError(ErrorKind.SPECIAL_CONDITION, str(exc), exc)
    return CreationError(ErrorKind.UNCLASSIFIED, str(exc), exc)
