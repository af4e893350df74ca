"""Mini README: Tagged success/failure results for fleet operations.

Structure:
    * ResultCode - enumeration of the expected failure categories.
    * OperationResult - immutable outcome carrying a value or an error.

Domain and service operations return ``OperationResult`` instead of raising
for expected failures (bad input, unknown id, id collisions). Exceptions are
reserved for programmer errors such as constructing a failure without a
message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultCode(str, Enum):
    """Categorise why an operation failed."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate"


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    """Outcome of an operation that may carry a value."""

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    code: Optional[ResultCode] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: Optional[ResultCode] = None) -> "OperationResult[T]":
        """Create a failure; a blank message is a programming error."""

        if not error or not error.strip():
            raise ValueError("Failure results require a non-empty error message.")
        return cls(success=False, error=error, code=code)

    @classmethod
    def from_failure(cls, other: "OperationResult[object]", fallback: str = "Operation failed.") -> "OperationResult[T]":
        """Re-wrap another failed result under a different value type."""

        return cls.fail(other.error or fallback, other.code)

    def __bool__(self) -> bool:
        return self.success
