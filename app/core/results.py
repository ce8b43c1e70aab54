"""
Typed results returned by store operations.

Stores never raise on remote or validation failures; they return an
OperationResult carrying an ErrorKind so the view layer decides what the
user is told.
"""
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a store operation did not happen."""
    REMOTE_FAILURE = "remote_failure"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"
    INCOMPLETE_REGISTRATION = "incomplete_registration"


class OperationResult(BaseModel, Generic[T]):
    """Outcome of a store operation."""
    success: bool
    data: Optional[T] = None
    error: Optional[ErrorKind] = None
    detail: Optional[str] = None
    context: Dict[str, Any] = {}

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: ErrorKind,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> "OperationResult[T]":
        return cls(success=False, error=error, detail=detail, context=context or {})

    def __bool__(self) -> bool:
        return self.success
