"""
Service Result.

Return type for every service operation. Business failures travel back to
the caller as a value carrying an ApplicationError instead of being raised,
and the API layer decides how to present them.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from todo_tracker.core.exceptions import ApplicationError

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_note"``).
        data: Operation payload on success.
        error: Error kind and message if ``ok`` is False.
    """

    ok: bool
    op: str
    data: T | None = None
    error: ApplicationError | None = None

    @classmethod
    def success(cls, op: str, data: T | None = None) -> "ServiceResult[T]":
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, error: ApplicationError) -> "ServiceResult[T]":
        return cls(ok=False, op=op, error=error)
