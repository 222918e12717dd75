"""
Base Service.

Base class for all services providing common patterns for business logic.
Services own the repositories they are given and implement business rules.

Usage:
    from todo_tracker.services.base import BaseService

    class TodoService(BaseService):
        def __init__(self, repo: TodoRepository) -> None:
            super().__init__()
            self.repo = repo

        async def get_note(self, note_id: str) -> ServiceResult[Todo]:
            record = await self.repo.find_by_id(note_id)
            if record is None:
                return self._fail("get_note", NotFoundError(...))
            ...
"""

from typing import Any

from todo_tracker.core.exceptions import ApplicationError
from todo_tracker.core.logging import get_logger
from todo_tracker.services.result import ServiceResult


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Failure results that are logged once, where they are produced

    Subclasses should:
    - Call super().__init__() in their __init__
    - Keep their repositories as attributes
    - Return ServiceResult from every public method
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _fail(self, operation: str, error: ApplicationError) -> ServiceResult[Any]:
        """
        Log a business failure and wrap it in a failed result.

        Args:
            operation: Name of the failing operation
            error: Error kind describing the failure

        Returns:
            Failed ServiceResult carrying `error`
        """
        self._logger.warning(
            "Operation failed",
            extra={
                "service": self.__class__.__name__,
                "operation": operation,
                "code": error.code,
                "error": error.message,
            },
        )
        return ServiceResult.failure(operation, error)

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
