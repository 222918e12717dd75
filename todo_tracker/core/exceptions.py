"""
Custom Exceptions.

Application-specific error kinds. The Todo service hands these back as
values inside a ServiceResult. The authentication gate and the record
mapping raise them.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class IntegrityError(ApplicationError):
    """Raised when a persisted record breaks a storage invariant."""

    def __init__(self, message: str = "Persisted record missing identifier") -> None:
        super().__init__(message, code="RES_INTEGRITY_ERROR")


class AuthenticationError(ApplicationError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")
