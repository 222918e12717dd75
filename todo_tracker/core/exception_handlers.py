"""
Error Translation.

Converts error kinds into the standard response envelope with the right
HTTP status. Used two ways:

- error_response() for failed ServiceResults returned to an endpoint
- FastAPI exception handlers for errors that are raised (authentication,
  request validation, anything unexpected)

Every failure body has the shape {"data": null, "errors": {"url", "error"}}.

Usage:
    from todo_tracker.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_tracker.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from todo_tracker.core.logging import get_logger
from todo_tracker.schemas.base import ErrorInfo, ResponseDTO

logger = get_logger(__name__)

# Map error kinds to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    IntegrityError: 400,
    AuthenticationError: 401,
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    # Try request state first (set by middleware)
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _envelope(
    request: Request,
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ResponseDTO(errors=ErrorInfo(url=str(request.url), error=message))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def error_response(request: Request, error: ApplicationError) -> JSONResponse:
    """
    Build the failure response for an application error.

    Unknown error kinds fall back to 500.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(error), 500)

    log_extra = {
        "code": error.code,
        "message": error.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }
    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return _envelope(request, status_code, error.message, headers)


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Handle raised ApplicationError subclasses."""
    return error_response(request, exc)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            parts.append("Malformed JSON body")
            continue
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        message = err.get("msg", "Validation error")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return "; ".join(parts) or "Invalid request"


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Malformed bodies and missing fields are reported as 400 with one
    message listing each offending field.
    """
    error = ValidationError(_describe_validation_errors(exc))
    return error_response(request, error)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Infrastructure failures (database unavailable and the like) end up
    here. The traceback is logged; the client only sees a generic message.
    RequestContextMiddleware calls this directly so the 500 still carries
    the request id and timing headers.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": _get_request_id(request),
        },
    )
    return _envelope(request, 500, "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
