"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

import structlog
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_tracker.core.database import get_db_session
from todo_tracker.core.exceptions import AuthenticationError
from todo_tracker.core.logging import get_logger
from todo_tracker.core.security import Authenticator
from todo_tracker.repositories.todo import TodoRepository
from todo_tracker.services.todo import TodoService

logger = get_logger(__name__)

BodyT = TypeVar("BodyT", bound=BaseModel)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

bearer_scheme = HTTPBearer(auto_error=False)


async def require_authentication(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """
    Gate every protected route on a valid bearer credential.

    Declared on the router, so it is resolved before any endpoint
    dependency and a rejected request never reaches the service.

    Raises:
        AuthenticationError: If the credential is missing or invalid
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    authenticator: Authenticator = request.app.state.authenticator
    claims = await authenticator.authenticate(credentials.credentials)

    structlog.contextvars.bind_contextvars(subject=claims.get("sub"))
    logger.debug("Request authenticated")
    return claims


def authenticated_body(model: type[BodyT]) -> Callable[..., Awaitable[BodyT]]:
    """
    Dependency factory that parses the JSON body into `model`.

    FastAPI decodes declared body parameters before resolving any
    dependency. Reading the body here instead, behind
    require_authentication, means an anonymous request is answered with
    401 before its body is looked at.

    Usage:
        @router.post("")
        async def create(body: Annotated[CreateNoteRequest, Depends(authenticated_body(CreateNoteRequest))]):
            ...
    """

    async def parse_body(
        request: Request,
        _claims: dict[str, Any] = Depends(require_authentication),
    ) -> BodyT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except PydanticValidationError as e:
            raise RequestValidationError(e.errors(include_url=False), body=raw) from e

    return parse_body


def body_openapi(model: type[BaseModel]) -> dict[str, Any]:
    """`openapi_extra` documenting a body read by authenticated_body()."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def get_todo_service(db: DbSession) -> TodoService:
    """Build a TodoService bound to the request's session."""
    return TodoService(TodoRepository(db))


TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]
