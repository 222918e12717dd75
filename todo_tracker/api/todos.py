"""
Todo API Endpoints.

REST API endpoints for todo notes. Every route sits behind the bearer
token gate declared on the router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from todo_tracker.core.dependencies import (
    TodoServiceDep,
    authenticated_body,
    body_openapi,
    require_authentication,
)
from todo_tracker.core.exception_handlers import error_response
from todo_tracker.core.logging import get_logger
from todo_tracker.domain.mapping import to_dto
from todo_tracker.domain.todo import Todo
from todo_tracker.schemas.base import ResponseDTO
from todo_tracker.schemas.todo import CreateNoteRequest, TodoDTO, UpdateNoteRequest
from todo_tracker.services.result import ServiceResult

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_authentication)])


def _respond(
    request: Request,
    result: ServiceResult[Todo],
) -> ResponseDTO[TodoDTO] | JSONResponse:
    """Turn a single-todo result into the success envelope or an error response."""
    if not result.ok:
        return error_response(request, result.error)
    return ResponseDTO(data=to_dto(result.data))


@router.post(
    "",
    response_model=ResponseDTO[TodoDTO],
    status_code=201,
    summary="Create a note",
    description="Create a new note. The store assigns its id; it starts not done.",
    openapi_extra=body_openapi(CreateNoteRequest),
)
async def create_note(
    body: Annotated[CreateNoteRequest, Depends(authenticated_body(CreateNoteRequest))],
    request: Request,
    service: TodoServiceDep,
) -> ResponseDTO[TodoDTO] | JSONResponse:
    """Create a new note."""
    logger.info("Create new note")
    result = await service.create_note(body.note)
    return _respond(request, result)


@router.get(
    "",
    response_model=ResponseDTO[list[TodoDTO]],
    summary="List notes",
    description="Get every note, unfiltered and unpaginated.",
)
async def list_notes(
    request: Request,
    service: TodoServiceDep,
) -> ResponseDTO[list[TodoDTO]] | JSONResponse:
    """List all notes."""
    logger.info("Get all notes")
    result = await service.list_notes()
    if not result.ok:
        return error_response(request, result.error)
    return ResponseDTO(data=[to_dto(todo) for todo in result.data])


@router.get(
    "/{note_id}",
    response_model=ResponseDTO[TodoDTO],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    request: Request,
    service: TodoServiceDep,
) -> ResponseDTO[TodoDTO] | JSONResponse:
    """Get a note by ID."""
    logger.info("Get note", extra={"note_id": note_id})
    result = await service.get_note(note_id)
    return _respond(request, result)


@router.patch(
    "",
    response_model=ResponseDTO[TodoDTO],
    summary="Update a note",
    description="Replace the text of an existing note. The done flag is unchanged.",
    openapi_extra=body_openapi(UpdateNoteRequest),
)
async def update_note(
    body: Annotated[UpdateNoteRequest, Depends(authenticated_body(UpdateNoteRequest))],
    request: Request,
    service: TodoServiceDep,
) -> ResponseDTO[TodoDTO] | JSONResponse:
    """Update a note's text."""
    logger.info("Update note", extra={"note_id": body.id})
    result = await service.update_note(body.id, body.note)
    return _respond(request, result)


@router.patch(
    "/{note_id}/done",
    response_model=ResponseDTO[TodoDTO],
    summary="Mark a note as done",
    description="Set the done flag of a note. Repeating the call is harmless.",
)
async def mark_note_done(
    note_id: str,
    request: Request,
    service: TodoServiceDep,
) -> ResponseDTO[TodoDTO] | JSONResponse:
    """Mark a note as done."""
    logger.info("Mark note as done", extra={"note_id": note_id})
    result = await service.mark_done(note_id)
    return _respond(request, result)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
    description="Permanently delete a note. Deleting an unknown id also returns 204.",
)
async def delete_note(
    note_id: str,
    request: Request,
    service: TodoServiceDep,
) -> Response:
    """Delete a note."""
    logger.info("Delete note", extra={"note_id": note_id})
    result = await service.delete_note(note_id)
    if not result.ok:
        return error_response(request, result.error)
    return Response(status_code=204)
