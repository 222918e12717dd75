# Pydantic schemas package
from todo_tracker.schemas.base import ErrorInfo, ResponseDTO
from todo_tracker.schemas.todo import CreateNoteRequest, TodoDTO, UpdateNoteRequest

__all__ = [
    "CreateNoteRequest",
    "ErrorInfo",
    "ResponseDTO",
    "TodoDTO",
    "UpdateNoteRequest",
]
