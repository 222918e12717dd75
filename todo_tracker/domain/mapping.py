"""
Todo Mapping.

Pure conversions between the store-facing record, the domain entity and
the wire-facing transfer shape.
"""

from todo_tracker.core.exceptions import IntegrityError
from todo_tracker.domain.todo import Todo
from todo_tracker.models.todo import TodoRecord
from todo_tracker.schemas.todo import TodoDTO


def to_domain(record: TodoRecord) -> Todo:
    """
    Build a domain Todo from a persisted record.

    Raises:
        IntegrityError: If the record has no identifier
    """
    if record.id is None:
        raise IntegrityError("Persisted record missing identifier")
    return Todo(id=record.id, note=record.note, is_done=record.is_done)


def to_record(todo: Todo) -> TodoRecord:
    return TodoRecord(id=todo.id, note=todo.note, is_done=todo.is_done)


def to_dto(todo: Todo) -> TodoDTO:
    return TodoDTO(id=todo.id, note=todo.note, is_done=todo.is_done)
