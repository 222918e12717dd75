"""
Todo Service.

Business logic layer for todo notes. The only component that talks to the
record store. Every mutation reloads the stored record before writing, so
a caller can neither resurrect a deleted note nor overwrite fields it did
not ask to change.
"""

from collections.abc import Callable

from todo_tracker.core.exceptions import IntegrityError, NotFoundError
from todo_tracker.domain.mapping import to_domain, to_record
from todo_tracker.domain.todo import Todo
from todo_tracker.models.todo import TodoRecord
from todo_tracker.repositories.todo import TodoRepository
from todo_tracker.services.base import BaseService
from todo_tracker.services.result import ServiceResult


def _not_found(note_id: str) -> NotFoundError:
    return NotFoundError(f"Todo with {note_id} notfound")


class TodoService(BaseService):
    """
    Service for todo lifecycle rules.

    Handles creation, lookup, text updates, completion and deletion.
    Missing notes and corrupt records come back as failed results.
    Store and driver errors are not caught here.
    """

    def __init__(self, repo: TodoRepository) -> None:
        super().__init__()
        self.repo = repo

    async def create_note(self, note: str) -> ServiceResult[Todo]:
        """
        Create a new note. The store assigns its id.

        Args:
            note: Note text

        Returns:
            Result carrying the created Todo
        """
        self._log_operation("Creating note")

        record = await self.repo.save(TodoRecord(note=note, is_done=False))
        result = self._to_result("create_note", record)

        if result.ok:
            self._log_debug("Note created", note_id=result.data.id)
        return result

    async def get_note(self, note_id: str) -> ServiceResult[Todo]:
        """
        Get a note by ID.

        Returns:
            Result carrying the Todo, or NotFoundError
        """
        record = await self.repo.find_by_id(note_id)
        if record is None:
            return self._fail("get_note", _not_found(note_id))
        return self._to_result("get_note", record)

    async def list_notes(self) -> ServiceResult[list[Todo]]:
        """List every note in the store's native order."""
        records = await self.repo.find_all()
        try:
            todos = [to_domain(record) for record in records]
        except IntegrityError as e:
            return self._fail("list_notes", e)

        self._log_debug("Notes listed", count=len(todos))
        return ServiceResult.success("list_notes", todos)

    async def update_note(self, note_id: str, new_note: str) -> ServiceResult[Todo]:
        """
        Replace a note's text. The done flag is kept as stored.

        Returns:
            Result carrying the updated Todo, or NotFoundError
        """
        self._log_operation("Updating note", note_id=note_id)
        return await self._modify(
            "update_note", note_id, lambda todo: todo.update_note(new_note)
        )

    async def mark_done(self, note_id: str) -> ServiceResult[Todo]:
        """
        Mark a note as done. Repeating the call is harmless.

        Returns:
            Result carrying the Todo with is_done=True, or NotFoundError
        """
        self._log_operation("Marking note done", note_id=note_id)
        return await self._modify("mark_done", note_id, lambda todo: todo.mark_done())

    async def delete_note(self, note_id: str) -> ServiceResult[None]:
        """
        Delete a note.

        Deleting an id that does not exist succeeds without changes.
        """
        self._log_operation("Deleting note", note_id=note_id)
        await self.repo.delete_by_id(note_id)
        return ServiceResult.success("delete_note")

    async def _modify(
        self,
        operation: str,
        note_id: str,
        change: Callable[[Todo], Todo],
    ) -> ServiceResult[Todo]:
        """Load, apply `change` to the domain Todo, and save it back."""
        record = await self.repo.find_by_id(note_id)
        if record is None:
            return self._fail(operation, _not_found(note_id))

        try:
            todo = change(to_domain(record))
        except IntegrityError as e:
            return self._fail(operation, e)

        saved = await self.repo.save(to_record(todo))
        return self._to_result(operation, saved)

    def _to_result(self, operation: str, record: TodoRecord) -> ServiceResult[Todo]:
        try:
            return ServiceResult.success(operation, to_domain(record))
        except IntegrityError as e:
            return self._fail(operation, e)
