"""
Integration Tests for TodoService with a real record store.

Checks the lifecycle rules end to end against SQLite.
"""

import pytest

from todo_tracker.core.exceptions import NotFoundError
from todo_tracker.domain.todo import Todo
from todo_tracker.repositories.todo import TodoRepository
from todo_tracker.services.todo import TodoService


@pytest.fixture
def service(db_session):
    return TodoService(TodoRepository(db_session))


class TestTodoLifecycle:
    """Tests for create, read, modify and delete against the store."""

    @pytest.mark.asyncio
    async def test_created_note_is_readable(self, service):
        created = (await service.create_note("buy milk")).data

        fetched = await service.get_note(created.id)

        assert fetched.ok is True
        assert fetched.data == created
        assert created.is_done is False

    @pytest.mark.asyncio
    async def test_list_after_creates(self, service):
        ids = {(await service.create_note(f"note {i}")).data.id for i in range(3)}

        result = await service.list_notes()

        assert {todo.id for todo in result.data} == ids

    @pytest.mark.asyncio
    async def test_update_twice_keeps_last_text(self, service):
        created = (await service.create_note("first")).data

        await service.update_note(created.id, "second")
        await service.update_note(created.id, "third")

        assert (await service.get_note(created.id)).data.note == "third"

    @pytest.mark.asyncio
    async def test_mark_done_then_update_keeps_done(self, service):
        """Should not reset the done flag when the text changes."""
        created = (await service.create_note("buy milk")).data

        await service.mark_done(created.id)
        updated = await service.update_note(created.id, "buy oat milk")

        assert updated.data.is_done is True
        assert (await service.get_note(created.id)).data.is_done is True

    @pytest.mark.asyncio
    async def test_update_then_mark_done_keeps_text(self, service):
        created = (await service.create_note("draft")).data

        await service.update_note(created.id, "final")
        done = await service.mark_done(created.id)

        assert done.data == Todo(created.id, "final", True)

    @pytest.mark.asyncio
    async def test_deleted_note_is_gone(self, service):
        created = (await service.create_note("temp")).data

        deleted = await service.delete_note(created.id)
        fetched = await service.get_note(created.id)

        assert deleted.ok is True
        assert isinstance(fetched.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_modifying_deleted_note_does_not_resurrect_it(self, service):
        created = (await service.create_note("temp")).data
        await service.delete_note(created.id)

        updated = await service.update_note(created.id, "back again")
        done = await service.mark_done(created.id)

        assert isinstance(updated.error, NotFoundError)
        assert isinstance(done.error, NotFoundError)
        assert (await service.list_notes()).data == []

    @pytest.mark.asyncio
    async def test_delete_unknown_id_succeeds(self, service):
        kept = (await service.create_note("keep")).data

        result = await service.delete_note("does-not-exist")

        assert result.ok is True
        assert [todo.id for todo in (await service.list_notes()).data] == [kept.id]
