"""
Todo Repository.

Record store for todo notes.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from todo_tracker.models.todo import TodoRecord
from todo_tracker.repositories.base import BaseRepository


class TodoRepository(BaseRepository[TodoRecord]):
    """Repository for TodoRecord. Inherits the standard store operations."""

    model = TodoRecord

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
