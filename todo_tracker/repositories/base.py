"""
Base Repository.

Key-addressed record store with the operations every repository shares.
Lookups report absence with None; deciding whether that is an error is
the service's job.
"""

from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_tracker.core.logging import get_logger
from todo_tracker.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common record store operations.

    Subclasses should set the model class:

        class TodoRepository(BaseRepository[TodoRecord]):
            model = TodoRecord
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def find_all(self) -> list[ModelType]:
        """Get every record in the store's native order."""
        result = await self.session.execute(select(self.model))
        return list(result.scalars().all())

    async def save(self, instance: ModelType) -> ModelType:
        """
        Insert a new record or update an existing one.

        A record without an id is inserted and receives its generated id
        on flush. A record carrying an id is merged onto the stored row
        with the same key.
        """
        if instance.id is None:
            self.session.add(instance)
        else:
            instance = await self.session.merge(instance)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete_by_id(self, id: str) -> None:
        """Delete a record by ID. Missing IDs are a no-op."""
        await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        await self.session.flush()

    async def delete_all(self) -> None:
        """Delete every record of this model."""
        await self.session.execute(delete(self.model))
        await self.session.flush()

