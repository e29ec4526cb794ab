"""
Base repository - generic data access shared by users and tasks.
The session is injected by the caller; repositories flush but never commit.
"""

from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by primary key."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def exists(self, id: int) -> bool:
        """Existence check used before mutations to decide 404 vs proceed."""
        result = await self.session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Get ID and server defaults without committing
        await self.session.refresh(entity)
        return entity

    async def delete_by_id(self, id: int) -> int | None:
        """Remove row by primary key. Returns the removed id, or None if nothing matched."""
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id).returning(self.model.id)
        )
        return result.scalar_one_or_none()
