"""Base repository: generic get/list/create with a post-create hook."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create and create_many.

    Subclasses override _on_after_create for logging or cache invalidation.
    Each write flushes inside its own SAVEPOINT and never commits; the caller
    owns the outer transaction. A failed write rolls back only itself.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination."""
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        async with self.db.begin_nested():
            self.db.add(obj)
            await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def create_many(self, objs: list[ModelType]) -> list[ModelType]:
        """Persist several records in one flush; runs _on_after_create for each."""
        async with self.db.begin_nested():
            self.db.add_all(objs)
            await self.db.flush()
        for obj in objs:
            await self._on_after_create(obj)
        return objs

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to log or invalidate caches."""
