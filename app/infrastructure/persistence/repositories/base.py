"""Base repository: primary-key access and flush-on-write over one ORM model."""

from typing import Any

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Shared plumbing for registry repositories.

    Subclasses expose DTO-returning methods and keep ORM objects internal.
    Nothing here commits; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @property
    def _id_column(self) -> Any:
        return self.model.id  # type: ignore[attr-defined]

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        result = await self.db.execute(
            select(self.model).where(self._id_column == entity_id)
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; flush so server defaults and constraints apply."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply(self, obj: ModelType, values: dict[str, Any]) -> ModelType:
        """Set column values on a loaded record, flush and refresh it."""
        for key, value in values.items():
            if not hasattr(self.model, key):
                raise ValueError(f"{self.model.__name__} has no attribute '{key}'")
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete_by_id(self, entity_id: str) -> bool:
        """Delete with a single statement (database cascades apply). False when absent."""
        result = await self.db.execute(
            delete(self.model).where(self._id_column == entity_id)
        )
        return (result.rowcount or 0) > 0

    async def count(self, *conditions: ColumnElement[bool]) -> int:
        stmt = select(func.count(self._id_column)).where(*conditions)
        return int((await self.db.execute(stmt)).scalar_one())
