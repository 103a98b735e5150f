"""Base repository: generic get/create/update/delete over one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.sql import Select

from tasks_management.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


def paginate(stmt: Select, start: int | None, end: int | None) -> Select:
    """Apply start (inclusive) and end (exclusive) row positions.

    A negative position (or None) means no bound on that side.
    """
    offset = start if start is not None and start > 0 else 0
    if offset:
        stmt = stmt.offset(offset)
    if end is not None and end >= 0:
        stmt = stmt.limit(max(0, end - offset))
    return stmt


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, update and delete.

    Subclasses map ORM rows to application DTOs; only DTOs leave the
    repository layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def savepoint(self) -> AsyncSessionTransaction:
        """SAVEPOINT on the session: `async with repo.savepoint():` rolls back only its block on error."""
        return self.db.begin_nested()

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed from the database."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes of an attached record and return it refreshed."""
        mapper = sa_inspect(self.model)
        for col in mapper.primary_key:
            if getattr(obj, col.key) is None:
                raise ValueError(
                    f"Cannot update: primary key '{col.key}' is missing on "
                    f"{self.model.__name__} instance."
                )
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()
