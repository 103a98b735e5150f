"""Counter repository: monotonic id sequences stored in the counter table."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.infrastructure.persistence.models.counter import Counter


class CounterRepository:
    """Hand out increasing ids per sequence name. Ids are never reused, even after deletes."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def increment(self, name: str, size: int = 1) -> int:
        """Advance the named sequence by size and return the new current id."""
        if size < 1:
            raise ValueError("Counter increment size must be >= 1")
        result = await self.db.execute(
            select(Counter).where(Counter.name == name).with_for_update()
        )
        counter = result.scalar_one_or_none()
        if counter is None:
            counter = Counter(name=name, current_id=0)
            self.db.add(counter)
        counter.current_id += size
        await self.db.flush()
        return counter.current_id

    async def current(self, name: str) -> int:
        """Return the last id handed out for name (0 when none yet)."""
        result = await self.db.execute(select(Counter.current_id).where(Counter.name == name))
        return result.scalar_one_or_none() or 0
