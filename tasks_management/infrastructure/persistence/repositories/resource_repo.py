"""Resource repository: individual-scope resource entries for entity instances."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.domain.enums import ResourceScopeType
from tasks_management.infrastructure.persistence.models.resource import ResourcePermission
from tasks_management.shared.telemetry.logging import get_logger

_logger = get_logger(__name__)


class ResourceRepository:
    """Resource repository. Implements IResourceRepository (grant/revoke/exists)."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get(self, company_id: int, name: str, prim_key: int) -> ResourcePermission | None:
        return await self.db.get(
            ResourcePermission,
            (company_id, name, int(ResourceScopeType.INDIVIDUAL), prim_key),
        )

    async def grant(
        self,
        company_id: int,
        group_id: int,
        owner_id: int,
        name: str,
        prim_key: int,
        *,
        group_permissions: bool = True,
        guest_permissions: bool = True,
    ) -> None:
        """Create the resource entry; an existing entry is updated in place."""
        entry = await self._get(company_id, name, prim_key)
        if entry is None:
            entry = ResourcePermission(
                company_id=company_id,
                name=name,
                scope=int(ResourceScopeType.INDIVIDUAL),
                prim_key=prim_key,
            )
            self.db.add(entry)
        entry.group_id = group_id
        entry.owner_id = owner_id
        entry.group_permissions = group_permissions
        entry.guest_permissions = guest_permissions
        await self.db.flush()
        _logger.debug("Resource granted: %s %s (company %s)", name, prim_key, company_id)

    async def revoke(self, company_id: int, name: str, prim_key: int) -> None:
        """Remove the resource entry; no-op when absent."""
        entry = await self._get(company_id, name, prim_key)
        if entry is None:
            return
        await self.db.delete(entry)
        await self.db.flush()

    async def exists(self, company_id: int, name: str, prim_key: int) -> bool:
        result = await self.db.execute(
            select(ResourcePermission.prim_key).where(
                ResourcePermission.company_id == company_id,
                ResourcePermission.name == name,
                ResourcePermission.scope == int(ResourceScopeType.INDIVIDUAL),
                ResourcePermission.prim_key == prim_key,
            )
        )
        return result.scalar_one_or_none() is not None

    async def list_prim_keys(self, company_id: int, group_id: int, name: str) -> list[int]:
        result = await self.db.execute(
            select(ResourcePermission.prim_key)
            .where(
                ResourcePermission.company_id == company_id,
                ResourcePermission.group_id == group_id,
                ResourcePermission.name == name,
            )
            .order_by(ResourcePermission.prim_key)
        )
        return list(result.scalars().all())
