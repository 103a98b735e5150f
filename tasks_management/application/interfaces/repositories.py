"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Failures of an implementation propagate to the caller unchanged.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Protocol

from tasks_management.domain.enums import WorkflowStatus

if TYPE_CHECKING:
    from tasks_management.application.dtos.asset import (
        AssetEntryResult,
        AssetEntryWrite,
    )
    from tasks_management.application.dtos.task import TaskResult, TaskWrite
    from tasks_management.application.dtos.user import UserResult


# Task store interface
class ITaskRepository(Protocol):
    """Protocol for the task store (DIP). Keyed by a numeric task_id."""

    async def allocate_id(self) -> int:
        """Return the next task id from a monotonic counter. Ids are never reused."""

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Nested unit of work: writes made inside roll back alone when the block raises."""

    async def create(self, task_id: int, data: TaskWrite) -> TaskResult:
        """Persist a new task under an allocated id."""

    async def update(self, task_id: int, data: TaskWrite) -> TaskResult:
        """Overwrite the stored task; raises ResourceNotFoundException if absent."""

    async def remove(self, task: TaskResult) -> None:
        """Delete the stored task; raises ResourceNotFoundException if absent."""

    async def find_by_primary_key(self, task_id: int) -> TaskResult:
        """Return task by id; raises ResourceNotFoundException if absent."""

    async def fetch_by_primary_key(self, task_id: int) -> TaskResult | None:
        """Return task by id, or None."""

    async def fetch_by_uuid_and_group_id(
        self, uuid: str, group_id: int
    ) -> TaskResult | None:
        """Return the task with this uuid in the group, or None."""

    async def find_by_uuid_and_company_id(
        self, uuid: str, company_id: int, start: int | None = None, end: int | None = None
    ) -> list[TaskResult]:
        """Return tasks with this uuid across the company's groups."""

    async def find_by_scope(
        self,
        company_id: int,
        group_id: int,
        status: WorkflowStatus | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> list[TaskResult]:
        """Return tasks of company+group (optionally with status); start inclusive, end exclusive."""

    async def count_by_scope(
        self, company_id: int, group_id: int, status: WorkflowStatus | None = None
    ) -> int:
        """Count tasks matching the same filters as find_by_scope."""

    async def count_all(self) -> int:
        """Count every stored task."""

    async def find_by_company_and_user(
        self, company_id: int, user_id: int
    ) -> list[TaskResult]:
        """Return tasks created by user_id in the company."""

    async def find_by_company_and_task_user(
        self, company_id: int, task_user_id: int
    ) -> list[TaskResult]:
        """Return tasks assigned to task_user_id in the company."""


# Identity resolver interface
class IUserRepository(Protocol):
    """Protocol for identity resolution (existence check and creator snapshot)."""

    async def resolve(self, user_id: int) -> UserResult:
        """Return the identity; raises ResourceNotFoundException if unknown."""


# Resource scope interface
class IResourceRepository(Protocol):
    """Protocol for resource/ACL entries bound to an entity instance."""

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
        """Create the resource entry for (name, prim_key). Granting twice keeps one entry."""

    async def revoke(self, company_id: int, name: str, prim_key: int) -> None:
        """Remove the resource entry for (name, prim_key); no-op when absent."""

    async def exists(self, company_id: int, name: str, prim_key: int) -> bool:
        """Return True if a resource entry exists for (name, prim_key)."""

    async def list_prim_keys(
        self, company_id: int, group_id: int, name: str
    ) -> list[int]:
        """Return the entity ids holding a resource entry in the scope."""


# Asset sync interface
class IAssetRepository(Protocol):
    """Protocol for the searchable/taggable asset projection of an entity."""

    async def upsert(self, data: AssetEntryWrite) -> AssetEntryResult:
        """Create or refresh the asset entry of (class_name, class_pk)."""

    async def link_related(
        self, user_id: int, entry_id: int, related_entry_ids: tuple[int, ...]
    ) -> None:
        """Replace the related links of entry_id with related_entry_ids."""

    async def remove(self, class_name: str, class_pk: int) -> None:
        """Delete the asset entry of (class_name, class_pk) and its links; no-op when absent."""

    async def get_entry(self, class_name: str, class_pk: int) -> AssetEntryResult | None:
        """Return the asset entry of (class_name, class_pk), or None."""

    async def search(
        self,
        company_id: int,
        group_id: int,
        class_name: str,
        keywords: str,
        start: int | None = None,
        end: int | None = None,
    ) -> list[AssetEntryResult]:
        """Return visible entries whose title, description or summary match keywords."""

    async def list_class_pks(
        self, company_id: int, group_id: int, class_name: str
    ) -> list[int]:
        """Return the entity ids holding an asset entry in the scope."""
