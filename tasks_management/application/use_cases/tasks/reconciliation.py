"""Reconciliation of resource and asset state with the task store.

Task rows are the source of truth. A pass grants missing resource entries,
refreshes asset projections, and removes resource and asset entries whose
task no longer exists. Running it twice changes nothing the second time
except asset modified dates.
"""

from __future__ import annotations

from tasks_management.application.dtos.task import ReconciliationResult
from tasks_management.application.interfaces.repositories import (
    IAssetRepository,
    IResourceRepository,
    ITaskRepository,
)
from tasks_management.application.use_cases.tasks.task_operations import (
    TASK_ENTITY_TYPE,
    TaskService,
)
from tasks_management.shared.telemetry.logging import get_logger
from tasks_management.shared.telemetry.tracing import traced

logger = get_logger(__name__)


class TaskReconciliationService:
    """Re-derive resource and asset entries of one company/group from its tasks."""

    def __init__(
        self,
        task_service: TaskService,
        task_repo: ITaskRepository,
        resource_repo: IResourceRepository,
        asset_repo: IAssetRepository,
    ) -> None:
        self.task_service = task_service
        self.task_repo = task_repo
        self.resource_repo = resource_repo
        self.asset_repo = asset_repo

    @traced("task.reconcile_group")
    async def reconcile_group(
        self, company_id: int, group_id: int, user_id: int
    ) -> ReconciliationResult:
        """Repair resource and asset drift for every task of the scope.

        Existing asset categories, tags, related links and priority are kept;
        entries missing entirely are recreated without them.
        """
        tasks = await self.task_repo.find_by_scope(company_id, group_id)
        task_ids = {t.task_id for t in tasks}
        granted: list[int] = []
        refreshed: list[int] = []

        for task in tasks:
            if not await self.resource_repo.exists(company_id, TASK_ENTITY_TYPE, task.task_id):
                await self.resource_repo.grant(
                    task.company_id, task.group_id, task.user_id, TASK_ENTITY_TYPE, task.task_id
                )
                granted.append(task.task_id)

            entry = await self.asset_repo.get_entry(TASK_ENTITY_TYPE, task.task_id)
            await self.task_service.update_asset(
                user_id,
                task,
                entry.category_ids if entry else (),
                entry.tag_names if entry else (),
                entry.related_entry_ids if entry else (),
                entry.priority if entry else 0.0,
            )
            refreshed.append(task.task_id)

        orphan_assets = [
            pk
            for pk in await self.asset_repo.list_class_pks(company_id, group_id, TASK_ENTITY_TYPE)
            if pk not in task_ids
        ]
        for pk in orphan_assets:
            await self.asset_repo.remove(TASK_ENTITY_TYPE, pk)

        orphan_resources = [
            pk
            for pk in await self.resource_repo.list_prim_keys(
                company_id, group_id, TASK_ENTITY_TYPE
            )
            if pk not in task_ids
        ]
        for pk in orphan_resources:
            await self.resource_repo.revoke(company_id, TASK_ENTITY_TYPE, pk)

        if granted or orphan_assets or orphan_resources:
            logger.warning(
                "Reconciled company %s group %s: %d resources granted, %d orphan assets, %d orphan resources",
                company_id,
                group_id,
                len(granted),
                len(orphan_assets),
                len(orphan_resources),
            )
        return ReconciliationResult(
            company_id=company_id,
            group_id=group_id,
            tasks_checked=len(tasks),
            resources_granted=tuple(granted),
            assets_refreshed=tuple(refreshed),
            orphan_assets_removed=tuple(orphan_assets),
            orphan_resources_revoked=tuple(orphan_resources),
        )
