"""Task operations: add, update, delete, query, and asset sync.

TaskService validates input and orchestrates the task store, the resource
store and the asset store. The three stores are updated in sequence without
compensation: when a later step fails, earlier steps stay applied and the
error propagates (TaskReconciliationService repairs the drift).
"""

from __future__ import annotations

from tasks_management.application.dtos.asset import AssetEntryResult, AssetEntryWrite
from tasks_management.application.dtos.task import (
    BulkDeleteResult,
    ServiceContext,
    TaskResult,
    TaskWrite,
)
from tasks_management.application.interfaces.repositories import (
    IAssetRepository,
    IResourceRepository,
    ITaskRepository,
    IUserRepository,
)
from tasks_management.domain.enums import WorkflowAction, WorkflowStatus
from tasks_management.domain.exceptions import ResourceNotFoundException
from tasks_management.domain.expiration import assemble_expiration_date, normalize_title
from tasks_management.shared.telemetry.logging import get_logger
from tasks_management.shared.telemetry.tracing import add_span_attributes, traced
from tasks_management.shared.utils.datetime import utc_now
from tasks_management.shared.utils.generators import generate_uuid
from tasks_management.shared.utils.text import extract_text, shorten

TASK_ENTITY_TYPE = "task"
DEFAULT_SUMMARY_MAX_LENGTH = 500

logger = get_logger(__name__)


class TaskService:
    """Create, update, delete and query tasks scoped by company and group."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
        resource_repo: IResourceRepository,
        asset_repo: IAssetRepository,
        *,
        summary_max_length: int = DEFAULT_SUMMARY_MAX_LENGTH,
        bulk_delete_strict: bool = False,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.resource_repo = resource_repo
        self.asset_repo = asset_repo
        self.summary_max_length = summary_max_length
        self.bulk_delete_strict = bulk_delete_strict

    @traced("task.add")
    async def add_task(
        self,
        user_id: int,
        title: str,
        description: str | None,
        expiration_month: int,
        expiration_day: int,
        expiration_year: int,
        task_user_id: int,
        completed: bool,
        service_context: ServiceContext,
    ) -> TaskResult:
        """Create a task, grant its resource entry and sync its asset projection.

        Raises:
            ResourceNotFoundException: Actor or assignee does not exist.
            InvalidTitleException: Title is blank.
            InvalidExpirationDateException: Month/day/year is not a date.
        """
        user = await self.user_repo.resolve(user_id)
        await self.user_repo.resolve(task_user_id)

        normalized_title = normalize_title(title)
        expiration_date = assemble_expiration_date(
            expiration_month, expiration_day, expiration_year
        )
        now = utc_now()
        action = service_context.workflow_action or WorkflowAction.PUBLISH
        status = action.resulting_status()

        task_id = await self.task_repo.allocate_id()
        task = await self.task_repo.create(
            task_id,
            TaskWrite(
                uuid=service_context.uuid or generate_uuid(),
                company_id=service_context.company_id,
                group_id=service_context.scope_group_id,
                user_id=user.user_id,
                user_name=user.full_name,
                create_date=service_context.get_create_date(now),
                modified_date=service_context.get_modified_date(now),
                title=normalized_title,
                description=description,
                expiration_date=expiration_date,
                task_user_id=task_user_id,
                completed=completed,
                status=status,
                status_by_user_id=user.user_id,
                status_date=now,
            ),
        )
        logger.info(
            "Task %s created in company %s group %s by user %s",
            task.task_id,
            task.company_id,
            task.group_id,
            user_id,
        )

        await self.resource_repo.grant(
            task.company_id,
            task.group_id,
            user_id,
            TASK_ENTITY_TYPE,
            task.task_id,
            group_permissions=True,
            guest_permissions=True,
        )

        await self.update_asset(
            user_id,
            task,
            service_context.asset_category_ids,
            service_context.asset_tag_names,
            service_context.asset_link_entry_ids,
            service_context.asset_priority,
        )
        return task

    @traced("task.update")
    async def update_task(
        self,
        user_id: int,
        task_id: int,
        title: str,
        description: str | None,
        expiration_month: int,
        expiration_day: int,
        expiration_year: int,
        task_user_id: int,
        completed: bool,
        service_context: ServiceContext,
    ) -> TaskResult:
        """Update a task's mutable fields and re-sync its asset projection.

        The resource entry granted at creation is left untouched. Status,
        status_by_user_id and status_date change only when the service context
        carries a workflow action that moves the task to another status.

        Raises:
            ResourceNotFoundException: Actor, task or assignee does not exist.
            InvalidTitleException: Title is blank.
            InvalidExpirationDateException: Month/day/year is not a date.
        """
        await self.user_repo.resolve(user_id)
        task = await self.task_repo.find_by_primary_key(task_id)

        normalized_title = normalize_title(title)
        await self.user_repo.resolve(task_user_id)
        expiration_date = assemble_expiration_date(
            expiration_month, expiration_day, expiration_year
        )
        now = utc_now()
        status = task.status
        status_by_user_id = task.status_by_user_id
        status_date = task.status_date
        action = service_context.workflow_action
        if action is not None and action.resulting_status() != task.status:
            status = action.resulting_status()
            status_by_user_id = user_id
            status_date = now

        task = await self.task_repo.update(
            task_id,
            TaskWrite(
                uuid=task.uuid,
                company_id=task.company_id,
                group_id=task.group_id,
                user_id=task.user_id,
                user_name=task.user_name,
                create_date=task.create_date,
                modified_date=service_context.get_modified_date(now),
                title=normalized_title,
                description=description,
                expiration_date=expiration_date,
                task_user_id=task_user_id,
                completed=completed,
                status=status,
                status_by_user_id=status_by_user_id,
                status_date=status_date,
            ),
        )
        logger.info("Task %s updated by user %s", task.task_id, user_id)

        await self.update_asset(
            user_id,
            task,
            service_context.asset_category_ids,
            service_context.asset_tag_names,
            service_context.asset_link_entry_ids,
            service_context.asset_priority,
        )
        return task

    @traced("task.delete")
    async def delete_task(self, task: TaskResult | int) -> TaskResult:
        """Delete a task (by id or instance), then revoke its resource and remove its asset.

        Raises:
            ResourceNotFoundException: No task with the given id.
        """
        if not isinstance(task, TaskResult):
            task = await self.task_repo.find_by_primary_key(task)

        await self.task_repo.remove(task)
        await self.resource_repo.revoke(task.company_id, TASK_ENTITY_TYPE, task.task_id)
        await self.asset_repo.remove(TASK_ENTITY_TYPE, task.task_id)
        logger.info("Task %s deleted", task.task_id)
        return task

    @traced("task.delete_group")
    async def delete_group_tasks(self, company_id: int, group_id: int) -> BulkDeleteResult:
        """Delete every task of the company+group scope."""
        tasks = await self.task_repo.find_by_scope(company_id, group_id)
        return await self._delete_all(tasks)

    @traced("task.delete_user")
    async def delete_user_tasks(self, company_id: int, user_id: int) -> BulkDeleteResult:
        """Delete every task in the company assigned to or created by user_id.

        Assigned tasks go first; created tasks are queried afterwards so a task
        that is both is deleted once.
        """
        assigned = await self.task_repo.find_by_company_and_task_user(company_id, user_id)
        first = await self._delete_all(assigned)
        created = await self.task_repo.find_by_company_and_user(company_id, user_id)
        created = [t for t in created if t.task_id not in first.failed]
        second = await self._delete_all(created)
        return BulkDeleteResult(
            deleted_task_ids=first.deleted_task_ids + second.deleted_task_ids,
            failed={**first.failed, **second.failed},
        )

    async def _delete_all(self, tasks: list[TaskResult]) -> BulkDeleteResult:
        """Apply delete_task to each task; best-effort unless bulk_delete_strict.

        Each task is deleted inside its own savepoint, so a failing task leaves
        its row, resource entry and asset in place while the others go ahead.
        """
        deleted: list[int] = []
        failed: dict[int, str] = {}
        for task in tasks:
            try:
                async with self.task_repo.savepoint():
                    await self.delete_task(task)
            except Exception as e:
                if self.bulk_delete_strict:
                    raise
                logger.exception("Bulk delete: task %s could not be deleted", task.task_id)
                failed[task.task_id] = str(e)
                continue
            deleted.append(task.task_id)
        add_span_attributes(tasks_deleted=len(deleted), tasks_failed=len(failed))
        if failed:
            logger.warning(
                "Bulk delete finished with %d deleted and %d failed", len(deleted), len(failed)
            )
        return BulkDeleteResult(deleted_task_ids=tuple(deleted), failed=failed)

    async def get_task(self, task_id: int) -> TaskResult:
        """Return task by id; raise ResourceNotFoundException if absent."""
        return await self.task_repo.find_by_primary_key(task_id)

    async def fetch_task(self, task_id: int) -> TaskResult | None:
        return await self.task_repo.fetch_by_primary_key(task_id)

    async def get_task_by_uuid_and_group_id(self, uuid: str, group_id: int) -> TaskResult:
        """Return the task with uuid in the group; raise ResourceNotFoundException if absent."""
        task = await self.task_repo.fetch_by_uuid_and_group_id(uuid, group_id)
        if task is None:
            raise ResourceNotFoundException(TASK_ENTITY_TYPE, f"uuid={uuid} group_id={group_id}")
        return task

    async def fetch_task_by_uuid_and_group_id(
        self, uuid: str, group_id: int
    ) -> TaskResult | None:
        return await self.task_repo.fetch_by_uuid_and_group_id(uuid, group_id)

    async def get_tasks_by_uuid_and_company_id(
        self, uuid: str, company_id: int, start: int | None = None, end: int | None = None
    ) -> list[TaskResult]:
        return await self.task_repo.find_by_uuid_and_company_id(uuid, company_id, start, end)

    async def get_tasks(
        self,
        company_id: int,
        group_id: int,
        start: int | None = None,
        end: int | None = None,
        status: WorkflowStatus | None = None,
    ) -> list[TaskResult]:
        """Return tasks of the scope, optionally filtered by status. start inclusive, end exclusive."""
        return await self.task_repo.find_by_scope(company_id, group_id, status, start, end)

    async def get_tasks_count(
        self, company_id: int, group_id: int, status: WorkflowStatus | None = None
    ) -> int:
        return await self.task_repo.count_by_scope(company_id, group_id, status)

    async def get_all_tasks_count(self) -> int:
        return await self.task_repo.count_all()

    async def search_tasks(
        self,
        company_id: int,
        group_id: int,
        keywords: str,
        start: int | None = None,
        end: int | None = None,
    ) -> list[AssetEntryResult]:
        """Search the visible asset projections of the scope's tasks."""
        if not keywords or not keywords.strip():
            return []
        return await self.asset_repo.search(
            company_id, group_id, TASK_ENTITY_TYPE, keywords.strip(), start, end
        )

    def build_summary(self, description: str | None) -> str:
        """Plain-text summary of a description: shortened, then stripped of HTML."""
        return extract_text(shorten(description, self.summary_max_length))

    async def update_asset(
        self,
        user_id: int,
        task: TaskResult,
        asset_category_ids: tuple[int, ...],
        asset_tag_names: tuple[str, ...],
        asset_link_entry_ids: tuple[int, ...],
        priority: float,
    ) -> AssetEntryResult:
        """Create or refresh the asset projection of a task and its related links.

        The entry is visible only while the task is approved.
        """
        entry = await self.asset_repo.upsert(
            AssetEntryWrite(
                user_id=user_id,
                company_id=task.company_id,
                group_id=task.group_id,
                create_date=task.create_date,
                modified_date=task.modified_date,
                class_name=TASK_ENTITY_TYPE,
                class_pk=task.task_id,
                class_uuid=task.uuid,
                visible=task.is_approved,
                category_ids=tuple(asset_category_ids),
                tag_names=tuple(asset_tag_names),
                title=task.title,
                description=task.description,
                summary=self.build_summary(task.description),
                priority=priority,
            )
        )
        await self.asset_repo.link_related(user_id, entry.entry_id, tuple(asset_link_entry_ids))
        logger.debug("Asset entry %s synced for task %s", entry.entry_id, task.task_id)
        return entry
