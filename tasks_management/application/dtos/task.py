"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tasks_management.domain.enums import WorkflowAction, WorkflowStatus


@dataclass(frozen=True)
class TaskResult:
    """Task read-model (result of add_task, update_task, get_task, etc.).

    user_name is the creator's full name at creation time and is never refreshed.
    """

    task_id: int
    uuid: str
    company_id: int
    group_id: int
    user_id: int
    user_name: str
    create_date: datetime
    modified_date: datetime
    title: str
    description: str | None
    expiration_date: datetime | None
    task_user_id: int
    completed: bool
    status: WorkflowStatus = WorkflowStatus.APPROVED
    status_by_user_id: int | None = None
    status_date: datetime | None = None

    @property
    def is_approved(self) -> bool:
        return self.status == WorkflowStatus.APPROVED


@dataclass(frozen=True)
class TaskWrite:
    """Field values persisted by the task repository on create and update."""

    uuid: str
    company_id: int
    group_id: int
    user_id: int
    user_name: str
    create_date: datetime
    modified_date: datetime
    title: str
    description: str | None
    expiration_date: datetime | None
    task_user_id: int
    completed: bool
    status: WorkflowStatus
    status_by_user_id: int | None
    status_date: datetime | None


@dataclass(frozen=True)
class ServiceContext:
    """Acting scope and asset inputs supplied by the caller of a mutating operation.

    create_date and modified_date override the current time when set (imports).
    workflow_action None publishes on create and keeps the current status on update.
    """

    company_id: int
    scope_group_id: int
    uuid: str | None = None
    create_date: datetime | None = None
    modified_date: datetime | None = None
    asset_category_ids: tuple[int, ...] = ()
    asset_tag_names: tuple[str, ...] = ()
    asset_link_entry_ids: tuple[int, ...] = ()
    asset_priority: float = 0.0
    workflow_action: WorkflowAction | None = None

    def get_create_date(self, now: datetime) -> datetime:
        return self.create_date or now

    def get_modified_date(self, now: datetime) -> datetime:
        return self.modified_date or now


@dataclass(frozen=True)
class BulkDeleteResult:
    """Outcome of deleting every task of a group or user.

    failed maps task_id to the error message of a task that could not be deleted.
    """

    deleted_task_ids: tuple[int, ...] = ()
    failed: dict[int, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class ReconciliationResult:
    """What a reconciliation pass repaired for one company/group scope."""

    company_id: int
    group_id: int
    tasks_checked: int
    resources_granted: tuple[int, ...]
    assets_refreshed: tuple[int, ...]
    orphan_assets_removed: tuple[int, ...]
    orphan_resources_revoked: tuple[int, ...]
