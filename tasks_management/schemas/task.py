"""Task API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasks_management.domain.enums import WorkflowAction, WorkflowStatus


class TaskWriteRequest(BaseModel):
    """Request body for creating or updating a task.

    Expiration date is given as 1-based month, day and year. The asset_*
    fields feed the asset projection (categories, tags, related entries).
    """

    title: str = Field(..., max_length=500)
    description: str | None = Field(default=None)
    expiration_month: int = Field(..., ge=1, le=12)
    expiration_day: int = Field(..., ge=1, le=31)
    expiration_year: int = Field(..., ge=1, le=9999)
    task_user_id: int = Field(..., ge=1, description="Assignee user id")
    completed: bool = False
    uuid: str | None = Field(default=None, max_length=75, description="Only used on create")
    asset_category_ids: list[int] = Field(default_factory=list)
    asset_tag_names: list[str] = Field(default_factory=list)
    asset_link_entry_ids: list[int] = Field(default_factory=list)
    asset_priority: float = 0.0
    workflow_action: WorkflowAction | None = Field(
        default=None, description="Omit to publish on create and keep the status on update"
    )


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

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
    status: int
    status_by_user_id: int | None = None
    status_date: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_to_int(cls, v: WorkflowStatus | int) -> int:
        """Accept WorkflowStatus from DTO; serialize to int for JSON."""
        return int(v)


class TaskCountResponse(BaseModel):
    """Number of tasks matching a scope (and optional status)."""

    count: int


class TaskSearchItem(BaseModel):
    """One visible asset projection matching a search."""

    model_config = ConfigDict(from_attributes=True)

    entry_id: int
    task_id: int = Field(validation_alias="class_pk")
    title: str
    summary: str
    priority: float
    modified_date: datetime
    tag_names: list[str] = Field(default_factory=list)
    category_ids: list[int] = Field(default_factory=list)


class BulkDeleteResponse(BaseModel):
    """Result of deleting every task of a group or user (best-effort by default)."""

    deleted_task_ids: list[int]
    failed: dict[int, str]


class ReconciliationResponse(BaseModel):
    """What one reconciliation pass repaired."""

    model_config = ConfigDict(from_attributes=True)

    company_id: int
    group_id: int
    tasks_checked: int
    resources_granted: list[int]
    assets_refreshed: list[int]
    orphan_assets_removed: list[int]
    orphan_resources_revoked: list[int]
