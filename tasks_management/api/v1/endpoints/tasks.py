"""Task API: thin routes delegating to TaskService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tasks_management.api.v1.dependencies import (
    get_reconciliation_service,
    get_task_service,
    get_task_service_for_write,
)
from tasks_management.api.v1.dependencies.scope import ActingScope, ActingScopeDep, ActorIdDep
from tasks_management.application.dtos.task import ServiceContext, TaskResult
from tasks_management.application.use_cases.tasks import (
    TASK_ENTITY_TYPE,
    TaskReconciliationService,
    TaskService,
)
from tasks_management.core.config import get_settings
from tasks_management.domain.enums import WorkflowStatus
from tasks_management.domain.exceptions import ResourceNotFoundException, ValidationException
from tasks_management.schemas.task import (
    BulkDeleteResponse,
    ReconciliationResponse,
    TaskCountResponse,
    TaskResponse,
    TaskSearchItem,
    TaskWriteRequest,
)

router = APIRouter()


def _service_context(scope: ActingScope, body: TaskWriteRequest) -> ServiceContext:
    """Build the acting context for add/update from headers and body."""
    return ServiceContext(
        company_id=scope.company_id,
        scope_group_id=scope.group_id,
        uuid=body.uuid,
        asset_category_ids=tuple(body.asset_category_ids),
        asset_tag_names=tuple(body.asset_tag_names),
        asset_link_entry_ids=tuple(body.asset_link_entry_ids),
        asset_priority=body.asset_priority,
        workflow_action=body.workflow_action,
    )


def _page_end(start: int, end: int | None) -> int:
    """Default and cap the exclusive end index from settings."""
    settings = get_settings()
    if end is None:
        return start + settings.default_page_size
    if end < start:
        raise ValidationException("end must be greater than or equal to start", field="end")
    return min(end, start + settings.max_page_size)


def _parse_status(status: int | None) -> WorkflowStatus | None:
    if status is None:
        return None
    try:
        return WorkflowStatus(status)
    except ValueError as e:
        raise ValidationException(
            f"Unknown status {status}; expected one of {WorkflowStatus.values()}",
            field="status",
        ) from e


async def _get_scoped_task(svc: TaskService, scope: ActingScope, task_id: int) -> TaskResult:
    """Return the task if it belongs to the acting company/group; else 404."""
    task = await svc.get_task(task_id)
    if task.company_id != scope.company_id or task.group_id != scope.group_id:
        raise ResourceNotFoundException(TASK_ENTITY_TYPE, task_id)
    return task


@router.post("", response_model=TaskResponse, status_code=201)
async def add_task(
    body: TaskWriteRequest,
    scope: ActingScopeDep,
    actor_id: ActorIdDep,
    svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a task in the acting company/group; grants its resource and syncs its asset."""
    created = await svc.add_task(
        user_id=actor_id,
        title=body.title,
        description=body.description,
        expiration_month=body.expiration_month,
        expiration_day=body.expiration_day,
        expiration_year=body.expiration_year,
        task_user_id=body.task_user_id,
        completed=body.completed,
        service_context=_service_context(scope, body),
    )
    return TaskResponse.model_validate(created)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service)],
    start: int = Query(0, ge=0),
    end: int | None = Query(None, ge=0, description="Exclusive end index"),
    status: int | None = Query(None, description="Workflow status filter"),
):
    """List tasks of the acting company/group, optionally by status."""
    tasks = await svc.get_tasks(
        scope.company_id,
        scope.group_id,
        start=start,
        end=_page_end(start, end),
        status=_parse_status(status),
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/count", response_model=TaskCountResponse)
async def count_tasks(
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service)],
    status: int | None = Query(None, description="Workflow status filter"),
):
    """Count tasks of the acting company/group with the same filters as the list."""
    count = await svc.get_tasks_count(
        scope.company_id, scope.group_id, status=_parse_status(status)
    )
    return TaskCountResponse(count=count)


@router.get("/search", response_model=list[TaskSearchItem])
async def search_tasks(
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service)],
    q: str = Query(..., min_length=1, max_length=200),
    start: int = Query(0, ge=0),
    end: int | None = Query(None, ge=0),
):
    """Keyword search over visible task asset projections of the acting group."""
    entries = await svc.search_tasks(
        scope.company_id, scope.group_id, q, start=start, end=_page_end(start, end)
    )
    return [TaskSearchItem.model_validate(e) for e in entries]


@router.post("/reconcile", response_model=ReconciliationResponse)
async def reconcile_tasks(
    scope: ActingScopeDep,
    actor_id: ActorIdDep,
    reconciler: Annotated[TaskReconciliationService, Depends(get_reconciliation_service)],
):
    """Re-derive resource and asset entries of the acting group from its tasks."""
    result = await reconciler.reconcile_group(scope.company_id, scope.group_id, actor_id)
    return ReconciliationResponse.model_validate(result)


@router.get("/by-uuid/{uuid}", response_model=TaskResponse)
async def get_task_by_uuid(
    uuid: str,
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Get task by uuid within the acting group."""
    task = await svc.get_task_by_uuid_and_group_id(uuid, scope.group_id)
    if task.company_id != scope.company_id:
        raise ResourceNotFoundException(TASK_ENTITY_TYPE, uuid)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service)],
):
    """Get task by id (scoped to the acting company/group)."""
    return TaskResponse.model_validate(await _get_scoped_task(svc, scope, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskWriteRequest,
    scope: ActingScopeDep,
    actor_id: ActorIdDep,
    svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Update a task's fields and re-sync its asset projection."""
    await _get_scoped_task(svc, scope, task_id)
    updated = await svc.update_task(
        user_id=actor_id,
        task_id=task_id,
        title=body.title,
        description=body.description,
        expiration_month=body.expiration_month,
        expiration_day=body.expiration_day,
        expiration_year=body.expiration_year,
        task_user_id=body.task_user_id,
        completed=body.completed,
        service_context=_service_context(scope, body),
    )
    return TaskResponse.model_validate(updated)


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(
    task_id: int,
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Delete a task, its resource entry and its asset projection. Returns the deleted task."""
    task = await _get_scoped_task(svc, scope, task_id)
    deleted = await svc.delete_task(task)
    return TaskResponse.model_validate(deleted)


@router.delete("", response_model=BulkDeleteResponse)
async def delete_group_tasks(
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Delete every task of the acting company/group. Failures are reported, not fatal."""
    result = await svc.delete_group_tasks(scope.company_id, scope.group_id)
    return BulkDeleteResponse(
        deleted_task_ids=list(result.deleted_task_ids), failed=result.failed
    )
