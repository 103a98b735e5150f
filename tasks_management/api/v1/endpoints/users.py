"""User-scoped task API: bulk deletion of a user's tasks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tasks_management.api.v1.dependencies import get_task_service_for_write
from tasks_management.api.v1.dependencies.scope import ActingScopeDep
from tasks_management.application.use_cases.tasks import TaskService
from tasks_management.schemas.task import BulkDeleteResponse

router = APIRouter()


@router.delete("/{user_id}/tasks", response_model=BulkDeleteResponse)
async def delete_user_tasks(
    user_id: int,
    scope: ActingScopeDep,
    svc: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Delete every task in the acting company created by or assigned to user_id."""
    result = await svc.delete_user_tasks(scope.company_id, user_id)
    return BulkDeleteResponse(
        deleted_task_ids=list(result.deleted_task_ids), failed=result.failed
    )
