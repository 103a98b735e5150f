"""Task service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.application.use_cases.tasks import (
    TaskReconciliationService,
    TaskService,
)
from tasks_management.core.config import get_settings
from tasks_management.infrastructure.persistence.database import get_db, get_db_transactional
from tasks_management.infrastructure.persistence.repositories import (
    AssetRepository,
    CounterRepository,
    ResourceRepository,
    TaskRepository,
    UserRepository,
)


def _build_task_service(db: AsyncSession) -> TaskService:
    """Wire TaskService with SQLAlchemy repositories sharing one session (one unit of work)."""
    settings = get_settings()
    counter_repo = CounterRepository(db)
    return TaskService(
        task_repo=TaskRepository(db, counter_repo),
        user_repo=UserRepository(db, counter_repo),
        resource_repo=ResourceRepository(db),
        asset_repo=AssetRepository(db, counter_repo),
        summary_max_length=settings.asset_summary_max_length,
        bulk_delete_strict=settings.bulk_delete_strict,
    )


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskService:
    """Task service for read operations (no transaction)."""
    return _build_task_service(db)


async def get_task_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskService:
    """Task service for add/update/delete (transactional: commit on success, rollback on error)."""
    return _build_task_service(db)


async def get_reconciliation_service(
    task_service: Annotated[TaskService, Depends(get_task_service_for_write)],
) -> TaskReconciliationService:
    """Reconciliation use case on the same session as the task service."""
    return TaskReconciliationService(
        task_service=task_service,
        task_repo=task_service.task_repo,
        resource_repo=task_service.resource_repo,
        asset_repo=task_service.asset_repo,
    )
