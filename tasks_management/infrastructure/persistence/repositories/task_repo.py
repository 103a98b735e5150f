"""Task repository: the task store port over SQLAlchemy. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.application.dtos.task import TaskResult, TaskWrite
from tasks_management.domain.enums import WorkflowStatus
from tasks_management.domain.exceptions import ResourceNotFoundException
from tasks_management.infrastructure.persistence.models.task import Task
from tasks_management.infrastructure.persistence.repositories.base import (
    BaseRepository,
    paginate,
)
from tasks_management.infrastructure.persistence.repositories.counter_repo import (
    CounterRepository,
)
from tasks_management.shared.utils.datetime import ensure_utc

TASK_COUNTER_NAME = "task"


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        task_id=t.task_id,
        uuid=t.uuid,
        company_id=t.company_id,
        group_id=t.group_id,
        user_id=t.user_id,
        user_name=t.user_name,
        create_date=ensure_utc(t.create_date),
        modified_date=ensure_utc(t.modified_date),
        title=t.title,
        description=t.description,
        expiration_date=ensure_utc(t.expiration_date),
        task_user_id=t.task_user_id,
        completed=t.completed,
        status=WorkflowStatus(t.status),
        status_by_user_id=t.status_by_user_id,
        status_date=ensure_utc(t.status_date),
    )


def _apply(task: Task, data: TaskWrite) -> None:
    """Copy every persisted field from the write DTO onto the ORM row."""
    task.uuid = data.uuid
    task.company_id = data.company_id
    task.group_id = data.group_id
    task.user_id = data.user_id
    task.user_name = data.user_name
    task.create_date = data.create_date
    task.modified_date = data.modified_date
    task.title = data.title
    task.description = data.description
    task.expiration_date = data.expiration_date
    task.task_user_id = data.task_user_id
    task.completed = data.completed
    task.status = int(data.status)
    task.status_by_user_id = data.status_by_user_id
    task.status_date = data.status_date


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository; ids come from the counter table."""

    def __init__(self, db: AsyncSession, counter_repo: CounterRepository | None = None) -> None:
        super().__init__(db, Task)
        self.counter_repo = counter_repo or CounterRepository(db)

    async def allocate_id(self) -> int:
        return await self.counter_repo.increment(TASK_COUNTER_NAME)

    async def create(self, task_id: int, data: TaskWrite) -> TaskResult:  # type: ignore[override]
        """Insert a task row under an allocated id and return the result DTO."""
        task = Task(task_id=task_id)
        _apply(task, data)
        created = await super().create(task)
        return _to_result(created)

    async def update(self, task_id: int, data: TaskWrite) -> TaskResult:  # type: ignore[override]
        """Overwrite the task row; raise ResourceNotFoundException if absent."""
        task = await self.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        _apply(task, data)
        updated = await super().update(task)
        return _to_result(updated)

    async def remove(self, task: TaskResult) -> None:
        """Delete the task row; raise ResourceNotFoundException if absent."""
        row = await self.get_by_id(task.task_id)
        if row is None:
            raise ResourceNotFoundException("task", task.task_id)
        await self.delete(row)

    async def find_by_primary_key(self, task_id: int) -> TaskResult:
        task = await self.fetch_by_primary_key(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def fetch_by_primary_key(self, task_id: int) -> TaskResult | None:
        row = await self.get_by_id(task_id)
        return _to_result(row) if row else None

    async def fetch_by_uuid_and_group_id(self, uuid: str, group_id: int) -> TaskResult | None:
        result = await self.db.execute(
            select(Task).where(Task.uuid == uuid, Task.group_id == group_id)
        )
        row = result.scalar_one_or_none()
        return _to_result(row) if row else None

    async def find_by_uuid_and_company_id(
        self, uuid: str, company_id: int, start: int | None = None, end: int | None = None
    ) -> list[TaskResult]:
        stmt = (
            select(Task)
            .where(Task.uuid == uuid, Task.company_id == company_id)
            .order_by(Task.task_id)
        )
        result = await self.db.execute(paginate(stmt, start, end))
        return [_to_result(t) for t in result.scalars().all()]

    async def find_by_scope(
        self,
        company_id: int,
        group_id: int,
        status: WorkflowStatus | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> list[TaskResult]:
        stmt = select(Task).where(Task.company_id == company_id, Task.group_id == group_id)
        if status is not None:
            stmt = stmt.where(Task.status == int(status))
        stmt = paginate(stmt.order_by(Task.task_id), start, end)
        result = await self.db.execute(stmt)
        return [_to_result(t) for t in result.scalars().all()]

    async def count_by_scope(
        self, company_id: int, group_id: int, status: WorkflowStatus | None = None
    ) -> int:
        stmt = select(func.count(Task.task_id)).where(
            Task.company_id == company_id, Task.group_id == group_id
        )
        if status is not None:
            stmt = stmt.where(Task.status == int(status))
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def count_all(self) -> int:
        result = await self.db.execute(select(func.count(Task.task_id)))
        return result.scalar() or 0

    async def find_by_company_and_user(self, company_id: int, user_id: int) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task)
            .where(Task.company_id == company_id, Task.user_id == user_id)
            .order_by(Task.task_id)
        )
        return [_to_result(t) for t in result.scalars().all()]

    async def find_by_company_and_task_user(
        self, company_id: int, task_user_id: int
    ) -> list[TaskResult]:
        result = await self.db.execute(
            select(Task)
            .where(Task.company_id == company_id, Task.task_user_id == task_user_id)
            .order_by(Task.task_id)
        )
        return [_to_result(t) for t in result.scalars().all()]

