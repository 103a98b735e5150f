"""Seed a local database with a creator, an assignee and a few tasks.

Usage:
    python -m scripts.seed_dev_data [company_id] [group_id]

Creates the schema when missing (same as DATABASE_CREATE_ALL) and goes
through TaskService so resource and asset entries are created too.
"""

from __future__ import annotations

import asyncio
import sys

from tasks_management.application.dtos.task import ServiceContext
from tasks_management.application.use_cases.tasks import TaskService
from tasks_management.domain.enums import WorkflowAction
from tasks_management.infrastructure.persistence import database
from tasks_management.infrastructure.persistence.repositories import (
    AssetRepository,
    CounterRepository,
    ResourceRepository,
    TaskRepository,
    UserRepository,
)
from tasks_management.shared.telemetry.logging import setup_logging

SAMPLE_TASKS = [
    ("Write release notes", "<p>Summarize <b>every</b> change since the last tag.</p>", (3, 15, 2025), False, WorkflowAction.PUBLISH),
    ("Review onboarding guide", "Check screenshots &amp; links.", (4, 1, 2025), False, WorkflowAction.PUBLISH),
    ("Plan Q3 offsite", None, (6, 30, 2025), False, WorkflowAction.SAVE_DRAFT),
]


async def seed(company_id: int, group_id: int) -> None:
    await database.create_all()
    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            counter_repo = CounterRepository(session)
            user_repo = UserRepository(session, counter_repo)
            creator = await user_repo.create_user(company_id, "jdoe", "Jane", "Doe")
            assignee = await user_repo.create_user(company_id, "rroe", "Rick", "Roe")
            svc = TaskService(
                TaskRepository(session, counter_repo),
                user_repo,
                ResourceRepository(session),
                AssetRepository(session, counter_repo),
            )
            for title, description, (month, day, year), completed, action in SAMPLE_TASKS:
                task = await svc.add_task(
                    user_id=creator.user_id,
                    title=title,
                    description=description,
                    expiration_month=month,
                    expiration_day=day,
                    expiration_year=year,
                    task_user_id=assignee.user_id,
                    completed=completed,
                    service_context=ServiceContext(
                        company_id=company_id,
                        scope_group_id=group_id,
                        asset_tag_names=("seed",),
                        workflow_action=action,
                    ),
                )
                print(f"Created task {task.task_id}: {task.title}")
    print(f"Creator user_id={creator.user_id}, assignee user_id={assignee.user_id}")


async def main() -> None:
    setup_logging()
    company_id = int(sys.argv[1]) if len(sys.argv) > 1 else 10
    group_id = int(sys.argv[2]) if len(sys.argv) > 2 else 100
    try:
        await seed(company_id, group_id)
    finally:
        await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
