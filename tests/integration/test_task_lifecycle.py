"""Task lifecycle against real SQLAlchemy repositories on in-memory SQLite.

Session is rolled back after each test (see conftest.db_session).
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy import text

from tasks_management.application.dtos.task import ServiceContext
from tasks_management.application.use_cases.tasks import (
    TASK_ENTITY_TYPE,
    TaskReconciliationService,
    TaskService,
)
from tasks_management.domain.enums import WorkflowAction, WorkflowStatus
from tasks_management.domain.exceptions import (
    DependencyFailureException,
    InvalidTitleException,
    ResourceNotFoundException,
)
from tasks_management.infrastructure.persistence.models.counter import Counter
from tasks_management.infrastructure.persistence.repositories import (
    AssetRepository,
    CounterRepository,
    ResourceRepository,
    TaskRepository,
    UserRepository,
)

# Seeded by conftest._seed_users
COMPANY_ID = 10
GROUP_ID = 100
CREATOR_ID = 1
ASSIGNEE_ID = 2
OTHER_USER_ID = 3


@pytest.fixture
def repos(db_session):
    counter_repo = CounterRepository(db_session)
    return (
        TaskRepository(db_session, counter_repo),
        UserRepository(db_session, counter_repo),
        ResourceRepository(db_session),
        AssetRepository(db_session, counter_repo),
    )


@pytest.fixture
def svc(repos) -> TaskService:
    return TaskService(*repos)


def _context(group_id: int = GROUP_ID, **overrides) -> ServiceContext:
    return ServiceContext(company_id=COMPANY_ID, scope_group_id=group_id, **overrides)


async def _add(svc: TaskService, title: str = "Write report", **overrides):
    kwargs = dict(
        user_id=CREATOR_ID,
        title=title,
        description="Quarterly <b>numbers</b>",
        expiration_month=3,
        expiration_day=15,
        expiration_year=2025,
        task_user_id=ASSIGNEE_ID,
        completed=False,
        service_context=_context(),
    )
    kwargs.update(overrides)
    return await svc.add_task(**kwargs)


async def test_add_then_get_returns_equal_task(svc, repos) -> None:
    """A created task reads back field for field, with its resource and visible asset."""
    _, _, resource_repo, asset_repo = repos

    task = await _add(svc)
    found = await svc.get_task(task.task_id)

    assert found == task
    assert task.company_id == COMPANY_ID
    assert task.group_id == GROUP_ID
    assert task.user_id == CREATOR_ID
    assert task.user_name == "Jane Doe"
    assert task.task_user_id == ASSIGNEE_ID
    assert task.completed is False
    assert task.expiration_date == datetime(2025, 3, 15, tzinfo=UTC)
    assert await resource_repo.exists(COMPANY_ID, TASK_ENTITY_TYPE, task.task_id)
    entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, task.task_id)
    assert entry is not None
    assert entry.visible is True
    assert entry.title == "Write report"
    assert entry.summary == "Quarterly numbers"
    assert entry.class_uuid == task.uuid


async def test_ids_are_allocated_from_counter(svc) -> None:
    first = await _add(svc)
    second = await _add(svc)
    assert second.task_id == first.task_id + 1


async def test_blank_title_writes_nothing(svc) -> None:
    with pytest.raises(InvalidTitleException):
        await _add(svc, title="   ")
    assert await svc.get_all_tasks_count() == 0


async def test_unknown_assignee_writes_nothing(svc) -> None:
    with pytest.raises(ResourceNotFoundException):
        await _add(svc, task_user_id=999)
    assert await svc.get_tasks_count(COMPANY_ID, GROUP_ID) == 0


async def test_update_changes_fields_and_keeps_creation_data(svc, repos) -> None:
    _, _, _, asset_repo = repos
    task = await _add(svc)

    updated = await svc.update_task(
        user_id=ASSIGNEE_ID,
        task_id=task.task_id,
        title="Write final report",
        description="Done",
        expiration_month=4,
        expiration_day=1,
        expiration_year=2025,
        task_user_id=OTHER_USER_ID,
        completed=True,
        service_context=_context(),
    )

    assert updated.task_id == task.task_id
    assert updated.uuid == task.uuid
    assert updated.user_id == CREATOR_ID
    assert updated.create_date == task.create_date
    assert updated.modified_date > task.create_date
    assert updated.title == "Write final report"
    assert updated.task_user_id == OTHER_USER_ID
    assert updated.completed is True
    assert updated.expiration_date == datetime(2025, 4, 1, tzinfo=UTC)
    assert await svc.get_task(task.task_id) == updated
    entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, task.task_id)
    assert entry.title == "Write final report"
    assert entry.summary == "Done"


async def test_update_missing_task_raises(svc) -> None:
    with pytest.raises(ResourceNotFoundException):
        await svc.update_task(
            user_id=CREATOR_ID,
            task_id=12345,
            title="x",
            description=None,
            expiration_month=1,
            expiration_day=1,
            expiration_year=2025,
            task_user_id=ASSIGNEE_ID,
            completed=False,
            service_context=_context(),
        )


async def test_draft_task_is_hidden_from_search(svc, repos) -> None:
    _, _, _, asset_repo = repos
    draft = await _add(
        svc,
        title="Secret roadmap",
        service_context=_context(workflow_action=WorkflowAction.SAVE_DRAFT),
    )
    assert draft.status == WorkflowStatus.DRAFT
    entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, draft.task_id)
    assert entry.visible is False
    assert await svc.search_tasks(COMPANY_ID, GROUP_ID, "roadmap") == []


async def test_delete_removes_row_resource_and_asset(svc, repos) -> None:
    _, _, resource_repo, asset_repo = repos
    task = await _add(svc)

    deleted = await svc.delete_task(task.task_id)

    assert deleted == task
    assert await svc.fetch_task(task.task_id) is None
    assert not await resource_repo.exists(COMPANY_ID, TASK_ENTITY_TYPE, task.task_id)
    assert await asset_repo.get_entry(TASK_ENTITY_TYPE, task.task_id) is None
    with pytest.raises(ResourceNotFoundException):
        await svc.get_task(task.task_id)


async def test_group_delete_leaves_other_groups(svc) -> None:
    await _add(svc, title="A")
    await _add(svc, title="B")
    other = await _add(svc, title="C", service_context=_context(group_id=200))

    result = await svc.delete_group_tasks(COMPANY_ID, GROUP_ID)

    assert len(result.deleted_task_ids) == 2
    assert result.ok
    assert await svc.get_tasks_count(COMPANY_ID, GROUP_ID) == 0
    assert await svc.get_task(other.task_id) == other


async def test_user_delete_covers_assigned_and_created(svc) -> None:
    created = await _add(svc, title="Created by creator")
    assigned = await _add(
        svc, title="Assigned to creator", user_id=OTHER_USER_ID, task_user_id=CREATOR_ID
    )
    unrelated = await _add(
        svc, title="Unrelated", user_id=OTHER_USER_ID, task_user_id=ASSIGNEE_ID
    )

    result = await svc.delete_user_tasks(COMPANY_ID, CREATOR_ID)

    assert set(result.deleted_task_ids) == {created.task_id, assigned.task_id}
    assert result.deleted_task_ids[0] == assigned.task_id
    assert await svc.get_task(unrelated.task_id) == unrelated


async def test_listing_pagination_count_and_status(svc) -> None:
    ids = [(await _add(svc, title=f"Task {i}")).task_id for i in range(5)]
    draft = await _add(
        svc, title="Draft", service_context=_context(workflow_action=WorkflowAction.SAVE_DRAFT)
    )

    page = await svc.get_tasks(COMPANY_ID, GROUP_ID, start=1, end=3)
    assert [t.task_id for t in page] == ids[1:3]
    assert await svc.get_tasks_count(COMPANY_ID, GROUP_ID) == 6
    assert await svc.get_tasks_count(COMPANY_ID, GROUP_ID, WorkflowStatus.DRAFT) == 1
    drafts = await svc.get_tasks(COMPANY_ID, GROUP_ID, status=WorkflowStatus.DRAFT)
    assert [t.task_id for t in drafts] == [draft.task_id]
    assert await svc.get_tasks(COMPANY_ID, 999) == []
    assert await svc.get_all_tasks_count() == 6


async def test_uuid_lookups(svc) -> None:
    task = await _add(svc, service_context=_context(uuid="shared-uuid"))
    twin = await _add(svc, service_context=_context(group_id=200, uuid="shared-uuid"))

    assert await svc.get_task_by_uuid_and_group_id("shared-uuid", GROUP_ID) == task
    assert await svc.fetch_task_by_uuid_and_group_id("shared-uuid", 300) is None
    by_company = await svc.get_tasks_by_uuid_and_company_id("shared-uuid", COMPANY_ID)
    assert [t.task_id for t in by_company] == [task.task_id, twin.task_id]


async def test_asset_tags_categories_and_links(svc, repos) -> None:
    _, _, _, asset_repo = repos
    first = await _add(svc, title="First")
    first_entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, first.task_id)

    second = await _add(
        svc,
        title="Second",
        service_context=_context(
            asset_category_ids=(4, 2),
            asset_tag_names=("Urgent", "urgent", " q1 "),
            asset_link_entry_ids=(first_entry.entry_id,),
            asset_priority=2.0,
        ),
    )
    entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, second.task_id)
    assert entry.category_ids == (2, 4)
    assert entry.tag_names == ("q1", "urgent")
    assert entry.priority == 2.0
    assert entry.related_entry_ids == (first_entry.entry_id,)
    refreshed_first = await asset_repo.get_entry(TASK_ENTITY_TYPE, first.task_id)
    assert refreshed_first.related_entry_ids == (entry.entry_id,)

    await svc.update_asset(CREATOR_ID, second, (2,), ("q1",), (), 0.0)
    entry = await asset_repo.get_entry(TASK_ENTITY_TYPE, second.task_id)
    assert entry.category_ids == (2,)
    assert entry.tag_names == ("q1",)
    assert entry.related_entry_ids == ()

    await svc.delete_task(first)
    assert (await asset_repo.get_entry(TASK_ENTITY_TYPE, second.task_id)).related_entry_ids == ()


async def test_search_matches_all_keywords(svc) -> None:
    await _add(svc, title="Prepare budget", description="Finance <i>review</i>")
    await _add(svc, title="Prepare slides", description="For the board")

    hits = await svc.search_tasks(COMPANY_ID, GROUP_ID, "prepare REVIEW")
    assert [h.title for h in hits] == ["Prepare budget"]
    assert len(await svc.search_tasks(COMPANY_ID, GROUP_ID, "prepare")) == 2
    assert await svc.search_tasks(COMPANY_ID, 200, "prepare") == []


async def test_reconciliation_repairs_drift(svc, repos) -> None:
    task_repo, _, resource_repo, asset_repo = repos
    kept = await _add(svc, title="Kept", service_context=_context(asset_tag_names=("keep",)))
    lost_resource = await _add(svc, title="Lost resource")
    gone = await _add(svc, title="Gone")

    await resource_repo.revoke(COMPANY_ID, TASK_ENTITY_TYPE, lost_resource.task_id)
    await asset_repo.remove(TASK_ENTITY_TYPE, kept.task_id)
    await task_repo.remove(gone)

    reconciler = TaskReconciliationService(svc, task_repo, resource_repo, asset_repo)
    result = await reconciler.reconcile_group(COMPANY_ID, GROUP_ID, CREATOR_ID)

    assert result.tasks_checked == 2
    assert result.resources_granted == (lost_resource.task_id,)
    assert result.orphan_assets_removed == (gone.task_id,)
    assert result.orphan_resources_revoked == (gone.task_id,)
    assert await resource_repo.exists(COMPANY_ID, TASK_ENTITY_TYPE, lost_resource.task_id)
    assert await asset_repo.get_entry(TASK_ENTITY_TYPE, kept.task_id) is not None
    assert await asset_repo.get_entry(TASK_ENTITY_TYPE, gone.task_id) is None

    again = await reconciler.reconcile_group(COMPANY_ID, GROUP_ID, CREATOR_ID)
    assert again.resources_granted == ()
    assert again.orphan_assets_removed == ()
    assert again.orphan_resources_revoked == ()


async def test_plain_update_keeps_draft_hidden(svc, repos) -> None:
    """Updating a draft without a workflow action leaves it a draft, out of search."""
    _, _, _, asset_repo = repos
    draft = await _add(
        svc,
        title="Secret roadmap",
        service_context=_context(workflow_action=WorkflowAction.SAVE_DRAFT),
    )

    updated = await svc.update_task(
        user_id=ASSIGNEE_ID,
        task_id=draft.task_id,
        title="Secret roadmap v2",
        description=None,
        expiration_month=3,
        expiration_day=15,
        expiration_year=2025,
        task_user_id=ASSIGNEE_ID,
        completed=False,
        service_context=_context(),
    )

    assert updated.status == WorkflowStatus.DRAFT
    assert updated.status_by_user_id == draft.status_by_user_id
    assert updated.status_date == draft.status_date
    assert (await asset_repo.get_entry(TASK_ENTITY_TYPE, draft.task_id)).visible is False
    assert await svc.search_tasks(COMPANY_ID, GROUP_ID, "roadmap") == []


class _BrokenRevokeResourceRepository(ResourceRepository):
    """Resource store whose revoke fails for one prim_key."""

    def __init__(self, db_session, failing_prim_key: int, flush_failure: bool) -> None:
        super().__init__(db_session)
        self.failing_prim_key = failing_prim_key
        self.flush_failure = flush_failure

    async def revoke(self, company_id: int, name: str, prim_key: int) -> None:
        if prim_key == self.failing_prim_key:
            if not self.flush_failure:
                raise DependencyFailureException("resource", "revoke", "locked")
            # 'taken' already exists, so this INSERT violates the primary key
            self.db.add(Counter(name="taken", current_id=0))
            await self.db.flush()
        await super().revoke(company_id, name, prim_key)


@pytest.mark.parametrize("flush_failure", [False, True])
async def test_group_delete_keeps_failed_task_whole(db_session, svc, repos, flush_failure) -> None:
    """A failed member rolls back alone; the others are deleted and the session stays usable."""
    task_repo, user_repo, resource_repo, asset_repo = repos
    first = await _add(svc, title="A")
    second = await _add(svc, title="B")
    third = await _add(svc, title="C")
    await db_session.execute(text("INSERT INTO counter (name, current_id) VALUES ('taken', 1)"))

    broken = TaskService(
        task_repo,
        user_repo,
        _BrokenRevokeResourceRepository(db_session, second.task_id, flush_failure),
        asset_repo,
    )
    result = await broken.delete_group_tasks(COMPANY_ID, GROUP_ID)

    assert result.deleted_task_ids == (first.task_id, third.task_id)
    assert list(result.failed) == [second.task_id]
    assert await svc.fetch_task(first.task_id) is None
    assert await svc.fetch_task(third.task_id) is None
    assert await svc.get_task(second.task_id) == second
    assert await resource_repo.exists(COMPANY_ID, TASK_ENTITY_TYPE, second.task_id)
    assert await asset_repo.get_entry(TASK_ENTITY_TYPE, second.task_id) is not None
    assert not await resource_repo.exists(COMPANY_ID, TASK_ENTITY_TYPE, first.task_id)
    await db_session.flush()
    assert await svc.get_tasks_count(COMPANY_ID, GROUP_ID) == 1


async def test_negative_positions_mean_no_bound(svc) -> None:
    ids = [(await _add(svc, title=f"Report {i}")).task_id for i in range(3)]

    assert [t.task_id for t in await svc.get_tasks(COMPANY_ID, GROUP_ID, -1, -1)] == ids
    assert [t.task_id for t in await svc.get_tasks(COMPANY_ID, GROUP_ID, -1, 2)] == ids[:2]
    assert [t.task_id for t in await svc.get_tasks(COMPANY_ID, GROUP_ID, 1, -1)] == ids[1:]
    assert len(await svc.search_tasks(COMPANY_ID, GROUP_ID, "report", -1, -1)) == 3


async def test_search_wildcards_match_literally(svc) -> None:
    await _add(svc, title="Discount 50% off", description=None)
    await _add(svc, title="Discount 500 units", description=None)
    await _add(svc, title="plan_a", description=None)
    await _add(svc, title="planXa", description=None)

    assert [h.title for h in await svc.search_tasks(COMPANY_ID, GROUP_ID, "50%")] == [
        "Discount 50% off"
    ]
    assert [h.title for h in await svc.search_tasks(COMPANY_ID, GROUP_ID, "n_a")] == ["plan_a"]
    assert [h.title for h in await svc.search_tasks(COMPANY_ID, GROUP_ID, "%")] == [
        "Discount 50% off"
    ]
