"""TaskReconciliationService unit tests with mocked repositories."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from tasks_management.application.dtos.asset import AssetEntryResult
from tasks_management.application.dtos.task import TaskResult
from tasks_management.application.use_cases.tasks import (
    TASK_ENTITY_TYPE,
    TaskReconciliationService,
    TaskService,
)
from tasks_management.domain.enums import WorkflowStatus

NOW = datetime(2025, 2, 1, tzinfo=UTC)


def _task(task_id: int) -> TaskResult:
    return TaskResult(
        task_id=task_id,
        uuid=f"uuid-{task_id}",
        company_id=10,
        group_id=100,
        user_id=1,
        user_name="Jane Doe",
        create_date=NOW,
        modified_date=NOW,
        title=f"Task {task_id}",
        description=None,
        expiration_date=None,
        task_user_id=2,
        completed=False,
        status=WorkflowStatus.APPROVED,
    )


def _entry(class_pk: int, **overrides) -> AssetEntryResult:
    values = dict(
        entry_id=500 + class_pk,
        company_id=10,
        group_id=100,
        user_id=1,
        class_name=TASK_ENTITY_TYPE,
        class_pk=class_pk,
        class_uuid=f"uuid-{class_pk}",
        visible=True,
        title=f"Task {class_pk}",
        description=None,
        summary="",
        priority=0.0,
        create_date=NOW,
        modified_date=NOW,
    )
    values.update(overrides)
    return AssetEntryResult(**values)


def _reconciler():
    task_repo = AsyncMock()
    resource_repo = AsyncMock()
    asset_repo = AsyncMock()
    svc = TaskService(task_repo, AsyncMock(), resource_repo, asset_repo)
    return TaskReconciliationService(svc, task_repo, resource_repo, asset_repo), task_repo, resource_repo, asset_repo


async def test_reconcile_repairs_missing_and_orphaned_entries() -> None:
    """Missing resource granted, assets refreshed with their existing inputs, orphans removed."""
    reconciler, task_repo, resource_repo, asset_repo = _reconciler()
    task_repo.find_by_scope = AsyncMock(return_value=[_task(1), _task(2)])
    resource_repo.exists = AsyncMock(side_effect=lambda company_id, name, pk: pk == 1)
    existing = _entry(1, tag_names=("keep",), category_ids=(3,), related_entry_ids=(77,), priority=1.5)
    asset_repo.get_entry = AsyncMock(side_effect=lambda name, pk: existing if pk == 1 else None)
    asset_repo.upsert = AsyncMock(side_effect=lambda data: _entry(data.class_pk))
    asset_repo.list_class_pks = AsyncMock(return_value=[1, 2, 5])
    resource_repo.list_prim_keys = AsyncMock(return_value=[1, 2, 9])

    result = await reconciler.reconcile_group(10, 100, user_id=1)

    assert result.tasks_checked == 2
    assert result.resources_granted == (2,)
    assert result.assets_refreshed == (1, 2)
    assert result.orphan_assets_removed == (5,)
    assert result.orphan_resources_revoked == (9,)
    resource_repo.grant.assert_awaited_once_with(10, 100, 1, TASK_ENTITY_TYPE, 2)
    asset_repo.remove.assert_awaited_once_with(TASK_ENTITY_TYPE, 5)
    resource_repo.revoke.assert_awaited_once_with(10, TASK_ENTITY_TYPE, 9)

    first_write = asset_repo.upsert.call_args_list[0][0][0]
    assert first_write.tag_names == ("keep",)
    assert first_write.category_ids == (3,)
    assert first_write.priority == 1.5
    asset_repo.link_related.assert_any_await(1, 501, (77,))
    second_write = asset_repo.upsert.call_args_list[1][0][0]
    assert second_write.tag_names == ()


async def test_reconcile_consistent_scope_changes_nothing_structural() -> None:
    reconciler, task_repo, resource_repo, asset_repo = _reconciler()
    task_repo.find_by_scope = AsyncMock(return_value=[_task(1)])
    resource_repo.exists = AsyncMock(return_value=True)
    asset_repo.get_entry = AsyncMock(return_value=_entry(1))
    asset_repo.upsert = AsyncMock(return_value=_entry(1))
    asset_repo.list_class_pks = AsyncMock(return_value=[1])
    resource_repo.list_prim_keys = AsyncMock(return_value=[1])

    result = await reconciler.reconcile_group(10, 100, user_id=1)

    assert result.resources_granted == ()
    assert result.orphan_assets_removed == ()
    assert result.orphan_resources_revoked == ()
    resource_repo.grant.assert_not_awaited()
    asset_repo.remove.assert_not_awaited()
    resource_repo.revoke.assert_not_awaited()
