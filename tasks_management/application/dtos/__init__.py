"""Application DTOs (no ORM dependency)."""

from tasks_management.application.dtos.asset import AssetEntryResult, AssetEntryWrite
from tasks_management.application.dtos.task import (
    BulkDeleteResult,
    ReconciliationResult,
    ServiceContext,
    TaskResult,
    TaskWrite,
)
from tasks_management.application.dtos.user import UserResult

__all__ = [
    "AssetEntryResult",
    "AssetEntryWrite",
    "BulkDeleteResult",
    "ReconciliationResult",
    "ServiceContext",
    "TaskResult",
    "TaskWrite",
    "UserResult",
]
