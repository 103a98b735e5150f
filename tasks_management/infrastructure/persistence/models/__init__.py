"""ORM models. Importing this package registers every table on Base.metadata."""

from tasks_management.infrastructure.persistence.models.asset import (
    AssetEntry,
    AssetEntryCategory,
    AssetEntryTag,
    AssetLink,
)
from tasks_management.infrastructure.persistence.models.counter import Counter
from tasks_management.infrastructure.persistence.models.resource import ResourcePermission
from tasks_management.infrastructure.persistence.models.task import Task
from tasks_management.infrastructure.persistence.models.user import User

__all__ = [
    "AssetEntry",
    "AssetEntryCategory",
    "AssetEntryTag",
    "AssetLink",
    "Counter",
    "ResourcePermission",
    "Task",
    "User",
]
