"""Persistence repositories. Re-exports for dependency injection."""

from tasks_management.infrastructure.persistence.repositories.asset_repo import AssetRepository
from tasks_management.infrastructure.persistence.repositories.base import BaseRepository
from tasks_management.infrastructure.persistence.repositories.counter_repo import (
    CounterRepository,
)
from tasks_management.infrastructure.persistence.repositories.resource_repo import (
    ResourceRepository,
)
from tasks_management.infrastructure.persistence.repositories.task_repo import TaskRepository
from tasks_management.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AssetRepository",
    "BaseRepository",
    "CounterRepository",
    "ResourceRepository",
    "TaskRepository",
    "UserRepository",
]
