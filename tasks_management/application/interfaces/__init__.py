"""Application ports: protocols implemented by infrastructure."""

from tasks_management.application.interfaces.repositories import (
    IAssetRepository,
    IResourceRepository,
    ITaskRepository,
    IUserRepository,
)

__all__ = [
    "IAssetRepository",
    "IResourceRepository",
    "ITaskRepository",
    "IUserRepository",
]
