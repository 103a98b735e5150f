"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the acting scope and task use cases. Use cases
are built from infrastructure implementations here; routes depend only on
these dependencies, not on infrastructure directly.
"""

from tasks_management.api.v1.dependencies.scope import (
    ActingScope,
    get_acting_scope,
    get_actor_id,
)
from tasks_management.api.v1.dependencies.task import (
    get_reconciliation_service,
    get_task_service,
    get_task_service_for_write,
)

__all__ = [
    "ActingScope",
    "get_acting_scope",
    "get_actor_id",
    "get_reconciliation_service",
    "get_task_service",
    "get_task_service_for_write",
]
