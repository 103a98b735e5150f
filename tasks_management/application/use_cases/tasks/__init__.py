"""Task use cases: lifecycle operations and asset/resource reconciliation."""

from tasks_management.application.use_cases.tasks.reconciliation import (
    TaskReconciliationService,
)
from tasks_management.application.use_cases.tasks.task_operations import (
    TASK_ENTITY_TYPE,
    TaskService,
)

__all__ = ["TASK_ENTITY_TYPE", "TaskReconciliationService", "TaskService"]
