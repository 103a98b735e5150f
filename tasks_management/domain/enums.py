"""Domain enumerations for task management.

Enums represent fixed sets of domain values (workflow status and action).
"""

from enum import Enum, IntEnum


class WorkflowStatus(IntEnum):
    """Approval status of a task. Only APPROVED tasks have a visible asset projection."""

    APPROVED = 0
    PENDING = 1
    DRAFT = 2
    EXPIRED = 3
    DENIED = 4
    INACTIVE = 5
    INCOMPLETE = 6
    SCHEDULED = 7
    IN_TRASH = 8

    @classmethod
    def values(cls) -> list[int]:
        """Return all valid status values as ints (e.g. for query validation)."""
        return [status.value for status in cls]


class WorkflowAction(str, Enum):
    """What the caller asks for when saving a task: publish it or keep it as a draft."""

    PUBLISH = "publish"
    SAVE_DRAFT = "save_draft"

    def resulting_status(self) -> WorkflowStatus:
        """Status a task takes when saved with this action."""
        if self is WorkflowAction.SAVE_DRAFT:
            return WorkflowStatus.DRAFT
        return WorkflowStatus.APPROVED


class AssetLinkType(IntEnum):
    """Type of link between two asset entries."""

    RELATED = 0


class ResourceScopeType(IntEnum):
    """Scope of a resource permission entry. Task entries are individual."""

    COMPANY = 1
    GROUP = 2
    GROUP_TEMPLATE = 3
    INDIVIDUAL = 4
