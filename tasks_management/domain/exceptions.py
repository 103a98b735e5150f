"""Domain exceptions for the task management service.

Defines domain-level exceptions that represent business rule violations
and collaborator failures. Presentation layer maps them to HTTP responses
in exception handlers.
"""

from typing import Any


class TasksManagementException(Exception):
    """Base exception for all task management errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TasksManagementException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(
        self, message: str, field: str | None = None, error_code: str = "VALIDATION_ERROR"
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Machine-readable code; subclasses narrow it.
        """
        details = {"field": field} if field else {}
        super().__init__(message, error_code, details)


class InvalidTitleException(ValidationException):
    """Raised when a task title is empty or whitespace only. No write happens."""

    def __init__(self) -> None:
        super().__init__("Task title must not be empty", field="title", error_code="INVALID_TITLE")


class InvalidExpirationDateException(ValidationException):
    """Raised when month, day and year do not form a calendar date."""

    def __init__(self, month: int, day: int, year: int) -> None:
        super().__init__(
            f"Invalid expiration date: month={month} day={day} year={year}",
            field="expiration_date",
        )
        self.details.update({"month": month, "day": day, "year": year})


class ResourceNotFoundException(TasksManagementException):
    """Raised when a requested task or identity is not found."""

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class DependencyFailureException(TasksManagementException):
    """Raised by a collaborator (store, resource, asset) that could not complete a call.

    Not retried and not compensated by the service; earlier steps stay applied.
    """

    def __init__(self, dependency: str, operation: str, reason: str) -> None:
        """Initialize with collaborator name, attempted operation and reason.

        Args:
            dependency: Collaborator name (e.g. 'asset', 'resource').
            operation: Operation that failed (e.g. 'upsert').
            reason: Human-readable cause.
        """
        super().__init__(
            f"{dependency}.{operation} failed: {reason}",
            "DEPENDENCY_FAILURE",
            {"dependency": dependency, "operation": operation, "reason": reason},
        )
