"""Domain exceptions for the OpsDesk assignment service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class OpsDeskException(Exception):
    """Base exception for all OpsDesk application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

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
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(OpsDeskException):
    """Raised when input validation fails (e.g. team mode without a team)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(OpsDeskException):
    """Raised when the acting user cannot be resolved."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(OpsDeskException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'team').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AssignmentConflictException(OpsDeskException):
    """Raised when an assignment request passes structural checks but conflicts with stored data."""

    def __init__(self, task_id: str, conflicts: list[str]) -> None:
        """Initialize with the task and the blocking conflicts.

        Args:
            task_id: Task the assignment targeted.
            conflicts: Human-readable conflict lines (same text as preview).
        """
        super().__init__(
            f"Assignment failed: {', '.join(conflicts)}",
            "ASSIGNMENT_CONFLICT",
            {"task_id": task_id, "conflicts": list(conflicts)},
        )


class SqlNotConfiguredException(OpsDeskException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class AssignmentHistoryWriteException(OpsDeskException):
    """Raised when the history append fails after the assignment write was issued.

    The caller's transaction must roll the assignment write back; the error is
    reported instead of leaving an assignment change without an audit trail.
    """

    def __init__(self, task_id: str, reason: str) -> None:
        super().__init__(
            f"Assignment history could not be recorded for task {task_id}",
            "ASSIGNMENT_HISTORY_WRITE_FAILED",
            {"task_id": task_id, "reason": reason},
        )
