"""Domain exceptions for TaskNest.

Defines the error kinds every task operation may surface. These exceptions
are independent of infrastructure concerns. The presentation layer maps them
to HTTP responses in exception handlers; the HTTP client maps them back.
"""

from typing import Any


class TaskNestException(Exception):
    """Base exception for all TaskNest application errors.

    All custom exceptions inherit from this class to allow consistent error
    handling and logging. Presentation layer maps these to HTTP responses
    using message, error_code, and details.

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
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskNestException):
    """Raised when a task payload fails validation (first failing field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)

    @property
    def field(self) -> str | None:
        return self.details.get("field")


class AuthenticationException(TaskNestException):
    """Raised when the caller's identity cannot be resolved."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(TaskNestException):
    """Raised when no resource with the id is owned by the caller."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreUnavailableException(TaskNestException):
    """Raised when the persistence backend cannot be reached or errors."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the failed store operation.

        Args:
            operation: Store operation that failed (e.g. 'find_by_owner').
            reason: Optional description of the underlying failure.
        """
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Task storage is unavailable",
            "STORE_UNAVAILABLE",
            details,
        )
