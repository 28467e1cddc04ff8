"""Domain exceptions for the scaling-reads service.

Defines domain-level exceptions that represent business rule violations
and data-access contract violations. Presentation layer maps them to HTTP
responses in exception handlers.
"""

from typing import Any


class ScalingReadsException(Exception):
    """Base exception for all application errors.

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
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ScalingReadsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(ScalingReadsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'album').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ReadOnlyContextError(ScalingReadsException):
    """Raised when a mutation is attempted through a read-only data context.

    This is a programming error (a read path tried to write), not a
    recoverable business condition. It is never retried or swallowed.
    """

    def __init__(self, operation: str) -> None:
        """Initialize with the rejected operation.

        Args:
            operation: Name of the mutation that was attempted (e.g. 'add', 'commit').
        """
        super().__init__(
            f"This context is read-only and does not allow '{operation}'",
            "READ_ONLY_VIOLATION",
            {"operation": operation},
        )


class SqlNotConfiguredException(ScalingReadsException):
    """Raised when an operation requires a database that is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
