"""Domain exceptions for workflow automation.

Defines domain-level exceptions for invalid input, missing records and
unavailable collaborators. The presentation layer maps them to HTTP
responses in exception handlers; the workflow engine converts them into
failed action results and never lets them escape trigger_workflow.
"""

from typing import Any


class WaveLaunchException(Exception):
    """Base exception for all application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

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


class ValidationException(WaveLaunchException):
    """Raised when input validation fails (e.g. unknown field or missing value)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(WaveLaunchException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'project', 'workflow').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(WaveLaunchException):
    """Raised when an operation requires SQL persistence but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class EmailTemplateNotFoundException(WaveLaunchException):
    """Raised when an email template key has no registered template."""

    def __init__(self, template: str) -> None:
        super().__init__(
            f'Template "{template}" not found',
            "EMAIL_TEMPLATE_NOT_FOUND",
            {"template": template},
        )


class EmailDeliveryException(WaveLaunchException):
    """Raised by an email transport when the provider rejects a message."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(
            f"Email delivery via {provider} failed: {reason}",
            "EMAIL_DELIVERY_ERROR",
            {"provider": provider},
        )
