"""Domain exceptions for the LeadDesk search service.

Defines domain-level exceptions that represent request or business rule
failures. These exceptions are independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class LeadDeskException(Exception):
    """Base exception for all LeadDesk application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, caller_id).
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
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(LeadDeskException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(LeadDeskException):
    """Raised when the bearer credential is missing, invalid, or expired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class CallerNotFoundException(LeadDeskException):
    """Raised when a valid token refers to no active staff account."""

    def __init__(self, caller_id: str) -> None:
        """Initialize with the caller id taken from the token subject.

        Args:
            caller_id: The user ID that has no (active) profile.
        """
        super().__init__(
            "User profile not found",
            "CALLER_NOT_FOUND",
            {"caller_id": caller_id},
        )


class SqlNotConfiguredException(LeadDeskException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class SearchRequestException(LeadDeskException):
    """Raised by the search client when the service answers with a non-success status."""

    def __init__(self, status_code: int, message: str = "Search request failed") -> None:
        super().__init__(message, "SEARCH_REQUEST_FAILED", {"status_code": status_code})
        self.status_code = status_code
