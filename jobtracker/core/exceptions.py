"""
Exception hierarchy for the JobTracker application.

Provides layered exception structure for domain-specific errors.
Every exception carries the HTTP status it maps to and context for
observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class JobTrackerError(Exception):
    """Base exception for all JobTracker application errors."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(JobTrackerError):
    """Raised when input validation fails."""

    status_code = 400
    error = "Validation failed"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            errors: Individual rule violations, when several were found
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, details)


class AuthenticationError(JobTrackerError):
    """Raised when a request carries no valid session."""

    status_code = 401
    error = "Unauthorized"

    def __init__(self, message: str = "Authentication required", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class NotFoundError(JobTrackerError):
    """Raised when a resource cannot be found for the current user."""

    status_code = 404
    error = "Not found"

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Resource name (e.g. "Application")
            resource_id: ID of the missing resource
            details: Additional context
        """
        details = details or {}
        details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found", details)


class StorageError(JobTrackerError):
    """Raised when an object storage operation fails."""

    error = "Storage error"

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, details)


class EncryptionError(JobTrackerError):
    """Raised when token encryption or decryption fails."""

    error = "Encryption error"


class OAuthError(JobTrackerError):
    """Raised when the OAuth provider rejects a code exchange or token call."""

    status_code = 400
    error = "OAuth error"

    def __init__(
        self,
        message: str,
        provider_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if provider_status is not None:
            details["provider_status"] = provider_status
        super().__init__(message, details)


class GmailError(JobTrackerError):
    """Base exception for Gmail integration errors."""

    error = "Failed to fetch emails from Gmail"


class GmailNotConnectedError(GmailError):
    """Raised when the user has not connected a Gmail account."""

    status_code = 401
    error = "Gmail not connected"

    def __init__(self, message: str = "Gmail not connected", details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["needsConnection"] = True
        super().__init__(message, details)


class GmailPermissionError(GmailError):
    """Raised when the stored Gmail grant lacks the required scopes."""

    status_code = 403
    error = "Gmail permissions insufficient"

    def __init__(self, message: str = "Gmail permissions insufficient", details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["needsReconnection"] = True
        super().__init__(message, details)


class GmailQuotaError(GmailError):
    """Raised when the Gmail API quota is exhausted."""

    status_code = 429
    error = "Gmail API quota exceeded"
    retry_after = 3600

    def __init__(self, message: str = "Gmail API quota exceeded", details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["retryAfter"] = self.retry_after
        super().__init__(message, details)


class GmailServiceError(GmailError):
    """Raised for any other Gmail API failure."""
