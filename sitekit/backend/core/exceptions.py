"""
Application Errors.

Every error a service raises on purpose derives from ApplicationError.
The class decides the machine-readable `code` and the HTTP status the
exception handlers answer with; the instance carries the message shown
to the client.
"""

from typing import Any


class ApplicationError(Exception):
    """Base class; anything not covered by a subclass is a 500."""

    code = "SYS_INTERNAL_ERROR"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Input breaks a business rule (as opposed to a malformed request, 422)."""

    code = "VAL_VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(ApplicationError):
    code = "AUTH_UNAUTHORIZED"
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(ApplicationError):
    code = "AUTHZ_FORBIDDEN"
    status_code = 403
    default_message = "Permission denied"


class NotFoundError(ApplicationError):
    code = "RES_NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApplicationError):
    """Unique key taken, or the row is still referenced elsewhere."""

    code = "RES_CONFLICT"
    status_code = 409
    default_message = "Resource conflict"


class PayloadTooLargeError(ApplicationError):
    code = "VAL_PAYLOAD_TOO_LARGE"
    status_code = 413
    default_message = "File too large"


class RateLimitError(ApplicationError):
    """Sent with a Retry-After header when retry_after_seconds is set."""

    code = "RATE_LIMITED"
    status_code = 429
    default_message = "Rate limit exceeded"

    def __init__(self, message: str | None = None, retry_after_seconds: int = 0) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message)


class ServiceNotConfiguredError(ApplicationError):
    """An integration was needed but its credentials are missing."""

    code = "SYS_NOT_CONFIGURED"
    status_code = 500
    default_message = "Service not configured"


class ExternalServiceError(ApplicationError):
    code = "SYS_EXTERNAL_SERVICE_ERROR"
    status_code = 502
    default_message = "External service error"


class DatabaseError(ApplicationError):
    code = "SYS_DATABASE_ERROR"
    status_code = 503
    default_message = "Database error"
