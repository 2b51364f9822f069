"""Domain exceptions for the application.

These exceptions represent application errors and are converted to
RFC 7807 Problem Details responses by the exception handlers. Routes
that talk to GitHub catch ``UpstreamError`` themselves and send the
browser home instead.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class UpstreamError(AppException):
    """Raised when a call to GitHub fails.

    Covers transport errors, non-2xx responses and bodies that
    cannot be parsed.

    Example:
        raise UpstreamError("Token exchange failed", details={"status": 401})
    """

    message = "Upstream service request failed"
    error_code = "upstream_error"
    status_code = 502

    def __init__(
        self,
        message: str | None = None,
        service: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if service:
            details["service"] = service
        super().__init__(message=message, details=details, **kwargs)


class SessionPersistenceError(AppException):
    """Raised when the session backend cannot load, save or destroy a session.

    Example:
        raise SessionPersistenceError("Session save failed")
    """

    message = "Session storage unavailable"
    error_code = "session_persistence_error"
    status_code = 500


class ConfigurationError(AppException):
    """Raised when a required setting is missing.

    Example:
        raise ConfigurationError("GitHub OAuth client is not configured")
    """

    message = "Application is not configured"
    error_code = "configuration_error"
    status_code = 500
