"""Error handling module with RFC 7807 Problem Details."""

from repogate.core.errors.exceptions import (
    AppException,
    ConfigurationError,
    SessionPersistenceError,
    UpstreamError,
)
from repogate.core.errors.handlers import (
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "ConfigurationError",
    # Handlers
    "ProblemDetail",
    "SessionPersistenceError",
    "UpstreamError",
    "register_exception_handlers",
]
