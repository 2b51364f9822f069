"""Core services and cross-cutting concerns."""

from repogate.core.errors import (
    AppException,
    ConfigurationError,
    SessionPersistenceError,
    UpstreamError,
    register_exception_handlers,
)


__all__ = [
    "AppException",
    "ConfigurationError",
    "SessionPersistenceError",
    "UpstreamError",
    "register_exception_handlers",
]
