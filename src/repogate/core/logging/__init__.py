"""Logging module with structured logging and request tracking."""

from repogate.core.logging.config import configure_logging
from repogate.core.logging.middleware import RequestIdMiddleware, RequestLoggingMiddleware


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
