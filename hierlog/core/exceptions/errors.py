"""
Built-in exception types.
"""
from __future__ import annotations

from hierlog.core.exceptions.base import LoggingError


class UnknownLevelError(LoggingError, LookupError):
    """A level name or index could not be resolved against the level registry."""

    default_code = "UNKNOWN_LEVEL"


class HandlerError(LoggingError):
    """A handler raised while handling a context. Reported, never raised to log() callers."""

    default_code = "HANDLER_FAILURE"


class ConfigurationError(LoggingError):
    """Invalid or missing configuration."""

    default_code = "CONFIGURATION_ERROR"
