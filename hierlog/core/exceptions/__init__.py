"""
Library exception system.

Usage:
    from hierlog.core.exceptions import LoggingError, UnknownLevelError

    try:
        logger.log("LOUD", "hello")
    except UnknownLevelError as exc:
        print(exc.details["level"])
"""
from hierlog.core.exceptions.base import LoggingError
from hierlog.core.exceptions.errors import (
    ConfigurationError,
    HandlerError,
    UnknownLevelError,
)

__all__ = [
    "LoggingError",
    "UnknownLevelError",
    "HandlerError",
    "ConfigurationError",
]
