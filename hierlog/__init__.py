"""
hierlog: hierarchical loggers with inherited levels, handlers and extra data.

Usage:
    import hierlog

    # Configure once at startup (optional; get_logger() falls back to env)
    hierlog.configure(hierlog.LoggerConfig(level="DEBUG", log_file="/var/log/myapp.log"))

    # Or from env: LOG_LEVEL, LOG_FILE, LOG_CONSOLE, LOG_COLOR, LOG_SILENCE, etc.
    hierlog.configure()

    logger = hierlog.get_logger("myapp.db")
    logger.info("Connected to %s in %dms", host, elapsed)

    # Subsystems can keep their messages away from the root handlers
    noisy = hierlog.get_logger("myapp.poller")
    noisy.propagate = False
    noisy.add_handler(hierlog.FileHandler("poller.log"))
"""
from hierlog.config import LoggerConfig
from hierlog.core.context import Context
from hierlog.core.exceptions import (
    ConfigurationError,
    HandlerError,
    LoggingError,
    UnknownLevelError,
)
from hierlog.core.levels import DEFAULT_LEVELS, LevelRegistry
from hierlog.core.logger import Logger
from hierlog.core.system import LoggingSystem, get_system, init_logging
from hierlog.handlers import BaseHandler, ConsoleHandler, FileHandler
from hierlog.setup import (
    build_console_handler,
    build_file_handler,
    configure,
    configure_from_dict,
    get_logger,
    is_configured,
    logger_for,
)


def silence(all: bool = True) -> None:
    """Silence the process-wide system: everything, or with all=False console handlers only."""
    get_system().silence(all)


def unsilence() -> None:
    get_system().unsilence()


__all__ = [
    "LoggerConfig",
    "Context",
    "LoggingError",
    "UnknownLevelError",
    "HandlerError",
    "ConfigurationError",
    "DEFAULT_LEVELS",
    "LevelRegistry",
    "Logger",
    "LoggingSystem",
    "get_system",
    "init_logging",
    "BaseHandler",
    "ConsoleHandler",
    "FileHandler",
    "configure",
    "configure_from_dict",
    "is_configured",
    "get_logger",
    "logger_for",
    "build_console_handler",
    "build_file_handler",
    "silence",
    "unsilence",
]
