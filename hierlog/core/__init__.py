"""
Core: levels, contexts, loggers and the logging system that owns them.
"""
from hierlog.core.context import Context, HandlerContext
from hierlog.core.levels import DEFAULT_LEVELS, UNSET, LevelRegistry
from hierlog.core.logger import Logger, resolve_inherited
from hierlog.core.system import LoggingSystem, get_system, init_logging

__all__ = [
    "Context",
    "HandlerContext",
    "DEFAULT_LEVELS",
    "UNSET",
    "LevelRegistry",
    "Logger",
    "resolve_inherited",
    "LoggingSystem",
    "get_system",
    "init_logging",
]
