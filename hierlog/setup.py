"""
Logger setup: attach console and file handlers to the root logger from config.
"""
from __future__ import annotations

import logging
import sys
import threading
import weakref
from types import ModuleType
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from hierlog.config.schema import LoggerSchema, LoggingSchema
from hierlog.config.settings import LoggerConfig
from hierlog.core.exceptions import ConfigurationError, UnknownLevelError
from hierlog.core.levels import UNSET
from hierlog.core.logger import Logger
from hierlog.core.system import LoggingSystem, get_system
from hierlog.formatting.formatters import JsonFormatter
from hierlog.handlers.base import BaseHandler
from hierlog.handlers.console import ConsoleHandler
from hierlog.handlers.file import FileHandler
from hierlog.handlers.registry import HandlerRegistry, default_registry

logger = logging.getLogger(__name__)

# Root handlers installed by configure(), per system. A system is listed
# here once configure() or configure_from_dict() has run on it.
_installed: "weakref.WeakKeyDictionary[LoggingSystem, List[BaseHandler]]" = weakref.WeakKeyDictionary()
_configure_lock = threading.Lock()


def _apply_silence(system: LoggingSystem, mode: Optional[str]) -> None:
    if mode is None:
        return
    system.unsilence()
    if mode == "all":
        system.silence(all=True)
    elif mode == "console":
        system.silence(all=False)


def _build_root_handlers(config: LoggerConfig, system: LoggingSystem) -> List[BaseHandler]:
    handlers: List[BaseHandler] = []
    if config.console:
        handlers.append(
            build_console_handler(
                level=config.console_level,
                color=config.color,
                stream=sys.stderr if config.stream == "stderr" else None,
                system=system,
            )
        )
    if config.log_file:
        handlers.append(
            build_file_handler(
                config.log_file,
                level=config.file_level,
                json_lines=config.file_format == "json",
                system=system,
            )
        )
    return handlers


def _install_root_handlers(system: LoggingSystem, handlers: List[BaseHandler]) -> None:
    previous = _installed.get(system, [])
    kept = [handler for handler in system.root.handlers if handler not in previous]
    system.root.handlers = kept + handlers
    _installed[system] = handlers


def is_configured(system: Optional[LoggingSystem] = None) -> bool:
    """True once configure() or configure_from_dict() has run on system (default: process-wide)."""
    return (system or get_system()) in _installed


def configure(
    config: Optional[LoggerConfig] = None,
    system: Optional[LoggingSystem] = None,
) -> LoggingSystem:
    """
    Configure the root logger with the given config.
    If config is None, uses LoggerConfig.from_env().

    Handlers installed by an earlier configure() are replaced, so calling this
    again reconfigures cleanly; handlers attached any other way stay. The
    silence flags change only when config.silence is set.
    """
    if config is None:
        config = LoggerConfig.from_env()
    system = system or get_system()

    system.root.level = config.level
    handlers = _build_root_handlers(config, system)
    _install_root_handlers(system, handlers)
    _apply_silence(system, config.silence)
    logger.debug("Configured root logger: level=%s handlers=%s", config.level, handlers)
    return system


def _ensure_configured(config: Optional[LoggerConfig] = None) -> LoggingSystem:
    """
    First-use configuration of the process-wide system. Unlike configure(),
    a root level or root handlers set by the caller are left in place.
    """
    system = get_system()
    if system in _installed:
        return system
    with _configure_lock:
        if system in _installed:
            return system
        if config is None:
            config = LoggerConfig.from_env()
        root = system.root
        if root.level_idx == UNSET:
            root.level = config.level
        handlers = [] if root.handlers else _build_root_handlers(config, system)
        _install_root_handlers(system, handlers)
        _apply_silence(system, config.silence)
        logger.debug("Auto-configured root logger: level=%s handlers=%s", root.level, root.handlers)
    return system


def configure_from_dict(
    data: Mapping[str, Any],
    system: Optional[LoggingSystem] = None,
    registry: HandlerRegistry = default_registry,
) -> LoggingSystem:
    """
    Validate data against LoggingSchema and apply it.

    Raises ConfigurationError for schema violations, unknown handler types,
    references to undeclared handlers and unknown level names.
    """
    try:
        schema = LoggingSchema.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid logging configuration: {exc.error_count()} error(s)",
            details={"errors": exc.errors(include_url=False)},
            cause=exc,
        ) from exc

    system = system or get_system()

    handlers: Dict[str, BaseHandler] = {}
    for name, handler_schema in schema.handlers.items():
        try:
            handler = registry.build(handler_schema.type, system=system, **handler_schema.options())
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(
                f"Could not build handler {name!r}: {exc}",
                details={"handler": name, "type": handler_schema.type},
                cause=exc,
            ) from exc
        if handler_schema.silenced:
            handler.silence()
        handlers[name] = handler

    if schema.root is not None:
        _apply_logger_schema(system.root, schema.root, handlers)
    for logger_name, logger_schema in schema.loggers.items():
        _apply_logger_schema(system.get_logger(logger_name), logger_schema, handlers)

    _apply_silence(system, schema.silence)
    _installed.setdefault(system, [])
    return system


def _apply_logger_schema(target: Logger, schema: LoggerSchema, handlers: Dict[str, BaseHandler]) -> None:
    options = schema.model_dump(exclude_unset=True, exclude={"handlers"})
    if schema.handlers is not None:
        missing = [name for name in schema.handlers if name not in handlers]
        if missing:
            raise ConfigurationError(
                f"Logger {target.name!r} references undeclared handlers: {missing}",
                details={"logger": target.name, "handlers": missing},
            )
        options["handlers"] = [handlers[name] for name in schema.handlers]
    try:
        target.configure(**options)
    except UnknownLevelError as exc:
        raise ConfigurationError(
            f"Logger {target.name!r}: {exc}",
            details={"logger": target.name, **exc.details},
            cause=exc,
        ) from exc


def get_logger(name: Optional[str] = None, config: Optional[LoggerConfig] = None) -> Logger:
    """
    Return the logger for the given name from the process-wide system. If
    neither configure() nor configure_from_dict() ran on it, the root gets a
    level and handlers from config (or from_env()) where it has none yet.
    """
    return _ensure_configured(config).get_logger(name)


def logger_for(obj: Union[ModuleType, str, None]) -> Logger:
    """get_logger() keyed by a module or source file path; see LoggingSystem.logger_for."""
    return _ensure_configured().logger_for(obj)


def build_file_handler(
    file_name: str,
    level: Optional[str] = "DEBUG",
    json_lines: bool = False,
    system: Optional[LoggingSystem] = None,
    **config: Any,
) -> FileHandler:
    """Build a standalone file handler, template lines or JSON Lines (for custom use)."""
    handler = FileHandler(file_name, level=level, system=system, **config)
    if json_lines:
        handler.formatter = JsonFormatter()
    return handler


def build_console_handler(
    level: Optional[str] = "INFO",
    fmt: Optional[str] = None,
    color: bool = True,
    system: Optional[LoggingSystem] = None,
    **config: Any,
) -> ConsoleHandler:
    """Build a standalone console handler (for custom use)."""
    if fmt is not None:
        config["format"] = fmt
    return ConsoleHandler(level=level, color=color, system=system, **config)
