"""
Named, hierarchical loggers.

Logger names are dot-separated; a logger inherits its level, handlers and
extra data from its ancestors. Ancestors are looked up by name in the owning
LoggingSystem, so "a.b.c" inherits from "a" even if "a.b" was never created.

Configuration attributes (level, handlers, propagate, extra) are plain
instance state and are not synchronized: configure loggers during startup,
not while other threads are logging through them.
"""
from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional, Tuple, Type

from hierlog.core.callsite import find_caller_frame
from hierlog.core.context import Context
from hierlog.core.exceptions import HandlerError
from hierlog.core.levels import UNSET, LevelLike
from hierlog.formatting.dumper import Dumper

if TYPE_CHECKING:
    from hierlog.core.system import LoggingSystem
    from hierlog.handlers.base import BaseHandler

# Fallback channel for handler failures; never routed through hierlog handlers.
_diagnostics = logging.getLogger("hierlog.dispatch")

_INHERITABLE = ("level_idx", "handlers", "extra")


def resolve_inherited(logger: "Logger", key: str, default: Any = None) -> Any:
    """First own value of key found walking from logger up to root, else default."""
    for node in logger.lineage():
        value = node.own(key)
        if value is not None:
            return value
    return default


class Logger:
    """A named dispatch node. Obtain instances through LoggingSystem.get_logger()."""

    def __init__(self, name: str, system: "LoggingSystem", **config: Any) -> None:
        self._name = name
        self._system = system
        self._own: Dict[str, Any] = {key: None for key in _INHERITABLE}
        self._silenced = False
        self.propagate = True
        self.configure(**config)

    def __repr__(self) -> str:
        return f"<Logger {self._name} ({self.effective_level})>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def system(self) -> "LoggingSystem":
        return self._system

    @property
    def parent(self) -> Optional["Logger"]:
        """Nearest existing ancestor; None for the root logger."""
        return self._system.parent_of(self)

    def own(self, key: str) -> Any:
        """This logger's own (not inherited) value for an inheritable key, or None."""
        return self._own[key]

    def lineage(self) -> Iterator["Logger"]:
        """This logger followed by its existing ancestors, ending at root."""
        yield self
        yield from self._system.ancestors(self._name)

    def configure(self, **config: Any) -> "Logger":
        """Merge configuration keys into this logger. Unknown keys become attributes."""
        for key, value in config.items():
            if key == "silenced":
                if value:
                    self.silence()
                else:
                    self.unsilence()
            else:
                setattr(self, key, value)
        return self

    def child(self, name: str) -> "Logger":
        if self is self._system.root:
            return self._system.get_logger(name)
        return self._system.get_logger(f"{self._name}.{name}")

    # Level ---------------------------------------------------------------

    @property
    def level_idx(self) -> int:
        """Own level index; UNSET (-1) when not set on this logger."""
        value = self._own["level_idx"]
        return UNSET if value is None else value

    @level_idx.setter
    def level_idx(self, value: Optional[int]) -> None:
        if value is None or value == UNSET:
            self._own["level_idx"] = None
        else:
            self._own["level_idx"] = self._system.levels.index_of(value)

    @property
    def level(self) -> Optional[str]:
        return self._system.levels.name_of(self.level_idx)

    @level.setter
    def level(self, value: Optional[LevelLike]) -> None:
        if value is None:
            self._own["level_idx"] = None
        else:
            self._own["level_idx"] = self._system.levels.index_of(value)

    @property
    def effective_level_idx(self) -> int:
        return resolve_inherited(self, "level_idx", default=0)

    @property
    def effective_level(self) -> Optional[str]:
        return self._system.levels.name_of(self.effective_level_idx)

    def is_enabled_for(self, level: LevelLike) -> bool:
        if self.silenced:
            return False
        return self._system.levels.index_of(level) >= self.effective_level_idx

    # Handlers ------------------------------------------------------------

    @property
    def handlers(self) -> List["BaseHandler"]:
        """Own handlers only; see effective_handlers for what log() uses."""
        return list(self._own["handlers"] or ())

    @handlers.setter
    def handlers(self, value: Optional[Iterable["BaseHandler"]]) -> None:
        self._own["handlers"] = None if value is None else list(value)

    def add_handler(self, handler: "BaseHandler") -> "Logger":
        if self._own["handlers"] is None:
            self._own["handlers"] = []
        self._own["handlers"].append(handler)
        return self

    def remove_handler(self, handler: "BaseHandler") -> "Logger":
        if self._own["handlers"] and handler in self._own["handlers"]:
            self._own["handlers"].remove(handler)
        return self

    @property
    def effective_handlers(self) -> List["BaseHandler"]:
        """
        Own handlers, then each ancestor's, nearest first. The walk stops after
        the first logger that does not propagate.
        """
        handlers: List["BaseHandler"] = []
        for node in self.lineage():
            handlers.extend(node.own("handlers") or ())
            if not node.propagate:
                break
        return handlers

    # Extra data ----------------------------------------------------------

    @property
    def extra(self) -> Dict[str, Any]:
        return dict(self._own["extra"] or {})

    @extra.setter
    def extra(self, value: Optional[Dict[str, Any]]) -> None:
        self._own["extra"] = None if value is None else dict(value)

    @property
    def effective_extra(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for node in reversed(list(self.lineage())):
            merged.update(node.own("extra") or {})
        return merged

    # Silence -------------------------------------------------------------

    @property
    def silenced(self) -> bool:
        return self._silenced or self._system.silenced_all

    def silence(self) -> "Logger":
        self._silenced = True
        return self

    def unsilence(self) -> "Logger":
        self._silenced = False
        return self

    # Dispatch ------------------------------------------------------------

    def log(self, level: LevelLike, message: Any, *args: Any) -> "Logger":
        """
        Log message at level. printf-style placeholders in message are filled
        from args when a handler renders it.

        Raises UnknownLevelError for an unknown level. Handler failures are
        reported on the "hierlog.dispatch" stdlib logger and never raised.
        """
        if self.silenced:
            return self

        levels = self._system.levels
        level_idx = levels.index_of(level)
        if level_idx < self.effective_level_idx:
            return self

        context = Context(
            self._name,
            level_idx,
            levels.name_of(level_idx),
            message,
            args,
            extra=self.effective_extra,
            caller_frame=find_caller_frame(self._system.internal_packages),
            main_dir=self._system.main_dir,
        )

        for handler in self.effective_handlers:
            try:
                handler.handle(context)
            except Exception as exc:
                self._report_handler_failure(handler, exc)
        return self

    def _report_handler_failure(self, handler: Any, exc: Exception) -> None:
        error = HandlerError(
            f"Exception while logging to {type(handler).__name__} handler {handler!r}: {exc}",
            details={
                "handler": type(handler).__name__,
                "logger": self._name,
            },
            cause=exc,
        )
        _diagnostics.error(
            "%s",
            error,
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={"error": error.to_dict()},
        )

    def dump(self, target: Any, depth: Optional[int] = None) -> Dumper:
        """Wrap target for deferred pretty-printing, e.g. ``logger.debug("state: %s", logger.dump(obj))``."""
        return Dumper(target, depth)

    # Per-level methods (trace, debug, ...) live on the subclass built by logger_class_for().


def _make_log_method(level_name: str):
    def log_at(self: Logger, message: Any, *args: Any) -> Logger:
        return self.log(level_name, message, *args)

    log_at.__name__ = level_name.lower()
    log_at.__qualname__ = f"Logger.{level_name.lower()}"
    log_at.__doc__ = f"Log a message at {level_name} level. Same as ``log({level_name!r}, message, *args)``."
    return log_at


@functools.lru_cache(maxsize=None)
def _build_logger_class(level_names: Tuple[str, ...]) -> Type[Logger]:
    namespace: Dict[str, Any] = {"__module__": __name__}
    for level_name in level_names:
        method_name = level_name.lower()
        if hasattr(Logger, method_name):
            raise ValueError(f"Level name {level_name!r} clashes with Logger.{method_name}")
        namespace[method_name] = _make_log_method(level_name)
    return type("Logger", (Logger,), namespace)


def logger_class_for(level_names: Iterable[str]) -> Type[Logger]:
    """
    Logger subclass with a ``<level>()`` shortcut method for each level name.

    Each LoggingSystem instantiates the class for its own levels, so loggers
    only carry methods for levels their system knows. Classes are shared
    between systems with the same level list.
    """
    return _build_logger_class(tuple(name.upper() for name in level_names))
