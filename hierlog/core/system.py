"""
The logging system: owns the logger registry, the root logger, the level
registry and the process-wide silence flags.

One LoggingSystem is installed process-wide by init_logging() (or lazily by
get_system()); tests and embedders can build private instances.
"""
from __future__ import annotations

import logging
import os
import sys
import threading
from types import ModuleType
from typing import Dict, Iterable, Iterator, Optional, Union

from hierlog.core.levels import DEFAULT_LEVELS, LevelRegistry
from hierlog.core.callsite import INTERNAL_PACKAGES
from hierlog.core.logger import Logger, logger_class_for

logger = logging.getLogger(__name__)

ROOT_NAME = "root"


def _default_main_dir() -> str:
    main = sys.modules.get("__main__")
    filename = getattr(main, "__file__", None)
    if filename:
        return os.path.dirname(os.path.abspath(filename))
    # Interactive session.
    return os.getcwd()


class LoggingSystem:
    """Registry of loggers by name plus the process-wide switches they consult."""

    def __init__(
        self,
        levels: Optional[Iterable[str]] = None,
        *,
        main_dir: Optional[str] = None,
        internal_packages: Iterable[str] = (),
    ) -> None:
        self.levels = LevelRegistry(levels if levels is not None else DEFAULT_LEVELS)
        self.logger_class = logger_class_for(self.levels)
        # Wrapper libraries add their own packages so call sites skip them too.
        self.internal_packages = INTERNAL_PACKAGES + tuple(internal_packages)
        self.main_dir = main_dir if main_dir is not None else _default_main_dir()
        self.silenced_all = False
        self.silenced_console = False
        self._lock = threading.Lock()
        self._loggers: Dict[str, Logger] = {}
        self.root = self.logger_class(ROOT_NAME, self)

    def __repr__(self) -> str:
        return f"<LoggingSystem loggers={len(self._loggers)} levels={list(self.levels)}>"

    @property
    def loggers(self) -> Dict[str, Logger]:
        """Snapshot of the named loggers created so far (root excluded)."""
        with self._lock:
            return dict(self._loggers)

    def get_logger(self, name: Optional[str] = None) -> Logger:
        """Return the logger for name, creating it if needed. Empty name or "root" -> root."""
        if not name or name == ROOT_NAME:
            return self.root
        existing = self._loggers.get(name)
        if existing is not None:
            return existing
        with self._lock:
            existing = self._loggers.get(name)
            if existing is None:
                existing = self.logger_class(name, self)
                self._loggers[name] = existing
                logger.debug("Created logger %r", name)
        return existing

    def find_logger(self, name: str) -> Optional[Logger]:
        """The existing logger for name, or None. Never creates."""
        if name == ROOT_NAME:
            return self.root
        return self._loggers.get(name)

    def ancestors(self, name: str) -> Iterator[Logger]:
        """
        Existing ancestors of name, nearest first, always ending at root.

        Strips the trailing dot-segment repeatedly; prefixes with no logger are
        skipped rather than created.
        """
        if name == ROOT_NAME:
            return
        prefix = name
        while "." in prefix:
            prefix = prefix.rsplit(".", 1)[0]
            ancestor = self._loggers.get(prefix)
            if ancestor is not None:
                yield ancestor
        yield self.root

    def parent_of(self, logger: Logger) -> Optional[Logger]:
        if logger is self.root:
            return None
        return next(self.ancestors(logger.name))

    def logger_for(self, obj: Union[ModuleType, str, None]) -> Logger:
        """
        Logger named after a module or source file, relative to main_dir.

        "pkg/sub/mod.py" -> "pkg.sub.mod", "pkg/__init__.py" -> "pkg". Files
        outside main_dir use the module's __name__ when a module was given,
        otherwise the root logger.
        """
        module_name = None
        if isinstance(obj, ModuleType):
            filename = getattr(obj, "__file__", None)
            module_name = obj.__name__
        else:
            filename = obj
        name = self._name_from_path(filename) if filename else None
        if not name and module_name and module_name != "__main__":
            name = module_name
        return self.get_logger(name or ROOT_NAME)

    def _name_from_path(self, filename: str) -> Optional[str]:
        try:
            relative = os.path.relpath(os.path.abspath(filename), self.main_dir)
        except ValueError:
            return None
        if relative == os.curdir or relative.startswith(os.pardir):
            return None
        stem, ext = os.path.splitext(relative)
        if ext not in (".py", ".pyc", ".pyw"):
            stem = relative
        parts = [part for part in stem.replace(os.sep, "/").split("/") if part]
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts) or None

    # Process-wide silence ----------------------------------------------

    def silence(self, all: bool = True) -> None:
        """Silence every logger and handler, or with all=False only console handlers."""
        if all:
            self.silenced_all = True
        else:
            self.silenced_console = True

    def unsilence(self) -> None:
        self.silenced_all = False
        self.silenced_console = False


_system: Optional[LoggingSystem] = None
_system_lock = threading.Lock()


def init_logging(
    levels: Optional[Iterable[str]] = None,
    *,
    main_dir: Optional[str] = None,
    internal_packages: Iterable[str] = (),
) -> LoggingSystem:
    """Create a fresh LoggingSystem and install it as the process-wide instance."""
    global _system
    system = LoggingSystem(levels, main_dir=main_dir, internal_packages=internal_packages)
    with _system_lock:
        _system = system
    return system


def get_system() -> LoggingSystem:
    """The process-wide LoggingSystem, initialized with default levels on first use."""
    global _system
    if _system is None:
        with _system_lock:
            if _system is None:
                _system = LoggingSystem()
    return _system
