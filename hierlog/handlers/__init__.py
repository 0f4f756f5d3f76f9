from hierlog.handlers.base import BaseHandler
from hierlog.handlers.console import ANSI_FORMAT, PLAIN_FORMAT, ConsoleHandler
from hierlog.handlers.file import FileHandler
from hierlog.handlers.registry import HandlerRegistry, default_registry

__all__ = [
    "BaseHandler",
    "ConsoleHandler",
    "FileHandler",
    "HandlerRegistry",
    "default_registry",
    "ANSI_FORMAT",
    "PLAIN_FORMAT",
]
