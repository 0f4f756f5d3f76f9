"""
Handler registry: map handler type name -> handler class.

Used by dict-based configuration to build handlers from plain config.
"""
from __future__ import annotations

from typing import Any, Callable, Dict

from hierlog.core.exceptions import ConfigurationError
from hierlog.handlers.base import BaseHandler
from hierlog.handlers.console import ConsoleHandler
from hierlog.handlers.file import FileHandler

HandlerBuilder = Callable[..., BaseHandler]


class HandlerRegistry:
    """Maps handler type to a builder that takes config keywords and returns a BaseHandler."""

    def __init__(self) -> None:
        self._builders: Dict[str, HandlerBuilder] = {}

    def register(self, handler_type: str, builder: HandlerBuilder) -> None:
        """Register a builder (usually the handler class) for this type name."""
        self._builders[handler_type] = builder

    def get(self, handler_type: str) -> HandlerBuilder | None:
        """Return the builder for this type, or None."""
        return self._builders.get(handler_type)

    def build(self, handler_type: str, **config: Any) -> BaseHandler:
        """Build a handler of this type. Raises ConfigurationError for unknown types."""
        builder = self._builders.get(handler_type)
        if builder is None:
            raise ConfigurationError(
                f"Unknown handler type: {handler_type!r}. Registered: {sorted(self._builders)}",
                details={"type": handler_type},
            )
        return builder(**config)


# Default registry with the built-in handlers pre-registered.
default_registry = HandlerRegistry()
default_registry.register("console", ConsoleHandler)
default_registry.register("file", FileHandler)
