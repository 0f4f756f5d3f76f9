"""Abstract base handler for all log handlers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from hierlog.core.levels import UNSET, LevelLike
from hierlog.core.system import get_system
from hierlog.formatting.formatters import TemplateFormatter

if TYPE_CHECKING:
    from hierlog.core.context import Context, HandlerContext
    from hierlog.core.system import LoggingSystem


class BaseHandler(ABC):
    """
    Every handler implements ``emit()``; ``handle()`` applies the handler's own
    level filter and silence flags first.

    Configuration is permissive: keyword arguments are merged onto the instance
    by configure(), so subclasses only declare defaults as class attributes.
    """

    default_level: Optional[LevelLike] = None
    """Class-level default; None accepts every level."""

    default_format: str = "{datetime} [{level}] {logger}: {message}"

    def __init__(self, *, system: Optional["LoggingSystem"] = None, **config: Any) -> None:
        self.system = system or get_system()
        self._level_idx = UNSET
        self._silenced = False
        self.dumper_args: Dict[str, Any] = {}
        self.formatter: Any = TemplateFormatter(self.default_format)
        # Custom level lists may not contain the default; accept everything then.
        if self.default_level is not None and self.default_level in self.system.levels:
            self.level = self.default_level
        self.configure(**config)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ({self.level or 'ALL'})>"

    def configure(self, **config: Any) -> "BaseHandler":
        for key, value in config.items():
            setattr(self, key, value)
        return self

    # Level ---------------------------------------------------------------

    @property
    def level_idx(self) -> int:
        return self._level_idx

    @level_idx.setter
    def level_idx(self, value: Optional[int]) -> None:
        if value is None or value == UNSET:
            self._level_idx = UNSET
        else:
            self._level_idx = self.system.levels.index_of(value)

    @property
    def level(self) -> Optional[str]:
        return self.system.levels.name_of(self._level_idx)

    @level.setter
    def level(self, value: Optional[LevelLike]) -> None:
        self._level_idx = UNSET if value is None else self.system.levels.index_of(value)

    def step_verbosity(self, steps: int) -> Optional[str]:
        """Positive steps log more (lower level), negative steps log less."""
        level = self.level or self.system.levels.lowest
        for _ in range(abs(steps)):
            if steps > 0:
                lower = self.system.levels.step_down(level)
                if lower is None:
                    break
                level = lower
            else:
                level = self.system.levels.step_up(level)
        self.level = level
        return self.level

    # Formatting ----------------------------------------------------------

    @property
    def format(self) -> Optional[str]:
        return getattr(self.formatter, "template", None)

    @format.setter
    def format(self, template: str) -> None:
        self.formatter = TemplateFormatter(template)

    # Silence -------------------------------------------------------------

    @property
    def silenced(self) -> bool:
        return self._silenced or self.system.silenced_all

    def silence(self) -> "BaseHandler":
        self._silenced = True
        return self

    def unsilence(self) -> "BaseHandler":
        self._silenced = False
        return self

    # Dispatch ------------------------------------------------------------

    def accepts(self, context: "Context") -> bool:
        return self._level_idx == UNSET or context.level_idx >= self._level_idx

    def handle(self, context: "Context") -> None:
        if self.silenced or not self.accepts(context):
            return
        self.emit(context.for_handler(self))

    @abstractmethod
    def emit(self, context: "HandlerContext") -> None:
        ...
