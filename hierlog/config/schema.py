"""Pydantic schemas for dict-based logging configuration.

Shape:

    {
        "handlers": {"console": {"type": "console", "level": "INFO"}},
        "root": {"level": "DEBUG", "handlers": ["console"]},
        "loggers": {"db": {"level": "WARN", "propagate": False, "extra": {"component": "db"}}},
    }

Unknown keys are kept (``extra="allow"``) and passed through to the handler or
logger ``configure()``, which merges them permissively.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HandlerSchema(BaseModel):
    """One named handler. ``type`` is looked up in the handler registry."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., min_length=1, description="Registered handler type, e.g. console, file")
    level: Optional[Union[str, int]] = None
    format: Optional[str] = None
    silenced: bool = False
    dumper_args: Optional[Dict[str, Any]] = None

    def options(self) -> Dict[str, Any]:
        """Keyword arguments for the handler builder (everything but type/silenced)."""
        return self.model_dump(exclude={"type", "silenced"}, exclude_none=True)


class LoggerSchema(BaseModel):
    """Settings for one logger. Fields left out keep the logger's current value."""

    model_config = ConfigDict(extra="allow")

    level: Optional[Union[str, int]] = None
    handlers: Optional[List[str]] = Field(None, description="Names from the top-level handlers mapping")
    propagate: Optional[bool] = None
    extra: Optional[Dict[str, Any]] = None
    silenced: Optional[bool] = None


class LoggingSchema(BaseModel):
    """Whole-system configuration."""

    model_config = ConfigDict(extra="forbid")

    handlers: Dict[str, HandlerSchema] = Field(default_factory=dict)
    root: Optional[LoggerSchema] = None
    loggers: Dict[str, LoggerSchema] = Field(default_factory=dict)
    silence: Optional[str] = Field(None, pattern="^(none|console|all)$")
