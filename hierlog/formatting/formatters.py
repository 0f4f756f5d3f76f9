"""
Formatters: template text for console/file, JSON lines for machine consumption.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from hierlog.formatting.strformat import render_template


class TemplateFormatter:
    """Render a context through a ``{name}`` template (see render_template)."""

    def __init__(self, template: str) -> None:
        self.template = template

    def __repr__(self) -> str:
        return f"TemplateFormatter({self.template!r})"

    def format(self, context: Any, **overrides: Any) -> str:
        return render_template(self.template, context, **overrides)


class JsonFormatter:
    """
    Format contexts as one JSON object per line (JSON Lines).
    Production-friendly for aggregation and parsing.
    """

    def __init__(
        self,
        *,
        include_extra: bool = True,
        include_call_site: bool = False,
        timestamp_key: str = "timestamp",
        level_key: str = "level",
        logger_key: str = "logger",
        message_key: str = "message",
    ) -> None:
        self.include_extra = include_extra
        self.include_call_site = include_call_site
        self.timestamp_key = timestamp_key
        self.level_key = level_key
        self.logger_key = logger_key
        self.message_key = message_key

    def format(self, context: Any, **_handler_fields: Any) -> str:
        log_dict: Dict[str, Any] = {
            self.timestamp_key: context.timestamp.isoformat(),
            self.level_key: context.level,
            self.logger_key: context.logger,
            self.message_key: context.render(),
        }
        if self.include_call_site and context.call_site is not None:
            log_dict["filename"] = context.filename
            log_dict["line"] = context.line
            log_dict["func"] = context.func
        if self.include_extra and context.extra:
            log_dict["extra"] = context.extra
        return json.dumps(log_dict, default=str, ensure_ascii=False)
