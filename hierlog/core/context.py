"""
Logging contexts: one per log call.

A Context captures everything a handler may need about a log event. Expensive
parts are deferred: the message is rendered by ``render()`` (memoized) and the
call site is resolved from the recorded caller frame only when one of
``filename``, ``line``, ``column``, ``func`` or ``type`` is read.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone
from types import FrameType
from typing import Any, Dict, Optional, Sequence

from hierlog.core.callsite import FrameDescriptor, describe_frame
from hierlog.formatting.strformat import format_message


class Context:
    """A single log event."""

    def __init__(
        self,
        logger: str,
        level_idx: int,
        level: Optional[str],
        message: Any,
        args: Sequence[Any] = (),
        *,
        extra: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
        caller_frame: Optional[FrameType] = None,
        main_dir: Optional[str] = None,
    ) -> None:
        self.logger = logger
        self.level_idx = level_idx
        self.level = level
        self.raw_message = message
        self.args = tuple(args)
        self.extra: Dict[str, Any] = dict(extra or {})
        self.timestamp = timestamp or datetime.now(timezone.utc)
        self.main_dir = main_dir
        self._caller_frame = caller_frame
        self._call_site: Optional[FrameDescriptor] = None
        self._rendered: Optional[str] = None

    def __repr__(self) -> str:
        return f"Context({self.logger!r}, {self.level!r}, {self.raw_message!r})"

    # Message -------------------------------------------------------------

    def _render_for(self, view: Any) -> str:
        for arg in self.args:
            hook = getattr(arg, "set_logging_context", None)
            if callable(hook):
                hook(view)
        return format_message(self.raw_message, self.args)

    def render(self) -> str:
        """The message with its args substituted. Rendered once, then cached."""
        if self._rendered is None:
            self._rendered = self._render_for(self)
        return self._rendered

    @property
    def message(self) -> str:
        return self.render()

    def for_handler(self, handler: Any) -> "HandlerContext":
        """A view of this context carrying handler-specific rendering hints."""
        return HandlerContext(self, handler)

    # Timestamps ----------------------------------------------------------

    @property
    def date(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d")

    @property
    def time(self) -> str:
        return self.timestamp.strftime("%H:%M:%S.") + f"{self.timestamp.microsecond // 1000:03d}"

    @property
    def datetime(self) -> str:
        return f"{self.date} {self.time}"

    # Call site -----------------------------------------------------------

    @property
    def call_site(self) -> Optional[FrameDescriptor]:
        if self._call_site is None and self._caller_frame is not None:
            self._call_site = describe_frame(self._caller_frame)
            self._caller_frame = None
        return self._call_site

    @property
    def filename(self) -> Optional[str]:
        site = self.call_site
        if site is None:
            return None
        if self.main_dir:
            try:
                return os.path.relpath(site.file_name, self.main_dir)
            except ValueError:
                # Different drive on Windows.
                return site.file_name
        return site.file_name

    @property
    def line(self) -> Optional[int]:
        site = self.call_site
        return site.line_number if site else None

    @property
    def column(self) -> Optional[int]:
        site = self.call_site
        return site.column_number if site else None

    @property
    def func(self) -> Optional[str]:
        site = self.call_site
        return site.function_name if site else None

    @property
    def type(self) -> Optional[str]:
        site = self.call_site
        return site.type_name if site else None


class HandlerContext:
    """
    Per-handler view of a Context.

    Attribute reads fall through to the wrapped context. The message is
    rendered again only when the handler has dumper args, since those can
    change how arguments print.
    """

    def __init__(self, context: Context, handler: Any) -> None:
        self.context = context
        self.handler = handler
        self.dumper_args: Dict[str, Any] = dict(getattr(handler, "dumper_args", None) or {})
        self._rendered: Optional[str] = None

    def __getattr__(self, name: str) -> Any:
        if name == "context":
            raise AttributeError(name)
        return getattr(self.context, name)

    def __repr__(self) -> str:
        return f"HandlerContext({self.context!r}, handler={type(self.handler).__name__})"

    def render(self) -> str:
        if not self.dumper_args:
            return self.context.render()
        if self._rendered is None:
            self._rendered = self.context._render_for(self)
        return self._rendered

    @property
    def message(self) -> str:
        return self.render()

    def for_handler(self, handler: Any) -> "HandlerContext":
        return HandlerContext(self.context, handler)
