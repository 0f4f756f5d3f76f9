"""Console handler: colored (ANSI) or plain lines on stdout/stderr."""
from __future__ import annotations

import sys
from typing import IO, Any, Dict, Optional

from hierlog.core.levels import DEFAULT_LEVEL_COLORS
from hierlog.handlers.base import BaseHandler

ANSI_FORMAT = (
    "\033[90m{datetime}\033[m \033[1;30m[\033[{level_color}m{level}\033[1;30m]"
    "\033[0;1m {logger}:\033[m {message}"
)
PLAIN_FORMAT = "{datetime} [{level}] {logger}: {message}"


class ConsoleHandler(BaseHandler):
    """
    Writes one line per message to a stream (sys.stdout unless configured).

    Silenced by its own flag, by silence() on the logging system, and by the
    system-wide "silence console" switch.
    """

    default_level = "INFO"
    default_format = ANSI_FORMAT

    def __init__(self, *, color: bool = True, stream: Optional[IO[str]] = None, **config: Any) -> None:
        self.stream = stream
        self.level_colors: Dict[str, str] = dict(DEFAULT_LEVEL_COLORS)
        if not color and "format" not in config and "formatter" not in config:
            config["format"] = PLAIN_FORMAT
        super().__init__(**config)

    @property
    def silenced(self) -> bool:
        return super().silenced or self.system.silenced_console

    def emit(self, context) -> None:
        line = self.formatter.format(context, level_color=self.level_colors.get(context.level, "0"))
        # Resolved per call so redirected sys.stdout (e.g. in tests) is honoured.
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()
