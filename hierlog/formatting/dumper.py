"""Deferred pretty-printing of objects passed as log arguments."""
from __future__ import annotations

import pprint
from typing import Any, Dict, Optional

_PFORMAT_OPTIONS = ("indent", "width", "depth", "compact", "sort_dicts", "underscore_numbers")


class Dumper:
    """
    Wraps an object so it is only pretty-printed if a handler renders the message.

    Before rendering, the context hands over the handler's ``dumper_args``
    (``pprint.pformat`` keyword arguments); an explicit ``depth`` given to the
    Dumper wins over the handler's.
    """

    def __init__(self, target: Any, depth: Optional[int] = None) -> None:
        self.target = target
        self.depth = depth
        self.options: Dict[str, Any] = {}

    def set_logging_context(self, context: Any) -> None:
        options = {
            key: value
            for key, value in (getattr(context, "dumper_args", None) or {}).items()
            if key in _PFORMAT_OPTIONS
        }
        if self.depth:
            options["depth"] = self.depth
        self.options = options

    def __str__(self) -> str:
        return pprint.pformat(self.target, **self.options)

    def __repr__(self) -> str:
        return f"Dumper({self.target!r}, depth={self.depth!r})"
