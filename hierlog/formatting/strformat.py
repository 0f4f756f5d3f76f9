"""
String formatting helpers.

Two independent syntaxes live here:

- ``render_template`` fills ``{name}`` / ``{}`` placeholders in a handler's
  output template from a logging context.
- ``format_message`` applies printf-style substitution (``%s``, ``%d``, ...)
  of positional arguments into the message passed to ``Logger.log()``.
"""
from __future__ import annotations

import json
import math
import pprint
import re
from typing import Any, Mapping, Sequence

_TEMPLATE_PATTERN = re.compile(r"\{([a-zA-Z0-9_]*)\}")
_PRINTF_PATTERN = re.compile(r"%[sdifjoO%]")

_MISSING = object()


def _lookup(context: Any, name: str, overrides: Mapping[str, Any]) -> Any:
    if name in overrides:
        return overrides[name]
    value = getattr(context, name, _MISSING)
    if value is not _MISSING:
        return value
    extra = getattr(context, "extra", None)
    if isinstance(extra, Mapping) and name in extra:
        return extra[name]
    return _MISSING


def render_template(template: str, context: Any, *positional: Any, **overrides: Any) -> str:
    """
    Replace ``{name}`` with the named attribute of context and ``{}`` with the
    next positional argument.

    Lookup order for named placeholders: overrides, context attribute, key in
    ``context.extra``. Placeholders that resolve to nothing are left verbatim.
    """
    queue = list(positional)

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if not name:
            if not queue:
                return match.group(0)
            return str(queue.pop(0))
        value = _lookup(context, name, overrides)
        if value is _MISSING:
            return match.group(0)
        return "" if value is None else str(value)

    return _TEMPLATE_PATTERN.sub(_replace, template)


def _format_number(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return "NaN"
    if math.isnan(number):
        return "NaN"
    if number.is_integer() and not math.isinf(number):
        return str(int(number))
    return repr(number)


def _format_integer(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    try:
        return str(int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return "NaN"


def _format_float(value: Any) -> str:
    try:
        return repr(float(value))
    except (TypeError, ValueError, OverflowError):
        return "NaN"


def _format_json(value: Any) -> str:
    try:
        return json.dumps(value, default=str, ensure_ascii=False)
    except ValueError:
        return "[Circular]"


_CONVERTERS = {
    "%s": str,
    "%d": _format_number,
    "%i": _format_integer,
    "%f": _format_float,
    "%j": _format_json,
    "%o": pprint.pformat,
    "%O": pprint.pformat,
}


def format_message(message: Any, args: Sequence[Any] = ()) -> str:
    """
    printf-style substitution of args into message.

    With no args the message is returned unchanged (so a literal ``%`` needs
    no escaping). Surplus args are appended, separated by spaces; a
    placeholder with no arg left is kept as-is. A non-string message is
    converted with str() and joined with the args.
    """
    if not isinstance(message, str):
        return " ".join(str(part) for part in (message, *args))
    if not args:
        return message

    queue = list(args)

    def _replace(match: "re.Match[str]") -> str:
        placeholder = match.group(0)
        if placeholder == "%%":
            return "%"
        if not queue:
            return placeholder
        return _CONVERTERS[placeholder](queue.pop(0))

    text = _PRINTF_PATTERN.sub(_replace, message)
    if queue:
        text = " ".join([text, *(str(arg) for arg in queue)])
    return text
