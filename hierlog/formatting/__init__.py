from hierlog.formatting.dumper import Dumper
from hierlog.formatting.formatters import JsonFormatter, TemplateFormatter
from hierlog.formatting.strformat import format_message, render_template

__all__ = [
    "Dumper",
    "JsonFormatter",
    "TemplateFormatter",
    "format_message",
    "render_template",
]
