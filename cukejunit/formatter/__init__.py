from .api import convert_envelopes
from .config import FormatterOptions
from .plugin import OPTIONS_KEY, formatter
from .printer import JunitXmlPrinter, render_index
from .writer import MessagesToJunitXmlWriter, WriterClosedError

__all__ = [
    "OPTIONS_KEY",
    "FormatterOptions",
    "JunitXmlPrinter",
    "MessagesToJunitXmlWriter",
    "WriterClosedError",
    "convert_envelopes",
    "formatter",
    "render_index",
]
