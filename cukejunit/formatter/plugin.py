from __future__ import annotations

from typing import Any, Callable, Mapping, Union

from cukejunit.messages.models import Envelope

from .config import FormatterOptions
from .printer import JunitXmlPrinter

OPTIONS_KEY = "junit"

MessageHandler = Callable[[Envelope], None]


def formatter(
    *,
    options: Union[FormatterOptions, Mapping[str, Any], None],
    on: Callable[[str, MessageHandler], None],
    write: Callable[[str], None],
) -> JunitXmlPrinter:
    printer = JunitXmlPrinter(FormatterOptions.coerce(options), write)
    on("message", printer.update)
    return printer
