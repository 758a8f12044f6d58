from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional

from cukejunit.messages.models import Envelope

from .config import FormatterOptions
from .writer import MessagesToJunitXmlWriter


def convert_envelopes(
    envelopes: Iterable[Envelope], options: Optional[FormatterOptions] = None
) -> str:
    """Render a complete event stream; raises before producing any output on error."""
    buffer = StringIO()
    with MessagesToJunitXmlWriter(buffer, options) as writer:
        for envelope in envelopes:
            writer.write(envelope)
    return buffer.getvalue()
