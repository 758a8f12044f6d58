from __future__ import annotations

import logging
from typing import Optional, TextIO

from cukejunit.messages.models import Envelope
from cukejunit.query.index import EventIndex

from .config import FormatterOptions
from .printer import render_index

logger = logging.getLogger(__name__)


class WriterClosedError(RuntimeError):
    def __init__(self, message: str = "writer is closed") -> None:
        super().__init__(message)
        self.code = "writer.closed"
        self.message = message


class MessagesToJunitXmlWriter:
    """Collects events and writes the report to ``out`` when closed.

    The report is written at most once. If the ``with`` block exits with an
    exception nothing is written, so a broken stream never yields partial XML.
    """

    def __init__(self, out: TextIO, options: Optional[FormatterOptions] = None) -> None:
        self.out = out
        self.options = options or FormatterOptions()
        self.index = EventIndex()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, envelope: Envelope) -> None:
        if self._closed:
            raise WriterClosedError()
        self.index.ingest(envelope)

    def close(self) -> None:
        if self._closed:
            return
        try:
            content = render_index(self.index, self.options)
            self.out.write(content)
            self.out.flush()
        finally:
            self._closed = True

    def __enter__(self) -> "MessagesToJunitXmlWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            logger.debug("discarding report after %s", exc_type.__name__)
            self._closed = True
            return
        self.close()
