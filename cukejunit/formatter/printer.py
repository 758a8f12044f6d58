from __future__ import annotations

import logging
from typing import Callable, Optional

from cukejunit.messages.models import Envelope
from cukejunit.query.index import EventIndex
from cukejunit.report.builder import ReportBuilder
from cukejunit.report.xml_writer import render_xml

from .config import FormatterOptions

logger = logging.getLogger(__name__)


def render_index(index: EventIndex, options: FormatterOptions) -> str:
    suite = ReportBuilder(
        index,
        suite_name=options.suite_name,
        test_class_name=options.test_class_name,
        naming_strategy=options.test_naming_strategy,
    ).build()
    return render_xml(suite)


class JunitXmlPrinter:
    """Feeds events into an index and writes the report once the run finishes."""

    def __init__(
        self,
        options: Optional[FormatterOptions],
        write: Callable[[str], None],
    ) -> None:
        self.options = options or FormatterOptions()
        self.index = EventIndex()
        self._write = write
        self._emitted = False

    @property
    def emitted(self) -> bool:
        return self._emitted

    def update(self, envelope: Envelope) -> None:
        self.index.ingest(envelope)
        if envelope.test_run_finished is None or self._emitted:
            return
        content = render_index(self.index, self.options)
        self._emitted = True
        logger.debug("writing junit report (%d bytes)", len(content))
        self._write(content)
