from __future__ import annotations

from typing import Iterable

from cukejunit.messages.models import Envelope

from .index import EventIndex
from .resolver import LineageResolver


def build_index(envelopes: Iterable[Envelope]) -> EventIndex:
    index = EventIndex()
    for envelope in envelopes:
        index.ingest(envelope)
    return index


def create_resolver(index: EventIndex) -> LineageResolver:
    return LineageResolver(index.documents)
