from __future__ import annotations

from .models import Envelope
from .ndjson import MessageParseError, parse_envelope, read_envelopes
from .timeconv import duration_between, duration_to_seconds, timestamp_to_nanos

__all__ = [
    "Envelope",
    "MessageParseError",
    "duration_between",
    "duration_to_seconds",
    "parse_envelope",
    "read_envelopes",
    "timestamp_to_nanos",
]
