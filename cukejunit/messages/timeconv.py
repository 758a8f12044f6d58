from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .models import Duration, Timestamp

NANOS_PER_SECOND = 1_000_000_000


def timestamp_to_nanos(timestamp: Timestamp) -> int:
    return timestamp.seconds * NANOS_PER_SECOND + timestamp.nanos


def duration_between(start: Timestamp, end: Timestamp) -> Duration:
    seconds, nanos = divmod(
        timestamp_to_nanos(end) - timestamp_to_nanos(start), NANOS_PER_SECOND
    )
    return Duration(seconds=seconds, nanos=nanos)


def duration_to_seconds(duration: Optional[Duration]) -> float:
    if duration is None:
        return 0.0
    return (duration.seconds * NANOS_PER_SECOND + duration.nanos) / NANOS_PER_SECOND


def timestamp_to_datetime(timestamp: Timestamp) -> datetime:
    return datetime.fromtimestamp(timestamp.seconds, tz=timezone.utc)
