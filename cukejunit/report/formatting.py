from __future__ import annotations

from typing import Callable, Mapping, Optional

from cukejunit.messages.models import TestStepResultStatus, Timestamp
from cukejunit.messages.timeconv import timestamp_to_datetime

STEP_LINE_WIDTH = 76


def format_step(keyword: str, text: str, status: TestStepResultStatus) -> str:
    """``Given some text.......passed``, padded with dots to a fixed column."""
    line = " ".join(part for part in (keyword.strip(), text.strip()) if part) + "."
    line += "." * max(1, STEP_LINE_WIDTH - len(line))
    return line + status.value.lower()


def format_seconds(value: float) -> str:
    text = f"{value:.6f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


def format_timestamp(timestamp: Optional[Timestamp]) -> Optional[str]:
    if timestamp is None:
        return None
    return timestamp_to_datetime(timestamp).strftime("%Y-%m-%dT%H:%M:%SZ")


def count_statuses(
    statuses: Mapping[TestStepResultStatus, int],
    predicate: Optional[Callable[[TestStepResultStatus], bool]] = None,
) -> int:
    return sum(
        count
        for status, count in statuses.items()
        if predicate is None or predicate(status)
    )
