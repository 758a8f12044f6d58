from __future__ import annotations

from cukejunit.messages.models import TestStepResultStatus, Timestamp
from cukejunit.report.formatting import (
    STEP_LINE_WIDTH,
    count_statuses,
    format_seconds,
    format_step,
    format_timestamp,
)


def test_format_step_pads_to_fixed_column() -> None:
    line = format_step("Given ", "I have 42 cukes", TestStepResultStatus.PASSED)
    assert line.startswith("Given I have 42 cukes....")
    assert line.endswith(".passed")
    assert len(line) == STEP_LINE_WIDTH + len("passed")


def test_format_step_always_keeps_a_dot_before_status() -> None:
    text = "x" * 100
    line = format_step("When ", text, TestStepResultStatus.UNDEFINED)
    assert line == f"When {text}..undefined"


def test_format_step_strips_keyword_and_text() -> None:
    line = format_step("  Then  ", "  done ", TestStepResultStatus.FAILED)
    assert line.startswith("Then done.")


def test_format_seconds() -> None:
    assert format_seconds(0) == "0.0"
    assert format_seconds(3) == "3.0"
    assert format_seconds(0.005) == "0.005"
    assert format_seconds(3.000987654) == "3.000988"
    assert format_seconds(12.5) == "12.5"


def test_format_timestamp_is_utc_to_the_second() -> None:
    assert format_timestamp(Timestamp(seconds=0)) == "1970-01-01T00:00:00Z"
    assert (
        format_timestamp(Timestamp(seconds=1_600_000_000, nanos=999_999_999))
        == "2020-09-13T12:26:40Z"
    )
    assert format_timestamp(None) is None


def test_count_statuses_with_predicate() -> None:
    counts = {status: 1 for status in TestStepResultStatus}
    assert count_statuses(counts) == len(TestStepResultStatus)
    passed_only = count_statuses(
        counts, lambda status: status == TestStepResultStatus.PASSED
    )
    assert passed_only == 1


def test_format_step_without_keyword_has_no_leading_space() -> None:
    line = format_step("", "I have 42 cukes", TestStepResultStatus.PASSED)
    assert line.startswith("I have 42 cukes.")
    assert len(line) == STEP_LINE_WIDTH + len("passed")
