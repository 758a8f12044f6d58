from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from cukejunit.messages.models import Pickle, TestCaseStarted, TestStepResultStatus
from cukejunit.messages.timeconv import duration_to_seconds
from cukejunit.query.index import EventIndex
from cukejunit.query.lineage import DEFAULT_NAMING_STRATEGY, NamingStrategy
from cukejunit.query.resolver import LineageResolver

from .errors import ReportStateError
from .formatting import count_statuses, format_step, format_timestamp
from .models import ReportFailure, ReportSuite, ReportTestCase

logger = logging.getLogger(__name__)

DEFAULT_SUITE_NAME = "Cucumber"


def _pickle_order(pickle: Pickle) -> Tuple[str, int, int]:
    # Pickles without a location sort first within their uri.
    if pickle.location is None:
        return (pickle.uri, 0, 0)
    return (pickle.uri, 1, pickle.location.line)


class ReportBuilder:
    """Synthesizes the report model from a fully ingested ``EventIndex``."""

    def __init__(
        self,
        index: EventIndex,
        resolver: Optional[LineageResolver] = None,
        *,
        suite_name: str = DEFAULT_SUITE_NAME,
        test_class_name: Optional[str] = None,
        naming_strategy: Optional[NamingStrategy] = None,
    ) -> None:
        self.index = index
        self.resolver = resolver or LineageResolver(index.documents)
        self.suite_name = suite_name
        self.test_class_name = test_class_name
        self.naming_strategy = naming_strategy or DEFAULT_NAMING_STRATEGY
        self._report: Optional[ReportSuite] = None

    def build(self) -> ReportSuite:
        if self._report is not None:
            return self._report
        if not self.index.is_run_finished:
            raise ReportStateError(
                "report.run_not_finished",
                "cannot build a report before testRunFinished was ingested",
            )

        statuses = self.index.count_final_statuses()
        run_started = self.index.find_test_run_started()
        self._report = ReportSuite(
            name=self.suite_name,
            time=duration_to_seconds(self.index.find_run_duration()),
            tests=count_statuses(statuses),
            skipped=statuses[TestStepResultStatus.SKIPPED],
            failures=count_statuses(
                statuses,
                lambda status: status
                not in (TestStepResultStatus.PASSED, TestStepResultStatus.SKIPPED),
            ),
            errors=0,
            timestamp=format_timestamp(run_started.timestamp if run_started else None),
            test_cases=tuple(self._make_test_cases()),
        )
        logger.debug(
            "built report: tests=%d failures=%d skipped=%d",
            self._report.tests,
            self._report.failures,
            self._report.skipped,
        )
        return self._report

    def _make_test_cases(self) -> List[ReportTestCase]:
        attempts = [
            (self.index.find_pickle_by(attempt), attempt)
            for attempt in self.index.find_final_attempts()
        ]
        attempts.sort(key=lambda item: _pickle_order(item[0]))
        return [self._make_test_case(pickle, attempt) for pickle, attempt in attempts]

    def _make_test_case(
        self, pickle: Pickle, attempt: TestCaseStarted
    ) -> ReportTestCase:
        return ReportTestCase(
            classname=self._classname(pickle),
            name=self.resolver.find_name_of(pickle, self.naming_strategy),
            time=duration_to_seconds(self.index.find_test_case_duration_by(attempt)),
            failure=self._make_failure(attempt),
            output=self._make_output(attempt),
        )

    def _classname(self, pickle: Pickle) -> str:
        if self.test_class_name is not None:
            return self.test_class_name
        feature_name = self.resolver.find_feature_name_by(pickle)
        return feature_name if feature_name is not None else pickle.uri

    def _make_failure(self, attempt: TestCaseStarted) -> Optional[ReportFailure]:
        result = self.index.find_most_severe_step_result_by(attempt)
        if result is None or result.status == TestStepResultStatus.PASSED:
            return None
        exception = result.exception
        stack = exception.stack_trace if exception else None
        return ReportFailure(
            kind=(
                "skipped"
                if result.status == TestStepResultStatus.SKIPPED
                else "failure"
            ),
            type=exception.type if exception else None,
            message=exception.message if exception else None,
            stack=stack if stack is not None else result.message,
        )

    def _make_output(self, attempt: TestCaseStarted) -> str:
        lines: List[str] = []
        outcomes = self.index.find_step_outcomes_and_test_steps_by(attempt)
        for outcome, test_step in outcomes:
            pickle_step = self.index.find_pickle_step_by(test_step)
            if pickle_step is None:
                continue
            step = self.index.find_indexed_step_by(pickle_step)
            keyword = step.keyword if step is not None else ""
            status = outcome.test_step_result.status
            lines.append(format_step(keyword, pickle_step.text, status))
        return "\n".join(lines)
