from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from cukejunit.messages.models import (
    Duration,
    Envelope,
    Pickle,
    PickleStep,
    Step,
    TestCase,
    TestCaseFinished,
    TestCaseStarted,
    TestRunFinished,
    TestRunStarted,
    TestStep,
    TestStepFinished,
    TestStepResult,
    TestStepResultStatus,
)
from cukejunit.messages.timeconv import duration_between

from .documents import DocumentIndex
from .errors import missing

logger = logging.getLogger(__name__)

# Most severe first.
SEVERITY_ORDER: Tuple[TestStepResultStatus, ...] = (
    TestStepResultStatus.UNKNOWN,
    TestStepResultStatus.AMBIGUOUS,
    TestStepResultStatus.FAILED,
    TestStepResultStatus.PENDING,
    TestStepResultStatus.UNDEFINED,
    TestStepResultStatus.SKIPPED,
    TestStepResultStatus.PASSED,
)
_SEVERITY_RANK = {
    status: len(SEVERITY_ORDER) - position
    for position, status in enumerate(SEVERITY_ORDER)
}


def most_severe_result(
    results: Iterable[TestStepResult],
) -> Optional[TestStepResult]:
    """Worst result under ``SEVERITY_ORDER``; on ties the first one wins."""
    worst: Optional[TestStepResult] = None
    for result in results:
        if worst is None or (
            _SEVERITY_RANK[result.status] > _SEVERITY_RANK[worst.status]
        ):
            worst = result
    return worst


class EventIndex:
    """Id-keyed tables built incrementally from the event stream.

    Static document structure lives in a composed :class:`DocumentIndex`;
    this class layers the executable plan and the per-attempt outcomes on top
    of it. Lookups of ids the protocol guarantees raise ``CorrelationError``;
    lookups of data that may legitimately be missing return ``None``.
    """

    def __init__(self, documents: Optional[DocumentIndex] = None) -> None:
        self.documents = documents or DocumentIndex()
        self._test_run_started: Optional[TestRunStarted] = None
        self._test_run_finished: Optional[TestRunFinished] = None
        self._pickle_by_id: Dict[str, Pickle] = {}
        self._pickle_step_by_id: Dict[str, PickleStep] = {}
        self._test_case_by_id: Dict[str, TestCase] = {}
        self._test_step_by_id: Dict[str, TestStep] = {}
        self._test_case_started_by_id: Dict[str, TestCaseStarted] = {}
        self._current_attempt_by_test_case_id: Dict[str, TestCaseStarted] = {}
        self._final_attempt_by_test_case_id: Dict[str, TestCaseStarted] = {}
        self._test_case_finished_by_started_id: Dict[str, TestCaseFinished] = {}
        self._step_outcomes_by_started_id: Dict[str, List[TestStepFinished]] = {}

    def ingest(self, envelope: Envelope) -> None:
        if envelope.gherkin_document is not None:
            self.documents.update(envelope.gherkin_document)
        if envelope.pickle is not None:
            self._ingest_pickle(envelope.pickle)
        if envelope.test_case is not None:
            self._ingest_test_case(envelope.test_case)
        if envelope.test_run_started is not None:
            self._ingest_test_run_started(envelope.test_run_started)
        if envelope.test_case_started is not None:
            self._ingest_test_case_started(envelope.test_case_started)
        if envelope.test_step_finished is not None:
            self._ingest_test_step_finished(envelope.test_step_finished)
        if envelope.test_case_finished is not None:
            self._ingest_test_case_finished(envelope.test_case_finished)
        if envelope.test_run_finished is not None:
            self._ingest_test_run_finished(envelope.test_run_finished)

    update = ingest

    @property
    def is_run_finished(self) -> bool:
        return self._test_run_finished is not None

    # Ingestion

    def _ingest_pickle(self, pickle: Pickle) -> None:
        self._pickle_by_id[pickle.id] = pickle
        for pickle_step in pickle.steps:
            self._pickle_step_by_id[pickle_step.id] = pickle_step

    def _ingest_test_case(self, test_case: TestCase) -> None:
        if test_case.pickle_id not in self._pickle_by_id:
            raise missing(
                "pickle", test_case.pickle_id, referenced_by=f"testCase {test_case.id}"
            )
        self._test_case_by_id[test_case.id] = test_case
        for test_step in test_case.test_steps:
            self._test_step_by_id[test_step.id] = test_step

    def _ingest_test_run_started(self, event: TestRunStarted) -> None:
        if self._test_run_started is not None:
            logger.warning("ignoring repeated testRunStarted")
            return
        self._test_run_started = event
        logger.debug("test run started")

    def _ingest_test_case_started(self, event: TestCaseStarted) -> None:
        if event.test_case_id not in self._test_case_by_id:
            raise missing(
                "testCase",
                event.test_case_id,
                referenced_by=f"testCaseStarted {event.id}",
            )
        self._test_case_started_by_id[event.id] = event
        self._current_attempt_by_test_case_id[event.test_case_id] = event
        self._step_outcomes_by_started_id.setdefault(event.id, [])

    def _ingest_test_step_finished(self, event: TestStepFinished) -> None:
        if event.test_case_started_id not in self._test_case_started_by_id:
            raise missing(
                "testCaseStarted",
                event.test_case_started_id,
                referenced_by=f"testStepFinished for step {event.test_step_id}",
            )
        if event.test_step_id not in self._test_step_by_id:
            raise missing(
                "testStep",
                event.test_step_id,
                referenced_by=f"testStepFinished in {event.test_case_started_id}",
            )
        self._step_outcomes_by_started_id[event.test_case_started_id].append(event)

    def _ingest_test_case_finished(self, event: TestCaseFinished) -> None:
        attempt = self._test_case_started_by_id.get(event.test_case_started_id)
        if attempt is None:
            raise missing(
                "testCaseStarted",
                event.test_case_started_id,
                referenced_by="testCaseFinished",
            )
        self._test_case_finished_by_started_id[attempt.id] = event
        if not event.will_be_retried:
            self._final_attempt_by_test_case_id[attempt.test_case_id] = attempt
            logger.debug(
                "final attempt %s recorded for test case %s",
                attempt.id,
                attempt.test_case_id,
            )

    def _ingest_test_run_finished(self, event: TestRunFinished) -> None:
        if self._test_run_finished is not None:
            logger.warning("ignoring repeated testRunFinished")
            return
        self._test_run_finished = event
        logger.debug(
            "test run finished: %d test cases, %d final attempts",
            len(self._test_case_by_id),
            len(self._final_attempt_by_test_case_id),
        )

    # Single-hop lookups

    def find_test_case_by(self, attempt: TestCaseStarted) -> TestCase:
        test_case = self._test_case_by_id.get(attempt.test_case_id)
        if test_case is None:
            raise missing(
                "testCase",
                attempt.test_case_id,
                referenced_by=f"testCaseStarted {attempt.id}",
            )
        return test_case

    def find_pickle_by(self, item: Union[TestCase, TestCaseStarted]) -> Pickle:
        test_case = item if isinstance(item, TestCase) else self.find_test_case_by(item)
        pickle = self._pickle_by_id.get(test_case.pickle_id)
        if pickle is None:
            raise missing(
                "pickle", test_case.pickle_id, referenced_by=f"testCase {test_case.id}"
            )
        return pickle

    def find_test_step_by_id(self, test_step_id: str) -> TestStep:
        test_step = self._test_step_by_id.get(test_step_id)
        if test_step is None:
            raise missing("testStep", test_step_id, referenced_by="lookup")
        return test_step

    def find_pickle_step_by(self, test_step: TestStep) -> Optional[PickleStep]:
        """``None`` for hooks, which do not correspond to a pickle step."""
        if test_step.pickle_step_id is None:
            return None
        pickle_step = self._pickle_step_by_id.get(test_step.pickle_step_id)
        if pickle_step is None:
            raise missing(
                "pickleStep",
                test_step.pickle_step_id,
                referenced_by=f"testStep {test_step.id}",
            )
        return pickle_step

    def find_step_by(self, pickle_step: PickleStep) -> Step:
        step = self.find_indexed_step_by(pickle_step)
        if step is None:
            step_id = (
                pickle_step.ast_node_ids[0] if pickle_step.ast_node_ids else "<none>"
            )
            raise missing("step", step_id, referenced_by=f"pickleStep {pickle_step.id}")
        return step

    def find_indexed_step_by(self, pickle_step: PickleStep) -> Optional[Step]:
        """``None`` when the document holding the step was never ingested."""
        if not pickle_step.ast_node_ids:
            return None
        return self.documents.find_step(pickle_step.ast_node_ids[0])

    # Attempts

    def find_test_run_started(self) -> Optional[TestRunStarted]:
        return self._test_run_started

    def find_test_run_finished(self) -> Optional[TestRunFinished]:
        return self._test_run_finished

    def find_all_attempts(self) -> List[TestCaseStarted]:
        """Current attempt per test case, in the order test cases first started."""
        return list(self._current_attempt_by_test_case_id.values())

    def find_final_attempts(self) -> List[TestCaseStarted]:
        """Attempts whose outcome was reported with ``willBeRetried`` false."""
        return list(self._final_attempt_by_test_case_id.values())

    def find_final_attempt_by(self, test_case: TestCase) -> Optional[TestCaseStarted]:
        return self._final_attempt_by_test_case_id.get(test_case.id)

    def count_test_cases_started(self) -> int:
        return len(self._current_attempt_by_test_case_id)

    def find_test_case_finished_by(
        self, attempt: TestCaseStarted
    ) -> Optional[TestCaseFinished]:
        return self._test_case_finished_by_started_id.get(attempt.id)

    def find_step_outcomes_by(
        self, attempt: TestCaseStarted
    ) -> List[TestStepFinished]:
        return list(self._step_outcomes_by_started_id.get(attempt.id, []))

    def find_step_outcomes_and_test_steps_by(
        self, attempt: TestCaseStarted
    ) -> List[Tuple[TestStepFinished, TestStep]]:
        return [
            (outcome, self.find_test_step_by_id(outcome.test_step_id))
            for outcome in self.find_step_outcomes_by(attempt)
        ]

    def find_most_severe_step_result_by(
        self, attempt: TestCaseStarted
    ) -> Optional[TestStepResult]:
        return most_severe_result(
            outcome.test_step_result for outcome in self.find_step_outcomes_by(attempt)
        )

    def count_final_statuses(self) -> Dict[TestStepResultStatus, int]:
        counts = {status: 0 for status in TestStepResultStatus}
        for attempt in self._final_attempt_by_test_case_id.values():
            result = self.find_most_severe_step_result_by(attempt)
            # A test case without steps passes by definition.
            status = result.status if result else TestStepResultStatus.PASSED
            counts[status] += 1
        return counts

    # Durations

    def find_run_duration(self) -> Optional[Duration]:
        if self._test_run_started is None or self._test_run_finished is None:
            return None
        return duration_between(
            self._test_run_started.timestamp, self._test_run_finished.timestamp
        )

    def find_test_case_duration_by(
        self, attempt: TestCaseStarted
    ) -> Optional[Duration]:
        finished = self.find_test_case_finished_by(attempt)
        if finished is None:
            return None
        return duration_between(attempt.timestamp, finished.timestamp)
