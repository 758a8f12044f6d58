from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from cukejunit.messages.models import (
    Envelope,
    Examples,
    Feature,
    FeatureChild,
    GherkinDocument,
    Location,
    MessageException,
    Pickle,
    PickleStep,
    Scenario,
    Step,
    TableRow,
    TestCase,
    TestCaseFinished,
    TestCaseStarted,
    TestRunFinished,
    TestRunStarted,
    TestStep,
    TestStepFinished,
    TestStepResult,
    TestStepResultStatus,
    Timestamp,
)
from cukejunit.query.index import EventIndex

Outcome = Union[TestStepResultStatus, TestStepResult]


def ts(seconds: int, nanos: int = 0) -> Timestamp:
    return Timestamp(seconds=seconds, nanos=nanos)


class StreamBuilder:
    """Emits a well-formed event stream, one scenario at a time."""

    def __init__(self) -> None:
        self.envelopes: List[Envelope] = []
        self.test_steps: Dict[str, List[str]] = {}

    def emit(self, **fields) -> Envelope:
        envelope = Envelope(**fields)
        self.envelopes.append(envelope)
        return envelope

    def ingest_into(self, index: EventIndex) -> EventIndex:
        for envelope in self.envelopes:
            index.ingest(envelope)
        return index

    def index(self) -> EventIndex:
        return self.ingest_into(EventIndex())

    # Static structure

    def document(
        self, uri: str, feature_name: str, children: Sequence[FeatureChild]
    ) -> GherkinDocument:
        document = GherkinDocument(
            uri=uri,
            feature=Feature(name=feature_name, children=list(children)),
        )
        self.emit(gherkin_document=document)
        return document

    @staticmethod
    def scenario(
        scenario_id: str,
        name: str,
        steps: Sequence[Tuple[str, str, str]],
        examples: Sequence[Examples] = (),
        line: int = 3,
    ) -> Scenario:
        return Scenario(
            id=scenario_id,
            name=name,
            location=Location(line=line),
            steps=[Step(id=sid, keyword=kw, text=text) for sid, kw, text in steps],
            examples=list(examples),
        )

    @staticmethod
    def examples(examples_id: str, name: str, row_ids: Sequence[str]) -> Examples:
        return Examples(
            id=examples_id,
            name=name,
            table_body=[TableRow(id=row_id) for row_id in row_ids],
        )

    # Executable plan

    def pickle(
        self,
        pickle_id: str,
        uri: str,
        name: str,
        ast_node_ids: Sequence[str],
        steps: Sequence[Tuple[str, str, str]],
        line: Optional[int] = None,
    ) -> Pickle:
        pickle = Pickle(
            id=pickle_id,
            uri=uri,
            name=name,
            ast_node_ids=list(ast_node_ids),
            location=Location(line=line) if line is not None else None,
            steps=[
                PickleStep(id=psid, text=text, ast_node_ids=[step_id])
                for psid, text, step_id in steps
            ],
        )
        self.emit(pickle=pickle)
        return pickle

    def test_case(
        self,
        test_case_id: str,
        pickle_id: str,
        steps: Sequence[Tuple[str, Optional[str]]],
    ) -> TestCase:
        test_case = TestCase(
            id=test_case_id,
            pickle_id=pickle_id,
            test_steps=[
                TestStep(
                    id=step_id,
                    pickle_step_id=pickle_step_id,
                    hook_id=None if pickle_step_id else f"{step_id}-hook",
                )
                for step_id, pickle_step_id in steps
            ],
        )
        self.test_steps[test_case_id] = [step_id for step_id, _ in steps]
        self.emit(test_case=test_case)
        return test_case

    def simple_scenario(
        self,
        key: str,
        *,
        uri: str = "features/cukes.feature",
        feature: str = "Cukes",
        name: str = "Eating cukes",
        line: Optional[int] = 3,
        steps: Sequence[Tuple[str, str]] = (("Given ", "I have 42 cukes"),),
        before_hook: bool = False,
        with_document: bool = True,
    ) -> str:
        """Document, pickle and test case for one scenario; returns the test case id."""
        step_rows = [
            (f"{key}-step-{i}", keyword, text)
            for i, (keyword, text) in enumerate(steps)
        ]
        if with_document:
            scenario = self.scenario(f"{key}-scenario", name, step_rows, line=line or 1)
            self.document(uri, feature, [FeatureChild(scenario=scenario)])
        self.pickle(
            f"{key}-pickle",
            uri,
            name,
            [f"{key}-scenario"],
            [
                (f"{key}-pstep-{i}", text, sid)
                for i, (sid, _, text) in enumerate(step_rows)
            ],
            line=line,
        )
        plan: List[Tuple[str, Optional[str]]] = []
        if before_hook:
            plan.append((f"{key}-hook", None))
        plan.extend(
            (f"{key}-ts-{i}", f"{key}-pstep-{i}") for i in range(len(step_rows))
        )
        test_case_id = f"{key}-tc"
        self.test_case(test_case_id, f"{key}-pickle", plan)
        return test_case_id

    @staticmethod
    def result(
        status: TestStepResultStatus = TestStepResultStatus.FAILED,
        message: Optional[str] = None,
        *,
        exception_type: Optional[str] = None,
        exception_message: Optional[str] = None,
        stack_trace: Optional[str] = None,
    ) -> TestStepResult:
        exception = None
        if exception_type is not None:
            exception = MessageException(
                type=exception_type,
                message=exception_message,
                stack_trace=stack_trace,
            )
        return TestStepResult(status=status, message=message, exception=exception)

    # Execution

    def run_started(self, seconds: int = 0, nanos: int = 0) -> None:
        self.emit(test_run_started=TestRunStarted(timestamp=ts(seconds, nanos)))

    def run_finished(self, seconds: int = 10, nanos: int = 0) -> None:
        self.emit(test_run_finished=TestRunFinished(timestamp=ts(seconds, nanos)))

    def started(
        self, started_id: str, test_case_id: str, seconds: int = 1, attempt: int = 0
    ) -> None:
        self.emit(
            test_case_started=TestCaseStarted(
                id=started_id,
                test_case_id=test_case_id,
                timestamp=ts(seconds),
                attempt=attempt,
            )
        )

    def step_finished(
        self, started_id: str, test_step_id: str, outcome: Outcome, seconds: int = 1
    ) -> None:
        result = (
            outcome
            if isinstance(outcome, TestStepResult)
            else TestStepResult(status=outcome)
        )
        self.emit(
            test_step_finished=TestStepFinished(
                test_case_started_id=started_id,
                test_step_id=test_step_id,
                test_step_result=result,
                timestamp=ts(seconds),
            )
        )

    def finished(
        self, started_id: str, seconds: int = 2, will_be_retried: bool = False
    ) -> None:
        self.emit(
            test_case_finished=TestCaseFinished(
                test_case_started_id=started_id,
                timestamp=ts(seconds),
                will_be_retried=will_be_retried,
            )
        )

    def attempt(
        self,
        started_id: str,
        test_case_id: str,
        outcomes: Sequence[Outcome],
        *,
        started_at: int = 1,
        finished_at: int = 2,
        will_be_retried: bool = False,
        attempt: int = 0,
    ) -> None:
        """One full attempt; outcomes are paired with the test case's steps in order."""
        self.started(started_id, test_case_id, started_at, attempt=attempt)
        for test_step_id, outcome in zip(self.test_steps[test_case_id], outcomes):
            self.step_finished(started_id, test_step_id, outcome, started_at)
        self.finished(started_id, finished_at, will_be_retried=will_be_retried)


@pytest.fixture
def stream() -> StreamBuilder:
    return StreamBuilder()
