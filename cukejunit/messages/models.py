from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MessageModel(BaseModel):
    """Base for event records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Timestamp(MessageModel):
    seconds: int
    nanos: int = 0


class Duration(MessageModel):
    seconds: int = 0
    nanos: int = 0


class Location(MessageModel):
    line: int
    column: Optional[int] = None


# Static document structure


class Step(MessageModel):
    id: str
    keyword: str
    text: str
    keyword_type: Optional[str] = None
    location: Optional[Location] = None


class TableCell(MessageModel):
    value: str = ""
    location: Optional[Location] = None


class TableRow(MessageModel):
    id: str
    cells: List[TableCell] = Field(default_factory=list)
    location: Optional[Location] = None


class Examples(MessageModel):
    id: str
    name: str = ""
    keyword: str = "Examples"
    description: str = ""
    table_header: Optional[TableRow] = None
    table_body: List[TableRow] = Field(default_factory=list)
    location: Optional[Location] = None


class Background(MessageModel):
    id: str
    name: str = ""
    keyword: str = "Background"
    steps: List[Step] = Field(default_factory=list)
    location: Optional[Location] = None


class Scenario(MessageModel):
    id: str
    name: str = ""
    keyword: str = "Scenario"
    description: str = ""
    steps: List[Step] = Field(default_factory=list)
    examples: List[Examples] = Field(default_factory=list)
    location: Optional[Location] = None


class RuleChild(MessageModel):
    background: Optional[Background] = None
    scenario: Optional[Scenario] = None


class Rule(MessageModel):
    id: str
    name: str = ""
    keyword: str = "Rule"
    children: List[RuleChild] = Field(default_factory=list)
    location: Optional[Location] = None


class FeatureChild(MessageModel):
    rule: Optional[Rule] = None
    background: Optional[Background] = None
    scenario: Optional[Scenario] = None


class Feature(MessageModel):
    name: str = ""
    keyword: str = "Feature"
    language: str = "en"
    description: str = ""
    children: List[FeatureChild] = Field(default_factory=list)
    location: Optional[Location] = None


class GherkinDocument(MessageModel):
    uri: Optional[str] = None
    feature: Optional[Feature] = None


# Executable form


class PickleStep(MessageModel):
    id: str
    text: str
    ast_node_ids: List[str] = Field(default_factory=list)
    type: Optional[str] = None


class Pickle(MessageModel):
    id: str
    uri: str
    name: str
    language: str = "en"
    ast_node_ids: List[str] = Field(default_factory=list)
    steps: List[PickleStep] = Field(default_factory=list)
    tags: List[dict] = Field(default_factory=list)
    location: Optional[Location] = None


class TestStep(MessageModel):
    __test__ = False

    id: str
    pickle_step_id: Optional[str] = None
    hook_id: Optional[str] = None


class TestCase(MessageModel):
    __test__ = False

    id: str
    pickle_id: str
    test_steps: List[TestStep] = Field(default_factory=list)


# Execution outcomes


class TestStepResultStatus(str, Enum):
    UNKNOWN = "UNKNOWN"
    PASSED = "PASSED"
    SKIPPED = "SKIPPED"
    PENDING = "PENDING"
    UNDEFINED = "UNDEFINED"
    AMBIGUOUS = "AMBIGUOUS"
    FAILED = "FAILED"


TestStepResultStatus.__test__ = False  # type: ignore[attr-defined]


class MessageException(MessageModel):
    type: str
    message: Optional[str] = None
    stack_trace: Optional[str] = None


class TestStepResult(MessageModel):
    __test__ = False

    status: TestStepResultStatus
    duration: Duration = Field(default_factory=Duration)
    message: Optional[str] = None
    exception: Optional[MessageException] = None


class TestRunStarted(MessageModel):
    __test__ = False

    timestamp: Timestamp
    id: Optional[str] = None


class TestCaseStarted(MessageModel):
    __test__ = False

    id: str
    test_case_id: str
    timestamp: Timestamp
    attempt: int = 0


class TestStepFinished(MessageModel):
    __test__ = False

    test_case_started_id: str
    test_step_id: str
    test_step_result: TestStepResult
    timestamp: Timestamp


class TestCaseFinished(MessageModel):
    __test__ = False

    test_case_started_id: str
    timestamp: Timestamp
    will_be_retried: bool = False


class TestRunFinished(MessageModel):
    __test__ = False

    timestamp: Timestamp
    success: Optional[bool] = None
    message: Optional[str] = None
    exception: Optional[MessageException] = None


class Envelope(MessageModel):
    """One tagged record from the event stream; at most one field is set."""

    gherkin_document: Optional[GherkinDocument] = None
    pickle: Optional[Pickle] = None
    test_case: Optional[TestCase] = None
    test_run_started: Optional[TestRunStarted] = None
    test_case_started: Optional[TestCaseStarted] = None
    test_step_finished: Optional[TestStepFinished] = None
    test_case_finished: Optional[TestCaseFinished] = None
    test_run_finished: Optional[TestRunFinished] = None

    @property
    def kind(self) -> Optional[str]:
        for name in type(self).model_fields:
            if getattr(self, name) is not None:
                return name
        return None
