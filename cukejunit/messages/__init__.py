from .api import (
    MessageParseError,
    duration_between,
    duration_to_seconds,
    parse_envelope,
    read_envelopes,
    timestamp_to_nanos,
)
from .models import (
    Background,
    Duration,
    Envelope,
    Examples,
    Feature,
    FeatureChild,
    GherkinDocument,
    Location,
    MessageException,
    Pickle,
    PickleStep,
    Rule,
    RuleChild,
    Scenario,
    Step,
    TableCell,
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

__all__ = [
    "Background",
    "Duration",
    "Envelope",
    "Examples",
    "Feature",
    "FeatureChild",
    "GherkinDocument",
    "Location",
    "MessageException",
    "MessageParseError",
    "Pickle",
    "PickleStep",
    "Rule",
    "RuleChild",
    "Scenario",
    "Step",
    "TableCell",
    "TableRow",
    "TestCase",
    "TestCaseFinished",
    "TestCaseStarted",
    "TestRunFinished",
    "TestRunStarted",
    "TestStep",
    "TestStepFinished",
    "TestStepResult",
    "TestStepResultStatus",
    "Timestamp",
    "duration_between",
    "duration_to_seconds",
    "parse_envelope",
    "read_envelopes",
    "timestamp_to_nanos",
]
