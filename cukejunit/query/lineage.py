from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from cukejunit.messages.models import (
    Examples,
    Feature,
    GherkinDocument,
    Pickle,
    Rule,
    Scenario,
    TableRow,
)

SEPARATOR = " - "


@dataclass(frozen=True)
class Lineage:
    """Ancestors of a static node, from the document down to the node itself."""

    document: GherkinDocument
    feature: Optional[Feature] = None
    rule: Optional[Rule] = None
    scenario: Optional[Scenario] = None
    examples: Optional[Examples] = None
    examples_index: Optional[int] = None
    example: Optional[TableRow] = None
    example_index: Optional[int] = None


class NamingStrategyLength(str, Enum):
    LONG = "long"
    SHORT = "short"


class NamingStrategyFeatureName(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


class NamingStrategyExampleName(str, Enum):
    NONE = "none"
    NUMBER = "number"
    NUMBER_AND_PICKLE_IF_PARAMETERIZED = "number_and_pickle_if_parameterized"


@dataclass(frozen=True)
class NamingStrategy:
    """Assembles a test name from a lineage and the pickle it was resolved for.

    Segments are, in order: the feature name (when included), the rule, the
    scenario, the examples table and the example row. Empty names are dropped.
    ``LONG`` joins every segment with ``" - "``; ``SHORT`` keeps only the most
    specific one. For an examples row that is the row segment
    (``Example #1.1: ...``), not the scenario name.
    """

    length: NamingStrategyLength = NamingStrategyLength.LONG
    feature_name: NamingStrategyFeatureName = NamingStrategyFeatureName.INCLUDE
    example_name: NamingStrategyExampleName = (
        NamingStrategyExampleName.NUMBER_AND_PICKLE_IF_PARAMETERIZED
    )

    @classmethod
    def parse(cls, raw: str) -> "NamingStrategy":
        """Parse ``"long,exclude,number"``; omitted trailing parts keep defaults."""
        parts = [item.strip().lower() for item in raw.split(",")]
        if not parts or len(parts) > 3 or not all(parts):
            raise ValueError(f"invalid naming strategy: {raw!r}")
        values = {}
        try:
            values["length"] = NamingStrategyLength(parts[0])
            if len(parts) > 1:
                values["feature_name"] = NamingStrategyFeatureName(parts[1])
            if len(parts) > 2:
                values["example_name"] = NamingStrategyExampleName(parts[2])
        except ValueError as exc:
            raise ValueError(f"invalid naming strategy: {raw!r}") from exc
        return cls(**values)

    def reduce(self, lineage: Lineage, pickle: Pickle) -> str:
        segments = self._segments(lineage, pickle)
        if not segments:
            return pickle.name
        if self.length == NamingStrategyLength.SHORT:
            return segments[-1]
        return SEPARATOR.join(segments)

    def _segments(self, lineage: Lineage, pickle: Pickle) -> List[str]:
        parts: List[str] = []
        if (
            lineage.feature is not None
            and self.feature_name == NamingStrategyFeatureName.INCLUDE
        ):
            parts.append(lineage.feature.name)
        if lineage.rule is not None:
            parts.append(lineage.rule.name)
        if lineage.scenario is not None:
            parts.append(lineage.scenario.name)
        if lineage.examples is not None:
            parts.append(lineage.examples.name)
        if lineage.example is not None:
            parts.append(self._example_segment(lineage, pickle))
        return [part for part in parts if part]

    def _example_segment(self, lineage: Lineage, pickle: Pickle) -> str:
        if self.example_name == NamingStrategyExampleName.NONE:
            return ""
        number = (
            f"Example #{(lineage.examples_index or 0) + 1}"
            f".{(lineage.example_index or 0) + 1}"
        )
        if self.example_name == NamingStrategyExampleName.NUMBER:
            return number
        scenario_name = lineage.scenario.name if lineage.scenario else ""
        if pickle.name != scenario_name:
            return f"{number}: {pickle.name}"
        return number


def naming_strategy(
    length: NamingStrategyLength,
    feature_name: NamingStrategyFeatureName = NamingStrategyFeatureName.INCLUDE,
    example_name: NamingStrategyExampleName = (
        NamingStrategyExampleName.NUMBER_AND_PICKLE_IF_PARAMETERIZED
    ),
) -> NamingStrategy:
    return NamingStrategy(
        length=length, feature_name=feature_name, example_name=example_name
    )


DEFAULT_NAMING_STRATEGY = naming_strategy(
    NamingStrategyLength.LONG,
    NamingStrategyFeatureName.EXCLUDE,
    NamingStrategyExampleName.NUMBER_AND_PICKLE_IF_PARAMETERIZED,
)
