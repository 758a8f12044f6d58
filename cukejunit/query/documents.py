from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from cukejunit.messages.models import (
    Background,
    GherkinDocument,
    Rule,
    Scenario,
    Step,
)

from .lineage import Lineage

logger = logging.getLogger(__name__)


class DocumentIndex:
    """Static document structure: steps, scenarios and their lineage by node id."""

    def __init__(self) -> None:
        self._documents: List[GherkinDocument] = []
        self._step_by_id: Dict[str, Step] = {}
        self._scenario_by_id: Dict[str, Scenario] = {}
        self._lineage_by_node_id: Dict[str, Lineage] = {}

    @property
    def documents(self) -> List[GherkinDocument]:
        return list(self._documents)

    def update(self, document: GherkinDocument) -> None:
        self._documents.append(document)
        feature = document.feature
        if feature is None:
            return
        root = Lineage(document=document, feature=feature)
        for child in feature.children:
            if child.background is not None:
                self._index_background(child.background)
            if child.scenario is not None:
                self._index_scenario(root, child.scenario)
            if child.rule is not None:
                self._index_rule(root, child.rule)
        logger.debug(
            "indexed document uri=%s scenarios=%d steps=%d",
            document.uri,
            len(self._scenario_by_id),
            len(self._step_by_id),
        )

    def find_step(self, step_id: str) -> Optional[Step]:
        return self._step_by_id.get(step_id)

    def find_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return self._scenario_by_id.get(scenario_id)

    def find_lineage(self, node_id: str) -> Optional[Lineage]:
        return self._lineage_by_node_id.get(node_id)

    def _index_rule(self, parent: Lineage, rule: Rule) -> None:
        lineage = replace(parent, rule=rule)
        for child in rule.children:
            if child.background is not None:
                self._index_background(child.background)
            if child.scenario is not None:
                self._index_scenario(lineage, child.scenario)

    def _index_background(self, background: Background) -> None:
        self._index_steps(background.steps)

    def _index_scenario(self, parent: Lineage, scenario: Scenario) -> None:
        self._scenario_by_id[scenario.id] = scenario
        self._index_steps(scenario.steps)
        lineage = replace(parent, scenario=scenario)
        self._lineage_by_node_id[scenario.id] = lineage
        for examples_index, examples in enumerate(scenario.examples):
            examples_lineage = replace(
                lineage, examples=examples, examples_index=examples_index
            )
            self._lineage_by_node_id[examples.id] = examples_lineage
            for example_index, row in enumerate(examples.table_body):
                self._lineage_by_node_id[row.id] = replace(
                    examples_lineage, example=row, example_index=example_index
                )

    def _index_steps(self, steps: Iterable[Step]) -> None:
        for step in steps:
            self._step_by_id[step.id] = step
