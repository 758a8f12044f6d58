from __future__ import annotations

from typing import Optional

from cukejunit.messages.models import Pickle

from .documents import DocumentIndex
from .lineage import DEFAULT_NAMING_STRATEGY, Lineage, NamingStrategy


class LineageResolver:
    """Maps pickles to their static ancestry and renders display names."""

    def __init__(self, documents: DocumentIndex) -> None:
        self.documents = documents

    def find_lineage_by(self, pickle: Pickle) -> Optional[Lineage]:
        if not pickle.ast_node_ids:
            return None
        return self.documents.find_lineage(pickle.ast_node_ids[-1])

    def find_name_of(
        self, pickle: Pickle, strategy: NamingStrategy = DEFAULT_NAMING_STRATEGY
    ) -> str:
        lineage = self.find_lineage_by(pickle)
        if lineage is None:
            return pickle.name
        return strategy.reduce(lineage, pickle)

    def find_feature_name_by(self, pickle: Pickle) -> Optional[str]:
        lineage = self.find_lineage_by(pickle)
        if lineage is None or lineage.feature is None:
            return None
        return lineage.feature.name
