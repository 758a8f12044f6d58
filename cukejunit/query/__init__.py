from .api import build_index, create_resolver
from .documents import DocumentIndex
from .errors import CorrelationError
from .index import SEVERITY_ORDER, EventIndex, most_severe_result
from .lineage import (
    DEFAULT_NAMING_STRATEGY,
    SEPARATOR,
    Lineage,
    NamingStrategy,
    NamingStrategyExampleName,
    NamingStrategyFeatureName,
    NamingStrategyLength,
    naming_strategy,
)
from .resolver import LineageResolver

__all__ = [
    "DEFAULT_NAMING_STRATEGY",
    "SEPARATOR",
    "SEVERITY_ORDER",
    "CorrelationError",
    "DocumentIndex",
    "EventIndex",
    "Lineage",
    "LineageResolver",
    "NamingStrategy",
    "NamingStrategyExampleName",
    "NamingStrategyFeatureName",
    "NamingStrategyLength",
    "build_index",
    "create_resolver",
    "most_severe_result",
    "naming_strategy",
]
