from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from cukejunit.query.lineage import NamingStrategy
from cukejunit.report.builder import DEFAULT_SUITE_NAME


def _parse_optional(raw: str | None) -> Optional[str]:
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _parse_naming_strategy(raw: Any) -> Optional[NamingStrategy]:
    if raw is None or isinstance(raw, NamingStrategy):
        return raw
    text = _parse_optional(str(raw))
    return NamingStrategy.parse(text) if text else None


@dataclass(frozen=True)
class FormatterOptions:
    """Recognized formatter options; unset values fall back to the defaults."""

    suite_name: str = DEFAULT_SUITE_NAME
    test_class_name: Optional[str] = None
    test_naming_strategy: Optional[NamingStrategy] = None

    @classmethod
    def from_env(cls) -> "FormatterOptions":
        return cls(
            suite_name=_parse_optional(os.environ.get("CUKEJUNIT_SUITE_NAME"))
            or DEFAULT_SUITE_NAME,
            test_class_name=_parse_optional(
                os.environ.get("CUKEJUNIT_TEST_CLASS_NAME")
            ),
            test_naming_strategy=_parse_naming_strategy(
                os.environ.get("CUKEJUNIT_NAMING_STRATEGY")
            ),
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "FormatterOptions":
        """Accepts the plugin option keys, e.g. ``suiteName`` and ``testClassName``."""
        return cls(
            suite_name=options.get("suiteName") or DEFAULT_SUITE_NAME,
            test_class_name=options.get("testClassName"),
            test_naming_strategy=_parse_naming_strategy(
                options.get("testNamingStrategy")
            ),
        )

    @classmethod
    def coerce(
        cls, options: Union["FormatterOptions", Mapping[str, Any], None]
    ) -> "FormatterOptions":
        if options is None:
            return cls()
        if isinstance(options, FormatterOptions):
            return options
        return cls.from_mapping(options)
