from __future__ import annotations

from typing import Optional

from cukejunit.query.index import EventIndex
from cukejunit.query.lineage import NamingStrategy

from .builder import DEFAULT_SUITE_NAME, ReportBuilder
from .models import ReportSuite
from .xml_writer import render_xml


def build_report(
    index: EventIndex,
    *,
    suite_name: str = DEFAULT_SUITE_NAME,
    test_class_name: Optional[str] = None,
    naming_strategy: Optional[NamingStrategy] = None,
) -> ReportSuite:
    return ReportBuilder(
        index,
        suite_name=suite_name,
        test_class_name=test_class_name,
        naming_strategy=naming_strategy,
    ).build()


def render_report(suite: ReportSuite) -> str:
    return render_xml(suite)
