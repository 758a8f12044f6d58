from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Dict, Optional

from .formatting import format_seconds
from .models import ReportFailure, ReportSuite, ReportTestCase

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production.
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _clean(value: str) -> str:
    return _INVALID_XML_CHARS.sub("", value)


def render_xml(suite: ReportSuite) -> str:
    """Serialize a report as a single JUnit ``<testsuite>`` document."""
    attributes: Dict[str, str] = {
        "name": _clean(suite.name),
        "time": format_seconds(suite.time),
        "tests": str(suite.tests),
        "skipped": str(suite.skipped),
        "failures": str(suite.failures),
        "errors": str(suite.errors),
    }
    if suite.timestamp:
        attributes["timestamp"] = suite.timestamp
    testsuite = ET.Element("testsuite", attributes)
    for test_case in suite.test_cases:
        _append_test_case(testsuite, test_case)
    ET.indent(testsuite)
    return XML_DECLARATION + ET.tostring(testsuite, encoding="unicode") + "\n"


def _append_test_case(parent: ET.Element, test_case: ReportTestCase) -> None:
    element = ET.SubElement(
        parent,
        "testcase",
        {
            "classname": _clean(test_case.classname),
            "name": _clean(test_case.name),
            "time": format_seconds(test_case.time),
        },
    )
    if test_case.failure is not None:
        _append_failure(element, test_case.failure)
    if test_case.output:
        system_out = ET.SubElement(element, "system-out")
        system_out.text = _clean(test_case.output)


def _append_failure(parent: ET.Element, failure: ReportFailure) -> None:
    attributes: Dict[str, str] = {}
    if failure.kind == "failure":
        _set_if_present(attributes, "type", failure.type)
        _set_if_present(attributes, "message", failure.message)
    element = ET.SubElement(parent, failure.kind, attributes)
    if failure.stack:
        element.text = _clean(failure.stack)


def _set_if_present(attributes: Dict[str, str], key: str, value: Optional[str]) -> None:
    if value:
        attributes[key] = _clean(value)
