from .api import build_report, render_report
from .builder import DEFAULT_SUITE_NAME, ReportBuilder
from .errors import ReportStateError
from .formatting import count_statuses, format_seconds, format_step, format_timestamp
from .models import ReportFailure, ReportSuite, ReportTestCase
from .xml_writer import render_xml

__all__ = [
    "DEFAULT_SUITE_NAME",
    "ReportBuilder",
    "ReportFailure",
    "ReportStateError",
    "ReportSuite",
    "ReportTestCase",
    "build_report",
    "count_statuses",
    "format_seconds",
    "format_step",
    "format_timestamp",
    "render_report",
    "render_xml",
]
