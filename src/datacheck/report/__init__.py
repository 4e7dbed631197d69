"""
Outcome recording and report generation.

This submodule defines the Reporter interface that every check writes to,
the shipped reporters, and report rendering in several output formats.
"""

from .formatters import (
    export_report_csv,
    export_report_json,
    format_report_console,
    format_report_tap,
)
from .generator import generate_report
from .outcome import AssertionOutcome, MetricsReporter, Reporter, ResultCollector

__all__ = [
    "AssertionOutcome",
    "Reporter",
    "ResultCollector",
    "MetricsReporter",
    "generate_report",
    "export_report_json",
    "export_report_csv",
    "format_report_console",
    "format_report_tap",
]
