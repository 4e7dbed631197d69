"""
Shared plumbing for assertion functions.
"""

import functools
from typing import Any, Iterable

from datacheck.report.outcome import AssertionOutcome, Reporter
from datacheck.utils.tracing import add_span_attributes, trace_operation

# Cap on per-row diagnostics attached to a single failure
MAX_DIAG_ROWS = 10


def default_name(sql: str) -> str:
    """Collapse a statement onto one line for use as a check name."""
    return " ".join(sql.split())


def format_value(value: Any) -> str:
    return "NULL" if value is None else str(value)


def format_row(row: Iterable[Any]) -> str:
    return ", ".join(format_value(value) for value in row)


def record_outcome(
    reporter: Reporter,
    kind: str,
    name: str,
    passed: bool,
    diagnostics: Iterable[str] = (),
    **details: Any,
) -> bool:
    """
    Build an outcome, hand it to the reporter, and return ``passed``.

    Diagnostics are dropped for passing outcomes.
    """
    outcome = AssertionOutcome(
        name=name,
        kind=kind,
        passed=passed,
        diagnostics=tuple(diagnostics) if not passed else (),
        details=details,
    )
    reporter.record(outcome)
    add_span_attributes(**{"datacheck.passed": passed})
    return passed


def traced_check(kind: str):
    """
    Decorator wrapping an assertion function in a span named after its kind.

    Example:
        >>> @traced_check("is_rows")
        ... def is_rows(connection, sql, expected, name=None, *, reporter):
        ...     ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with trace_operation(f"datacheck.{kind}", **{"datacheck.kind": kind}):
                return func(*args, **kwargs)

        return wrapper
    return decorator
