"""
Single-database row count assertions.

Each function runs one counting query, compares the count with an
expectation and records exactly one outcome on the reporter. The SQL can be
an explicit ``COUNT(*)`` (recommended for speed) or a ``SELECT`` whose rows
are counted. Driver errors are not caught.
"""

import logging
from typing import Any

from datacheck.query import execute_query, get_database_name
from datacheck.report.outcome import Reporter

from .base import MAX_DIAG_ROWS, default_name, format_row, record_outcome, traced_check
from .comparators import Comparator

logger = logging.getLogger(__name__)

DEFAULT_DIAG_PREFIX = "Unexpected data"


def _got_expected(count: int, expected: Any, comparator: Comparator | None = None) -> str:
    if comparator is None or comparator is Comparator.EQ:
        return f"got: {count}\nexpected: {expected}"
    return f"{count}\n    {comparator.value}\n{expected}"


@traced_check("is_rows")
def is_rows(
    connection: Any,
    sql: str,
    expected: int,
    name: str | None = None,
    *,
    reporter: Reporter,
    scalar: bool | None = None,
) -> bool:
    """
    Pass if the query's row count equals ``expected``.

    Args:
        connection: DB-API connection or provider
        sql: Counting query
        expected: Expected count
        name: Short description of the check
        reporter: Receives the outcome
        scalar: Override scalar/row-fetch classification

    Returns:
        Whether the check passed
    """
    result = execute_query(connection, sql, scalar=scalar)
    passed = result.count == expected

    return record_outcome(
        reporter, "is_rows", name or default_name(sql), passed,
        [_got_expected(result.count, expected)],
        got=result.count, expected=expected,
    )


@traced_check("cmp_rows")
def cmp_rows(
    connection: Any,
    sql: str,
    operator: Comparator | str,
    expected: int,
    name: str | None = None,
    *,
    reporter: Reporter,
    scalar: bool | None = None,
) -> bool:
    """
    Pass if ``count <operator> expected`` holds.

    The operator is validated before the query runs.

    Args:
        connection: DB-API connection or provider
        sql: Counting query
        operator: Comparator member or one of ``== != < <= > >=``
        expected: Value to compare the count against
        name: Short description of the check
        reporter: Receives the outcome
        scalar: Override scalar/row-fetch classification

    Returns:
        Whether the check passed

    Raises:
        ConfigurationError: If the operator is not supported
    """
    comparator = Comparator.parse(operator)

    result = execute_query(connection, sql, scalar=scalar)
    passed = comparator.evaluate(result.count, expected)

    return record_outcome(
        reporter, "cmp_rows", name or default_name(sql), passed,
        [_got_expected(result.count, expected, comparator)],
        got=result.count, operator=comparator.value, expected=expected,
    )


@traced_check("is_rows_zero")
def is_rows_zero(
    connection: Any,
    sql: str,
    name: str | None = None,
    diag_prefix: str | None = None,
    *,
    reporter: Reporter,
    scalar: bool | None = None,
) -> bool:
    """
    Pass if the query returns no rows (or a zero count).

    When rows were fetched, up to MAX_DIAG_ROWS offending rows are attached
    to a failure as ``"<diag_prefix> (v1, v2, ...)"``. Beyond that a single
    summary diagnostic tells the reader how to see the rest.

    Args:
        connection: DB-API connection or provider
        sql: Counting or row-selecting query
        name: Short description of the check
        diag_prefix: Text introducing each offending row
        reporter: Receives the outcome
        scalar: Override scalar/row-fetch classification

    Returns:
        Whether the check passed
    """
    result = execute_query(connection, sql, scalar=scalar)
    passed = result.count == 0

    diagnostics = []
    if not passed and result.rows is not None:
        prefix = diag_prefix or DEFAULT_DIAG_PREFIX
        for row in result.rows[:MAX_DIAG_ROWS]:
            diagnostics.append(f"{prefix} ({format_row(row)})")

        if result.count > MAX_DIAG_ROWS:
            database = get_database_name(connection)
            diagnostics.append(
                f"Reached limit for number of diagnostic messages "
                f"({MAX_DIAG_ROWS} of {result.count} rows shown). "
                f"Execute {default_name(sql)} against {database} to see all results"
            )

    if not passed:
        logger.debug(f"is_rows_zero found {result.count} row(s)")

    return record_outcome(
        reporter, "is_rows_zero", name or default_name(sql), passed, diagnostics,
        got=result.count, expected=0,
    )


@traced_check("is_rows_nonzero")
def is_rows_nonzero(
    connection: Any,
    sql: str,
    name: str | None = None,
    *,
    reporter: Reporter,
    scalar: bool | None = None,
) -> bool:
    """
    Pass if the query returns at least one row (or a positive count).

    Equivalent to ``cmp_rows(connection, sql, ">", 0, name)``.
    """
    result = execute_query(connection, sql, scalar=scalar)
    passed = result.count > 0

    return record_outcome(
        reporter, "is_rows_nonzero", name or default_name(sql), passed,
        [_got_expected(result.count, 0, Comparator.GT)],
        got=result.count, operator=Comparator.GT.value, expected=0,
    )
