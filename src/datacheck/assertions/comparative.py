"""
Cross-database count comparisons.

The first connection is always the primary (new) database and the second the
secondary (old, reference) database. A check fails when the primary count
drops below ``tolerance`` times the secondary count, e.g. with 0.75 the
primary must keep at least 75% of the secondary's rows. Growth in the primary
never fails a check.
"""

import logging
from numbers import Real
from typing import Any

from datacheck.exceptions import ConfigurationError
from datacheck.query import execute_query, validate_subtotal_query
from datacheck.query.executor import Row
from datacheck.report.outcome import Reporter

from .base import default_name, record_outcome, traced_check

logger = logging.getLogger(__name__)


def validate_tolerance(tolerance: Any) -> float:
    """
    Check a tolerance ratio before any query runs.

    Values above 1 are accepted but require the primary to exceed the
    secondary, which is rarely what is meant, so they are logged.

    Args:
        tolerance: Minimum acceptable primary/secondary proportion

    Returns:
        Tolerance as a float

    Raises:
        ConfigurationError: If the tolerance is not a positive number
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, Real):
        raise ConfigurationError(f"Tolerance must be a number, got {tolerance!r}")

    if tolerance <= 0:
        raise ConfigurationError(f"Tolerance must be greater than 0, got {tolerance}")

    if tolerance > 1:
        logger.warning(
            f"Tolerance {tolerance} is greater than 1; the primary count must "
            f"exceed the secondary count for the check to pass"
        )

    return float(tolerance)


def format_percentage(tolerance: float) -> str:
    """Render a tolerance ratio as a percentage, e.g. 0.75 -> "75%"."""
    return f"{tolerance * 100:g}%"


def build_subtotals(rows: list[Row]) -> dict[Any, int]:
    """
    Map category (first column) to count (second column).

    Args:
        rows: Rows of a two-column grouped query

    Returns:
        SubtotalMap; a repeated category keeps its last count
    """
    return {row[0]: int(row[1]) for row in rows}


def compare_subtotals(
    primary: dict[Any, int],
    secondary: dict[Any, int],
    tolerance: float = 1.0,
) -> list[str]:
    """
    Diff two subtotal maps.

    Only categories present in the secondary map are inspected; a category
    missing from the primary map counts as 0.

    Args:
        primary: Subtotals from the new database
        secondary: Subtotals from the reference database
        tolerance: Minimum acceptable primary/secondary proportion

    Returns:
        One diagnostic per category whose primary count is too low
    """
    diagnostics = []

    for category, secondary_count in secondary.items():
        primary_count = primary.get(category, 0)

        if secondary_count * tolerance > primary_count:
            diagnostics.append(
                f"Lower count than expected for {category}.\n"
                f"{primary_count} < {secondary_count} * {format_percentage(tolerance)}"
            )

    return diagnostics


@traced_check("row_totals")
def row_totals(
    primary: Any,
    secondary: Any,
    sql: str,
    tolerance: float = 1,
    name: str | None = None,
    *,
    reporter: Reporter,
    scalar: bool | None = None,
) -> bool:
    """
    Pass if ``secondary_count * tolerance <= primary_count``.

    Args:
        primary: Connection to the new database
        secondary: Connection to the reference database
        sql: Counting query, run unchanged against both
        tolerance: Minimum acceptable primary/secondary proportion
        name: Short description of the check
        reporter: Receives the outcome
        scalar: Override scalar/row-fetch classification

    Returns:
        Whether the check passed

    Raises:
        ConfigurationError: If the tolerance is invalid
    """
    tolerance = validate_tolerance(tolerance)

    primary_count = execute_query(primary, sql, scalar=scalar).count
    secondary_count = execute_query(secondary, sql, scalar=scalar).count

    passed = secondary_count * tolerance <= primary_count
    diagnostic = (
        f"Lower count than expected.\n"
        f"{primary_count} < {secondary_count} * {format_percentage(tolerance)}"
    )

    return record_outcome(
        reporter, "row_totals", name or default_name(sql), passed, [diagnostic],
        primary_count=primary_count, secondary_count=secondary_count, tolerance=tolerance,
    )


@traced_check("row_subtotals")
def row_subtotals(
    primary: Any,
    secondary: Any,
    sql: str,
    tolerance: float = 1,
    name: str | None = None,
    *,
    reporter: Reporter,
) -> bool:
    """
    Compare per-category counts between two databases.

    The query must select exactly two columns, the category then the count,
    e.g. ``SELECT biotype, COUNT(*) FROM gene GROUP BY biotype``. The shape
    is checked before either connection is used. Categories that appear only
    in the primary database are ignored; a category that vanished from the
    primary counts as 0.

    Args:
        primary: Connection to the new database
        secondary: Connection to the reference database
        sql: Two-column grouped query, run unchanged against both
        tolerance: Minimum acceptable primary/secondary proportion
        name: Short description of the check
        reporter: Receives the single aggregate outcome

    Returns:
        Whether every secondary category passed

    Raises:
        InvalidSubtotalQueryError: If the query has the wrong shape
        ConfigurationError: If the tolerance is invalid
    """
    validate_subtotal_query(sql)
    tolerance = validate_tolerance(tolerance)

    primary_rows = execute_query(primary, sql, scalar=False).rows
    secondary_rows = execute_query(secondary, sql, scalar=False).rows

    primary_subtotals = build_subtotals(primary_rows)
    secondary_subtotals = build_subtotals(secondary_rows)

    diagnostics = compare_subtotals(primary_subtotals, secondary_subtotals, tolerance)

    if diagnostics:
        logger.debug(f"{len(diagnostics)} subtotal categories below tolerance")

    return record_outcome(
        reporter, "row_subtotals", name or default_name(sql), not diagnostics, diagnostics,
        categories_checked=len(secondary_subtotals),
        categories_failed=len(diagnostics),
        tolerance=tolerance,
    )
