"""
Query execution for counting checks.

Every check reduces to "run this SQL, how many?". A statement is either a
scalar count (``SELECT COUNT(...)`` without ``GROUP BY``), in which case the
single value it returns is the count, or anything else, in which case all
rows are fetched and counted and kept for diagnostics.

The scalar/rows classification is a heuristic on the SQL text. It can be
wrong for statements such as a ``COUNT`` in a subquery under an outer
``GROUP BY``; callers who know better pass ``scalar=True`` or ``False``.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from datacheck.utils.database_types import DatabaseType
from datacheck.utils.tracing import add_span_attributes, trace_database_query

from .connection import resolve_connection

logger = logging.getLogger(__name__)

SCALAR_COUNT_PATTERN = re.compile(r"SELECT\s+COUNT\s*\(", re.IGNORECASE)
GROUP_BY_PATTERN = re.compile(r"GROUP\s+BY", re.IGNORECASE)

Row = tuple[Any, ...]


@dataclass(frozen=True)
class QueryResult:
    """
    Result of a counting query.

    Attributes:
        count: Scalar count, or number of rows fetched
        rows: Fetched rows, or None for scalar queries
    """

    count: int
    rows: list[Row] | None = None

    @property
    def is_scalar(self) -> bool:
        return self.rows is None


def is_scalar_count_query(sql: str) -> bool:
    """
    Guess whether a statement returns a single count value.

    Args:
        sql: SQL text

    Returns:
        True for ``SELECT COUNT(...)`` statements without ``GROUP BY``
    """
    return bool(SCALAR_COUNT_PATTERN.search(sql)) and not GROUP_BY_PATTERN.search(sql)


def execute_query(connection: Any, sql: str, scalar: bool | None = None) -> QueryResult:
    """
    Run a counting query against a connection.

    Opens a cursor, executes, fetches and closes the cursor. Driver
    exceptions propagate unchanged; there are no retries.

    Args:
        connection: DB-API connection or provider (see resolve_connection)
        sql: SQL text, run as-is
        scalar: Force scalar (True) or row-fetching (False) execution;
            None applies is_scalar_count_query

    Returns:
        QueryResult with the count, plus rows when they were fetched
    """
    conn = resolve_connection(connection)

    if scalar is None:
        scalar = is_scalar_count_query(sql)
    mode = "scalar" if scalar else "rows"

    db_type = DatabaseType.from_connection(conn)

    with trace_database_query(sql, database=db_type.value, mode=mode):
        cursor = conn.cursor()
        try:
            cursor.execute(sql)
            if scalar:
                result = QueryResult(count=_scalar_count(cursor.fetchone()))
            else:
                rows = [tuple(row) for row in cursor.fetchall()]
                result = QueryResult(count=len(rows), rows=rows)
        finally:
            cursor.close()

        add_span_attributes(**{"db.row_count": result.count})

    logger.debug(f"Executed {mode} query on {db_type.value}: count={result.count}")

    return result


def _scalar_count(row: Row | None) -> int:
    if row is None or row[0] is None:
        return 0
    return int(row[0])
