"""
Referential integrity checks.

A foreign key check counts rows whose reference has no target row, via a
LEFT JOIN, and asserts that count is zero. Rows whose referencing column is
NULL have no match either and are counted as orphans.
"""

from typing import Any

from datacheck.query import ForeignKey, OrphanQueryBuilder
from datacheck.report.outcome import Reporter
from datacheck.utils.database_types import DatabaseType

from .counts import is_rows_zero


def fk(
    connection: Any,
    table1: str,
    col1: str,
    table2: str,
    col2: str | None = None,
    both_ways: bool = False,
    constraint: str | None = None,
    name: str | None = None,
    *,
    reporter: Reporter,
    dialect: DatabaseType = DatabaseType.UNKNOWN,
) -> None:
    """
    Check that every ``table1.col1`` value exists in ``table2.col2``.

    Both queries are built before either is run, so an invalid identifier
    fails without touching the database.

    Args:
        connection: DB-API connection or provider
        table1: Referencing table ("from")
        col1: Referencing column
        table2: Referenced table ("to")
        col2: Referenced column (defaults to col1)
        both_ways: Also check that every table2.col2 value exists in table1.col1
        constraint: Extra SQL condition AND-ed to each query's WHERE clause
        name: Description used for both directions (defaults describe the direction)
        reporter: Receives one outcome per direction
        dialect: Quote identifiers for this database type; UNKNOWN leaves them bare

    Raises:
        ConfigurationError: If a table or column name is not a valid identifier

    Example:
        >>> fk(conn, "gene", "canonical_transcript_id", "transcript", "transcript_id",
        ...    reporter=collector)
    """
    builder = OrphanQueryBuilder(dialect)
    key = ForeignKey(table1, col1, table2, col2 or col1)

    directions = [key, key.reversed()] if both_ways else [key]
    queries = [(d, builder.orphan_count_sql(d, constraint)) for d in directions]

    for direction, sql in queries:
        is_rows_zero(connection, sql, name or direction.describe(), reporter=reporter)
