"""
SQL synthesis for derived checks.

Table and column names end up spliced into SQL text, so every identifier
passing through here is validated against the rules in
``datacheck.utils.sql_safety``. Free-text constraints are trusted caller SQL
and are appended verbatim.
"""

import re
from dataclasses import dataclass

from datacheck.exceptions import InvalidSubtotalQueryError
from datacheck.utils.database_types import DatabaseType
from datacheck.utils.sql_safety import quote_identifier, quote_schema_table

# A single category column, then a count expression, FROM ..., GROUP BY ...
SUBTOTAL_QUERY_PATTERN = re.compile(
    r"^\s*SELECT\s+[^,]+\s*,\s*COUNT[^,]+FROM.+GROUP\s+BY",
    re.IGNORECASE | re.DOTALL,
)


def validate_subtotal_query(sql: str) -> None:
    """
    Check that a statement has the two-column grouped shape.

    Args:
        sql: SQL text, e.g. ``SELECT biotype, COUNT(*) FROM gene GROUP BY biotype``

    Raises:
        InvalidSubtotalQueryError: If the statement does not match
    """
    if not isinstance(sql, str) or not SUBTOTAL_QUERY_PATTERN.match(sql):
        raise InvalidSubtotalQueryError(sql)


@dataclass(frozen=True)
class ForeignKey:
    """A column in one table that should reference a column in another."""

    table: str
    column: str
    ref_table: str
    ref_column: str

    def reversed(self) -> "ForeignKey":
        return ForeignKey(self.ref_table, self.ref_column, self.table, self.column)

    def describe(self) -> str:
        return (
            f"Checking for values in {self.table}.{self.column} "
            f"not found in {self.ref_table}.{self.ref_column}"
        )


class OrphanQueryBuilder:
    """
    Builds queries counting rows whose reference has no target row.

    With the default UNKNOWN dialect identifiers are validated but emitted
    unquoted.

    Example:
        >>> builder = OrphanQueryBuilder()
        >>> builder.orphan_count_sql(
        ...     ForeignKey("gene", "canonical_transcript_id", "transcript", "transcript_id"))
        'SELECT COUNT(*) FROM gene LEFT JOIN transcript ON gene.canonical_transcript_id = transcript.transcript_id WHERE transcript.transcript_id IS NULL'
    """

    def __init__(self, dialect: DatabaseType = DatabaseType.UNKNOWN):
        self.dialect = dialect

    def _column(self, table: str, column: str) -> str:
        return f"{quote_schema_table(table, self.dialect)}.{quote_identifier(column, self.dialect)}"

    def orphan_count_sql(self, fk: ForeignKey, constraint: str | None = None) -> str:
        """
        Count rows in ``fk.table`` with no match in ``fk.ref_table``.

        Args:
            fk: Reference to check
            constraint: Optional extra SQL condition, AND-ed to the WHERE clause

        Returns:
            Scalar-count SQL statement

        Raises:
            ConfigurationError: If any identifier is invalid
        """
        table = quote_schema_table(fk.table, self.dialect)
        ref_table = quote_schema_table(fk.ref_table, self.dialect)
        column = self._column(fk.table, fk.column)
        ref_column = self._column(fk.ref_table, fk.ref_column)

        sql = (
            f"SELECT COUNT(*) FROM {table} "
            f"LEFT JOIN {ref_table} ON {column} = {ref_column} "
            f"WHERE {ref_column} IS NULL"
        )

        if constraint:
            sql += f" AND {constraint}"

        return sql
