"""
Reporter-bound facade over the assertion functions.
"""

from typing import Any

from datacheck.report.outcome import Reporter
from datacheck.utils.database_types import DatabaseType

from . import comparative, counts, integrity
from .comparators import Comparator


class DataCheck:
    """
    Assertion functions with the reporter filled in.

    Usage:
        collector = ResultCollector()
        check = DataCheck(collector)
        check.is_rows_nonzero(conn, "SELECT COUNT(*) FROM gene", "Genes exist")
        check.fk(conn, "gene", "canonical_transcript_id", "transcript", "transcript_id")
        sys.exit(collector.exit_code)
    """

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def is_rows(self, connection: Any, sql: str, expected: int,
                name: str | None = None, scalar: bool | None = None) -> bool:
        return counts.is_rows(connection, sql, expected, name,
                              reporter=self.reporter, scalar=scalar)

    def cmp_rows(self, connection: Any, sql: str, operator: Comparator | str, expected: int,
                 name: str | None = None, scalar: bool | None = None) -> bool:
        return counts.cmp_rows(connection, sql, operator, expected, name,
                               reporter=self.reporter, scalar=scalar)

    def is_rows_zero(self, connection: Any, sql: str, name: str | None = None,
                     diag_prefix: str | None = None, scalar: bool | None = None) -> bool:
        return counts.is_rows_zero(connection, sql, name, diag_prefix,
                                   reporter=self.reporter, scalar=scalar)

    def is_rows_nonzero(self, connection: Any, sql: str, name: str | None = None,
                        scalar: bool | None = None) -> bool:
        return counts.is_rows_nonzero(connection, sql, name,
                                      reporter=self.reporter, scalar=scalar)

    def row_totals(self, primary: Any, secondary: Any, sql: str, tolerance: float = 1,
                   name: str | None = None, scalar: bool | None = None) -> bool:
        return comparative.row_totals(primary, secondary, sql, tolerance, name,
                                      reporter=self.reporter, scalar=scalar)

    def row_subtotals(self, primary: Any, secondary: Any, sql: str, tolerance: float = 1,
                      name: str | None = None) -> bool:
        return comparative.row_subtotals(primary, secondary, sql, tolerance, name,
                                         reporter=self.reporter)

    def fk(self, connection: Any, table1: str, col1: str, table2: str, col2: str | None = None,
           both_ways: bool = False, constraint: str | None = None, name: str | None = None,
           dialect: DatabaseType = DatabaseType.UNKNOWN) -> None:
        integrity.fk(connection, table1, col1, table2, col2, both_ways, constraint, name,
                     reporter=self.reporter, dialect=dialect)
