"""
datacheck: assertions about relational data

Row counts, zero/non-zero existence checks, cross-database comparisons with
tolerance thresholds, and foreign-key orphan checks, recorded on an explicit
reporter.

Components:
- query: counting query execution and SQL synthesis
- assertions: the checks
- report: outcome recording and report rendering
- cli: YAML suite runner

Usage:
    from datacheck import DataCheck, ResultCollector

    collector = ResultCollector()
    check = DataCheck(collector)
    check.is_rows_zero(conn, "SELECT gene_id FROM gene WHERE biotype IS NULL",
                       "Genes have a biotype")
    check.row_subtotals(new_conn, old_conn,
                        "SELECT biotype, COUNT(*) FROM gene GROUP BY biotype",
                        tolerance=0.95)
"""

from .assertions import (
    Comparator,
    DataCheck,
    MAX_DIAG_ROWS,
    cmp_rows,
    fk,
    is_rows,
    is_rows_nonzero,
    is_rows_zero,
    row_subtotals,
    row_totals,
)
from .exceptions import ConfigurationError, DataCheckError, InvalidSubtotalQueryError
from .report import AssertionOutcome, MetricsReporter, Reporter, ResultCollector

__version__ = "1.0.0"
__all__ = [
    "DataCheck",
    "Comparator",
    "MAX_DIAG_ROWS",
    "is_rows",
    "cmp_rows",
    "is_rows_zero",
    "is_rows_nonzero",
    "row_totals",
    "row_subtotals",
    "fk",
    "AssertionOutcome",
    "Reporter",
    "ResultCollector",
    "MetricsReporter",
    "DataCheckError",
    "ConfigurationError",
    "InvalidSubtotalQueryError",
]
