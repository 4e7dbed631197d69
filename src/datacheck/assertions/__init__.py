"""
Row count, comparative and referential-integrity assertions.

This submodule provides the checks themselves:
- counts: is_rows, cmp_rows, is_rows_zero, is_rows_nonzero
- comparative: row_totals, row_subtotals (primary vs secondary database)
- integrity: fk (orphan rows between two tables)
- checker: DataCheck facade bound to a reporter
"""

from .base import MAX_DIAG_ROWS
from .checker import DataCheck
from .comparative import (
    build_subtotals,
    compare_subtotals,
    row_subtotals,
    row_totals,
    validate_tolerance,
)
from .comparators import Comparator
from .counts import cmp_rows, is_rows, is_rows_nonzero, is_rows_zero
from .integrity import fk

__all__ = [
    "MAX_DIAG_ROWS",
    "Comparator",
    "DataCheck",
    "is_rows",
    "cmp_rows",
    "is_rows_zero",
    "is_rows_nonzero",
    "row_totals",
    "row_subtotals",
    "build_subtotals",
    "compare_subtotals",
    "validate_tolerance",
    "fk",
]
