"""
Query execution and SQL synthesis.

- executor: run a counting query, scalar or row-fetching
- connection: resolve connection providers, name databases for diagnostics
- builder: orphan-row query synthesis and subtotal query shape validation
"""

from .builder import (
    ForeignKey,
    OrphanQueryBuilder,
    SUBTOTAL_QUERY_PATTERN,
    validate_subtotal_query,
)
from .connection import get_database_name, resolve_connection
from .executor import QueryResult, execute_query, is_scalar_count_query

__all__ = [
    "QueryResult",
    "execute_query",
    "is_scalar_count_query",
    "resolve_connection",
    "get_database_name",
    "ForeignKey",
    "OrphanQueryBuilder",
    "SUBTOTAL_QUERY_PATTERN",
    "validate_subtotal_query",
]
