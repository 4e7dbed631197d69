"""
Database query tracing.
"""

from typing import Any

from opentelemetry import trace

from .context import trace_operation


def query_verb(sql: str) -> str:
    """Return the leading SQL keyword of a statement, e.g. "SELECT"."""
    parts = sql.split(None, 1)
    return parts[0].upper() if parts else "QUERY"


def trace_database_query(sql: str, database: str = "unknown", mode: str = "rows") -> Any:
    """
    Context manager for tracing a single query.

    Args:
        sql: Statement being executed
        database: Database system name (see DatabaseType)
        mode: "scalar" or "rows"

    Example:
        >>> with trace_database_query("SELECT COUNT(*) FROM gene", "postgresql", "scalar"):
        ...     cursor.execute("SELECT COUNT(*) FROM gene")
    """
    verb = query_verb(sql)
    return trace_operation(
        f"db.{verb.lower()}",
        kind=trace.SpanKind.CLIENT,
        **{
            "db.operation": verb,
            "db.statement": sql,
            "db.system": database,
            "datacheck.query_mode": mode,
            "component": "database",
        }
    )
