"""
Supporting modules for datacheck

Provides:
- logging: structured logging setup
- metrics: Prometheus assertion metrics
- tracing: OpenTelemetry spans around queries and checks
- sql_safety: identifier validation and quoting
- database_types: database dialect detection
"""

__all__ = ["logging", "metrics", "tracing", "sql_safety", "database_types"]
