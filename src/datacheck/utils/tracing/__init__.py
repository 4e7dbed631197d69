"""
Distributed tracing using OpenTelemetry.

Instruments query execution and assertion calls. Spans are dropped unless
``initialize_tracing`` has installed an exporter.
"""

from .context import add_span_attributes, trace_operation
from .database import trace_database_query
from .tracer import get_tracer, initialize_tracing, shutdown_tracing

__all__ = [
    "initialize_tracing",
    "get_tracer",
    "shutdown_tracing",
    "trace_operation",
    "add_span_attributes",
    "trace_database_query",
]
