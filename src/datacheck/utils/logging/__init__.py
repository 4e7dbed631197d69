"""
Structured logging configuration for datacheck

Usage:
    import logging
    from datacheck.utils.logging import ContextLogger, setup_logging

    setup_logging(level="INFO", json_format=True)
    logging.getLogger(__name__).info("Suite finished", extra={"suite": "core"})

    log = ContextLogger(__name__, suite="core")
    log.bind(check="gene_fk").info("Running check")
"""

from .config import configure_from_env, setup_logging
from .formatters import ConsoleFormatter, JSONFormatter
from .handlers import ContextLogger

__all__ = [
    "setup_logging",
    "configure_from_env",
    "JSONFormatter",
    "ConsoleFormatter",
    "ContextLogger",
]
