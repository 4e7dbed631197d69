"""
Logger wrappers that carry context.
"""

import logging
from typing import Any

from .formatters import RESERVED_FIELDS


def _check_keys(context: dict[str, Any]) -> None:
    """Reject context keys that would overwrite LogRecord attributes."""
    clashes = sorted(RESERVED_FIELDS.intersection(context))
    if clashes:
        raise ValueError(
            f"Log context keys clash with LogRecord attributes: {', '.join(clashes)}"
        )


class ContextLogger:
    """
    Logger wrapper that adds contextual information to all log messages

    Context keys may not reuse LogRecord attribute names such as ``name``
    or ``module``; those raise ValueError when bound.

    Usage:
        logger = ContextLogger("datacheck.suite", suite="core")
        logger.info("Running check", check="gene_fk")
        # Record carries both suite and check
    """

    def __init__(self, name: str, /, **context):
        _check_keys(context)
        self.logger = logging.getLogger(name)
        self.context = context

    def _log(self, level: int, msg: str, *args, exc_info=None, **kwargs) -> None:
        _check_keys(kwargs)
        extra = {**self.context, **kwargs}
        self.logger.log(level, msg, *args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, exc_info=None, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def bind(self, **context) -> "ContextLogger":
        """
        Return a new ContextLogger with additional context

        Args:
            **context: Context merged over this logger's context

        Returns:
            New ContextLogger sharing the underlying logger name

        Raises:
            ValueError: If a key is a LogRecord attribute name
        """
        return ContextLogger(self.logger.name, **{**self.context, **context})

    def get_context(self) -> dict[str, Any]:
        return self.context.copy()
