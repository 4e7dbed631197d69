"""
Exception types for datacheck.

Assertion failures are never raised; they are recorded as outcomes on the
reporter. Exceptions are reserved for problems that make a check impossible
to run as written.
"""


class DataCheckError(Exception):
    """Base class for all datacheck errors."""


class ConfigurationError(DataCheckError, ValueError):
    """
    A check was configured incorrectly.

    Raised before any query is executed, so no connection has been touched
    when this propagates.
    """


class InvalidSubtotalQueryError(ConfigurationError):
    """A subtotal query does not project a single category column then a count."""

    def __init__(self, sql: str):
        self.sql = sql
        super().__init__(
            "Invalid SQL statement for subtotals. Must select a single column "
            f"first, then a count.\n({sql})"
        )
