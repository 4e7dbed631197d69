"""
Running the checks of a suite in order.
"""

from typing import Any

from datacheck.assertions import DataCheck
from datacheck.exceptions import ConfigurationError
from datacheck.query import resolve_connection
from datacheck.report.outcome import AssertionOutcome, Reporter
from datacheck.utils.logging import ContextLogger

from .config import CheckConfig, SuiteConfig


def rollback_connections(item: CheckConfig, connections: dict[str, Any], log: ContextLogger) -> None:
    """
    Roll back every connection a failed check used.

    A connection left in an aborted transaction would fail every later
    check against it. Rollback on an autocommit connection is a no-op.
    """
    for alias in item.database_aliases():
        try:
            resolve_connection(connections[alias]).rollback()
        except Exception as e:
            log.warning(f"Rollback on '{alias}' failed: {e}")


def run_suite(
    suite: SuiteConfig,
    connections: dict[str, Any],
    reporter: Reporter,
    continue_on_error: bool = False,
) -> None:
    """
    Run every check of a suite against open connections

    Assertion failures are recorded and never stop the run. Configuration
    errors always stop it. Query errors stop it unless ``continue_on_error``
    is set, in which case the check is recorded as failed with the error as
    its diagnostic, and its connections are rolled back so later checks
    still run.

    Args:
        suite: Parsed suite
        connections: Connections (or providers) keyed by alias
        reporter: Receives every outcome
        continue_on_error: Record query errors as failures and carry on
    """
    check = DataCheck(reporter)
    log = ContextLogger(__name__, suite=suite.name)
    log.info(f"Running {len(suite.checks)} check(s)")

    for index, item in enumerate(suite.checks, start=1):
        check_log = log.bind(check=item.label, check_type=item.type, position=index)
        check_log.debug("Running check")

        try:
            getattr(check, item.type)(**item.call_arguments(connections))
        except ConfigurationError:
            raise
        except Exception as e:
            if not continue_on_error:
                raise
            check_log.error(f"Check could not be executed: {e}", exc_info=True)
            rollback_connections(item, connections, check_log)
            reporter.record(AssertionOutcome(
                name=item.label,
                kind=item.type,
                passed=False,
                diagnostics=(f"Execution error: {type(e).__name__}: {e}",),
                details={"error": str(e)},
            ))
