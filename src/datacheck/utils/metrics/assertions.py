"""
Prometheus metrics for assertion outcomes.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_or_create_metric(
    metric_factory: Callable[[], T],
    metric_name: str,
    registry: CollectorRegistry = REGISTRY,
) -> T:
    """
    Create a metric, or return the one already registered under that name.

    Lets several DataCheckMetrics instances share the global registry.

    Args:
        metric_factory: Callable that creates the metric
        metric_name: Registered name to look up on collision
        registry: Prometheus registry the factory registers into

    Returns:
        The metric instance (newly created or existing)
    """
    try:
        return metric_factory()
    except ValueError:
        existing = registry._names_to_collectors.get(metric_name)
        if existing is not None:
            return existing
        raise


class DataCheckMetrics:
    """
    Counters and gauges describing assertion runs

    Labels use the assertion kind (is_rows, row_subtotals, fk, ...) rather
    than the check name, to keep cardinality bounded.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize assertion metrics

        Args:
            registry: Custom Prometheus registry (default: global REGISTRY)
        """
        self.registry = registry or REGISTRY

        self.assertions_total = get_or_create_metric(
            lambda: Counter(
                "datacheck_assertions_total",
                "Total number of assertions recorded",
                ["kind", "status"],
                registry=self.registry,
            ),
            "datacheck_assertions",
            self.registry,
        )

        self.diagnostics_total = get_or_create_metric(
            lambda: Counter(
                "datacheck_assertion_diagnostics_total",
                "Total number of diagnostic messages attached to failed assertions",
                ["kind"],
                registry=self.registry,
            ),
            "datacheck_assertion_diagnostics",
            self.registry,
        )

        self.last_run_timestamp = get_or_create_metric(
            lambda: Gauge(
                "datacheck_last_run_timestamp",
                "Unix timestamp of the last completed suite run",
                ["suite"],
                registry=self.registry,
            ),
            "datacheck_last_run_timestamp",
            self.registry,
        )

        self.last_run_failures = get_or_create_metric(
            lambda: Gauge(
                "datacheck_last_run_failures",
                "Number of failed assertions in the last suite run",
                ["suite"],
                registry=self.registry,
            ),
            "datacheck_last_run_failures",
            self.registry,
        )

    def record_assertion(self, kind: str, passed: bool, diagnostics: int = 0) -> None:
        """
        Record one assertion outcome

        Args:
            kind: Assertion kind
            passed: Whether the assertion passed
            diagnostics: Number of diagnostic messages attached
        """
        status = "passed" if passed else "failed"
        self.assertions_total.labels(kind=kind, status=status).inc()

        if diagnostics:
            self.diagnostics_total.labels(kind=kind).inc(diagnostics)

    def record_suite_run(self, suite: str, failures: int) -> None:
        """
        Record completion of a suite run

        Args:
            suite: Suite name
            failures: Number of failed assertions
        """
        self.last_run_timestamp.labels(suite=suite).set(time.time())
        self.last_run_failures.labels(suite=suite).set(failures)
        logger.debug(f"Recorded suite run metrics for {suite}: {failures} failure(s)")
