"""
Assertion outcomes and the reporter interface.

Checks never keep state of their own: each one builds an AssertionOutcome
and hands it to the Reporter it was given. What happens next (collecting,
logging, counting, printing TAP) is up to the reporter.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssertionOutcome:
    """
    Result of one assertion.

    Attributes:
        name: Check description
        kind: Assertion kind (is_rows, cmp_rows, row_subtotals, ...)
        passed: Whether the assertion held
        diagnostics: Messages explaining a failure; always empty on a pass
        details: Structured values behind the result (got, expected, ...)
        timestamp: ISO 8601 UTC time the outcome was created
    """

    name: str
    kind: str
    passed: bool
    diagnostics: tuple[str, ...] = ()
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def __post_init__(self) -> None:
        if self.passed and self.diagnostics:
            # Diagnostics only ever describe failures
            object.__setattr__(self, "diagnostics", ())
        else:
            object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "passed": self.passed,
            "diagnostics": list(self.diagnostics),
            "details": dict(self.details),
            "timestamp": self.timestamp,
        }


@runtime_checkable
class Reporter(Protocol):
    """Anything that can record assertion outcomes."""

    def record(self, outcome: AssertionOutcome) -> None: ...


class ResultCollector:
    """
    Reporter that keeps outcomes in order and logs them.

    Passes are logged at INFO, failures at WARNING with one extra line per
    diagnostic.
    """

    def __init__(self, log: logging.Logger | None = None):
        self.outcomes: list[AssertionOutcome] = []
        self.log = log or logger

    def record(self, outcome: AssertionOutcome) -> None:
        self.outcomes.append(outcome)

        if outcome.passed:
            self.log.info(f"ok - {outcome.name}", extra={"check_kind": outcome.kind})
            return

        self.log.warning(f"not ok - {outcome.name}", extra={"check_kind": outcome.kind})
        for message in outcome.diagnostics:
            self.log.warning(f"  {message}")

    @property
    def passed(self) -> list[AssertionOutcome]:
        return [o for o in self.outcomes if o.passed]

    @property
    def failed(self) -> list[AssertionOutcome]:
        return [o for o in self.outcomes if not o.passed]

    @property
    def all_passed(self) -> bool:
        return not self.failed

    @property
    def exit_code(self) -> int:
        """0 when every recorded assertion passed, 1 otherwise."""
        return 0 if self.all_passed else 1

    def __len__(self) -> int:
        return len(self.outcomes)


class MetricsReporter:
    """
    Reporter that forwards to another reporter and counts outcomes in
    Prometheus.

    Args:
        inner: Reporter receiving every outcome
        metrics: DataCheckMetrics instance
    """

    def __init__(self, inner: Reporter, metrics: Any):
        self.inner = inner
        self.metrics = metrics

    def record(self, outcome: AssertionOutcome) -> None:
        self.inner.record(outcome)
        self.metrics.record_assertion(
            outcome.kind,
            outcome.passed,
            diagnostics=len(outcome.diagnostics),
        )
