"""
Report generation from recorded assertion outcomes.
"""

from collections import Counter
from datetime import UTC, datetime
from typing import Any, Iterable

from .outcome import AssertionOutcome


def generate_report(
    outcomes: Iterable[AssertionOutcome],
    suite: str | None = None,
) -> dict[str, Any]:
    """
    Summarise a run of assertions

    Args:
        outcomes: Recorded outcomes, in execution order
        suite: Optional suite name to include

    Returns:
        Dictionary containing:
        - suite: Suite name (or None)
        - status: PASS, FAIL, or NO_DATA
        - total_checks: Number of outcomes
        - checks_passed / checks_failed: Counts
        - failures_by_kind: Failed outcome counts per assertion kind
        - failures: Failed outcomes as dictionaries
        - results: All outcomes as dictionaries
        - summary: Human-readable summary
        - timestamp: Report generation time
    """
    outcomes = list(outcomes)
    timestamp = datetime.now(UTC).isoformat()

    if not outcomes:
        return {
            "suite": suite,
            "status": "NO_DATA",
            "total_checks": 0,
            "checks_passed": 0,
            "checks_failed": 0,
            "failures_by_kind": {},
            "failures": [],
            "results": [],
            "summary": "No checks were run",
            "timestamp": timestamp,
        }

    failures = [o for o in outcomes if not o.passed]
    passed = len(outcomes) - len(failures)

    return {
        "suite": suite,
        "status": "PASS" if not failures else "FAIL",
        "total_checks": len(outcomes),
        "checks_passed": passed,
        "checks_failed": len(failures),
        "failures_by_kind": dict(Counter(o.kind for o in failures)),
        "failures": [o.to_dict() for o in failures],
        "results": [o.to_dict() for o in outcomes],
        "summary": _generate_summary(len(outcomes), passed, len(failures)),
        "timestamp": timestamp,
    }


def _generate_summary(total: int, passed: int, failed: int) -> str:
    if failed == 0:
        return f"All {total} checks passed."
    return f"{failed} of {total} checks failed; {passed} passed."
