"""
Report formatting and export.

Supports a console summary, a TAP stream for CI harnesses that consume TAP,
JSON and CSV.
"""

import csv
import json
from typing import Any


def export_report_json(report: dict[str, Any], output_path: str) -> None:
    """
    Export report to JSON file

    Args:
        report: Report dictionary from generate_report
        output_path: Path to output file
    """
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)


def export_report_csv(report: dict[str, Any], output_path: str) -> None:
    """
    Export one CSV row per check

    Args:
        report: Report dictionary from generate_report
        output_path: Path to output file
    """
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Check", "Kind", "Status", "Diagnostics", "Timestamp"])

        for result in report.get("results", []):
            writer.writerow([
                result.get("name", ""),
                result.get("kind", ""),
                "PASS" if result.get("passed") else "FAIL",
                " | ".join(d.replace("\n", " ") for d in result.get("diagnostics", [])),
                result.get("timestamp", ""),
            ])


def format_report_tap(report: dict[str, Any]) -> str:
    """
    Render results as a TAP version 13 stream

    Args:
        report: Report dictionary from generate_report

    Returns:
        TAP text, newline-terminated
    """
    results = report.get("results", [])
    lines = ["TAP version 13", f"1..{len(results)}"]

    for number, result in enumerate(results, start=1):
        status = "ok" if result.get("passed") else "not ok"
        lines.append(f"{status} {number} - {result.get('name', '')}")
        for diagnostic in result.get("diagnostics", []):
            for line in diagnostic.splitlines():
                lines.append(f"# {line}")

    failed = report.get("checks_failed", 0)
    if failed:
        lines.append(f"# Looks like you failed {failed} test(s) of {len(results)}.")

    return "\n".join(lines) + "\n"


def format_report_console(report: dict[str, Any]) -> str:
    """
    Format report for console output

    Args:
        report: Report dictionary from generate_report

    Returns:
        Formatted string for terminal display
    """
    lines = []

    lines.append("=" * 80)
    title = "DATACHECK REPORT"
    if report.get("suite"):
        title += f": {report['suite']}"
    lines.append(title)
    lines.append("=" * 80)
    lines.append(f"Status: {report['status']}")
    lines.append(f"Timestamp: {report['timestamp']}")
    lines.append(f"Total Checks: {report['total_checks']}")
    lines.append(f"Passed: {report['checks_passed']}")
    lines.append(f"Failed: {report['checks_failed']}")
    lines.append("")

    if report.get("failures"):
        lines.append("FAILURES:")
        lines.append("-" * 80)
        for failure in report["failures"]:
            lines.append(f"  [{failure['kind']}] {failure['name']}")
            for diagnostic in failure.get("diagnostics", []):
                for line in diagnostic.splitlines():
                    lines.append(f"      {line}")
        lines.append("")

    lines.append(f"Summary: {report['summary']}")
    lines.append("=" * 80)

    return "\n".join(lines)
