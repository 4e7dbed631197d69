"""
CLI command implementations.

- run: execute a suite and render a report
- validate: check a suite file without connecting to anything
"""

import argparse
import json
import logging

from prometheus_client import CollectorRegistry

from datacheck.exceptions import ConfigurationError
from datacheck.report import (
    ResultCollector,
    MetricsReporter,
    export_report_csv,
    export_report_json,
    format_report_console,
    format_report_tap,
    generate_report,
)
from datacheck.utils.metrics import DataCheckMetrics, write_metrics_file
from datacheck.utils.tracing import initialize_tracing, shutdown_tracing

from .config import load_suite
from .connections import close_all, connect_all
from .runner import run_suite

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _write_text(text: str, output: str | None) -> None:
    if output:
        with open(output, "w") as f:
            f.write(text)
        logger.info(f"Report written to {output}")
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def emit_report(report: dict, report_format: str, output: str | None) -> None:
    """
    Render a report in the requested format

    Args:
        report: Report dictionary from generate_report
        report_format: console, tap, json or csv
        output: File path, or None for stdout (not allowed for csv)
    """
    if report_format == "json":
        if output:
            export_report_json(report, output)
            logger.info(f"Report written to {output}")
        else:
            _write_text(json.dumps(report, indent=2, default=str), None)
    elif report_format == "csv":
        if not output:
            raise ConfigurationError("--output is required for csv reports")
        export_report_csv(report, output)
        logger.info(f"Report written to {output}")
    elif report_format == "tap":
        _write_text(format_report_tap(report), output)
    else:
        _write_text(format_report_console(report), output)


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run a suite

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    try:
        suite = load_suite(args.suite)
        if args.format == "csv" and not args.output:
            raise ConfigurationError("--output is required for csv reports")
    except ConfigurationError as e:
        logger.error(f"Invalid suite: {e}")
        return EXIT_CONFIG_ERROR

    if args.otlp_endpoint:
        initialize_tracing(service_name="datacheck", otlp_endpoint=args.otlp_endpoint)

    collector = ResultCollector()
    reporter = collector
    registry = None
    metrics = None
    if args.metrics_file:
        registry = CollectorRegistry()
        metrics = DataCheckMetrics(registry=registry)
        reporter = MetricsReporter(collector, metrics)

    connections = {}
    try:
        connections = connect_all(suite.databases)
        run_suite(suite, connections, reporter, continue_on_error=args.continue_on_error)
    except ConfigurationError as e:
        logger.error(f"Suite aborted: {e}")
        return EXIT_CONFIG_ERROR
    finally:
        close_all(connections)
        shutdown_tracing()

    report = generate_report(collector.outcomes, suite=suite.name)
    emit_report(report, args.format, args.output)

    if metrics is not None:
        metrics.record_suite_run(suite.name, len(collector.failed))
        write_metrics_file(args.metrics_file, registry)

    logger.info(report["summary"])
    return collector.exit_code


def cmd_validate(args: argparse.Namespace) -> int:
    """
    Validate a suite file

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    try:
        suite = load_suite(args.suite)
    except ConfigurationError as e:
        logger.error(f"Invalid suite: {e}")
        return EXIT_CONFIG_ERROR

    print(
        f"Suite '{suite.name}' is valid: {len(suite.checks)} check(s), "
        f"databases: {', '.join(suite.databases)}"
    )
    return EXIT_OK
