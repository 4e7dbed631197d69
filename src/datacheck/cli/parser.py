"""
Command-line argument parser configuration.
"""

import argparse


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="datacheck",
        description="Run row count, comparison and foreign key checks against relational databases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a suite and print a summary
  datacheck run suites/core.yaml

  # Emit TAP for a CI harness
  datacheck run suites/core.yaml --format tap

  # Keep going past query errors and save a JSON report
  datacheck run suites/core.yaml --continue-on-error --format json --output report.json

  # Export Prometheus metrics for the node-exporter textfile collector
  datacheck run suites/core.yaml --metrics-file /var/lib/node_exporter/datacheck.prom

Exit status: 0 if every check passed, 1 if any check failed,
2 if the suite could not be run as configured.
        """
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO). Without any --log-* option, '
             'LOG_LEVEL, LOG_FILE, LOG_JSON and LOG_CONSOLE are read from the environment'
    )
    parser.add_argument(
        '--log-json',
        action='store_true',
        help='Emit logs as JSON lines'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file (rotated)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', help='Run the checks in a suite file')
    run_parser.add_argument(
        'suite',
        help='Path to a YAML suite file'
    )
    run_parser.add_argument(
        '--format',
        choices=['console', 'tap', 'json', 'csv'],
        default='console',
        help='Report format (default: console)'
    )
    run_parser.add_argument(
        '--output',
        help='Write the report to this file instead of stdout (required for csv)'
    )
    run_parser.add_argument(
        '--continue-on-error',
        action='store_true',
        help='Record query errors as failed checks and continue'
    )
    run_parser.add_argument(
        '--metrics-file',
        help='Write Prometheus metrics to this textfile after the run'
    )
    run_parser.add_argument(
        '--otlp-endpoint',
        help='Export trace spans to this OTLP gRPC endpoint (host:port)'
    )

    validate_parser = subparsers.add_parser(
        'validate', help='Parse and validate a suite file without connecting'
    )
    validate_parser.add_argument(
        'suite',
        help='Path to a YAML suite file'
    )

    return parser
