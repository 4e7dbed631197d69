"""
Command-line interface for running check suites.

Available commands:
- run: execute a YAML suite and report the results
- validate: check a suite file without connecting
"""

import sys

from datacheck.utils.logging import configure_from_env, setup_logging

from .commands import cmd_run, cmd_validate
from .config import load_suite, parse_suite
from .parser import create_parser
from .runner import run_suite


def main(argv: list[str] | None = None) -> int:
    """Entry point for the datacheck CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.log_level or args.log_file or args.log_json:
        setup_logging(level=args.log_level or "INFO", log_file=args.log_file, json_format=args.log_json)
    else:
        configure_from_env()

    if args.command == 'run':
        return cmd_run(args)
    elif args.command == 'validate':
        return cmd_validate(args)

    parser.print_help()
    return 2


__all__ = [
    'main',
    'cmd_run',
    'cmd_validate',
    'create_parser',
    'load_suite',
    'parse_suite',
    'run_suite',
]


if __name__ == '__main__':
    sys.exit(main())
