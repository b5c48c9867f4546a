"""
Command-line interface for the WebCore compiler.

Usage:
    webcore build [PROJECT] [--out DIR] [--mode dev|prod] [--print-ast]
"""

import argparse
import logging
import os
import sys
from typing import Optional

from webcore import __version__

from .commands import cmd_build

LOG_LEVELS = ['debug', 'info', 'warn', 'error']


def _configure_logging(args) -> None:
    """Configure the ``webcore`` logger from ``--log-level`` or WEBCORE_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('WEBCORE_LOG_LEVEL', 'warning')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }
    numeric_level = level_map.get(log_level, logging.WARNING)

    webcore_logger = logging.getLogger('webcore')
    webcore_logger.setLevel(numeric_level)

    if not webcore_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        webcore_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        webcore_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="WebCore compiler: build static sites from .webc sources",
        prog="webcore"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set WEBCORE_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default=None,
        help='Set logging level (or set WEBCORE_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    build = subparsers.add_parser(
        'build',
        help='Compile the project into a static site'
    )
    build.add_argument(
        'project', nargs='?', default='.',
        help='Project directory containing webc.toml (default: current directory)'
    )
    build.add_argument(
        '--out', '-o', default=None,
        help='Output directory, relative to the working directory; it is deleted and recreated '
             '(default: [build] out from webc.toml, relative to the project, or dist)'
    )
    build.add_argument(
        '--mode', choices=['dev', 'prod'], default=None,
        help='Build mode; prod minifies CSS (default: [app] mode or WEBCORE_MODE)'
    )
    build.add_argument(
        '--print-ast', action='store_true',
        help='Print the merged document as JSON and exit'
    )
    # Also accepted after the subcommand; SUPPRESS keeps the global value otherwise.
    build.add_argument(
        '--verbose', action='store_true', default=argparse.SUPPRESS,
        help='Print written files, full tracebacks and detailed errors'
    )
    build.add_argument(
        '--log-level', choices=LOG_LEVELS, default=argparse.SUPPRESS,
        help='Set logging level (or set WEBCORE_LOG_LEVEL)'
    )
    build.set_defaults(func=cmd_build)
    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint.

    Examples:
        >>> main(['build', 'my-site'])  # doctest: +SKIP
        ✓ Built 2 page(s) in my-site/dist [dev]
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)
    _configure_logging(args)
    args.func(args)


if __name__ == '__main__':  # pragma: no cover
    main()
