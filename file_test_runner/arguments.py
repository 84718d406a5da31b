"""Parse test harness arguments using the libtest (``cargo test``) vocabulary.

Tools that already drive ``cargo test -- <filter> --exact`` style invocations
can drive this engine unmodified.
"""

import argparse
from collections.abc import Sequence
from typing import NoReturn

from file_test_runner.errors import HelpRequested, UsageError
from file_test_runner.models.invocation import ParsedInvocation


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{message}\n\n{self.format_usage().rstrip()}")


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"'{value}' must be at least 1")
    return number


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    """Build the parser for the harness arguments."""
    parser = _ArgumentParser(
        prog=prog,
        description="Run file-based tests",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "filters",
        nargs="*",
        metavar="FILTER",
        help="Run only tests whose name contains FILTER",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Match filters by name equality instead of containment",
    )
    parser.add_argument(
        "--list",
        dest="list_only",
        action="store_true",
        help="List the selected tests without running them",
    )
    ignored = parser.add_mutually_exclusive_group()
    ignored.add_argument(
        "--ignored",
        dest="ignored_only",
        action="store_true",
        help="Run only ignored tests",
    )
    ignored.add_argument(
        "--include-ignored",
        action="store_true",
        help="Run ignored and non-ignored tests",
    )
    parser.add_argument(
        "--test-threads",
        type=positive_int,
        metavar="N",
        help="Number of worker threads used to run tests in parallel",
    )
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="FILTER",
        help="Skip tests whose name contains FILTER (may be repeated)",
    )
    parser.add_argument(
        "--nocapture",
        action="store_true",
        help="Run tests one at a time so their output is not interleaved",
    )
    parser.add_argument("-h", "--help", action="store_true", help="Show this help")
    return parser


def parse_args(argv: Sequence[str], prog: str | None = None) -> ParsedInvocation:
    """Parse harness arguments (without the program name).

    Raises:
        UsageError: For unrecognized or malformed arguments
        HelpRequested: For ``-h``/``--help``, carrying the help text

    """
    parser = build_parser(prog)
    args = parser.parse_intermixed_args(list(argv))

    if args.help:
        raise HelpRequested(parser.format_help())

    return ParsedInvocation(
        filters=tuple(f for f in args.filters if f),
        skip=tuple(s for s in args.skip if s),
        exact=args.exact,
        list_only=args.list_only,
        ignored_only=args.ignored_only,
        include_ignored=args.include_ignored,
        nocapture=args.nocapture,
        thread_count=args.test_threads,
    )
