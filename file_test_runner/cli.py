"""CLI entry point running a test callback over a directory of test files."""

import argparse
import logging
import pkgutil
import sys
from collections.abc import Sequence
from pathlib import Path

from file_test_runner.collector import CollectOptions
from file_test_runner.errors import ConfigurationError, FileTestRunnerError
from file_test_runner.reporter import EXIT_FAILURE
from file_test_runner.runner import collect_and_run
from file_test_runner.scheduler import RunOptions, RunTestFunc
from file_test_runner.strategies.loading import load_strategy_manifest


def split_harness_args(
    argv: Sequence[str],
) -> tuple[Sequence[str], Sequence[str]]:
    """Split CLI arguments from the test harness arguments following ``--``."""
    if "--" not in argv:
        return list(argv), []
    index = list(argv).index("--")
    return list(argv[:index]), list(argv[index + 1 :])


def load_callback(reference: str) -> RunTestFunc:
    """Resolve a ``module:function`` reference to the test callback."""
    try:
        callback = pkgutil.resolve_name(reference)
    except (ImportError, AttributeError, ValueError) as err:
        raise ConfigurationError(
            f"Cannot load test callback '{reference}': {err}"
        ) from err
    if not callable(callback):
        raise ConfigurationError(f"Test callback '{reference}' is not callable")
    return callback


def run(
    base: Path,
    strategy_key: str,
    strategy_config_json: str,
    callback: str,
    parallel: bool = True,
    timeout: float | None = None,
    harness_args: Sequence[str] = (),
) -> int:
    """Run the tests and return exit code."""
    log = logging.getLogger("file_test_runner")

    log.info("Loading strategy: %s", strategy_key)
    manifest = load_strategy_manifest(strategy_key)
    strategy = manifest.create(strategy_config_json)

    log.info("Loading test callback: %s", callback)
    run_test = load_callback(callback)

    return collect_and_run(
        CollectOptions(base=base, strategy=strategy),
        RunOptions(parallel=parallel, timeout=timeout),
        run_test,
        argv=harness_args,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    own_args, harness_args = split_harness_args(
        sys.argv[1:] if argv is None else argv
    )

    parser = argparse.ArgumentParser(
        description="Run a test callback for every test found in a directory",
        epilog="Arguments after '--' use the cargo test vocabulary "
        "(filters, --exact, --list, --ignored, --include-ignored, "
        "--test-threads=N, --skip=FILTER, --nocapture).",
    )
    parser.add_argument(
        "--base",
        type=Path,
        required=True,
        help="Directory containing the test files",
    )
    parser.add_argument(
        "--callback",
        required=True,
        help="Test callback as module:function, called with each CollectedTest",
    )
    parser.add_argument(
        "--strategy",
        default="per-file",
        help="Collection strategy key (per-file, per-directory, test-list)",
    )
    parser.add_argument(
        "--strategy-config",
        default="{}",
        help="JSON configuration for the strategy",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run tests one at a time in name order",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds after which a single test is reported as failed",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )

    args = parser.parse_args(own_args)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        exit_code = run(
            base=args.base,
            strategy_key=args.strategy,
            strategy_config_json=args.strategy_config,
            callback=args.callback,
            parallel=not args.sequential,
            timeout=args.timeout,
            harness_args=harness_args,
        )
    except FileTestRunnerError as err:
        print(f"error: {err}", file=sys.stderr)
        exit_code = EXIT_FAILURE
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
