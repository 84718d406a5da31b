"""Embedding entry points chaining collection, selection and execution."""

import asyncio
import logging
import sys
import time
from collections.abc import Sequence
from typing import Any

from file_test_runner.arguments import parse_args
from file_test_runner.collector import CollectOptions, collect
from file_test_runner.errors import FileTestRunnerError, HelpRequested
from file_test_runner.models.collected import CollectedTest
from file_test_runner.models.invocation import ParsedInvocation
from file_test_runner.models.result import RunSummary
from file_test_runner.reporter import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    LibtestReporter,
    exit_code,
)
from file_test_runner.scheduler import RunOptions, RunTestFunc, TestScheduler
from file_test_runner.settings import RunnerSettings

log = logging.getLogger(__name__)


def select_tests[T](
    tests: Sequence[CollectedTest[T]], invocation: ParsedInvocation
) -> tuple[Sequence[CollectedTest[T]], int]:
    """Apply the command line selection to collected tests.

    Returns:
        The selected tests in collection order and how many were filtered out

    """
    selected = [
        test
        for test in tests
        if invocation.selects(test.name)
        and (test.ignored or not invocation.ignored_only)
    ]
    return selected, len(tests) - len(selected)


async def run_async(
    tests: Sequence[CollectedTest[Any]],
    options: RunOptions,
    run_test: RunTestFunc,
    invocation: ParsedInvocation | None = None,
    settings: RunnerSettings | None = None,
) -> int:
    """Run collected tests from inside an event loop and return the exit code."""
    invocation = invocation or ParsedInvocation()
    settings = settings or RunnerSettings.from_env()

    selected, filtered_out = select_tests(tests, invocation)
    thread_count = invocation.thread_count
    if thread_count is None and options.parallelism is not None:
        thread_count = options.parallelism.max_parallelism()
    workers = settings.worker_count(
        options.parallel, thread_count, invocation.nocapture
    )
    reporter = options.reporter or LibtestReporter(parallel=workers > 1)

    if invocation.list_only:
        reporter.report_list(selected)
        return EXIT_SUCCESS

    start = time.monotonic()
    reporter.report_run_start(len(selected))
    scheduler = TestScheduler(
        run_test=run_test,
        reporter=reporter,
        workers=workers,
        timeout=options.timeout,
        slow_test_threshold=options.slow_test_threshold,
        parallelism=options.parallelism,
    )
    outcomes = await scheduler.run_tests(
        selected, run_ignored=invocation.runs_ignored()
    )

    summary = RunSummary.from_outcomes(
        outcomes, filtered_out=filtered_out, duration=time.monotonic() - start
    )
    reporter.report_summary(summary, outcomes)
    log.info(
        "Run finished: passed=%d failed=%d ignored=%d",
        summary.passed,
        summary.failed,
        summary.ignored,
    )
    return exit_code(summary)


def run(
    tests: Sequence[CollectedTest[Any]],
    options: RunOptions,
    run_test: RunTestFunc,
    invocation: ParsedInvocation | None = None,
    settings: RunnerSettings | None = None,
) -> int:
    """Run collected tests and return the process exit code.

    Without ``invocation`` every test is selected and ignored tests are
    reported without running.
    """
    return asyncio.run(run_async(tests, options, run_test, invocation, settings))


def collect_and_run[T](
    collect_options: CollectOptions[T],
    run_options: RunOptions,
    run_test: RunTestFunc,
    argv: Sequence[str] | None = None,
) -> int:
    """Parse the harness arguments, collect the tests and run them.

    ``run_test`` is called once per test, from worker threads when running in
    parallel; it must be safe to call concurrently and must not mutate shared
    state. It passes a test by returning ``None``, and reports an explicit
    outcome by returning a ``TestResult``; any exception it raises fails only
    that test.

    Arguments come from ``argv`` (defaults to ``sys.argv[1:]``) unless
    ``collect_options.filter_override`` is set, in which case the command
    line is not read at all.

    Returns:
        0 when no test failed, 101 on test failures, usage errors and
        collection errors

    """
    try:
        if collect_options.filter_override is not None:
            invocation = ParsedInvocation()
        else:
            invocation = parse_args(sys.argv[1:] if argv is None else argv)
        settings = RunnerSettings.from_env()
        tests = collect(collect_options)
    except HelpRequested as help_text:
        print(help_text, end="")
        return EXIT_SUCCESS
    except FileTestRunnerError as err:
        print(f"error: {err}", file=sys.stderr)
        return EXIT_FAILURE

    return run(tests, run_options, run_test, invocation, settings)
