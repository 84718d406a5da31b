"""Scheduler executing collected tests sequentially or on worker threads."""

import asyncio
import logging
import threading
import time
import traceback
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from file_test_runner.models.collected import CollectedTest
from file_test_runner.models.result import TestOutcome, TestResult
from file_test_runner.parallelism import Parallelism
from file_test_runner.reporter import Reporter

log = logging.getLogger(__name__)

# Returning None means the test passed.
type RunTestFunc = Callable[[CollectedTest[Any]], TestResult | None]


@dataclass(frozen=True, kw_only=True)
class RunOptions:
    """Options for executing tests."""

    parallel: bool
    # Seconds a single test may run before it is reported failed. The thread
    # of a timed out test cannot be stopped; it is left running in the
    # background and no longer holds a worker slot.
    timeout: float | None = None
    slow_test_threshold: float = 60.0
    reporter: Reporter | None = None
    parallelism: Parallelism | None = None


def invoke_test(run_test: RunTestFunc, test: CollectedTest[Any]) -> TestOutcome:
    """Call the test callback, converting anything it raises into a failure.

    Only ``KeyboardInterrupt`` and task cancellation propagate, so
    ``sys.exit()`` or a test framework's skip and fail signals raised by the
    callback fail the test without ending the run.
    """
    start = time.monotonic()
    try:
        returned = run_test(test)
    except (KeyboardInterrupt, asyncio.CancelledError):
        raise
    except BaseException:
        log.debug("Test %s raised", test.name, exc_info=True)
        result = TestResult.failed(traceback.format_exc())
    else:
        result = to_result(returned)
    return TestOutcome(test=test, result=result, duration=time.monotonic() - start)


def to_result(returned: object) -> TestResult:
    """Interpret the value returned by a test callback."""
    if returned is None:
        return TestResult.passed()
    if isinstance(returned, TestResult):
        return returned
    return TestResult.failed(
        f"test callback returned {returned!r}, expected None or a TestResult"
    )


@dataclass(frozen=True, kw_only=True)
class TestScheduler:
    """Runs every given test exactly once and collects the outcomes.

    Each executed test gets its own daemon thread. With one worker the tests
    run one at a time in the given order; with more, at most ``workers``
    tests run at once and they are reported as they complete. A failing or
    timed out test never stops the others.
    """

    __test__ = False

    run_test: RunTestFunc
    reporter: Reporter
    workers: int = 1
    timeout: float | None = None
    slow_test_threshold: float = 60.0
    parallelism: Parallelism | None = None

    async def run_tests(
        self,
        tests: Sequence[CollectedTest[Any]],
        run_ignored: bool = False,
    ) -> Sequence[TestOutcome]:
        """Run the tests and return one outcome per test.

        Args:
            tests: Selected tests, in collection order
            run_ignored: Run tests marked ignored instead of reporting them
                as ignored

        Returns:
            Outcomes in reporting order

        """
        if not tests:
            log.info("No tests to run")
            return []

        log.info("Running %d test(s) on %d worker(s)", len(tests), self.workers)
        if self.workers == 1:
            return await self._run_sequential(tests, run_ignored)
        return await self._run_parallel(tests, run_ignored)

    async def _run_sequential(
        self,
        tests: Sequence[CollectedTest[Any]],
        run_ignored: bool,
    ) -> Sequence[TestOutcome]:
        outcomes: list[TestOutcome] = []
        for test in tests:
            self.reporter.report_test_start(test)
            if test.ignored and not run_ignored:
                outcome = TestOutcome(test=test, result=TestResult.ignored())
            else:
                outcome = await self._run_one(test)
            self.reporter.report_test_end(outcome)
            outcomes.append(outcome)
        return outcomes

    async def _run_parallel(
        self,
        tests: Sequence[CollectedTest[Any]],
        run_ignored: bool,
    ) -> Sequence[TestOutcome]:
        slots = asyncio.Semaphore(self.workers)

        async def run_in_slot(test: CollectedTest[Any]) -> TestOutcome:
            async with slots:
                return await self._run_one(test)

        outcomes: list[TestOutcome] = []
        pending = []
        for test in tests:
            if test.ignored and not run_ignored:
                outcome = TestOutcome(test=test, result=TestResult.ignored())
                self.reporter.report_test_end(outcome)
                outcomes.append(outcome)
            else:
                self.reporter.report_test_start(test)
                pending.append(run_in_slot(test))

        for next_outcome in asyncio.as_completed(pending):
            outcome = await next_outcome
            self.reporter.report_test_end(outcome)
            outcomes.append(outcome)
        return outcomes

    async def _run_one(self, test: CollectedTest[Any]) -> TestOutcome:
        """Run one test on a new thread, applying the timeout once it started."""
        loop = asyncio.get_running_loop()
        started = asyncio.Event()
        future: asyncio.Future[TestOutcome] = loop.create_future()

        def finish(outcome: TestOutcome | None, error: BaseException | None) -> None:
            started.set()
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(outcome)

        def work() -> None:
            outcome: TestOutcome | None = None
            error: BaseException | None = None
            try:
                outcome = self._invoke(test, loop, started)
            except BaseException as err:
                error = err
            try:
                loop.call_soon_threadsafe(finish, outcome, error)
            except RuntimeError:
                log.debug("Run finished before test %s returned", test.name)

        threading.Thread(
            target=work, name=f"file-test-runner: {test.name}", daemon=True
        ).start()
        await started.wait()

        start = loop.time()
        slow_warning = loop.call_later(
            self.slow_test_threshold, self._warn_slow_test, test
        )
        try:
            if self.timeout is None:
                return await future
            return await asyncio.wait_for(future, self.timeout)
        except TimeoutError:
            log.warning("Test %s timed out after %.1fs", test.name, self.timeout)
            return TestOutcome(
                test=test,
                result=TestResult.failed(
                    f"test did not complete within {self.timeout} seconds"
                ),
                duration=loop.time() - start,
            )
        finally:
            slow_warning.cancel()

    def _invoke(
        self,
        test: CollectedTest[Any],
        loop: asyncio.AbstractEventLoop,
        started: asyncio.Event,
    ) -> TestOutcome:
        """Worker thread body: parallelism hooks around the callback."""
        if self.parallelism is None:
            loop.call_soon_threadsafe(started.set)
            return invoke_test(self.run_test, test)

        self.parallelism.on_test_start()
        try:
            loop.call_soon_threadsafe(started.set)
            return invoke_test(self.run_test, test)
        finally:
            self.parallelism.on_test_end()

    def _warn_slow_test(self, test: CollectedTest[Any]) -> None:
        log.warning(
            "test %s has been running for more than %d seconds",
            test.name,
            self.slow_test_threshold,
        )
