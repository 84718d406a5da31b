"""Report test progress and results in the libtest text format.

Downstream tooling that parses ``cargo test`` output (the per-test
``test <name> ... ok`` lines and the ``test result:`` summary) keeps working.
"""

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TextIO

from file_test_runner.models.collected import CollectedTest
from file_test_runner.models.result import RunSummary, SubTestResult, TestOutcome

EXIT_SUCCESS = 0
# libtest exits with the status of a panicking main thread.
EXIT_FAILURE = 101

STATUS_WORDS = {
    "passed": "ok",
    "failed": "FAILED",
    "ignored": "ignored",
}


class Reporter(Protocol):
    """Receives progress events from the scheduler.

    All methods are called from the orchestrating thread, never from workers.
    """

    def report_run_start(self, test_count: int) -> None: ...

    def report_test_start(self, test: CollectedTest[Any]) -> None: ...

    def report_test_end(self, outcome: TestOutcome) -> None: ...

    def report_summary(
        self, summary: RunSummary, outcomes: Sequence[TestOutcome]
    ) -> None: ...

    def report_list(self, tests: Sequence[CollectedTest[Any]]) -> None: ...


def exit_code(summary: RunSummary) -> int:
    """Process exit status for a finished run."""
    return EXIT_SUCCESS if summary.success else EXIT_FAILURE


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_sub_tests(
    sub_tests: Sequence[SubTestResult], indent: str = "  "
) -> list[str]:
    """Format step results as indented lines, nesting grouped steps."""
    lines: list[str] = []
    for sub_test in sub_tests:
        result = sub_test.result
        if result.status != "steps":
            lines.append(f"{indent}{sub_test.name} {STATUS_WORDS[result.status]}")
            continue
        lines.append(f"{indent}{sub_test.name}")
        if result.sub_tests:
            lines.extend(format_sub_tests(result.sub_tests, indent + "  "))
        else:
            lines.append(f"{indent}  <no steps>")
    return lines


def format_summary(summary: RunSummary) -> str:
    """Format the ``test result:`` line."""
    status = "ok" if summary.success else "FAILED"
    return (
        f"test result: {status}. {summary.passed} passed; {summary.failed} failed; "
        f"{summary.ignored} ignored; 0 measured; {summary.filtered_out} filtered out; "
        f"finished in {summary.duration:.2f}s"
    )


@dataclass(kw_only=True)
class LibtestReporter:
    """Writes libtest compatible output to a text stream.

    In sequential mode the test name is written before the callback runs and
    the status once it returns; in parallel mode the whole line is written
    when the test completes, so lines follow completion order.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    parallel: bool = False

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def report_run_start(self, test_count: int) -> None:
        self._write(f"\nrunning {pluralize(test_count, 'test')}\n")

    def report_test_start(self, test: CollectedTest[Any]) -> None:
        if not self.parallel:
            self._write(f"test {test.name} ... ")

    def report_test_end(self, outcome: TestOutcome) -> None:
        status = STATUS_WORDS[outcome.result.kind]
        text = f"{status}\n"
        if self.parallel:
            text = f"test {outcome.test.name} ... {text}"
        if outcome.result.status == "steps":
            text += "".join(
                f"{line}\n" for line in format_sub_tests(outcome.result.sub_tests)
            )
        self._write(text)

    def report_summary(
        self, summary: RunSummary, outcomes: Sequence[TestOutcome]
    ) -> None:
        self._write(f"\n{format_summary(summary)}\n\n")

        failures = sorted(
            (outcome for outcome in outcomes if outcome.result.is_failed),
            key=lambda outcome: outcome.test.name,
        )
        if not failures:
            return

        lines = ["failures:", ""]
        for failure in failures:
            lines.append(f"---- {failure.test.name} stdout ----")
            lines.append(failure.result.failure_output.rstrip("\n"))
            lines.append(f"Test file: {failure.test.path}")
            lines.append("")
        lines.append("failures:")
        lines.extend(f"    {failure.test.name}" for failure in failures)
        lines.append("")
        self._write("\n".join(lines) + "\n")

    def report_list(self, tests: Sequence[CollectedTest[Any]]) -> None:
        lines = [f"{test.name}: test" for test in tests]
        lines.append("")
        lines.append(f"{pluralize(len(tests), 'test')}, 0 benchmarks")
        self._write("\n".join(lines) + "\n")
