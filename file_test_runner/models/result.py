"""Models for test execution results."""

import asyncio
import traceback
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal, Self

from file_test_runner.models.collected import CollectedTest

type OutcomeKind = Literal["passed", "failed", "ignored"]


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Outcome of a single test callback.

    Contains only the outcome - the caller knows which test produced it.
    A ``steps`` result carries named sub-test results instead of an output
    and fails when any of them failed.
    """

    __test__ = False

    status: Literal["passed", "failed", "ignored", "steps"]
    output: str | None = None
    sub_tests: Sequence["SubTestResult"] = ()

    @classmethod
    def passed(cls) -> Self:
        return cls(status="passed")

    @classmethod
    def failed(cls, output: str) -> Self:
        return cls(status="failed", output=output)

    @classmethod
    def ignored(cls) -> Self:
        return cls(status="ignored")

    @classmethod
    def steps(cls, sub_tests: Sequence["SubTestResult"]) -> Self:
        return cls(status="steps", sub_tests=tuple(sub_tests))

    @property
    def is_failed(self) -> bool:
        if self.status == "steps":
            return any(sub_test.result.is_failed for sub_test in self.sub_tests)
        return self.status == "failed"

    @property
    def kind(self) -> OutcomeKind:
        """How the result counts in the run summary."""
        if self.status == "steps":
            return "failed" if self.is_failed else "passed"
        return self.status

    @property
    def failure_output(self) -> str:
        """Output of a failure; failed steps are joined in order."""
        if self.status == "steps":
            return "\n".join(
                sub_test.result.failure_output
                for sub_test in self.sub_tests
                if sub_test.result.is_failed
            )
        return (self.output or "") if self.is_failed else ""

    @classmethod
    def from_maybe_raise(cls, func: Callable[[], object]) -> Self:
        """Run ``func`` and convert anything it raises into a failure.

        Useful inside callbacks that want to report several checks as one
        result without letting the first exception escape. Only
        ``KeyboardInterrupt`` and task cancellation propagate.
        """
        try:
            func()
        except (KeyboardInterrupt, asyncio.CancelledError):
            raise
        except BaseException:
            return cls.failed(traceback.format_exc())
        return cls.passed()


@dataclass(frozen=True, kw_only=True)
class SubTestResult:
    """Named result of one step inside a test."""

    name: str
    result: TestResult


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """A test paired with its result and how long the callback took."""

    __test__ = False

    test: CollectedTest
    result: TestResult
    duration: float = 0.0


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Counts derived from a set of outcomes."""

    passed: int = 0
    failed: int = 0
    ignored: int = 0
    filtered_out: int = 0
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.ignored

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Sequence[TestOutcome],
        filtered_out: int = 0,
        duration: float = 0.0,
    ) -> Self:
        """Fold outcomes into counts; order of ``outcomes`` does not matter."""
        counts = {"passed": 0, "failed": 0, "ignored": 0}
        for outcome in outcomes:
            counts[outcome.result.kind] += 1
        return cls(
            passed=counts["passed"],
            failed=counts["failed"],
            ignored=counts["ignored"],
            filtered_out=filtered_out,
            duration=duration,
        )
