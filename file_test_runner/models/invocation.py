"""Normalized form of the test harness command line."""

from collections.abc import Sequence

from pydantic import Field, PositiveInt

from file_test_runner.models.base import Model


class ParsedInvocation(Model):
    """Run configuration parsed once from the process arguments."""

    filters: tuple[str, ...] = Field(
        default=(), description="Name filters; any match selects a test"
    )
    skip: tuple[str, ...] = Field(
        default=(), description="Name filters; any match deselects a test"
    )
    exact: bool = Field(default=False, description="Match filters by equality")
    list_only: bool = Field(default=False, description="List tests, do not run")
    ignored_only: bool = Field(default=False, description="Run only ignored tests")
    include_ignored: bool = Field(
        default=False, description="Run ignored and non-ignored tests"
    )
    nocapture: bool = Field(default=False, description="Run on a single worker")
    thread_count: PositiveInt | None = Field(
        default=None, description="Worker count override"
    )

    def _matches(self, name: str, patterns: Sequence[str]) -> bool:
        if self.exact:
            return name in patterns
        return any(pattern in name for pattern in patterns)

    def selects(self, name: str) -> bool:
        """Check a test name against the filters and skips."""
        if self.filters and not self._matches(name, self.filters):
            return False
        return not (self.skip and self._matches(name, self.skip))

    def runs_ignored(self) -> bool:
        return self.ignored_only or self.include_ignored
