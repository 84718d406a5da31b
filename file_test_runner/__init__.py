"""File driven test discovery and execution engine."""

from file_test_runner.arguments import parse_args
from file_test_runner.collector import CollectOptions, collect
from file_test_runner.errors import (
    CollisionError,
    ConfigurationError,
    FileTestRunnerError,
    InvalidTestNameError,
    UsageError,
)
from file_test_runner.models.collected import CollectedTest, DiscoveredTest
from file_test_runner.models.invocation import ParsedInvocation
from file_test_runner.models.result import (
    RunSummary,
    SubTestResult,
    TestOutcome,
    TestResult,
)
from file_test_runner.parallelism import BoundedParallelism, Parallelism
from file_test_runner.reporter import LibtestReporter, Reporter
from file_test_runner.runner import collect_and_run, run, run_async, select_tests
from file_test_runner.scheduler import RunOptions, RunTestFunc
from file_test_runner.strategies import (
    CollectionStrategy,
    TestListStrategy,
    TestMapperStrategy,
    TestPerDirectoryStrategy,
    TestPerFileStrategy,
)

__all__ = [
    "BoundedParallelism",
    "CollectOptions",
    "CollectedTest",
    "CollectionStrategy",
    "CollisionError",
    "ConfigurationError",
    "DiscoveredTest",
    "FileTestRunnerError",
    "InvalidTestNameError",
    "LibtestReporter",
    "Parallelism",
    "ParsedInvocation",
    "Reporter",
    "RunOptions",
    "RunSummary",
    "RunTestFunc",
    "SubTestResult",
    "TestListStrategy",
    "TestMapperStrategy",
    "TestOutcome",
    "TestPerDirectoryStrategy",
    "TestPerFileStrategy",
    "TestResult",
    "UsageError",
    "collect",
    "collect_and_run",
    "parse_args",
    "run",
    "run_async",
    "select_tests",
]
