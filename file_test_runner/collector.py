"""Collect named tests from a base directory."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from file_test_runner.errors import (
    CollisionError,
    ConfigurationError,
    InvalidTestNameError,
)
from file_test_runner.models.collected import CollectedTest, DiscoveredTest
from file_test_runner.models.invocation import ParsedInvocation
from file_test_runner.strategies.base import CollectionStrategy

log = logging.getLogger(__name__)

NAME_SEGMENT_PATTERN = re.compile(r"[\w.-]+")


@dataclass(frozen=True, kw_only=True)
class CollectOptions[T]:
    """Input to test collection."""

    base: Path
    strategy: CollectionStrategy[T]
    # Applied instead of the command line filters; used when this engine is
    # embedded in another test runner.
    filter_override: str | Sequence[str] | None = None


def collect[T](options: CollectOptions[T]) -> Sequence[CollectedTest[T]]:
    """Collect and name the tests below ``options.base``.

    Returns:
        Tests sorted by name

    Raises:
        ConfigurationError: If the base directory is unusable or holds no tests
        InvalidTestNameError: If a derived name cannot be used as a filter
        CollisionError: If two tests resolve to the same name

    """
    base = Path(options.base)
    if not base.is_dir():
        raise ConfigurationError(f"Test directory not found: {base}")

    discovered = options.strategy.discover(base)

    # error when no tests are found before filtering
    if not discovered:
        raise ConfigurationError(f"No tests found in '{base}'")

    tests = _name_tests(discovered)
    log.info("Collected %d test(s) from %s", len(tests), base)

    if options.filter_override is not None:
        filters = (
            (options.filter_override,)
            if isinstance(options.filter_override, str)
            else tuple(options.filter_override)
        )
        invocation = ParsedInvocation(filters=tuple(f for f in filters if f))
        tests = [test for test in tests if invocation.selects(test.name)]
        log.info("%d test(s) left after filter override", len(tests))

    return tests


def derive_name(relative_path: PurePosixPath) -> str:
    """Derive a test name from a path relative to the base directory."""
    parts = relative_path.parts
    if not parts or not all(
        NAME_SEGMENT_PATTERN.fullmatch(part) and part.strip(".") for part in parts
    ):
        raise InvalidTestNameError(relative_path.as_posix())
    return "/".join(parts)


def _name_tests[T](
    discovered: Sequence[DiscoveredTest[T]],
) -> list[CollectedTest[T]]:
    tests_by_name: dict[str, CollectedTest[T]] = {}
    for unit in discovered:
        name = derive_name(unit.relative_path)
        if (existing := tests_by_name.get(name)) is not None:
            raise CollisionError(name, existing.path, unit.path)
        tests_by_name[name] = CollectedTest(
            name=name, path=unit.path, data=unit.data, ignored=unit.ignored
        )
    return [tests_by_name[name] for name in sorted(tests_by_name)]
