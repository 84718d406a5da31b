"""Strategy post-processing the tests found by another strategy."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from file_test_runner.models.collected import DiscoveredTest
from file_test_runner.strategies.base import CollectionStrategy, sort_discovered


@dataclass(frozen=True, kw_only=True)
class TestMapperStrategy[T](CollectionStrategy[T]):
    """Maps every test found by ``base_strategy`` through ``map``.

    Use it to attach parsed data to a test or to mark it ignored while
    keeping the discovery rules of a built-in strategy::

        TestMapperStrategy(
            base_strategy=TestPerFileStrategy(file_pattern=r"\\.json$"),
            map=lambda test: replace(test, ignored="slow" in test.path.name),
        )
    """

    __test__ = False

    base_strategy: CollectionStrategy[Any]
    map: Callable[[DiscoveredTest[Any]], DiscoveredTest[T]]

    def discover(self, base: Path) -> Sequence[DiscoveredTest[T]]:
        return sort_discovered(
            [self.map(test) for test in self.base_strategy.discover(base)]
        )
