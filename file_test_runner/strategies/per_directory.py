"""Strategy collecting one test per directory."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from file_test_runner.models.base import Model
from file_test_runner.models.collected import DiscoveredTest
from file_test_runner.strategies.base import (
    CollectionStrategy,
    compile_pattern,
    is_directory,
    read_dir_entries,
    sort_discovered,
)
from file_test_runner.strategies.manifest import StrategyManifest


class TestPerDirectoryConfig(Model):
    """Configuration for the per-directory strategy."""

    __test__ = False

    file_pattern: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestPerDirectoryStrategy(CollectionStrategy[tuple[Path, ...]]):
    """Every directory holding a qualifying file is a test.

    A file qualifies when ``file_pattern`` is searched successfully in its
    name (``None`` qualifies any file). Once a directory is a test, traversal
    stops below it and every file it contains is attached as the test data.
    The base directory itself is never a test.
    """

    __test__ = False

    file_pattern: str | None = None

    @classmethod
    def from_config(
        cls, config: TestPerDirectoryConfig
    ) -> "TestPerDirectoryStrategy":
        return cls(file_pattern=config.file_pattern)

    def discover(self, base: Path) -> Sequence[DiscoveredTest[tuple[Path, ...]]]:
        pattern = compile_pattern(self.file_pattern)
        tests: list[DiscoveredTest[tuple[Path, ...]]] = []
        self._collect(base, PurePosixPath(), pattern, tests)
        return sort_discovered(tests)

    def _collect(
        self,
        dir_path: Path,
        relative_dir: PurePosixPath,
        pattern: re.Pattern[str] | None,
        tests: list[DiscoveredTest[tuple[Path, ...]]],
    ) -> None:
        for entry in read_dir_entries(dir_path):
            if not is_directory(entry):
                continue
            relative_path = relative_dir / entry.name
            if self._is_test_directory(entry, pattern):
                tests.append(
                    DiscoveredTest(
                        relative_path=relative_path,
                        path=entry,
                        data=tuple(list_files(entry)),
                    )
                )
            else:
                self._collect(entry, relative_path, pattern, tests)

    @staticmethod
    def _is_test_directory(dir_path: Path, pattern: re.Pattern[str] | None) -> bool:
        return any(
            entry.is_file() and (pattern is None or pattern.search(entry.name))
            for entry in read_dir_entries(dir_path)
        )


def list_files(dir_path: Path) -> Sequence[Path]:
    """List every file below a directory, depth first in name order."""
    files: list[Path] = []
    for entry in read_dir_entries(dir_path):
        if is_directory(entry):
            files.extend(list_files(entry))
        elif entry.is_file():
            files.append(entry)
    return files


per_directory_manifest = StrategyManifest(
    config_cls=TestPerDirectoryConfig,
    strategy_factory=TestPerDirectoryStrategy.from_config,
)
