"""Strategy collecting one test per file."""

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


class TestPerFileConfig(Model):
    """Configuration for the per-file strategy."""

    __test__ = False

    file_pattern: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestPerFileStrategy(CollectionStrategy[None]):
    """Every file in every subdirectory is a test.

    ``file_pattern`` is a regular expression searched in the file path
    relative to the base directory; ``None`` matches all files. The test name
    is the relative path without the file extension.
    """

    __test__ = False

    file_pattern: str | None = None

    @classmethod
    def from_config(cls, config: TestPerFileConfig) -> "TestPerFileStrategy":
        return cls(file_pattern=config.file_pattern)

    def discover(self, base: Path) -> Sequence[DiscoveredTest[None]]:
        pattern = compile_pattern(self.file_pattern)
        tests: list[DiscoveredTest[None]] = []
        self._collect(base, PurePosixPath(), pattern, tests)
        return sort_discovered(tests)

    def _collect(
        self,
        dir_path: Path,
        relative_dir: PurePosixPath,
        pattern: re.Pattern[str] | None,
        tests: list[DiscoveredTest[None]],
    ) -> None:
        for entry in read_dir_entries(dir_path):
            relative_path = relative_dir / entry.name
            if is_directory(entry):
                self._collect(entry, relative_path, pattern, tests)
            elif entry.is_file():
                if pattern is not None and not pattern.search(
                    relative_path.as_posix()
                ):
                    continue
                tests.append(
                    DiscoveredTest(
                        relative_path=relative_path.with_suffix(""),
                        path=entry,
                    )
                )


per_file_manifest = StrategyManifest(
    config_cls=TestPerFileConfig,
    strategy_factory=TestPerFileStrategy.from_config,
)
