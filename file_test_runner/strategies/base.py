"""Abstract base class for test collection strategies."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from file_test_runner.errors import ConfigurationError
from file_test_runner.models.collected import DiscoveredTest

log = logging.getLogger(__name__)

IGNORED_FILE_NAMES = frozenset({"readme.md"})


@dataclass(frozen=True, kw_only=True)
class CollectionStrategy[T](ABC):
    """Policy mapping a base directory to an ordered set of test units.

    Generic type T is the payload attached to each test for the callback to
    interpret - nothing for one test per file, the contained files for one
    test per directory, or whatever a custom strategy wants to hand over.
    Strategies decide inclusion from names only and never read file contents
    of the tests themselves.
    """

    @abstractmethod
    def discover(self, base: Path) -> Sequence[DiscoveredTest[T]]:
        """Discover test units below ``base``.

        Args:
            base: Existing directory to search

        Returns:
            Test units sorted by relative path

        Raises:
            ConfigurationError: If the directory tree cannot be read

        """


def read_dir_entries(dir_path: Path) -> Sequence[Path]:
    """List a directory sorted by entry name.

    Hidden entries (starting with a period) and readme files are skipped.
    """
    try:
        entries = [
            entry
            for entry in dir_path.iterdir()
            if not entry.name.startswith(".")
            and entry.name.lower() not in IGNORED_FILE_NAMES
        ]
    except OSError as err:
        raise ConfigurationError(f"{err.strerror} ({dir_path})") from err
    return sorted(entries, key=lambda entry: entry.name)


def is_directory(entry: Path) -> bool:
    """Check for a directory to descend into; symbolic links are not followed."""
    return entry.is_dir() and not entry.is_symlink()


def compile_pattern(pattern: str | None) -> re.Pattern[str] | None:
    """Compile an optional file pattern; bad patterns are configuration errors."""
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as err:
        raise ConfigurationError(f"Invalid file pattern '{pattern}': {err}") from err


def sort_discovered[T](
    tests: Sequence[DiscoveredTest[T]],
) -> Sequence[DiscoveredTest[T]]:
    """Sort discovered tests by relative path using plain string ordering."""
    return sorted(tests, key=lambda test: test.relative_path.as_posix())
