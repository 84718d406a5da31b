"""Models for tests produced by collection strategies and the collector."""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from file_test_runner.errors import ConfigurationError


@dataclass(frozen=True, kw_only=True)
class DiscoveredTest[T]:
    """A test unit as found by a strategy, before it is named.

    ``relative_path`` is relative to the base directory and is the only input
    used to derive the test name.
    """

    relative_path: PurePosixPath
    path: Path
    data: T | None = None
    ignored: bool = False


@dataclass(frozen=True, kw_only=True)
class CollectedTest[T]:
    """A named, addressable test handed to the user callback."""

    __test__ = False

    name: str
    path: Path
    data: T | None = None
    ignored: bool = False

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read the file backing this test."""
        try:
            return self.path.read_text(encoding=encoding)
        except OSError as err:
            raise ConfigurationError(f"{err.strerror} ({self.path})") from err
