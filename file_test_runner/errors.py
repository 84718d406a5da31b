"""Errors raised before any test is executed."""

from pathlib import Path


class FileTestRunnerError(Exception):
    """Base class for errors that abort a run."""


class ConfigurationError(FileTestRunnerError):
    """Raised for a bad base directory, an empty collection or unreadable files."""


class InvalidTestNameError(ConfigurationError):
    """Raised when a derived test name cannot be addressed from the command line."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid test name ({name}). Use only alphanumeric, '_', '-' and '.' "
            "characters in file and directory names so tests can be filtered "
            "via the command line."
        )
        self.name = name


class CollisionError(FileTestRunnerError):
    """Raised when two discovered tests resolve to the same name."""

    def __init__(self, name: str, first_path: Path, second_path: Path) -> None:
        super().__init__(
            f"Test name '{name}' is used by both '{first_path}' and '{second_path}'"
        )
        self.name = name
        self.first_path = first_path
        self.second_path = second_path


class UsageError(FileTestRunnerError):
    """Raised for unrecognized or malformed process arguments."""


class HelpRequested(FileTestRunnerError):
    """Raised by argument parsing when ``--help`` is given; carries the help text."""
