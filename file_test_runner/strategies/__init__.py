"""Collection strategies."""

from file_test_runner.strategies.base import CollectionStrategy
from file_test_runner.strategies.mapper import TestMapperStrategy
from file_test_runner.strategies.per_directory import TestPerDirectoryStrategy
from file_test_runner.strategies.per_file import TestPerFileStrategy
from file_test_runner.strategies.test_list import TestListStrategy

__all__ = [
    "CollectionStrategy",
    "TestListStrategy",
    "TestMapperStrategy",
    "TestPerDirectoryStrategy",
    "TestPerFileStrategy",
]
