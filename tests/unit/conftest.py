"""Shared fixtures for unit tests."""

import errno
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Mapping[str, str]], Path]:
    """Create files below a fresh base directory and return the base."""

    def _make_tree(files: Mapping[str, str], base_name: str = "specs") -> Path:
        base = tmp_path / base_name
        base.mkdir(parents=True, exist_ok=True)
        for relative_path, content in files.items():
            path = base / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return base

    return _make_tree


@pytest.fixture
def specs_dir(make_tree: Callable[[Mapping[str, str]], Path]) -> Path:
    """Base directory holding specs/a.txt and specs/b.txt."""
    return make_tree({"a.txt": "a\n", "b.txt": "b\n"})


@pytest.fixture
def locked_dir(
    make_tree: Callable[[Mapping[str, str]], Path], monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Base directory whose ``locked`` subdirectory cannot be listed."""
    base = make_tree({"a.txt": "", "locked/b.txt": ""})
    locked = base / "locked"
    iterdir = Path.iterdir

    def guarded_iterdir(self: Path) -> Iterator[Path]:
        if self == locked:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return iterdir(self)

    monkeypatch.setattr(Path, "iterdir", guarded_iterdir)
    return base
