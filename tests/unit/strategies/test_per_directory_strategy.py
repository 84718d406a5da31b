"""Tests for the per-directory strategy."""

from collections.abc import Callable, Mapping
from pathlib import Path

from file_test_runner.strategies.per_directory import (
    TestPerDirectoryStrategy,
    list_files,
    per_directory_manifest,
)

type MakeTree = Callable[[Mapping[str, str]], Path]


def test_directory_with_files_is_a_test(make_tree: MakeTree) -> None:
    base = make_tree(
        {
            "top.txt": "",
            "group/case1/input.txt": "",
            "group/case1/output.txt": "",
            "group/case2/input.txt": "",
            "other/input.txt": "",
        }
    )

    tests = TestPerDirectoryStrategy().discover(base)

    assert [test.relative_path.as_posix() for test in tests] == [
        "group/case1",
        "group/case2",
        "other",
    ]
    assert tests[0].path == base / "group" / "case1"
    assert tests[0].data == (
        base / "group" / "case1" / "input.txt",
        base / "group" / "case1" / "output.txt",
    )


def test_traversal_stops_at_test_directory(make_tree: MakeTree) -> None:
    base = make_tree({"case/input.txt": "", "case/nested/more.txt": ""})

    tests = TestPerDirectoryStrategy().discover(base)

    assert [test.relative_path.as_posix() for test in tests] == ["case"]
    assert tests[0].data == (
        base / "case" / "input.txt",
        base / "case" / "nested" / "more.txt",
    )


def test_pattern_selects_test_directories(make_tree: MakeTree) -> None:
    base = make_tree(
        {
            "a/__test__.jsonc": "",
            "a/data.txt": "",
            "b/data.txt": "",
            "c/d/__test__.jsonc": "",
        }
    )

    strategy = TestPerDirectoryStrategy(file_pattern=r"^__test__\.jsonc$")

    assert [t.relative_path.as_posix() for t in strategy.discover(base)] == [
        "a",
        "c/d",
    ]


def test_readme_does_not_make_a_test(make_tree: MakeTree) -> None:
    base = make_tree({"docs/README.md": "", "case/.keep": ""})

    assert TestPerDirectoryStrategy().discover(base) == []


def test_list_files_depth_first(make_tree: MakeTree) -> None:
    base = make_tree({"b": "", "a/y": "", "a/x": "", ".hidden": ""})

    assert list(list_files(base)) == [base / "a" / "x", base / "a" / "y", base / "b"]


def test_manifest_default_config() -> None:
    assert per_directory_manifest.create() == TestPerDirectoryStrategy()


def test_symlinked_directories_are_not_followed(make_tree: MakeTree) -> None:
    """A symlink loop is neither traversed nor turned into a test."""
    base = make_tree({"group/case/input.txt": ""})
    (base / "group" / "loop").symlink_to(base, target_is_directory=True)
    (base / "group" / "case" / "back").symlink_to(
        base / "group", target_is_directory=True
    )

    tests = TestPerDirectoryStrategy().discover(base)

    assert [test.relative_path.as_posix() for test in tests] == ["group/case"]
    assert tests[0].data == (base / "group" / "case" / "input.txt",)
