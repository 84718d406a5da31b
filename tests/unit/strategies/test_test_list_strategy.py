"""Tests for the YAML test list strategy."""

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from file_test_runner.errors import ConfigurationError
from file_test_runner.strategies.test_list import (
    TestListStrategy,
    load_test_list,
    test_list_manifest,
)

type MakeTree = Callable[[Mapping[str, str]], Path]

TEST_LIST = """\
version: "1"
tests:
  - path: parser/unicode.txt
    ignored: true
  - path: parser/basic.txt
  - path: fmt/input.txt
    name: fmt/default
    data:
      line_width: 80
"""


@pytest.fixture
def listed_dir(make_tree: MakeTree) -> Path:
    return make_tree(
        {
            "tests.yaml": TEST_LIST,
            "parser/basic.txt": "",
            "parser/unicode.txt": "",
            "parser/unlisted.txt": "",
            "fmt/input.txt": "",
        }
    )


def test_listed_entries_are_tests(listed_dir: Path) -> None:
    tests = TestListStrategy().discover(listed_dir)

    assert [test.relative_path.as_posix() for test in tests] == [
        "fmt/default",
        "parser/basic",
        "parser/unicode",
    ]
    assert tests[0].path == listed_dir / "fmt" / "input.txt"
    assert tests[0].data == {"line_width": 80}
    assert [test.ignored for test in tests] == [False, False, True]


def test_custom_list_file_name(make_tree: MakeTree) -> None:
    base = make_tree({"suite.yml": "tests:\n  - path: a.txt\n", "a.txt": ""})

    strategy = test_list_manifest.create('{"file_name": "suite.yml"}')

    assert [t.relative_path.as_posix() for t in strategy.discover(base)] == ["a"]


def test_missing_list(make_tree: MakeTree) -> None:
    with pytest.raises(ConfigurationError, match="Test list not found"):
        TestListStrategy().discover(make_tree({"a.txt": ""}))


def test_listed_file_missing(make_tree: MakeTree) -> None:
    base = make_tree({"tests.yaml": "tests:\n  - path: gone.txt\n"})

    with pytest.raises(ConfigurationError, match="'gone.txt' not found"):
        TestListStrategy().discover(base)


def test_listed_file_outside_base(make_tree: MakeTree) -> None:
    base = make_tree({"tests.yaml": "tests:\n  - path: ../escape.txt\n"})
    (base.parent / "escape.txt").write_text("")

    with pytest.raises(ConfigurationError, match="outside of"):
        TestListStrategy().discover(base)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("", "Empty test list"),
        ("tests: [unclosed", "Invalid YAML"),
        ("tests:\n  - name: no-path\n", "Invalid test list schema"),
        ("tests: []\nextra: 1\n", "Invalid test list schema"),
    ],
)
def test_invalid_list(tmp_path: Path, content: str, message: str) -> None:
    list_file = tmp_path / "tests.yaml"
    list_file.write_text(content)

    with pytest.raises(ConfigurationError, match=message):
        load_test_list(list_file)
