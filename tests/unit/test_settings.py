"""Tests for environment configuration."""

import pytest

from file_test_runner.errors import ConfigurationError
from file_test_runner.settings import RunnerSettings, default_parallelism


def test_defaults() -> None:
    """Unset variables fall back to the defaults."""
    settings = RunnerSettings.from_env({})

    assert settings.parallelism == default_parallelism()
    assert settings.nocapture is False


def test_default_parallelism_leaves_one_cpu(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("os.cpu_count", lambda: 8)
    assert default_parallelism() == 7

    monkeypatch.setattr("os.cpu_count", lambda: 1)
    assert default_parallelism() == 1

    monkeypatch.setattr("os.cpu_count", lambda: None)
    assert default_parallelism() == 1


def test_reads_environment() -> None:
    settings = RunnerSettings.from_env(
        {
            "FILE_TEST_RUNNER_PARALLELISM": " 3 ",
            "FILE_TEST_RUNNER_NOCAPTURE": "1",
        }
    )

    assert settings.parallelism == 3
    assert settings.nocapture is True


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILE_TEST_RUNNER_PARALLELISM", "5")

    assert RunnerSettings.from_env().parallelism == 5


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_invalid_parallelism(value: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid environment configuration"):
        RunnerSettings.from_env({"FILE_TEST_RUNNER_PARALLELISM": value})


@pytest.mark.parametrize(
    ("parallel", "thread_count", "nocapture", "expected"),
    [
        (False, None, False, 1),
        (False, 8, False, 1),
        (True, None, False, 4),
        (True, 2, False, 2),
        (True, 2, True, 1),
    ],
)
def test_worker_count(
    parallel: bool, thread_count: int | None, nocapture: bool, expected: int
) -> None:
    """Sequential runs and --nocapture always use a single worker."""
    settings = RunnerSettings(parallelism=4)

    assert settings.worker_count(parallel, thread_count, nocapture) == expected


def test_nocapture_from_environment_forces_one_worker() -> None:
    settings = RunnerSettings(parallelism=4, nocapture=True)

    assert settings.worker_count(True, 8) == 1
