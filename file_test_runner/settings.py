"""Configuration read from the process environment."""

import os
from collections.abc import Mapping
from typing import Self

from pydantic import Field, PositiveInt, ValidationError

from file_test_runner.errors import ConfigurationError
from file_test_runner.models.base import Model

PARALLELISM_ENV_VAR = "FILE_TEST_RUNNER_PARALLELISM"
NOCAPTURE_ENV_VAR = "FILE_TEST_RUNNER_NOCAPTURE"


def default_parallelism() -> int:
    """Use every available CPU but one."""
    return max(1, (os.cpu_count() or 2) - 1)


class RunnerSettings(Model):
    """Environment configuration for the scheduler."""

    parallelism: PositiveInt = Field(
        default_factory=default_parallelism,
        description="Worker count used for parallel runs",
    )
    nocapture: bool = Field(
        default=False, description="Run tests one at a time when set"
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build settings from environment variables.

        Unset variables fall back to the defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value

        """
        environ = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if parallelism := environ.get(PARALLELISM_ENV_VAR, "").strip():
            values["parallelism"] = parallelism
        if nocapture := environ.get(NOCAPTURE_ENV_VAR, "").strip():
            values["nocapture"] = nocapture
        try:
            return cls.model_validate(values)
        except ValidationError as err:
            raise ConfigurationError(
                f"Invalid environment configuration: {err}"
            ) from err

    def worker_count(
        self, parallel: bool, thread_count: int | None, nocapture: bool = False
    ) -> int:
        """Resolve the worker pool size for a run."""
        if not parallel or nocapture or self.nocapture:
            return 1
        return thread_count or self.parallelism
