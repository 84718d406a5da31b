"""Resolve collection strategies registered as entry points."""

import logging
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from file_test_runner.errors import ConfigurationError
from file_test_runner.strategies.manifest import StrategyManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "file_test_runner.strategies"


class StrategyNotFoundError(ConfigurationError):
    """Raised when no strategy is registered under a key."""

    def __init__(self, key: str, available: list[str]) -> None:
        super().__init__(
            f"Strategy '{key}' not found. Available strategies: {available}"
        )
        self.key = key
        self.available = available


def registered_strategies() -> dict[str, EntryPoint]:
    """Strategy entry points by key, without importing them."""
    return {entry.name: entry for entry in entry_points(group=ENTRY_POINT_GROUP)}


def load_strategy_manifest(key: str) -> StrategyManifest[Any, Any]:
    """Import the manifest registered under a strategy key.

    Args:
        key: The strategy key as registered in pyproject.toml
             (e.g., "per-file", "per-directory")

    Raises:
        StrategyNotFoundError: If no strategy is registered under the key
        ConfigurationError: If the entry point cannot be imported or does not
            refer to a StrategyManifest

    """
    strategies = registered_strategies()
    if (entry := strategies.get(key)) is None:
        raise StrategyNotFoundError(key, sorted(strategies))

    try:
        manifest = entry.load()
    except (ImportError, AttributeError) as err:
        raise ConfigurationError(
            f"Strategy '{key}' cannot be loaded from '{entry.value}': {err}"
        ) from err

    if not isinstance(manifest, StrategyManifest):
        raise ConfigurationError(
            f"Strategy '{key}' refers to '{entry.value}', which is a "
            f"{type(manifest).__name__}, not a StrategyManifest"
        )

    log.debug("Loaded strategy %s from %s", key, entry.value)
    return manifest
