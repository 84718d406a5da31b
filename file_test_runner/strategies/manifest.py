"""Strategy manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ValidationError

from file_test_runner.errors import ConfigurationError
from file_test_runner.strategies.base import CollectionStrategy


@dataclass(frozen=True, kw_only=True)
class StrategyManifest[ConfigT: BaseModel, DataT]:
    """Manifest describing a collection strategy plugin.

    The manifest contains references to the configuration class and the
    strategy factory function for lazy loading of strategies based on their key.
    """

    config_cls: type[ConfigT]
    strategy_factory: Callable[[ConfigT], CollectionStrategy[DataT]]

    def create(self, config_json: str = "{}") -> CollectionStrategy[DataT]:
        """Validate a JSON configuration and build the strategy from it.

        Raises:
            ConfigurationError: If the configuration does not validate

        """
        try:
            config = self.config_cls.model_validate_json(config_json)
        except ValidationError as err:
            raise ConfigurationError(
                f"Invalid strategy configuration: {err}"
            ) from err
        return self.strategy_factory(config)
