"""
Configuration Package Initialization.

Flat public API for the recipe schema and the committed network
configurations.

Example:
    >>> from netsketch.core.config import Recipe
    >>> recipe = Recipe.from_recipe(Path("recipes/cnn.yaml"))
"""

from .manifest import Recipe
from .network_config import (
    CNNConfig,
    FCNConfig,
    NetworkConfig,
    build_config,
    parse_network_config,
)
from .output_config import OutputConfig
from .telemetry_config import TelemetryConfig
from .types import LogLevel, ValidatedPath

__all__ = [
    "CNNConfig",
    "FCNConfig",
    "LogLevel",
    "NetworkConfig",
    "OutputConfig",
    "Recipe",
    "TelemetryConfig",
    "ValidatedPath",
    "build_config",
    "parse_network_config",
]
