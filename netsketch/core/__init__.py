"""
Core Utilities Package

Exposes configuration, logging, recipe I/O and project constants.
"""

# Configuration
from .config import (
    CNNConfig,
    FCNConfig,
    NetworkConfig,
    OutputConfig,
    Recipe,
    TelemetryConfig,
    build_config,
    parse_network_config,
)

# Input/Output Utilities
from .io import load_config_from_yaml, save_config_as_yaml, write_generated_code

# Logging
from .logger import (
    Logger,
    LogStyle,
    log_generation_summary,
    log_layer_table,
    log_validation_failure,
)

# Constants & Paths
from .paths import (
    DEFAULT_OUTPUT_DIR,
    GENERATED_CODE_MEDIA_TYPE,
    GENERATED_CODE_SUFFIX,
    LOGGER_NAME,
    get_download_filename,
)

__all__ = [
    # Configuration
    "CNNConfig",
    "FCNConfig",
    "NetworkConfig",
    "OutputConfig",
    "Recipe",
    "TelemetryConfig",
    "build_config",
    "parse_network_config",
    # I/O
    "load_config_from_yaml",
    "save_config_as_yaml",
    "write_generated_code",
    # Logging
    "Logger",
    "LogStyle",
    "log_generation_summary",
    "log_layer_table",
    "log_validation_failure",
    # Paths
    "DEFAULT_OUTPUT_DIR",
    "GENERATED_CODE_MEDIA_TYPE",
    "GENERATED_CODE_SUFFIX",
    "LOGGER_NAME",
    "get_download_filename",
]
