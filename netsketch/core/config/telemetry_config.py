"""
Telemetry Manifest.

Logging policy of a generation run: console verbosity and the optional
directory for rotating log files.

Attributes:
    log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_dir: Directory for log files, or None for console-only logging.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import LogLevel, ValidatedPath


class TelemetryConfig(BaseModel):
    """Logging verbosity and file destination. Frozen after creation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    log_level: LogLevel = Field(default="INFO")
    log_dir: ValidatedPath | None = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def handle_empty_config(cls, data: Any) -> Any:
        """
        Convert an empty ``telemetry:`` YAML section (None) into defaults.

        Args:
            data: Raw input data from YAML or dict.

        Returns:
            Empty dict if data is None, otherwise the original data.
        """
        if data is None:
            return {}
        return data
