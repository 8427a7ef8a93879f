"""
Logging and Reporting Package.

Available Components:

- Logger: Stream and rotating-file logging initialization.
- LogStyle: Unified logging style constants.
- Reporting functions: generation summaries and shape tables.
"""

from .logger import Logger
from .reporting import log_generation_summary, log_layer_table, log_validation_failure
from .styles import LogStyle

__all__ = [
    "Logger",
    "LogStyle",
    "log_generation_summary",
    "log_layer_table",
    "log_validation_failure",
]
