"""
Output Naming and Logger Identity.

Exposes the static constants shared by the logger, the I/O helpers and the
design session.
"""

from .constants import (
    DEFAULT_OUTPUT_DIR,
    GENERATED_CODE_MEDIA_TYPE,
    GENERATED_CODE_SUFFIX,
    LOGGER_NAME,
    get_download_filename,
)

__all__ = [
    "LOGGER_NAME",
    "DEFAULT_OUTPUT_DIR",
    "GENERATED_CODE_MEDIA_TYPE",
    "GENERATED_CODE_SUFFIX",
    "get_download_filename",
]
