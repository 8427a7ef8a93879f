"""
Project-wide Constants and Output Naming.

Single source of truth for logger identity and for the naming of generated
source files.

Module Attributes:
    LOGGER_NAME: Global logger identity used by all modules for log synchronization.
    GENERATED_CODE_SUFFIX: File extension of downloaded source files.
    GENERATED_CODE_MEDIA_TYPE: MIME type attached to downloaded source files.
    DEFAULT_OUTPUT_DIR: Default directory for generated files (relative to CWD).
"""

from pathlib import Path
from typing import Final

# Global logger identity used by all modules to ensure log synchronization
LOGGER_NAME: Final[str] = "NetSketch"

# GENERATED FILES
GENERATED_CODE_SUFFIX: Final[str] = ".py"
GENERATED_CODE_MEDIA_TYPE: Final[str] = "text/plain"
DEFAULT_OUTPUT_DIR: Final[Path] = Path("generated")


def get_download_filename(kind: str) -> str:
    """
    Derive the file name of a generated model from the network kind tag.

    Args:
        kind: Network kind tag (e.g. ``"CNN"``, ``"FCN"``).

    Returns:
        Lower-cased file name such as ``cnn_model.py``.
    """
    return f"{kind.lower()}_model{GENERATED_CODE_SUFFIX}"
