"""
Semantic Type Definitions for Recipe Validation.

Shared Annotated aliases used by the recipe schema. Path values are resolved
to absolute form without touching the filesystem, so a recipe can be
validated before its output directory exists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import AfterValidator, PlainSerializer


def _sanitize_path(v: str | Path) -> Path:
    """
    Resolve path to absolute form without disk side-effects.

    Args:
        v: Path object or string to sanitize

    Returns:
        Absolute Path with home directory expanded
    """
    return Path(v).expanduser().resolve()


# FILESYSTEM
ValidatedPath = Annotated[
    Path,
    AfterValidator(_sanitize_path),
    PlainSerializer(lambda v: str(v), when_used="json", return_type=str),
]

# SYSTEM
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
