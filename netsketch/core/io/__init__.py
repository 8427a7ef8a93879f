"""
Input/Output & Persistence Utilities.

Recipe serialization (YAML) and atomic persistence of generated source.
"""

from .serialization import load_config_from_yaml, save_config_as_yaml, write_generated_code

__all__ = [
    "load_config_from_yaml",
    "save_config_as_yaml",
    "write_generated_code",
]
