"""
Recipe Serialization & Generated Code Persistence.

Converts recipes (and other Pydantic models or raw dicts) into YAML and
writes generated model source to disk. Both writers go through a temporary
sibling file followed by ``os.replace`` so a reader never observes a
half-written file.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ..paths import LOGGER_NAME


# YAML ORCHESTRATION
def save_config_as_yaml(data: Any, yaml_path: Path, header: str = "") -> Path:
    """
    Serializes and persists configuration data to a YAML file.

    Args:
        data (Any): The object to save. Supports objects with 'dump_portable()'
            or 'model_dump()' methods, or standard dictionaries.
        yaml_path (Path): The destination filesystem path.
        header (str): Optional comment block written above the YAML body.

    Returns:
        Path: The confirmed path where the YAML was successfully written.

    Raises:
        ValueError: If the data structure cannot be serialized.
        OSError: If a filesystem-level error occurs (permissions, disk full).
    """
    logger = logging.getLogger(LOGGER_NAME)

    # 1. Extraction & Sanitization Phase
    if hasattr(data, "dump_portable"):
        raw_dict = data.dump_portable()
    elif hasattr(data, "model_dump"):
        raw_dict = data.model_dump(mode="json")
    else:
        raw_dict = data

    try:
        body = yaml.dump(
            _sanitize_for_yaml(raw_dict),
            default_flow_style=False,
            sort_keys=False,
            indent=4,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        logger.error(f"Serialization failed: object structure is incompatible. Error: {e}")
        raise ValueError(f"Could not serialize configuration object: {e}") from e

    # 2. Persistence Phase (Atomic Write)
    try:
        _write_text_atomic(header + body, yaml_path)
        logger.debug(f"Recipe written → {yaml_path.name}")
        return yaml_path
    except OSError as e:
        logger.error(f"IO Error: Could not write YAML to {yaml_path}. Error: {e}")
        raise


def load_config_from_yaml(yaml_path: Path) -> Any:
    """
    Loads a raw configuration mapping from a YAML file.

    Args:
        yaml_path (Path): Path to the source YAML file.

    Returns:
        The parsed document (a dict for well-formed recipes, None when empty).

    Raises:
        FileNotFoundError: If the specified path does not exist.
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"YAML configuration file not found at: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_generated_code(code: str, path: Path) -> Path:
    """
    Write generated source as UTF-8 text, creating parent directories.

    Args:
        code: Complete generated source.
        path: Destination file.

    Returns:
        The written path.

    Raises:
        OSError: If the file cannot be written.
    """
    logger = logging.getLogger(LOGGER_NAME)
    try:
        _write_text_atomic(code, path)
    except OSError as e:
        logger.error(f"IO Error: Could not write generated code to {path}. Error: {e}")
        raise
    logger.debug(f"Generated code written → {path}")
    return path


def _sanitize_for_yaml(obj: Any) -> Any:
    """
    Recursively converts non-serializable types into YAML-standard formats.

    - Path objects -> converted to strings.
    - Enum members -> their values.
    - Dicts/Lists/Tuples -> processed recursively.
    """
    if isinstance(obj, dict):
        return {k: _sanitize_for_yaml(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_sanitize_for_yaml(i) for i in obj]
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    return obj


def _write_text_atomic(text: str, path: Path) -> None:
    """
    Write through a temporary sibling file, fsync it, then swap it into place.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")

    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
