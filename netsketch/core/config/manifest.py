"""
Recipe Manifest.

Top-level schema of a YAML recipe: one network to generate, the output
target and the logging policy. Dotted overrides (``output.framework=keras``)
are merged into the raw mapping before validation, so an override is checked
exactly like a value written in the file.

Example:
    >>> recipe = Recipe.from_recipe(Path("cnn.yaml"), {"output.framework": "keras"})
    >>> recipe.output.framework
    <Framework.KERAS: 'Keras'>
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...exceptions import NetSketchConfigError
from ..io import load_config_from_yaml
from .network_config import NetworkConfig
from .output_config import OutputConfig
from .telemetry_config import TelemetryConfig


def _deep_set(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    """
    Set ``value`` at ``dotted_key`` inside ``data``, creating missing sections.

    Raises:
        NetSketchConfigError: If the key traverses a non-mapping value.
    """
    *parents, leaf = dotted_key.split(".")
    node = data
    for part in parents:
        if node.get(part) is None:
            node[part] = {}
        if not isinstance(node[part], dict):
            raise NetSketchConfigError(
                f"Cannot apply override '{dotted_key}': '{part}' is not a section"
            )
        node = node[part]
    node[leaf] = value


class Recipe(BaseModel):
    """
    Validated generation job.

    Attributes:
        network: Committed FCN or CNN configuration, discriminated on ``kind``.
        output: Framework and destination directory.
        telemetry: Logging verbosity and log directory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    network: NetworkConfig
    output: OutputConfig = Field(default_factory=OutputConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], overrides: Mapping[str, Any] | None = None
    ) -> Recipe:
        """
        Validate a raw recipe mapping, applying dotted overrides first.

        Raises:
            NetSketchConfigError: On a malformed mapping or any schema violation.
        """
        if not isinstance(data, Mapping):
            raise NetSketchConfigError(f"Recipe must be a mapping, got {type(data).__name__}")
        merged = copy.deepcopy(dict(data))
        for key, value in (overrides or {}).items():
            _deep_set(merged, key, value)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise NetSketchConfigError(f"Invalid recipe: {e}") from e

    @classmethod
    def from_recipe(cls, path: Path, overrides: Mapping[str, Any] | None = None) -> Recipe:
        """
        Load and validate a YAML recipe.

        Args:
            path: Recipe file.
            overrides: Flat ``{"dotted.key": value}`` mapping applied on top of the file.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            NetSketchConfigError: If the recipe is not valid YAML, is empty or
                fails validation.
        """
        try:
            data = load_config_from_yaml(path)
        except yaml.YAMLError as e:
            raise NetSketchConfigError(f"Invalid recipe: {e}") from e
        if data is None:
            raise NetSketchConfigError(f"Recipe is empty: {path}")
        return cls.from_dict(data, overrides)

    def dump_portable(self) -> dict[str, Any]:
        """Plain mapping suitable for ``yaml.dump``, in recipe section order."""
        return {
            "network": self.network.model_dump(mode="json"),
            "output": self.output.to_portable_dict(),
            "telemetry": self.telemetry.model_dump(mode="json"),
        }
