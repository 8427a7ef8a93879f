"""
Output Target Manifest.

Where generated source goes and which framework dialect it is written in.
Framework names are matched case-insensitively, so ``--set
output.framework=keras`` and ``framework: Keras`` resolve to the same target.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...layers import Framework
from ..paths import DEFAULT_OUTPUT_DIR
from .types import ValidatedPath


class OutputConfig(BaseModel):
    """
    Generation target of a recipe.

    Attributes:
        framework: Target framework dialect.
        directory: Absolute directory receiving ``<kind>_model.py``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    framework: Framework = Field(default=Framework.PYTORCH)
    directory: ValidatedPath = Field(default=DEFAULT_OUTPUT_DIR, validate_default=True)

    @model_validator(mode="before")
    @classmethod
    def handle_empty_config(cls, data: Any) -> Any:
        if data is None:
            return {}
        return data

    @field_validator("framework", mode="before")
    @classmethod
    def _parse_framework(cls, v: Any) -> Framework:
        return Framework.parse(v)

    def to_portable_dict(self) -> dict[str, Any]:
        """
        Dump with the directory made relative to the working directory when possible.

        Returns:
            Dictionary with plain string values.
        """
        data = self.model_dump(mode="json")
        directory = Path(data["directory"])
        cwd = Path.cwd().resolve()
        if directory.is_relative_to(cwd):
            data["directory"] = f"./{directory.relative_to(cwd)}"
        return data
