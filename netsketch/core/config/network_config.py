"""
Committed Network Configurations.

Frozen snapshots of a layer sequence plus the model style chosen for code
generation. ``FCNConfig`` and ``CNNConfig`` carry their own layer union, so a
CNN layer can never end up inside an FCN configuration; ``NetworkConfig``
discriminates the two on ``kind``.

Model style names are accepted case-insensitively and normalized to the
``ModelStyle`` enum.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from ...layers import CNNLayer, FCNLayer, ModelStyle, NetworkKind


class _NetworkConfigBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    model_style: ModelStyle = Field(
        default=ModelStyle.SEQUENTIAL, description="Code-shape convention of the model block"
    )

    @field_validator("model_style", mode="before")
    @classmethod
    def _parse_style(cls, v: Any) -> ModelStyle:
        return ModelStyle.parse(v)

    @property
    def network_kind(self) -> NetworkKind:
        return NetworkKind(self.kind)  # type: ignore[attr-defined]


class FCNConfig(_NetworkConfigBase):
    """Committed fully-connected network."""

    kind: Literal["FCN"] = "FCN"
    layers: tuple[FCNLayer, ...] = Field(default=(), description="Ordered FCN layers")


class CNNConfig(_NetworkConfigBase):
    """Committed convolutional network."""

    kind: Literal["CNN"] = "CNN"
    layers: tuple[CNNLayer, ...] = Field(default=(), description="Ordered CNN layers")


NetworkConfig = Annotated[Union[FCNConfig, CNNConfig], Field(discriminator="kind")]

_NETWORK_CONFIG_ADAPTER: TypeAdapter[FCNConfig | CNNConfig] = TypeAdapter(NetworkConfig)

_CONFIG_CLASSES: dict[NetworkKind, type[FCNConfig] | type[CNNConfig]] = {
    NetworkKind.FCN: FCNConfig,
    NetworkKind.CNN: CNNConfig,
}


def parse_network_config(data: Any) -> FCNConfig | CNNConfig:
    """Validate a raw mapping (``kind``, ``layers``, ``model_style``) into a config."""
    return _NETWORK_CONFIG_ADAPTER.validate_python(data)


def build_config(
    kind: NetworkKind | str,
    layers: Sequence[Any],
    model_style: ModelStyle | str = ModelStyle.SEQUENTIAL,
) -> FCNConfig | CNNConfig:
    """
    Snapshot a layer sequence into the frozen configuration of its family.

    Args:
        kind: Network family of the layers.
        layers: Layer models (or raw mappings) in order.
        model_style: Style name, matched case-insensitively.

    Returns:
        FCNConfig or CNNConfig holding a tuple copy of ``layers``.
    """
    return _CONFIG_CLASSES[NetworkKind.parse(kind)](layers=tuple(layers), model_style=model_style)
