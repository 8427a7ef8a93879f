"""
Fully-Connected Network (FCN) Layer Family.

Closed set of immutable layer models discriminated by their ``type`` tag.
Raw dictionaries (YAML recipe entries, JSON from a form editor) are parsed
with :data:`FCNLayer` so every entry lands on exactly one concrete class.
"""

from __future__ import annotations

from typing import Annotated, Callable, ClassVar, Final, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .enums import Activation, NetworkKind
from .limits import FCNDenseSize, FCNDropoutRate, FCNInputSize, FCNOutputSize


class _FCNLayerBase(BaseModel):
    """Shared configuration of every FCN layer model."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: ClassVar[NetworkKind] = NetworkKind.FCN


class InputLayer(_FCNLayerBase):
    """Input vector of ``size`` features."""

    type: Literal["Input"] = "Input"
    size: FCNInputSize = 1


class DenseLayer(_FCNLayerBase):
    """Fully-connected hidden layer."""

    type: Literal["Dense"] = "Dense"
    size: FCNDenseSize = 1
    activation: Activation = Activation.RELU


class DropoutLayer(_FCNLayerBase):
    """Dropout with drop probability ``rate``."""

    type: Literal["Dropout"] = "Dropout"
    rate: FCNDropoutRate = 0.01


class OutputLayer(_FCNLayerBase):
    """Final fully-connected layer producing ``size`` outputs."""

    type: Literal["Output"] = "Output"
    size: FCNOutputSize = 1
    activation: Activation = Activation.RELU


FCNLayer = Annotated[
    Union[InputLayer, DenseLayer, DropoutLayer, OutputLayer],
    Field(discriminator="type"),
]

# Blank layer per tag, as inserted by the form editor's "add layer" action
FCN_EMPTY_LAYERS: Final[dict[str, Callable[[], BaseModel]]] = {
    "Input": InputLayer,
    "Dense": DenseLayer,
    "Dropout": DropoutLayer,
    "Output": OutputLayer,
}

_FCN_SEQUENCE_ADAPTER: Final = TypeAdapter(tuple[FCNLayer, ...])


def parse_fcn_layers(raw: list[dict]) -> tuple[FCNLayer, ...]:
    """
    Parse raw layer dictionaries into FCN layer models.

    Raises:
        pydantic.ValidationError: On unknown tags or out-of-range fields.
    """
    return _FCN_SEQUENCE_ADAPTER.validate_python(raw)


def sample_fcn() -> list[FCNLayer]:
    """Starter network offered by the editor for new FCN designs."""
    return [
        InputLayer(size=8),
        DenseLayer(size=16, activation=Activation.RELU),
        DenseLayer(size=16, activation=Activation.SIGMOID),
        DenseLayer(size=16, activation=Activation.SOFTMAX),
        DenseLayer(size=16, activation=Activation.TANH),
        OutputLayer(size=8),
    ]
