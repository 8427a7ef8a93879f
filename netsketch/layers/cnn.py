"""
Convolutional Network (CNN) Layer Family.

Spatial stage (``Input``, ``Conv``, ``Pool``, ``Padding``) followed by a
single ``Flatten`` and a flattened stage (``Dense``, ``Dropout``,
``Output``). Tensor geometry is channels-first: ``Input.size`` is
``(channels, height, width)`` and every ``(a, b)`` pair is ``(rows, cols)``.
"""

from __future__ import annotations

from typing import Annotated, Callable, ClassVar, Final, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .enums import Activation, NetworkKind
from .limits import (
    CNNDenseSize,
    CNNDropoutRate,
    CNNOutputSize,
    ConvFilters,
    ConvKernel,
    InputChannels,
    InputExtent,
    PaddingExtent,
    PoolKernel,
    PoolStride,
)


class _CNNLayerBase(BaseModel):
    """Shared configuration of every CNN layer model."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: ClassVar[NetworkKind] = NetworkKind.CNN


class InputLayer(_CNNLayerBase):
    """Input image as ``(channels, height, width)``."""

    type: Literal["Input"] = "Input"
    size: tuple[InputChannels, InputExtent, InputExtent] = (1, 28, 28)

    @property
    def channels(self) -> int:
        return self.size[0]


class ConvLayer(_CNNLayerBase):
    """Valid (unpadded, stride 1) 2D convolution with ``size`` filters."""

    type: Literal["Conv"] = "Conv"
    size: ConvFilters = 1
    kernel: tuple[ConvKernel, ConvKernel] = (1, 1)


class PoolLayer(_CNNLayerBase):
    """2D max pooling."""

    type: Literal["Pool"] = "Pool"
    stride: tuple[PoolStride, PoolStride] = (1, 1)
    kernel: tuple[PoolKernel, PoolKernel] = (1, 1)


class PaddingLayer(_CNNLayerBase):
    """Symmetric zero padding of ``(rows, cols)`` on each side."""

    type: Literal["Padding"] = "Padding"
    padding: tuple[PaddingExtent, PaddingExtent] = (0, 0)


class FlattenLayer(_CNNLayerBase):
    type: Literal["Flatten"] = "Flatten"


class DenseLayer(_CNNLayerBase):
    type: Literal["Dense"] = "Dense"
    size: CNNDenseSize = 1
    activation: Activation = Activation.RELU


class DropoutLayer(_CNNLayerBase):
    type: Literal["Dropout"] = "Dropout"
    rate: CNNDropoutRate = 0.01


class OutputLayer(_CNNLayerBase):
    type: Literal["Output"] = "Output"
    size: CNNOutputSize = 1
    activation: Activation = Activation.RELU


CNNLayer = Annotated[
    Union[
        InputLayer,
        ConvLayer,
        PoolLayer,
        PaddingLayer,
        FlattenLayer,
        DenseLayer,
        DropoutLayer,
        OutputLayer,
    ],
    Field(discriminator="type"),
]

# Tags allowed only before / only after the Flatten layer
SPATIAL_TYPES: Final[frozenset[str]] = frozenset({"Conv", "Pool", "Padding"})
FLATTENED_TYPES: Final[frozenset[str]] = frozenset({"Dense", "Dropout", "Output"})

CNN_EMPTY_LAYERS: Final[dict[str, Callable[[], BaseModel]]] = {
    "Input": InputLayer,
    "Conv": ConvLayer,
    "Pool": PoolLayer,
    "Padding": PaddingLayer,
    "Flatten": FlattenLayer,
    "Dense": DenseLayer,
    "Dropout": DropoutLayer,
    "Output": OutputLayer,
}

_CNN_SEQUENCE_ADAPTER: Final = TypeAdapter(tuple[CNNLayer, ...])


def parse_cnn_layers(raw: list[dict]) -> tuple[CNNLayer, ...]:
    """
    Parse raw layer dictionaries into CNN layer models.

    Raises:
        pydantic.ValidationError: On unknown tags or out-of-range fields.
    """
    return _CNN_SEQUENCE_ADAPTER.validate_python(raw)


def sample_cnn() -> list[CNNLayer]:
    """Starter network offered by the editor for new CNN designs."""
    return [
        InputLayer(size=(3, 32, 32)),
        ConvLayer(size=16, kernel=(3, 3)),
        PoolLayer(kernel=(2, 2), stride=(2, 2)),
        ConvLayer(size=32, kernel=(3, 3)),
        PoolLayer(kernel=(2, 2), stride=(2, 2)),
        FlattenLayer(),
        DenseLayer(size=64, activation=Activation.RELU),
        DropoutLayer(rate=0.5),
        OutputLayer(size=10, activation=Activation.SOFTMAX),
    ]
