"""
Per-field numeric bounds for every layer tag.

The bounds are published twice: as plain ``FCN_LIMITS`` / ``CNN_LIMITS``
tables (``TAG -> FIELD -> Bounds``) that a form editor can read to configure
its input widgets, and as Pydantic ``Annotated`` types bound to the layer
models so out-of-range values are rejected when a layer is constructed.
The validator never re-checks them.
"""

from __future__ import annotations

from typing import Annotated, Final, NamedTuple

from pydantic import Field
from pydantic.fields import FieldInfo


class Bounds(NamedTuple):
    """Inclusive numeric range of a single layer field."""

    min: float
    max: float

    def field(self) -> FieldInfo:
        """Pydantic ``Field`` enforcing this range."""
        return Field(ge=self.min, le=self.max)


FCN_LIMITS: Final[dict[str, dict[str, Bounds]]] = {
    "INPUT": {"SIZE": Bounds(1, 100000)},
    "DENSE": {"SIZE": Bounds(1, 50000)},
    "OUTPUT": {"SIZE": Bounds(1, 10000)},
    "DROPOUT": {"RATE": Bounds(0.01, 1)},
}

CNN_LIMITS: Final[dict[str, dict[str, Bounds]]] = {
    "INPUT": {"CHANNELS": Bounds(1, 2048), "SIZE": Bounds(1, 4096)},
    "CONV": {"SIZE": Bounds(1, 2048), "KERNEL": Bounds(1, 64)},
    "POOL": {"STRIDE": Bounds(1, 64), "KERNEL": Bounds(1, 64)},
    "PADDING": {"PAD": Bounds(0, 64)},
    "DENSE": {"SIZE": Bounds(1, 50000)},
    "OUTPUT": {"SIZE": Bounds(1, 10000)},
    "DROPOUT": {"RATE": Bounds(0.01, 1)},
}

# FCN FIELDS
FCNInputSize = Annotated[int, FCN_LIMITS["INPUT"]["SIZE"].field()]
FCNDenseSize = Annotated[int, FCN_LIMITS["DENSE"]["SIZE"].field()]
FCNOutputSize = Annotated[int, FCN_LIMITS["OUTPUT"]["SIZE"].field()]
FCNDropoutRate = Annotated[float, FCN_LIMITS["DROPOUT"]["RATE"].field()]

# CNN FIELDS
InputChannels = Annotated[int, CNN_LIMITS["INPUT"]["CHANNELS"].field()]
InputExtent = Annotated[int, CNN_LIMITS["INPUT"]["SIZE"].field()]
ConvFilters = Annotated[int, CNN_LIMITS["CONV"]["SIZE"].field()]
ConvKernel = Annotated[int, CNN_LIMITS["CONV"]["KERNEL"].field()]
PoolStride = Annotated[int, CNN_LIMITS["POOL"]["STRIDE"].field()]
PoolKernel = Annotated[int, CNN_LIMITS["POOL"]["KERNEL"].field()]
PaddingExtent = Annotated[int, CNN_LIMITS["PADDING"]["PAD"].field()]
CNNDenseSize = Annotated[int, CNN_LIMITS["DENSE"]["SIZE"].field()]
CNNOutputSize = Annotated[int, CNN_LIMITS["OUTPUT"]["SIZE"].field()]
CNNDropoutRate = Annotated[float, CNN_LIMITS["DROPOUT"]["RATE"].field()]
