"""
Layer Model Package.

Two independent closed layer families (``fcn`` and ``cnn``), the shared
enums, and the per-field bounds tables. Concrete classes keep the same short
names in both families, so they are reached through their module:

    >>> from netsketch.layers import cnn
    >>> cnn.ConvLayer(size=8, kernel=(3, 3))
"""

from __future__ import annotations

from typing import Sequence, Union

from . import cnn, fcn
from .cnn import CNN_EMPTY_LAYERS, CNNLayer, parse_cnn_layers, sample_cnn
from .enums import Activation, Framework, ModelStyle, NetworkKind
from .fcn import FCN_EMPTY_LAYERS, FCNLayer, parse_fcn_layers, sample_fcn
from .limits import CNN_LIMITS, FCN_LIMITS, Bounds

Layer = Union[FCNLayer, CNNLayer]


def infer_kind(layers: Sequence[Layer]) -> NetworkKind | None:
    """Network kind of the first layer, or None for an empty sequence."""
    if not layers:
        return None
    return layers[0].family


__all__ = [
    "cnn",
    "fcn",
    "Activation",
    "Bounds",
    "CNN_EMPTY_LAYERS",
    "CNN_LIMITS",
    "CNNLayer",
    "FCN_EMPTY_LAYERS",
    "FCN_LIMITS",
    "FCNLayer",
    "Framework",
    "Layer",
    "ModelStyle",
    "NetworkKind",
    "infer_kind",
    "parse_cnn_layers",
    "parse_fcn_layers",
    "sample_cnn",
    "sample_fcn",
]
