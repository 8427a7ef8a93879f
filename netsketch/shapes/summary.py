"""
Per-layer diagram labels.

Produces the two captions the diagram renderer draws next to each layer box:
an info caption describing the layer's own parameters and a size caption
describing the tensor it outputs.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Sequence

from .propagator import ShapeAtLayer, propagate


class LayerSummary(NamedTuple):
    """Captions for a single layer of the diagram."""

    position: int
    type: str
    info_text: str
    size_text: str
    shape: ShapeAtLayer


def _pair(values: tuple[int, int]) -> str:
    return f"{values[0]}x{values[1]}"


def describe_layer(layer: Any) -> str:
    """Multi-line info caption for one layer (e.g. ``"Conv\\n8x3x3"``)."""
    if layer.type == "Input":
        if isinstance(layer.size, int):
            return f"Input\n{layer.size}"
        return "Input\n" + "x".join(str(v) for v in layer.size)
    if layer.type == "Conv":
        return f"Conv\n{layer.size}x{_pair(layer.kernel)}"
    if layer.type == "Pool":
        return f"Pool\n{_pair(layer.kernel)}\n{_pair(layer.stride)}"
    if layer.type == "Padding":
        return f"Padding\n{_pair(layer.padding)}"
    if layer.type in ("Dense", "Output"):
        return f"{layer.type}\n{layer.size}\n{layer.activation.value}"
    if layer.type == "Dropout":
        return f"Dropout\n{layer.rate}"
    return layer.type


def summarize(layers: Sequence[Any]) -> list[LayerSummary]:
    """
    Build diagram captions for a validated sequence.

    Raises:
        ShapeError: Propagated from :func:`propagate` on invalid geometry.
    """
    return [
        LayerSummary(position, layer.type, describe_layer(layer), str(shape), shape)
        for position, (layer, shape) in enumerate(zip(layers, propagate(layers)))
    ]
