"""
Forward Shape Propagation.

Walks a layer sequence in forward-pass order and threads the tensor shape
through every layer. The code generators use the result to fill in implicit
constructor arguments (``Conv2d`` in-channels, ``Linear`` in-features) and
the diagram renderer uses it to size boxes.

Shape rules (channels-first, valid convolutions):

- ``Input``   → ``(c, h, w)`` (FCN inputs become a flat ``(n, 1, 1)``)
- ``Conv``    → ``(filters, h - (kh - 1), w - (kw - 1))``
- ``Pool``    → ``(c, (h - kh) // sh + 1, (w - kw) // sw + 1)``
- ``Padding`` → ``(c, h + 2 * ph, w + 2 * pw)``
- ``Flatten`` → ``(c * h * w, 1, 1)``, flat
- ``Dense`` / ``Output`` → ``(size, 1, 1)``, flat
- ``Dropout`` → unchanged
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final, Iterator, Sequence

from ..exceptions import ShapeError


@dataclass(frozen=True)
class ShapeAtLayer:
    """Tensor shape produced by one layer."""

    channels: int
    height: int
    width: int
    flat: bool = False

    @property
    def features(self) -> int:
        """Element count per sample; the in-width of a following ``Linear``."""
        return self.channels * self.height * self.width

    @property
    def is_valid(self) -> bool:
        return self.channels > 0 and self.height > 0 and self.width > 0

    def __str__(self) -> str:
        if self.flat:
            return str(self.features)
        return f"{self.channels}x{self.height}x{self.width}"


_EMPTY: Final[ShapeAtLayer] = ShapeAtLayer(0, 0, 0)


def _input(_: ShapeAtLayer, layer: Any) -> ShapeAtLayer:
    if isinstance(layer.size, int):
        return ShapeAtLayer(layer.size, 1, 1, flat=True)
    channels, height, width = layer.size
    return ShapeAtLayer(channels, height, width)


def _conv(current: ShapeAtLayer, layer: Any) -> ShapeAtLayer:
    kh, kw = layer.kernel
    return ShapeAtLayer(layer.size, current.height - (kh - 1), current.width - (kw - 1))


def _pool(current: ShapeAtLayer, layer: Any) -> ShapeAtLayer:
    kh, kw = layer.kernel
    sh, sw = layer.stride
    return ShapeAtLayer(
        current.channels,
        (current.height - kh) // sh + 1,
        (current.width - kw) // sw + 1,
    )


def _padding(current: ShapeAtLayer, layer: Any) -> ShapeAtLayer:
    ph, pw = layer.padding
    return ShapeAtLayer(current.channels, current.height + 2 * ph, current.width + 2 * pw)


def _flatten(current: ShapeAtLayer, _: Any) -> ShapeAtLayer:
    return ShapeAtLayer(current.features, 1, 1, flat=True)


def _sized(_: ShapeAtLayer, layer: Any) -> ShapeAtLayer:
    return ShapeAtLayer(layer.size, 1, 1, flat=True)


def _identity(current: ShapeAtLayer, _: Any) -> ShapeAtLayer:
    return current


_TRANSITIONS: Final[dict[str, Callable[[ShapeAtLayer, Any], ShapeAtLayer]]] = {
    "Input": _input,
    "Conv": _conv,
    "Pool": _pool,
    "Padding": _padding,
    "Flatten": _flatten,
    "Dense": _sized,
    "Output": _sized,
    "Dropout": _identity,
}


def iter_shapes(layers: Sequence[Any]) -> Iterator[ShapeAtLayer]:
    """
    Yield the shape after each layer without checking dimensions.

    Raises:
        KeyError: If a layer carries an unknown ``type`` tag.
    """
    current = _EMPTY
    for layer in layers:
        current = _TRANSITIONS[layer.type](current, layer)
        yield current


def propagate(layers: Sequence[Any]) -> list[ShapeAtLayer]:
    """
    Compute the shape after every layer of a validated sequence.

    Args:
        layers: Ordered layer models (CNN, or FCN for flat widths).

    Returns:
        One :class:`ShapeAtLayer` per input layer, in the same order.

    Raises:
        ShapeError: If any layer yields a non-positive dimension, e.g. a
            kernel larger than the incoming feature map.
    """
    shapes: list[ShapeAtLayer] = []
    for index, (layer, shape) in enumerate(zip(layers, iter_shapes(layers))):
        if not shape.is_valid:
            raise ShapeError(
                f"{layer.type} layer at position {index} produces an invalid shape "
                f"{shape.channels}x{shape.height}x{shape.width}"
            )
        shapes.append(shape)
    return shapes


def fcn_widths(layers: Sequence[Any]) -> list[int]:
    """Output width after each FCN layer; Dropout keeps the previous width."""
    return [shape.features for shape in propagate(layers)]
