"""
Shape Propagation Package.

Forward shape simulation for layer sequences and the diagram captions
derived from it.
"""

from .propagator import ShapeAtLayer, fcn_widths, iter_shapes, propagate
from .summary import LayerSummary, describe_layer, summarize

__all__ = [
    "ShapeAtLayer",
    "LayerSummary",
    "describe_layer",
    "fcn_widths",
    "iter_shapes",
    "propagate",
    "summarize",
]
