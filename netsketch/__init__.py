"""
NetSketch: layer-by-layer neural network designs turned into framework code.

Top-level convenience API re-exporting the two entry points and the most
commonly used components, so callers and the ``netsketch`` CLI can write:

    from netsketch import validate_layers, generate_code, DesignSession
"""

from importlib.metadata import version as _pkg_version

__version__ = _pkg_version("netsketch")

from .core import LogStyle, Recipe, build_config
from .exceptions import (
    LayerValidationError,
    NetSketchConfigError,
    NetSketchError,
    ShapeError,
    UnsupportedFrameworkError,
    UnsupportedModelStyleError,
    UnsupportedTargetError,
)
from .generators import generate_code, generate_parts
from .layers import Framework, ModelStyle, NetworkKind, cnn, fcn
from .session import DesignSession
from .shapes import propagate, summarize
from .validation import ValidationResult, ensure_valid, validate_layers

__all__ = [
    "__version__",
    # Entry points
    "validate_layers",
    "generate_code",
    "generate_parts",
    "ensure_valid",
    "ValidationResult",
    # Layers
    "cnn",
    "fcn",
    "Framework",
    "ModelStyle",
    "NetworkKind",
    # Shapes
    "propagate",
    "summarize",
    # Session & Config
    "DesignSession",
    "Recipe",
    "build_config",
    "LogStyle",
    # Exceptions
    "NetSketchError",
    "NetSketchConfigError",
    "LayerValidationError",
    "ShapeError",
    "UnsupportedTargetError",
    "UnsupportedFrameworkError",
    "UnsupportedModelStyleError",
]
