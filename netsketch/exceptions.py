"""
NetSketch Exception Hierarchy.

NetSketchError (base, Exception)
├── NetSketchConfigError(NetSketchError, ValueError)     ← recipe / config validation
├── LayerValidationError(NetSketchError, ValueError)     ← layer placement rules
├── ShapeError(NetSketchError, ValueError)               ← non-positive tensor dimensions
└── UnsupportedTargetError(NetSketchError, ValueError)   ← unknown generation target
    ├── UnsupportedFrameworkError
    └── UnsupportedModelStyleError

Every subclass multi-inherits from ValueError so callers can keep plain
``except ValueError`` blocks around generation calls.
"""


class NetSketchError(Exception):
    """Base exception for all NetSketch errors."""


class NetSketchConfigError(NetSketchError, ValueError):
    """Recipe or configuration validation error."""


class LayerValidationError(NetSketchError, ValueError):
    """Layer sequence violates a structural placement rule."""


class ShapeError(NetSketchError, ValueError):
    """Shape propagation produced a non-positive tensor dimension."""


class UnsupportedTargetError(NetSketchError, ValueError):
    """Requested code generation target does not exist."""


class UnsupportedFrameworkError(UnsupportedTargetError):
    """Framework name is not one of the registered generators."""


class UnsupportedModelStyleError(UnsupportedTargetError):
    """Model style is not handled by the selected generator."""
