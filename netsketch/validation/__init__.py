"""
Validation Package.

Structural placement rules for FCN and CNN layer sequences.
"""

from .validator import (
    ValidationResult,
    ensure_valid,
    validate_cnn_layers,
    validate_fcn_layers,
    validate_layers,
)

__all__ = [
    "ValidationResult",
    "ensure_valid",
    "validate_cnn_layers",
    "validate_fcn_layers",
    "validate_layers",
]
