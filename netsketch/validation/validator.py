"""
Layer Sequence Validator.

Checks an ordered layer sequence against the structural placement rules of
its family in a single forward pass and reports the first violated rule as a
human-readable message. Checks run in a fixed order, so when a sequence
breaks several rules the message surfaced is deterministic:

1. empty sequence
2. first layer must be ``Input``
3. ``Input`` must not appear anywhere else
4. last layer must be ``Output``
5. (CNN) per-layer placement relative to the unique ``Flatten``
6. (CNN) forward geometry must stay positive

Dropout placement policy: CNN ``Dense``/``Dropout`` layers may appear
anywhere after the ``Flatten``; FCN sequences carry no Dropout rule.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Sequence

from ..core.paths import LOGGER_NAME
from ..exceptions import LayerValidationError, ShapeError
from ..layers import NetworkKind, infer_kind
from ..layers.cnn import FLATTENED_TYPES, SPATIAL_TYPES
from ..shapes import propagate

logger = logging.getLogger(LOGGER_NAME)

EMPTY_SEQUENCE = "Empty layer sequence"
FIRST_LAYER_NOT_INPUT = "First layer must be an input layer"
INPUT_NOT_FIRST = "Input layer must be the first layer"
LAST_LAYER_NOT_OUTPUT = "Last layer must be an output layer"
OUTPUT_NOT_LAST = "Output layer must be the last layer"
MULTIPLE_FLATTEN = "Only one flatten layer is allowed"


class ValidationResult(NamedTuple):
    """Outcome of a validation pass; ``message`` is empty on success."""

    success: bool
    message: str = ""

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(True, "")

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        return cls(False, message)


def _check_boundaries(layers: Sequence[Any]) -> ValidationResult:
    """Rules shared by both families: Input first and only first, Output last."""
    if not layers:
        return ValidationResult.fail(EMPTY_SEQUENCE)
    if layers[0].type != "Input":
        return ValidationResult.fail(FIRST_LAYER_NOT_INPUT)
    if any(layer.type == "Input" for layer in layers[1:]):
        return ValidationResult.fail(INPUT_NOT_FIRST)
    if layers[-1].type != "Output":
        return ValidationResult.fail(LAST_LAYER_NOT_OUTPUT)
    return ValidationResult.ok()


def validate_fcn_layers(layers: Sequence[Any]) -> ValidationResult:
    """
    Validate an FCN sequence.

    Args:
        layers: Ordered FCN layer models.

    Returns:
        ValidationResult with the first violated rule, if any.
    """
    result = _check_boundaries(layers)
    if not result.success:
        return result
    if any(layer.type == "Output" for layer in layers[:-1]):
        return ValidationResult.fail(OUTPUT_NOT_LAST)
    return ValidationResult.ok()


def validate_cnn_layers(layers: Sequence[Any]) -> ValidationResult:
    """
    Validate a CNN sequence.

    Besides the boundary rules, every layer between the first and the last
    is checked against the position of the single ``Flatten``: spatial
    layers must precede it, flattened-stage layers must follow it. Once the
    structure is sound the shapes are propagated so kernels, strides and
    pools that would shrink a dimension to zero are rejected here rather
    than emitted as unusable code.

    Args:
        layers: Ordered CNN layer models.

    Returns:
        ValidationResult with the first violated rule, if any.
    """
    result = _check_boundaries(layers)
    if not result.success:
        return result

    flatten_seen = False
    for layer in layers[1:-1]:
        tag = layer.type
        if tag == "Input":
            return ValidationResult.fail(INPUT_NOT_FIRST)
        if tag == "Output":
            return ValidationResult.fail(OUTPUT_NOT_LAST)
        if tag == "Flatten":
            if flatten_seen:
                return ValidationResult.fail(MULTIPLE_FLATTEN)
            flatten_seen = True
        elif tag in FLATTENED_TYPES and not flatten_seen:
            return ValidationResult.fail(f"{tag} layers must come after a flatten layer")
        elif tag in SPATIAL_TYPES and flatten_seen:
            return ValidationResult.fail(f"{tag} layers must come before flatten layer")

    if not flatten_seen:
        return ValidationResult.fail("Output layers must come after a flatten layer")

    try:
        propagate(layers)
    except ShapeError as e:
        return ValidationResult.fail(str(e))
    return ValidationResult.ok()


_VALIDATORS = {
    NetworkKind.FCN: validate_fcn_layers,
    NetworkKind.CNN: validate_cnn_layers,
}


def validate_layers(
    layers: Sequence[Any], kind: NetworkKind | str | None = None
) -> ValidationResult:
    """
    Validate a layer sequence of either family.

    Args:
        layers: Ordered layer models.
        kind: Network family; inferred from the layer models when omitted.

    Returns:
        ValidationResult(success, message). Never raises for rule violations.
    """
    resolved = NetworkKind.parse(kind) if kind is not None else infer_kind(layers)
    if resolved is None:
        return ValidationResult.fail(EMPTY_SEQUENCE)

    result = _VALIDATORS[resolved](layers)
    if result.success:
        logger.debug(f"{resolved.value} sequence of {len(layers)} layers is valid")
    else:
        logger.debug(f"{resolved.value} sequence rejected: {result.message}")
    return result


def ensure_valid(layers: Sequence[Any], kind: NetworkKind | str | None = None) -> None:
    """
    Raising counterpart of :func:`validate_layers`.

    Raises:
        LayerValidationError: With the first violated rule as message.
    """
    result = validate_layers(layers, kind)
    if not result.success:
        raise LayerValidationError(result.message)
