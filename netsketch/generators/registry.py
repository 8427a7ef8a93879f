"""
Generators Registry Module.

Registry-based facade that decouples callers from the concrete generator
classes. Generators are keyed by ``(NetworkKind, Framework)``; the framework
name coming from a caller is resolved against the closed ``Framework`` enum
before any text is produced, so an unknown name never yields partial output.

Key Components:

- ``generate_code``: Facade returning the final source text
- ``generate_parts``: Same generation, returned as separate blocks
- ``get_generator``: Registry lookup
- ``_GENERATOR_REGISTRY``: Internal mapping of targets to generator instances

Example:
    >>> from netsketch.generators import generate_code
    >>> source = generate_code("keras", config)
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.logger import LogStyle
from ..core.paths import LOGGER_NAME
from ..exceptions import UnsupportedFrameworkError
from ..layers import Framework, NetworkKind, infer_kind
from .base import CodeGenerator, GeneratedCode
from .keras import KerasGenerator
from .pytorch_cnn import PyTorchCNNGenerator
from .pytorch_fcn import PyTorchFCNGenerator

logger = logging.getLogger(LOGGER_NAME)


_GENERATOR_REGISTRY: dict[tuple[NetworkKind, Framework], CodeGenerator] = {
    (NetworkKind.FCN, Framework.PYTORCH): PyTorchFCNGenerator(),
    (NetworkKind.FCN, Framework.KERAS): KerasGenerator(class_name="FCNModel", loss="mse"),
    (NetworkKind.CNN, Framework.PYTORCH): PyTorchCNNGenerator(),
    (NetworkKind.CNN, Framework.KERAS): KerasGenerator(
        class_name="CNNModel", loss="categorical_crossentropy"
    ),
}


def _resolve_framework(framework: str | Framework) -> Framework:
    try:
        return Framework.parse(framework)
    except UnsupportedFrameworkError as e:
        logger.error(f" {LogStyle.FAILURE} {e}")
        raise


def _config_kind(config: Any) -> NetworkKind:
    kind = getattr(config, "kind", None)
    if kind is not None:
        return NetworkKind.parse(kind)
    inferred = infer_kind(config.layers)
    if inferred is None:
        raise ValueError("Cannot infer the network kind of an empty layer sequence")
    return inferred


def get_generator(framework: str | Framework, kind: NetworkKind | str) -> CodeGenerator:
    """
    Resolve the generator for a framework name and network kind.

    Args:
        framework: Framework name, matched case-insensitively.
        kind: Network family of the configuration.

    Returns:
        The registered generator instance.

    Raises:
        UnsupportedFrameworkError: If the framework name is unknown.
    """
    return _GENERATOR_REGISTRY[(NetworkKind.parse(kind), _resolve_framework(framework))]


def generate_parts(framework: str | Framework, config: Any) -> GeneratedCode:
    """
    Run the three generation steps for a committed configuration.

    Args:
        framework: Target framework name (``"PyTorch"`` or ``"Keras"``, any case).
        config: Committed ``FCNConfig`` / ``CNNConfig`` (layers + model style).

    Returns:
        GeneratedCode with the import, model and training blocks.

    Raises:
        UnsupportedFrameworkError: Unknown framework name.
        UnsupportedModelStyleError: Model style not handled by the generator.
    """
    generator = get_generator(framework, _config_kind(config))
    return GeneratedCode(
        imports=generator.generate_imports(),
        model=generator.generate_model(config),
        training=generator.generate_training_code(config),
    )


def generate_code(framework: str | Framework, config: Any) -> str:
    """
    Generate the complete source text for a committed configuration.

    The output is deterministic: identical inputs always render to
    byte-identical text.

    Raises:
        UnsupportedFrameworkError: Unknown framework name.
        UnsupportedModelStyleError: Model style not handled by the generator.
    """
    code = generate_parts(framework, config).render()
    style = getattr(config, "model_style", None)
    logger.info(
        f"{LogStyle.SUCCESS} Generated {_config_kind(config).value} code "
        f"({Framework.parse(framework).value}, {getattr(style, 'value', style)}, "
        f"{len(config.layers)} layers)"
    )
    return code
