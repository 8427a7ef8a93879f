"""
Closed vocabularies shared by the layer families and the generators.

Every enum is a ``str`` subclass so values round-trip unchanged through
YAML recipes and JSON payloads coming from a form editor.
"""

from __future__ import annotations

from enum import Enum

from ..exceptions import (
    NetSketchConfigError,
    UnsupportedFrameworkError,
    UnsupportedModelStyleError,
)


class Activation(str, Enum):
    """Activation functions selectable on Dense and Output layers."""

    RELU = "ReLU"
    SIGMOID = "Sigmoid"
    TANH = "Tanh"
    SOFTMAX = "Softmax"


class NetworkKind(str, Enum):
    """Layer family a sequence belongs to."""

    FCN = "FCN"
    CNN = "CNN"

    @classmethod
    def parse(cls, name: str | NetworkKind) -> NetworkKind:
        """
        Resolve a network kind tag case-insensitively.

        Raises:
            NetSketchConfigError: If ``name`` is neither FCN nor CNN.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError as e:
            raise NetSketchConfigError(f"Unknown network kind: {name}") from e


class ModelStyle(str, Enum):
    """Code-shape convention used for the model block."""

    SEQUENTIAL = "Sequential"
    FUNCTIONAL = "Functional"
    SUBCLASSING = "Subclassing"

    @classmethod
    def parse(cls, name: str | ModelStyle) -> ModelStyle:
        """
        Resolve a model style name case-insensitively.

        Raises:
            UnsupportedModelStyleError: If ``name`` matches no style.
        """
        if isinstance(name, cls):
            return name
        for style in cls:
            if style.value.lower() == str(name).strip().lower():
                return style
        raise UnsupportedModelStyleError(f"Unsupported model style: {name}")


class Framework(str, Enum):
    """Target framework dialect of the generated source."""

    PYTORCH = "PyTorch"
    KERAS = "Keras"

    @classmethod
    def parse(cls, name: str | Framework) -> Framework:
        """
        Resolve a framework name case-insensitively.

        Raises:
            UnsupportedFrameworkError: If ``name`` matches no framework.
        """
        if isinstance(name, cls):
            return name
        for framework in cls:
            if framework.value.lower() == str(name).strip().lower():
                return framework
        raise UnsupportedFrameworkError(f"Unsupported framework: {name}")
