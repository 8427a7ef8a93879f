"""
Shared building blocks of the code generators.

Key Components:

- ``CodeGenerator``: capability protocol every (kind, framework) generator meets
- ``GeneratedCode``: the three text blocks of one generation call
- ``Emission`` / ``fold_layers``: explicit accumulator threaded through a
  layer sequence instead of outer-scope mutable state
- Activation and literal formatting helpers for both dialects
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Final, NamedTuple, Protocol, Sequence, TypeVar

from ..layers import Activation


class CodeGenerator(Protocol):
    """Capability set of one (network kind, framework) generator."""

    def generate_imports(self) -> str: ...

    def generate_model(self, config: Any) -> str: ...

    def generate_training_code(self, config: Any) -> str: ...


class GeneratedCode(NamedTuple):
    """Import, model and training blocks produced by one generation call."""

    imports: str
    model: str
    training: str

    def render(self) -> str:
        """Final source text: the three blocks separated by blank lines."""
        blocks = (self.imports, self.model, self.training)
        return "\n\n".join(block.strip("\n") for block in blocks) + "\n"


class Emission(NamedTuple):
    """
    Accumulator of a fold over the layer sequence.

    Attributes:
        lines: Source lines emitted so far.
        prev_symbol: Name holding the most recent tensor (functional style).
        prev_width: Output width of the most recent width-changing layer.
    """

    lines: tuple[str, ...] = ()
    prev_symbol: str = "inputs"
    prev_width: int = 0

    def emit(self, *lines: str, symbol: str | None = None, width: int | None = None) -> Emission:
        return Emission(
            self.lines + lines,
            self.prev_symbol if symbol is None else symbol,
            self.prev_width if width is None else width,
        )


_Acc = TypeVar("_Acc")


def fold_layers(
    step: Callable[[_Acc, int, Any], _Acc],
    layers: Sequence[Any],
    initial: _Acc,
) -> _Acc:
    """Reduce ``step(acc, index, layer)`` over the sequence in forward order."""
    return reduce(lambda acc, item: step(acc, *item), enumerate(layers), initial)


# ACTIVATIONS
PYTORCH_ACTIVATIONS: Final[dict[str, str]] = {
    "ReLU": "nn.ReLU()",
    "Sigmoid": "nn.Sigmoid()",
    "Tanh": "nn.Tanh()",
    "Softmax": "nn.Softmax(dim=1)",
}

KERAS_ACTIVATIONS: Final[dict[str, str]] = {
    "ReLU": "relu",
    "Sigmoid": "sigmoid",
    "Tanh": "tanh",
    "Softmax": "softmax",
}


def _activation_name(activation: Activation | str) -> str:
    return activation.value if isinstance(activation, Activation) else str(activation)


def pytorch_activation(activation: Activation | str) -> str:
    """PyTorch module expression for an activation; unknown names map to ReLU."""
    return PYTORCH_ACTIVATIONS.get(_activation_name(activation), PYTORCH_ACTIVATIONS["ReLU"])


def keras_activation(activation: Activation | str) -> str:
    """Keras activation string; unknown names map to ``relu``."""
    return KERAS_ACTIVATIONS.get(_activation_name(activation), KERAS_ACTIVATIONS["ReLU"])


# LITERALS
def fmt_tuple(values: Sequence[int]) -> str:
    """Python tuple literal, e.g. ``(3, 3)`` or ``(8,)``."""
    if len(values) == 1:
        return f"({values[0]},)"
    return "(" + ", ".join(str(v) for v in values) + ")"


def fmt_rate(rate: float) -> str:
    return str(float(rate))


def indent(lines: Sequence[str], level: int = 1) -> list[str]:
    """Prefix every line with ``level`` four-space indents."""
    pad = "    " * level
    return [f"{pad}{line}" if line else line for line in lines]
