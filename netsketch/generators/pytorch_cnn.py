"""
PyTorch CNN Code Generator.

Emits an ``nn.Module`` subclass whose ``__init__`` declares one attribute
per layer and whose ``forward`` applies them in sequence order. PyTorch has
no separate sequential/functional/subclassing model styles, so every style
produces the same module definition.

Constructor in-widths are wired from the propagated shapes rather than from
the immediately preceding layer: ``Conv2d`` reads the previous channel count
and ``Linear`` the previous flattened feature count, so ``Dropout`` layers
and the ``Flatten`` are accounted for.
"""

from __future__ import annotations

from typing import Any, Callable, Final, NamedTuple

from ..layers import ModelStyle
from ..shapes import ShapeAtLayer, propagate
from .base import fmt_rate, fmt_tuple, fold_layers, indent, pytorch_activation

_Modules = tuple[tuple[str, str], ...]


class _ModuleTable(NamedTuple):
    """Fold accumulator: declared ``(attribute, constructor)`` pairs and the running shape."""

    modules: _Modules = ()
    prev_shape: ShapeAtLayer = ShapeAtLayer(0, 0, 0)


def _conv(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    return (
        (
            f"conv{index}",
            f"nn.Conv2d({prev.channels}, {layer.size}, kernel_size={fmt_tuple(layer.kernel)})",
        ),
    )


def _pool(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    return (
        (
            f"pool{index}",
            f"nn.MaxPool2d(kernel_size={fmt_tuple(layer.kernel)}, "
            f"stride={fmt_tuple(layer.stride)})",
        ),
    )


def _padding(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    # ZeroPad2d takes (left, right, top, bottom)
    rows, cols = layer.padding
    return ((f"pad{index}", f"nn.ZeroPad2d({fmt_tuple((cols, cols, rows, rows))})"),)


def _dense(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    return (
        (f"fc{index}", f"nn.Linear({prev.features}, {layer.size})"),
        (f"act{index}", pytorch_activation(layer.activation)),
    )


def _dropout(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    return ((f"dropout{index}", f"nn.Dropout(p={fmt_rate(layer.rate)})"),)


def _output(index: int, layer: Any, prev: ShapeAtLayer) -> _Modules:
    return (
        ("output", f"nn.Linear({prev.features}, {layer.size})"),
        ("output_act", pytorch_activation(layer.activation)),
    )


_MODULE_BUILDERS: Final[dict[str, Callable[[int, Any, ShapeAtLayer], _Modules]]] = {
    "Input": lambda index, layer, prev: (),
    "Conv": _conv,
    "Pool": _pool,
    "Padding": _padding,
    "Flatten": lambda index, layer, prev: (("flatten", "nn.Flatten()"),),
    "Dense": _dense,
    "Dropout": _dropout,
    "Output": _output,
}


def _step(acc: _ModuleTable, index: int, item: tuple[Any, ShapeAtLayer]) -> _ModuleTable:
    layer, shape = item
    modules = _MODULE_BUILDERS[layer.type](index, layer, acc.prev_shape)
    return _ModuleTable(acc.modules + modules, shape)


class PyTorchCNNGenerator:
    """PyTorch generator for CNN configurations."""

    class_name = "CNNModel"

    def generate_imports(self) -> str:
        return (
            "import torch\n"
            "import torch.nn as nn\n"
            "import torch.optim as optim\n"
            "from torch.utils.data import DataLoader"
        )

    def generate_model(self, config: Any) -> str:
        """
        Emit the module definition.

        Raises:
            UnsupportedModelStyleError: If the configured style is unknown.
            ShapeError: If the layers produce a non-positive dimension.
        """
        ModelStyle.parse(config.model_style)
        layers = list(config.layers)
        table = fold_layers(_step, list(zip(layers, propagate(layers))), _ModuleTable())

        lines = [
            f"class {self.class_name}(nn.Module):",
            *indent(["def __init__(self):"]),
            *indent(["super().__init__()"], 2),
            *indent([f"self.{name} = {ctor}" for name, ctor in table.modules], 2),
            "",
            *indent(["def forward(self, x):"]),
            *indent([f"x = self.{name}(x)" for name, _ in table.modules], 2),
            *indent(["return x"], 2),
        ]
        return "\n".join(lines) + "\n"

    def generate_training_code(self, config: Any) -> str:
        return (
            "def train_model(model, train_loader, num_epochs=10):\n"
            "    criterion = nn.CrossEntropyLoss()\n"
            "    optimizer = optim.Adam(model.parameters(), lr=0.001)\n"
            "\n"
            "    for epoch in range(num_epochs):\n"
            "        running_loss = 0.0\n"
            "        for inputs, labels in train_loader:\n"
            "            optimizer.zero_grad()\n"
            "            outputs = model(inputs)\n"
            "            loss = criterion(outputs, labels)\n"
            "            loss.backward()\n"
            "            optimizer.step()\n"
            "            running_loss += loss.item()\n"
            "\n"
            "        print(f'Epoch {epoch + 1}, Loss: {running_loss / len(train_loader)}')\n"
            "\n"
            "\n"
            "# Example usage:\n"
            "# train_loader yields (inputs, labels) with inputs shaped [batch, channels, H, W]\n"
            f"# model = {self.class_name}()\n"
            "# train_model(model, train_loader)\n"
        )
