"""
PyTorch FCN Code Generator.

Emits an ``nn.Module`` subclass holding a flatten step and an
``nn.Sequential`` of ``Linear`` / activation / ``Dropout`` modules. The
running in-width is carried through the fold so a ``Dropout`` between two
``Dense`` layers leaves the next ``Linear`` wired to the last real width.
"""

from __future__ import annotations

from typing import Any

from ..layers import ModelStyle
from .base import Emission, fmt_rate, fold_layers, indent, pytorch_activation


def _step(acc: Emission, _: int, layer: Any) -> Emission:
    if layer.type == "Input":
        return acc.emit(width=layer.size)
    if layer.type == "Dropout":
        return acc.emit(f"nn.Dropout(p={fmt_rate(layer.rate)}),")
    return acc.emit(
        f"nn.Linear({acc.prev_width}, {layer.size}),",
        f"{pytorch_activation(layer.activation)},",
        width=layer.size,
    )


class PyTorchFCNGenerator:
    """PyTorch generator for FCN configurations."""

    class_name = "FCNModel"

    def generate_imports(self) -> str:
        return (
            "import torch\n"
            "import torch.nn as nn\n"
            "import torch.optim as optim\n"
            "from torch.utils.data import DataLoader"
        )

    def generate_model(self, config: Any) -> str:
        """
        Emit the module definition; identical for every model style.

        Raises:
            UnsupportedModelStyleError: If the configured style is unknown.
        """
        ModelStyle.parse(config.model_style)
        emission = fold_layers(_step, list(config.layers), Emission())

        lines = [
            f"class {self.class_name}(nn.Module):",
            *indent(["def __init__(self):"]),
            *indent(["super().__init__()", "self.flatten = nn.Flatten()"], 2),
            *indent(["self.layers = nn.Sequential("], 2),
            *indent(emission.lines, 3),
            *indent([")"], 2),
            "",
            *indent(["def forward(self, x):"]),
            *indent(["x = self.flatten(x)", "logits = self.layers(x)", "return logits"], 2),
        ]
        return "\n".join(lines) + "\n"

    def generate_training_code(self, config: Any) -> str:
        return (
            "def train_model(model, train_loader, num_epochs=10):\n"
            "    criterion = nn.MSELoss()\n"
            "    optimizer = optim.Adam(model.parameters(), lr=0.001)\n"
            "\n"
            "    for epoch in range(num_epochs):\n"
            "        running_loss = 0.0\n"
            "        for inputs, labels in train_loader:\n"
            "            inputs = inputs.view(inputs.size(0), -1)\n"
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
            "# train_loader yields (inputs, labels) with inputs shaped [batch_size, input_size]\n"
            f"# model = {self.class_name}()\n"
            "# train_model(model, train_loader)\n"
        )
