"""
Test Suite for the PyTorch Code Generators (FCN and CNN).
"""

from __future__ import annotations

import pytest

from netsketch.core.config import CNNConfig, FCNConfig
from netsketch.exceptions import ShapeError, UnsupportedModelStyleError
from netsketch.generators import PyTorchCNNGenerator, PyTorchFCNGenerator, pytorch_activation
from netsketch.layers import Activation, ModelStyle, cnn, fcn, sample_cnn


@pytest.fixture
def cnn_config():
    return CNNConfig(
        layers=(
            cnn.InputLayer(size=(3, 32, 32)),
            cnn.ConvLayer(size=8, kernel=(3, 3)),
            cnn.FlattenLayer(),
            cnn.OutputLayer(size=10, activation=Activation.SOFTMAX),
        )
    )


# ACTIVATIONS
@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [
        ("ReLU", "nn.ReLU()"),
        ("Sigmoid", "nn.Sigmoid()"),
        ("Tanh", "nn.Tanh()"),
        ("Softmax", "nn.Softmax(dim=1)"),
        ("Unknown", "nn.ReLU()"),
    ],
)
def test_pytorch_activation(name, expected):
    assert pytorch_activation(name) == expected


# CNN GENERATOR
@pytest.mark.unit
class TestPyTorchCNN:
    """Module attributes, in-width wiring and forward order."""

    def test_imports(self):
        imports = PyTorchCNNGenerator().generate_imports()
        assert imports.splitlines() == [
            "import torch",
            "import torch.nn as nn",
            "import torch.optim as optim",
            "from torch.utils.data import DataLoader",
        ]

    def test_minimal_model(self, cnn_config):
        code = PyTorchCNNGenerator().generate_model(cnn_config)
        assert code == (
            "class CNNModel(nn.Module):\n"
            "    def __init__(self):\n"
            "        super().__init__()\n"
            "        self.conv1 = nn.Conv2d(3, 8, kernel_size=(3, 3))\n"
            "        self.flatten = nn.Flatten()\n"
            "        self.output = nn.Linear(7200, 10)\n"
            "        self.output_act = nn.Softmax(dim=1)\n"
            "\n"
            "    def forward(self, x):\n"
            "        x = self.conv1(x)\n"
            "        x = self.flatten(x)\n"
            "        x = self.output(x)\n"
            "        x = self.output_act(x)\n"
            "        return x\n"
        )

    def test_sample_wiring(self):
        code = PyTorchCNNGenerator().generate_model(CNNConfig(layers=tuple(sample_cnn())))
        assert "self.conv1 = nn.Conv2d(3, 16, kernel_size=(3, 3))" in code
        assert "self.pool2 = nn.MaxPool2d(kernel_size=(2, 2), stride=(2, 2))" in code
        assert "self.conv3 = nn.Conv2d(16, 32, kernel_size=(3, 3))" in code
        assert "self.fc6 = nn.Linear(1152, 64)" in code
        assert "self.act6 = nn.ReLU()" in code
        assert "self.dropout7 = nn.Dropout(p=0.5)" in code
        assert "self.output = nn.Linear(64, 10)" in code

    def test_dropout_does_not_change_in_width(self):
        config = CNNConfig(
            layers=(
                cnn.InputLayer(size=(1, 4, 4)),
                cnn.FlattenLayer(),
                cnn.DropoutLayer(rate=0.2),
                cnn.OutputLayer(size=2),
            )
        )
        assert "self.output = nn.Linear(16, 2)" in PyTorchCNNGenerator().generate_model(config)

    def test_padding_argument_order(self):
        config = CNNConfig(
            layers=(
                cnn.InputLayer(size=(1, 4, 4)),
                cnn.PaddingLayer(padding=(1, 2)),
                cnn.FlattenLayer(),
                cnn.OutputLayer(size=2),
            )
        )
        code = PyTorchCNNGenerator().generate_model(config)
        assert "self.pad1 = nn.ZeroPad2d((2, 2, 1, 1))" in code
        assert "self.output = nn.Linear(48, 2)" in code

    @pytest.mark.parametrize("style", list(ModelStyle))
    def test_identical_for_every_style(self, cnn_config, style):
        generator = PyTorchCNNGenerator()
        styled = cnn_config.model_copy(update={"model_style": style})
        assert generator.generate_model(styled) == generator.generate_model(cnn_config)

    def test_unknown_style_rejected(self, cnn_config):
        class _Stub:
            layers = cnn_config.layers
            model_style = "Graph"

        with pytest.raises(UnsupportedModelStyleError):
            PyTorchCNNGenerator().generate_model(_Stub())

    def test_invalid_geometry_raises(self):
        config = CNNConfig(
            layers=(
                cnn.InputLayer(size=(1, 2, 2)),
                cnn.ConvLayer(size=2, kernel=(3, 3)),
                cnn.FlattenLayer(),
                cnn.OutputLayer(),
            )
        )
        with pytest.raises(ShapeError):
            PyTorchCNNGenerator().generate_model(config)

    def test_training_block(self, cnn_config):
        code = PyTorchCNNGenerator().generate_training_code(cnn_config)
        assert "criterion = nn.CrossEntropyLoss()" in code
        assert "optim.Adam(model.parameters(), lr=0.001)" in code
        assert "# model = CNNModel()" in code


# FCN GENERATOR
@pytest.mark.unit
class TestPyTorchFCN:
    """nn.Sequential body and running width."""

    def test_model(self):
        config = FCNConfig(
            layers=(
                fcn.InputLayer(size=4),
                fcn.DenseLayer(size=8),
                fcn.DropoutLayer(rate=0.5),
                fcn.OutputLayer(size=2, activation="Sigmoid"),
            )
        )
        code = PyTorchFCNGenerator().generate_model(config)
        assert code == (
            "class FCNModel(nn.Module):\n"
            "    def __init__(self):\n"
            "        super().__init__()\n"
            "        self.flatten = nn.Flatten()\n"
            "        self.layers = nn.Sequential(\n"
            "            nn.Linear(4, 8),\n"
            "            nn.ReLU(),\n"
            "            nn.Dropout(p=0.5),\n"
            "            nn.Linear(8, 2),\n"
            "            nn.Sigmoid(),\n"
            "        )\n"
            "\n"
            "    def forward(self, x):\n"
            "        x = self.flatten(x)\n"
            "        logits = self.layers(x)\n"
            "        return logits\n"
        )

    def test_dropout_right_after_input(self):
        config = FCNConfig(
            layers=(fcn.InputLayer(size=6), fcn.DropoutLayer(rate=0.1), fcn.OutputLayer(size=3))
        )
        assert "nn.Linear(6, 3)," in PyTorchFCNGenerator().generate_model(config)

    def test_training_block(self):
        code = PyTorchFCNGenerator().generate_training_code(FCNConfig())
        assert "criterion = nn.MSELoss()" in code
        assert "# model = FCNModel()" in code
