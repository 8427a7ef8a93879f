"""
Test Suite for the Keras Code Generator.

Checks the emitted text for the three model styles, the per-family loss,
and the unsupported-style error.
"""

from __future__ import annotations

import pytest

from netsketch.core.config import CNNConfig, FCNConfig
from netsketch.exceptions import UnsupportedModelStyleError
from netsketch.generators import KerasGenerator, keras_activation
from netsketch.generators.keras import layer_call
from netsketch.layers import Activation, ModelStyle, cnn, fcn


@pytest.fixture
def cnn_layers():
    return (
        cnn.InputLayer(size=(3, 32, 32)),
        cnn.ConvLayer(size=8, kernel=(3, 3)),
        cnn.FlattenLayer(),
        cnn.OutputLayer(size=10, activation=Activation.SOFTMAX),
    )


@pytest.fixture
def generator():
    return KerasGenerator(class_name="CNNModel", loss="categorical_crossentropy")


# LAYER CONSTRUCTORS
@pytest.mark.unit
class TestLayerCalls:
    """One constructor expression per layer tag."""

    @pytest.mark.parametrize(
        "layer, expected",
        [
            (cnn.InputLayer(size=(3, 32, 32)), "layers.Input(shape=(3, 32, 32))"),
            (fcn.InputLayer(size=8), "layers.Input(shape=(8,))"),
            (cnn.ConvLayer(size=8, kernel=(3, 3)), "layers.Conv2D(8, (3, 3))"),
            (
                cnn.PoolLayer(kernel=(2, 2), stride=(1, 2)),
                "layers.MaxPooling2D(pool_size=(2, 2), strides=(1, 2))",
            ),
            (cnn.PaddingLayer(padding=(1, 2)), "layers.ZeroPadding2D(padding=(1, 2))"),
            (cnn.FlattenLayer(), "layers.Flatten()"),
            (cnn.DenseLayer(size=64), "layers.Dense(64, activation='relu')"),
            (cnn.DropoutLayer(rate=0.5), "layers.Dropout(0.5)"),
            (fcn.OutputLayer(size=3, activation="Tanh"), "layers.Dense(3, activation='tanh')"),
        ],
    )
    def test_layer_call(self, layer, expected):
        assert layer_call(layer) == expected

    def test_activation_names(self):
        assert keras_activation(Activation.SIGMOID) == "sigmoid"
        assert keras_activation("Softmax") == "softmax"

    def test_unknown_activation_defaults_to_relu(self):
        assert keras_activation("Swish") == "relu"


# MODEL STYLES
@pytest.mark.unit
class TestModelStyles:
    """Model block text per style."""

    def test_imports(self, generator):
        assert generator.generate_imports() == (
            "from tensorflow import keras\nfrom tensorflow.keras import layers"
        )

    def test_sequential(self, generator, cnn_layers):
        code = generator.generate_model(CNNConfig(layers=cnn_layers))
        assert code == (
            "model = keras.Sequential()\n"
            "model.add(layers.Input(shape=(3, 32, 32)))\n"
            "model.add(layers.Conv2D(8, (3, 3)))\n"
            "model.add(layers.Flatten())\n"
            "model.add(layers.Dense(10, activation='softmax'))\n"
        )

    def test_functional(self, generator, cnn_layers):
        config = CNNConfig(layers=cnn_layers, model_style=ModelStyle.FUNCTIONAL)
        code = generator.generate_model(config)
        assert code == (
            "inputs = layers.Input(shape=(3, 32, 32))\n"
            "x1 = layers.Conv2D(8, (3, 3))(inputs)\n"
            "x2 = layers.Flatten()(x1)\n"
            "x3 = layers.Dense(10, activation='softmax')(x2)\n"
            "\n"
            "model = keras.Model(inputs=inputs, outputs=x3)\n"
        )

    def test_subclassing(self, generator, cnn_layers):
        config = CNNConfig(layers=cnn_layers, model_style="subclassing")
        code = generator.generate_model(config)
        assert code == (
            "class CNNModel(keras.Model):\n"
            "    def __init__(self):\n"
            "        super().__init__()\n"
            "        self.conv1 = layers.Conv2D(8, (3, 3))\n"
            "        self.flatten2 = layers.Flatten()\n"
            "        self.out3 = layers.Dense(10, activation='softmax')\n"
            "\n"
            "    def call(self, inputs):\n"
            "        x = inputs\n"
            "        x = self.conv1(x)\n"
            "        x = self.flatten2(x)\n"
            "        x = self.out3(x)\n"
            "        return x\n"
        )

    def test_fcn_sequential(self):
        generator = KerasGenerator(class_name="FCNModel", loss="mse")
        config = FCNConfig(
            layers=(fcn.InputLayer(size=4), fcn.DropoutLayer(rate=0.25), fcn.OutputLayer(size=2))
        )
        assert generator.generate_model(config).splitlines() == [
            "model = keras.Sequential()",
            "model.add(layers.Input(shape=(4,)))",
            "model.add(layers.Dropout(0.25))",
            "model.add(layers.Dense(2, activation='relu'))",
        ]

    def test_style_name_is_case_insensitive(self, generator, cnn_layers):
        class _Config:
            layers = cnn_layers
            model_style = "functional"

        code = generator.generate_model(_Config())
        assert "keras.Model(inputs=inputs, outputs=x3)" in code

    def test_unsupported_style(self, generator, cnn_layers):
        class _Stub:
            layers = cnn_layers
            model_style = "Graph"

        with pytest.raises(UnsupportedModelStyleError, match="Unsupported Keras model type: Graph"):
            generator.generate_model(_Stub())


# TRAINING BLOCK
@pytest.mark.unit
class TestTrainingCode:
    def test_cnn_loss(self, generator, cnn_layers):
        code = generator.generate_training_code(CNNConfig(layers=cnn_layers))
        assert "loss='categorical_crossentropy'" in code
        assert "optimizer='adam'" in code
        assert "model.fit(" in code

    def test_fcn_loss(self):
        generator = KerasGenerator(class_name="FCNModel", loss="mse")
        assert "loss='mse'" in generator.generate_training_code(FCNConfig())

    def test_subclassing_adds_instantiation_note(self, generator, cnn_layers):
        sequential = generator.generate_training_code(CNNConfig(layers=cnn_layers))
        subclassed = generator.generate_training_code(
            CNNConfig(layers=cnn_layers, model_style="Subclassing")
        )
        assert "model = CNNModel()" not in sequential
        assert subclassed.startswith(sequential)
        assert subclassed.rstrip().endswith("model = CNNModel()")
