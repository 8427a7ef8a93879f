"""
Test Suite for the Generator Registry Facade.

Tests framework resolution, dispatch by network kind, block assembly and
determinism of ``generate_code``.
"""

from __future__ import annotations

import logging
from itertools import product

import pytest

from netsketch import generate_code as top_level_generate_code
from netsketch.core.config import CNNConfig, FCNConfig
from netsketch.core.paths import LOGGER_NAME
from netsketch.exceptions import UnsupportedFrameworkError, UnsupportedTargetError
from netsketch.generators import (
    GeneratedCode,
    KerasGenerator,
    PyTorchCNNGenerator,
    PyTorchFCNGenerator,
    generate_code,
    generate_parts,
    get_generator,
)
from netsketch.layers import Framework, ModelStyle, NetworkKind, cnn, sample_cnn, sample_fcn


@pytest.fixture
def cnn_config():
    return CNNConfig(
        layers=(
            cnn.InputLayer(size=(3, 32, 32)),
            cnn.ConvLayer(size=8, kernel=(3, 3)),
            cnn.FlattenLayer(),
            cnn.OutputLayer(size=10, activation="Softmax"),
        )
    )


# REGISTRY LOOKUP
@pytest.mark.unit
class TestGetGenerator:
    def test_pytorch_targets(self):
        assert isinstance(get_generator("PyTorch", NetworkKind.CNN), PyTorchCNNGenerator)
        assert isinstance(get_generator("pytorch", "FCN"), PyTorchFCNGenerator)

    def test_keras_targets(self):
        cnn_gen = get_generator("KERAS", NetworkKind.CNN)
        fcn_gen = get_generator(Framework.KERAS, NetworkKind.FCN)
        assert isinstance(cnn_gen, KerasGenerator) and cnn_gen.loss == "categorical_crossentropy"
        assert isinstance(fcn_gen, KerasGenerator) and fcn_gen.loss == "mse"

    def test_unknown_framework(self):
        with pytest.raises(UnsupportedFrameworkError, match="Unsupported framework: jax"):
            get_generator("jax", NetworkKind.CNN)

    def test_unknown_framework_logs_error(self, caplog):
        logger = logging.getLogger(LOGGER_NAME)
        logger.propagate = True
        try:
            with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
                with pytest.raises(UnsupportedTargetError):
                    get_generator("mxnet", NetworkKind.FCN)
        finally:
            logger.propagate = False
        assert "Unsupported framework: mxnet" in caplog.text


# FACADE
@pytest.mark.unit
class TestGenerateCode:
    """Concatenation contract and determinism."""

    def test_blocks_joined_by_blank_line(self, cnn_config):
        parts = generate_parts("PyTorch", cnn_config)
        code = generate_code("PyTorch", cnn_config)
        assert isinstance(parts, GeneratedCode)
        assert code == (
            parts.imports.strip("\n")
            + "\n\n"
            + parts.model.strip("\n")
            + "\n\n"
            + parts.training.strip("\n")
            + "\n"
        )

    def test_keras_sequential_contains_every_layer(self, cnn_config):
        code = generate_code("Keras", cnn_config)
        assert "layers.Input(shape=(3, 32, 32))" in code
        assert "layers.Conv2D(8, (3, 3))" in code
        assert "layers.Flatten()" in code
        assert "layers.Dense(10, activation='softmax')" in code

    def test_pytorch_output_wiring(self, cnn_config):
        code = generate_code("pytorch", cnn_config)
        assert "class CNNModel(nn.Module):" in code
        assert "self.output = nn.Linear(7200, 10)" in code
        forward = code[code.index("def forward") :]
        assert forward.index("self.conv1(x)") < forward.index("self.output(x)")

    def test_deterministic(self, cnn_config):
        assert generate_code("Keras", cnn_config) == generate_code("Keras", cnn_config)

    def test_unknown_framework_produces_nothing(self, cnn_config):
        with pytest.raises(UnsupportedFrameworkError):
            generate_code("Caffe", cnn_config)

    def test_kind_inferred_without_kind_attribute(self):
        class _Bare:
            layers = tuple(sample_fcn())
            model_style = ModelStyle.SEQUENTIAL

        assert "class FCNModel(nn.Module):" in generate_code("PyTorch", _Bare())

    def test_top_level_reexport(self):
        assert top_level_generate_code is generate_code


# EVERY TARGET
@pytest.mark.unit
@pytest.mark.parametrize(
    "framework, style, kind",
    list(product(["PyTorch", "Keras"], list(ModelStyle), list(NetworkKind))),
)
def test_every_combination_compiles(framework, style, kind):
    """Generated source is syntactically valid Python for every target."""
    if kind is NetworkKind.CNN:
        config = CNNConfig(layers=tuple(sample_cnn()), model_style=style)
    else:
        config = FCNConfig(layers=tuple(sample_fcn()), model_style=style)

    code = generate_code(framework, config)

    compile(code, f"<{kind.value}-{framework}-{style.value}>", "exec")
    assert code.endswith("\n")
