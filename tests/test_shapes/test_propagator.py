"""
Test Suite for the Shape Propagator and Diagram Labels.
"""

from __future__ import annotations

import pytest

from netsketch.exceptions import ShapeError
from netsketch.layers import cnn, fcn, sample_cnn, sample_fcn
from netsketch.shapes import (
    LayerSummary,
    ShapeAtLayer,
    describe_layer,
    fcn_widths,
    iter_shapes,
    propagate,
    summarize,
)


# SHAPE AT LAYER
@pytest.mark.unit
class TestShapeAtLayer:
    def test_features(self):
        assert ShapeAtLayer(4, 8, 8).features == 256

    def test_str_spatial(self):
        assert str(ShapeAtLayer(4, 8, 8)) == "4x8x8"

    def test_str_flat(self):
        assert str(ShapeAtLayer(1152, 1, 1, flat=True)) == "1152"

    def test_validity(self):
        assert ShapeAtLayer(1, 1, 1).is_valid
        assert not ShapeAtLayer(1, 0, 3).is_valid


# PROPAGATION
@pytest.mark.unit
class TestPropagate:
    """Forward shape rules per layer tag."""

    def test_conv_after_input(self):
        shapes = propagate([cnn.InputLayer(size=(3, 10, 10)), cnn.ConvLayer(size=4, kernel=(3, 3))])
        assert shapes[-1] == ShapeAtLayer(4, 8, 8)

    def test_pool(self):
        shapes = propagate(
            [cnn.InputLayer(size=(2, 9, 7)), cnn.PoolLayer(kernel=(3, 2), stride=(2, 2))]
        )
        assert shapes[-1] == ShapeAtLayer(2, 4, 3)

    def test_padding(self):
        shapes = propagate([cnn.InputLayer(size=(1, 5, 5)), cnn.PaddingLayer(padding=(1, 2))])
        assert shapes[-1] == ShapeAtLayer(1, 7, 9)

    def test_flatten_then_dense(self):
        shapes = propagate(
            [
                cnn.InputLayer(size=(3, 32, 32)),
                cnn.ConvLayer(size=8, kernel=(3, 3)),
                cnn.FlattenLayer(),
                cnn.DenseLayer(size=64),
            ]
        )
        assert shapes[2] == ShapeAtLayer(7200, 1, 1, flat=True)
        assert shapes[3].features == 64

    def test_dropout_inherits(self):
        shapes = propagate(
            [cnn.InputLayer(size=(3, 4, 4)), cnn.FlattenLayer(), cnn.DropoutLayer(rate=0.5)]
        )
        assert shapes[2] == shapes[1]

    def test_one_entry_per_layer(self):
        layers = sample_cnn()
        assert len(propagate(layers)) == len(layers)

    def test_sample_cnn_features(self):
        shapes = propagate(sample_cnn())
        assert str(shapes[1]) == "16x30x30"
        assert str(shapes[2]) == "16x15x15"
        assert str(shapes[4]) == "32x6x6"
        assert shapes[5].features == 1152

    def test_invalid_dimension_raises(self):
        layers = [cnn.InputLayer(size=(1, 2, 2)), cnn.ConvLayer(size=3, kernel=(3, 3))]
        with pytest.raises(ShapeError, match="Conv layer at position 1"):
            propagate(layers)

    def test_iter_shapes_does_not_check(self):
        layers = [cnn.InputLayer(size=(1, 2, 2)), cnn.ConvLayer(size=3, kernel=(4, 4))]
        assert list(iter_shapes(layers))[-1] == ShapeAtLayer(3, -1, -1)

    def test_fcn_widths(self):
        layers = [
            fcn.InputLayer(size=8),
            fcn.DenseLayer(size=16),
            fcn.DropoutLayer(rate=0.2),
            fcn.OutputLayer(size=3),
        ]
        assert fcn_widths(layers) == [8, 16, 16, 3]


# DIAGRAM LABELS
@pytest.mark.unit
class TestSummaries:
    """Info and size captions drawn next to each layer."""

    @pytest.mark.parametrize(
        "layer, expected",
        [
            (cnn.InputLayer(size=(3, 32, 32)), "Input\n3x32x32"),
            (cnn.ConvLayer(size=8, kernel=(3, 3)), "Conv\n8x3x3"),
            (cnn.PoolLayer(kernel=(2, 2), stride=(2, 2)), "Pool\n2x2\n2x2"),
            (cnn.PaddingLayer(padding=(1, 1)), "Padding\n1x1"),
            (cnn.FlattenLayer(), "Flatten"),
            (cnn.DenseLayer(size=64), "Dense\n64\nReLU"),
            (cnn.DropoutLayer(rate=0.5), "Dropout\n0.5"),
            (fcn.InputLayer(size=8), "Input\n8"),
        ],
    )
    def test_describe_layer(self, layer, expected):
        assert describe_layer(layer) == expected

    def test_summarize_sample(self):
        summaries = summarize(sample_cnn())
        assert all(isinstance(row, LayerSummary) for row in summaries)
        assert summaries[1].size_text == "16x30x30"
        assert summaries[-1].size_text == "10"
        assert [row.position for row in summaries] == list(range(len(summaries)))

    def test_summarize_fcn(self):
        summaries = summarize(sample_fcn())
        assert [row.size_text for row in summaries] == ["8", "16", "16", "16", "16", "8"]
