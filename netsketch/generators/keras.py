"""
Keras Code Generator.

Emits ``tensorflow.keras`` source for FCN and CNN configurations in the three
Keras model styles. Both families share one tag → constructor table; the
per-family generators only differ in the model class name and the loss used
by the training block.

Model styles:

- Sequential: ``model = keras.Sequential()`` followed by one ``model.add``
  per layer
- Functional: ``inputs = layers.Input(...)`` followed by ``x<i> = layer(prev)``
  and a closing ``keras.Model(inputs=..., outputs=...)``
- Subclassing: ``keras.Model`` subclass with index-suffixed attributes and a
  ``call`` method applying them in order
"""

from __future__ import annotations

from typing import Any, Callable, Final

from ..exceptions import UnsupportedModelStyleError
from ..layers import ModelStyle
from .base import Emission, fmt_rate, fmt_tuple, fold_layers, indent, keras_activation


def _input_call(layer: Any) -> str:
    shape = (layer.size,) if isinstance(layer.size, int) else layer.size
    return f"layers.Input(shape={fmt_tuple(shape)})"


def _dense_call(layer: Any) -> str:
    return f"layers.Dense({layer.size}, activation='{keras_activation(layer.activation)}')"


_LAYER_CALLS: Final[dict[str, Callable[[Any], str]]] = {
    "Input": _input_call,
    "Conv": lambda layer: f"layers.Conv2D({layer.size}, {fmt_tuple(layer.kernel)})",
    "Pool": lambda layer: (
        f"layers.MaxPooling2D(pool_size={fmt_tuple(layer.kernel)}, "
        f"strides={fmt_tuple(layer.stride)})"
    ),
    "Padding": lambda layer: f"layers.ZeroPadding2D(padding={fmt_tuple(layer.padding)})",
    "Flatten": lambda _: "layers.Flatten()",
    "Dense": _dense_call,
    "Dropout": lambda layer: f"layers.Dropout({fmt_rate(layer.rate)})",
    "Output": _dense_call,
}

# Attribute prefixes for subclassed models ("output" is a keras.Model property)
_ATTRIBUTE_PREFIXES: Final[dict[str, str]] = {
    "Conv": "conv",
    "Pool": "pool",
    "Padding": "pad",
    "Flatten": "flatten",
    "Dense": "dense",
    "Dropout": "dropout",
    "Output": "out",
}


def layer_call(layer: Any) -> str:
    """Keras constructor expression for one layer."""
    return _LAYER_CALLS[layer.type](layer)


class KerasGenerator:
    """
    Keras generator for one network family.

    Args:
        class_name: Name of the generated ``keras.Model`` subclass.
        loss: Loss identifier passed to ``model.compile``.
    """

    def __init__(self, class_name: str, loss: str) -> None:
        self.class_name = class_name
        self.loss = loss
        self._builders: dict[ModelStyle, Callable[[Any], str]] = {
            ModelStyle.SEQUENTIAL: self._sequential_model,
            ModelStyle.FUNCTIONAL: self._functional_model,
            ModelStyle.SUBCLASSING: self._subclassing_model,
        }

    def generate_imports(self) -> str:
        return "from tensorflow import keras\nfrom tensorflow.keras import layers"

    def generate_model(self, config: Any) -> str:
        """
        Emit the model block in the configuration's model style.

        Raises:
            UnsupportedModelStyleError: If the style has no Keras builder.
        """
        try:
            builder = self._builders[ModelStyle.parse(config.model_style)]
        except (UnsupportedModelStyleError, KeyError) as e:
            raise UnsupportedModelStyleError(
                f"Unsupported Keras model type: {config.model_style}"
            ) from e
        return builder(config.layers)

    def generate_training_code(self, config: Any) -> str:
        code = (
            "def train_model(model, x_train, y_train, epochs=10, batch_size=32):\n"
            "    model.compile(\n"
            "        optimizer='adam',\n"
            f"        loss='{self.loss}',\n"
            "        metrics=['accuracy']\n"
            "    )\n"
            "\n"
            "    history = model.fit(\n"
            "        x_train, y_train,\n"
            "        epochs=epochs,\n"
            "        batch_size=batch_size,\n"
            "        validation_split=0.2\n"
            "    )\n"
            "    return history\n"
        )
        if ModelStyle.parse(config.model_style) is ModelStyle.SUBCLASSING:
            code += f"\n# Subclassed models need an instance first: model = {self.class_name}()\n"
        return code

    # MODEL STYLES
    def _sequential_model(self, layers: Any) -> str:
        def step(acc: Emission, _: int, layer: Any) -> Emission:
            return acc.emit(f"model.add({layer_call(layer)})")

        emission = fold_layers(step, layers, Emission(("model = keras.Sequential()",)))
        return "\n".join(emission.lines) + "\n"

    def _functional_model(self, layers: Any) -> str:
        def step(acc: Emission, index: int, layer: Any) -> Emission:
            if layer.type == "Input":
                return acc.emit(f"inputs = {layer_call(layer)}", symbol="inputs")
            symbol = f"x{index}"
            return acc.emit(f"{symbol} = {layer_call(layer)}({acc.prev_symbol})", symbol=symbol)

        emission = fold_layers(step, layers, Emission())
        lines = list(emission.lines)
        lines += ["", f"model = keras.Model(inputs=inputs, outputs={emission.prev_symbol})"]
        return "\n".join(lines) + "\n"

    def _subclassing_model(self, layers: Any) -> str:
        attributes = [
            (f"{_ATTRIBUTE_PREFIXES[layer.type]}{index}", layer_call(layer))
            for index, layer in enumerate(layers)
            if layer.type != "Input"
        ]

        lines = [
            f"class {self.class_name}(keras.Model):",
            *indent(["def __init__(self):"]),
            *indent(["super().__init__()"], 2),
            *indent([f"self.{name} = {call}" for name, call in attributes], 2),
            "",
            *indent(["def call(self, inputs):"]),
            *indent(["x = inputs"], 2),
            *indent([f"x = self.{name}(x)" for name, _ in attributes], 2),
            *indent(["return x"], 2),
        ]
        return "\n".join(lines) + "\n"
