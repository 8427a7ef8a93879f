"""
Design Session.

Stateful holder for one network being edited. The session keeps a mutable
``draft`` layer list that an editor (form UI, CLI, notebook) manipulates
freely, and a separate committed snapshot that only changes when a
generation request succeeds:

- ``generate`` validates the draft first; on failure the previously
  committed configuration and code stay in place and the result carries the
  rule that was violated.
- On success the draft is copied into a frozen ``FCNConfig`` / ``CNNConfig``,
  code is generated from that copy, and ``committed`` and ``code`` are
  replaced together.
- Any edit after that point marks the session out of sync until the next
  successful ``generate``.

Example:
    >>> session = DesignSession("CNN")
    >>> session.add_layer("Flatten")
    >>> session.add_layer(cnn.OutputLayer(size=10))
    >>> session.generate("Keras").success
    True
    >>> session.export(Path("generated"))
    PosixPath('generated/cnn_model.py')
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from .core.config import CNNConfig, FCNConfig, build_config
from .core.io import write_generated_code
from .core.logger import LogStyle
from .core.paths import (
    DEFAULT_OUTPUT_DIR,
    GENERATED_CODE_MEDIA_TYPE,
    LOGGER_NAME,
    get_download_filename,
)
from .exceptions import LayerValidationError, NetSketchError
from .generators import generate_code
from .layers import CNN_EMPTY_LAYERS, FCN_EMPTY_LAYERS, Framework, ModelStyle, NetworkKind
from .shapes import LayerSummary, summarize
from .validation import ValidationResult, validate_layers

logger = logging.getLogger(LOGGER_NAME)

_EMPTY_LAYERS: Final[dict[NetworkKind, dict[str, Any]]] = {
    NetworkKind.FCN: FCN_EMPTY_LAYERS,
    NetworkKind.CNN: CNN_EMPTY_LAYERS,
}


class DesignSession:
    """
    Draft / committed state of one FCN or CNN design.

    Attributes:
        kind: Network family; every draft layer must belong to it.
        draft: Editable layer list, initialized with one default Input layer.
        model_style: Style used by the next generation.
        committed: Snapshot of the last successful generation, or None.
        code: Source generated from ``committed``, or None.
        framework: Framework of the last successful generation, or None.
        in_sync: True while the draft is unchanged since the last success.
    """

    MEDIA_TYPE: Final[str] = GENERATED_CODE_MEDIA_TYPE

    def __init__(
        self,
        kind: NetworkKind | str,
        layers: list[Any] | None = None,
        model_style: ModelStyle | str = ModelStyle.SEQUENTIAL,
    ) -> None:
        self.kind = NetworkKind.parse(kind)
        self.draft: list[Any] = []
        self.model_style = ModelStyle.parse(model_style)
        self.committed: FCNConfig | CNNConfig | None = None
        self.code: str | None = None
        self.framework: Framework | None = None
        self.in_sync = False

        initial = layers if layers is not None else ["Input"]
        for layer in initial:
            self.add_layer(layer)
        self.in_sync = False

    @classmethod
    def from_config(cls, config: FCNConfig | CNNConfig) -> DesignSession:
        """Open a session whose draft starts as a copy of a committed configuration."""
        return cls(config.kind, list(config.layers), config.model_style)

    # DRAFT EDITING
    def _coerce(self, layer: Any) -> Any:
        """Accept a layer model of this family, or a tag naming a default layer."""
        if isinstance(layer, str):
            factory = _EMPTY_LAYERS[self.kind].get(layer)
            if factory is None:
                raise LayerValidationError(f"Unknown {self.kind.value} layer type: {layer}")
            return factory()
        family = getattr(layer, "family", None)
        if family is not self.kind:
            raise LayerValidationError(
                f"{getattr(layer, 'type', type(layer).__name__)} layer does not belong "
                f"to a {self.kind.value} network"
            )
        return layer

    def _touch(self) -> None:
        self.in_sync = False

    def add_layer(self, layer: Any) -> None:
        """Append a layer (model or tag) to the end of the draft."""
        self.draft.append(self._coerce(layer))
        self._touch()

    def insert_layer(self, index: int, layer: Any) -> None:
        """Insert a layer before ``index`` (list semantics)."""
        self.draft.insert(index, self._coerce(layer))
        self._touch()

    def remove_layer(self, index: int) -> Any:
        """
        Remove and return the layer at ``index``.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        removed = self.draft.pop(index)
        self._touch()
        return removed

    def replace_layer(self, index: int, layer: Any) -> None:
        """
        Swap the layer at ``index`` for another one of the same family.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        self.draft[index] = self._coerce(layer)
        self._touch()

    def set_model_style(self, style: ModelStyle | str) -> None:
        """
        Change the style used by the next generation.

        Raises:
            UnsupportedModelStyleError: If ``style`` is not a known style name.
        """
        self.model_style = ModelStyle.parse(style)
        self._touch()

    # GENERATION
    def validate(self) -> ValidationResult:
        """Run the placement rules against the current draft."""
        return validate_layers(self.draft, self.kind)

    def generate(self, framework: Framework | str) -> ValidationResult:
        """
        Validate the draft and, when valid, commit it and regenerate code.

        Args:
            framework: Target framework name, matched case-insensitively.

        Returns:
            The validation result. On failure ``committed`` and ``code`` are untouched.

        Raises:
            UnsupportedFrameworkError: Unknown framework name (nothing is committed).
        """
        result = self.validate()
        if not result.success:
            logger.warning(
                f"{LogStyle.WARNING} {self.kind.value} generation skipped: {result.message}"
            )
            return result

        config = build_config(self.kind, self.draft, self.model_style)
        code = generate_code(framework, config)

        self.committed, self.code = config, code
        self.framework = Framework.parse(framework)
        self.in_sync = True
        return result

    # OUTPUT
    @property
    def download_filename(self) -> str:
        """File name offered for the generated code, e.g. ``cnn_model.py``."""
        return get_download_filename(self.kind.value)

    def shapes(self) -> list[LayerSummary]:
        """Per-layer diagram captions of the committed configuration (empty before any commit)."""
        if self.committed is None:
            return []
        return summarize(self.committed.layers)

    def export(self, directory: Path = DEFAULT_OUTPUT_DIR) -> Path:
        """
        Write the committed code to ``directory / download_filename``.

        Returns:
            Path of the written file.

        Raises:
            NetSketchError: If nothing has been generated yet.
            OSError: If the file cannot be written.
        """
        if self.code is None:
            raise NetSketchError("Nothing to export: generate code first")
        return write_generated_code(self.code, Path(directory) / self.download_filename)
