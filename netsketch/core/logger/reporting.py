"""
Design Reporting Utilities.

Formatted log output for the command-line workflow: per-layer shape tables,
validation failures and the closing generation summary.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from ..paths import LOGGER_NAME
from .styles import LogStyle

if TYPE_CHECKING:  # pragma: no cover
    from ...shapes import LayerSummary

logger = logging.getLogger(LOGGER_NAME)


def log_layer_table(
    summaries: Sequence["LayerSummary"],
    title: str = "LAYER SHAPES",
    logger_instance: logging.Logger | None = None,
) -> None:
    """
    Log one row per layer: position, tag, parameters and resulting shape.

    Args:
        summaries: Per-layer summaries in sequence order.
        title: Phase header text.
        logger_instance: Logger instance to use (defaults to module logger)
    """
    log = logger_instance or logger

    LogStyle.log_phase_header(log, title)
    for row in summaries:
        params = " ".join(row.info_text.split("\n")[1:]) or "-"
        log.info(
            f"{LogStyle.INDENT}{LogStyle.BULLET} "
            f"{row.position:>3}  {row.type:<8} {params:<18} {LogStyle.ARROW} {row.size_text}"
        )
    log.info("")


def log_validation_failure(
    message: str,
    logger_instance: logging.Logger | None = None,
) -> None:
    """Log a rejected layer sequence with the first violated rule."""
    log = logger_instance or logger
    log.error(f"{LogStyle.INDENT}{LogStyle.FAILURE} Invalid layer sequence: {message}")


def log_generation_summary(
    kind: str,
    framework: str,
    model_style: str,
    layer_count: int,
    output_path: Path | None = None,
    logger_instance: logging.Logger | None = None,
) -> None:
    """
    Log the completion summary of a generation run.

    Args:
        kind: Network family ("FCN" / "CNN").
        framework: Target framework display name.
        model_style: Model style used for the model block.
        layer_count: Number of committed layers.
        output_path: Written file, or None when printed to stdout.
        logger_instance: Logger instance to use (defaults to module logger)
    """
    log = logger_instance or logger

    LogStyle.log_phase_header(log, "GENERATION SUMMARY", LogStyle.HEAVY)
    log.info(f"{LogStyle.INDENT}{LogStyle.ARROW} Network     : {kind} ({layer_count} layers)")
    log.info(f"{LogStyle.INDENT}{LogStyle.ARROW} Framework   : {framework}")
    log.info(f"{LogStyle.INDENT}{LogStyle.ARROW} Model Style : {model_style}")
    if output_path is not None:
        log.info(f"{LogStyle.INDENT}{LogStyle.SUCCESS} Written     : {output_path}")
    log.info(LogStyle.HEAVY)
