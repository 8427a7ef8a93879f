"""
Logging Management Module

Handles centralized logging configuration for the library and the CLI.
Console output is always enabled; a rotating log file is added when the
recipe's telemetry section names a log directory.

Every CLI invocation reconfigures the same named logger, so handlers are
replaced rather than stacked and each run gets its own timestamped file.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ..paths import LOGGER_NAME
from .styles import LogStyle

if TYPE_CHECKING:  # pragma: no cover
    from ..config import TelemetryConfig

# Separator characters used to detect decorative lines
_SEPARATOR_CHARS = {"━", "─"}


class ColorFormatter(logging.Formatter):
    """Formatter that applies ANSI colors to console output.

    Colors are applied based on log level and message content:
        - WARNING/ERROR/CRITICAL: yellow/red level prefix
        - Lines with ✓: green
        - Lines with ✗: red
        - Separator lines (━, ─): dim
        - Centered UPPER CASE headers: bold magenta
    """

    _LEVEL_COLORS = {
        logging.WARNING: LogStyle.YELLOW,
        logging.ERROR: LogStyle.RED,
        logging.CRITICAL: LogStyle.RED + LogStyle.BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record, coloring the level name and the message text only."""
        formatted = super().format(record)
        msg = record.getMessage()

        level_color = self._LEVEL_COLORS.get(record.levelno)
        if level_color:
            formatted = formatted.replace(
                record.levelname,
                f"{level_color}{record.levelname}{LogStyle.RESET}",
                1,
            )

        stripped = msg.strip()
        if stripped and all(c in _SEPARATOR_CHARS for c in stripped):
            return self._color_message_only(formatted, msg, LogStyle.DIM)
        # Centered phase headers ("LAYER SHAPES", "GENERATION SUMMARY")
        if (
            record.levelno == logging.INFO
            and stripped == stripped.upper()
            and len(stripped) > 5
            and any(c.isalpha() for c in stripped)
        ):
            return self._color_message_only(formatted, msg, LogStyle.BOLD + LogStyle.MAGENTA)
        if LogStyle.FAILURE in msg:
            return self._color_message_only(formatted, msg, LogStyle.RED)
        if LogStyle.SUCCESS in msg:
            return self._color_message_only(formatted, msg, LogStyle.GREEN)
        if record.levelno == logging.WARNING:
            return self._color_message_only(formatted, msg, LogStyle.YELLOW)

        return formatted

    def _color_message_only(self, formatted: str, msg: str, color: str) -> str:
        """Apply *color* only to the message portion of *formatted*, leaving the prefix plain."""
        idx = formatted.find(msg)
        if idx == -1:
            return formatted
        prefix = formatted[:idx]
        return f"{prefix}{color}{formatted[idx:]}{LogStyle.RESET}"


# LOGGER CLASS
class Logger:
    """
    Owner of the handlers attached to the ``NetSketch`` logger.

    Library modules only call ``logging.getLogger(LOGGER_NAME)`` and never
    touch handlers. A console-only bootstrap configuration is installed at
    import time; the CLI replaces it once a recipe's telemetry section is
    known (see :meth:`from_telemetry`).

    A name is configured once. Constructing another ``Logger`` with the same
    name is a no-op unless a ``log_dir`` is passed, and :meth:`setup` always
    reconfigures.

    Attributes:
        name (str): Logger identifier (typically LOGGER_NAME constant)
        log_dir (Path | None): Directory receiving rotating log files
        log_to_file (bool): True when a file handler is attached
        level (int): Numeric logging level
        max_bytes (int): Size at which the log file rotates
        backup_count (int): Number of rotated files kept

    Example:
        >>> log = Logger.setup(log_dir=Path("./logs"), level="DEBUG")
        >>> log.debug("Folding 9 layers")
    """

    FORMAT: Final[str] = "%(asctime)s - %(levelname)s - %(message)s"
    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

    _configured_names: Final[dict[str, bool]] = {}
    _active_log_file: Path | None = None

    def __init__(
        self,
        name: str = LOGGER_NAME,
        log_dir: Path | None = None,
        log_to_file: bool = True,
        level: int = logging.INFO,
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.name = name
        self.log_dir = log_dir
        self.log_to_file = log_to_file and log_dir is not None
        self.level = level
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._log = logging.getLogger(name)

        if log_dir is not None or name not in Logger._configured_names:
            self._install_handlers()
            Logger._configured_names[name] = True

    def _install_handlers(self) -> None:
        """Replace every handler on the logger: console always, file when requested."""
        self._log.setLevel(self.level)
        self._log.propagate = False

        for handler in list(self._log.handlers):
            handler.close()
            self._log.removeHandler(handler)

        self._log.addHandler(self._console_handler())
        Logger._active_log_file = None

        if self.log_to_file and self.log_dir is not None:
            file_handler, path = self._file_handler(self.log_dir)
            self._log.addHandler(file_handler)
            Logger._active_log_file = path

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        formatter_cls = ColorFormatter if sys.stdout.isatty() else logging.Formatter
        handler.setFormatter(formatter_cls(self.FORMAT, self.DATE_FORMAT))
        return handler

    def _file_handler(self, log_dir: Path) -> tuple[logging.Handler, Path]:
        """Rotating UTF-8 handler writing ``<name>_<utc timestamp>.log`` under log_dir."""
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        path = log_dir / f"{self.name.lower()}_{stamp}.log"

        handler = RotatingFileHandler(
            path, maxBytes=self.max_bytes, backupCount=self.backup_count, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(self.FORMAT, self.DATE_FORMAT))
        return handler, path

    def get_logger(self) -> logging.Logger:
        """Returns the configured logging.Logger instance."""
        return self._log

    @classmethod
    def get_log_file(cls) -> Path | None:
        """Path of the file currently receiving log records, or None."""
        return cls._active_log_file

    @staticmethod
    def resolve_level(level: str) -> int:
        """
        Map a level name to its numeric value.

        ``DEBUG=1`` in the environment forces DEBUG; unknown names fall back
        to INFO.
        """
        if os.getenv("DEBUG") == "1":
            return logging.DEBUG
        return getattr(logging, level.upper(), logging.INFO)

    @classmethod
    def setup(
        cls, name: str = LOGGER_NAME, log_dir: Path | None = None, level: str = "INFO", **kwargs
    ) -> logging.Logger:
        """
        Reconfigure ``name`` from scratch.

        Args:
            name: Logger identifier (typically LOGGER_NAME constant)
            log_dir: Directory for rotating log files (None = console only)
            level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            **kwargs (Any): Forwarded to the Logger constructor

        Returns:
            Configured logging.Logger instance
        """
        cls._configured_names.pop(name, None)
        numeric_level = cls.resolve_level(level)
        return cls(name=name, log_dir=log_dir, level=numeric_level, **kwargs).get_logger()

    @classmethod
    def from_telemetry(cls, telemetry: TelemetryConfig, quiet: bool = False) -> logging.Logger:
        """
        Configure the project logger from a recipe's telemetry section.

        Args:
            telemetry: Validated telemetry section of a Recipe.
            quiet: Cap console output at WARNING so stdout stays free for
                generated code.

        Returns:
            Configured logging.Logger instance
        """
        return cls.setup(
            log_dir=telemetry.log_dir,
            level="WARNING" if quiet else telemetry.log_level,
        )


# GLOBAL INSTANCE
# Bootstrap instance (console-only), reconfigured from the CLI.
logger: Final[logging.Logger] = Logger().get_logger()
