"""Logging setup."""

from __future__ import annotations

import logging
import sys
from typing import ClassVar

from .settings import LogSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColorFormatter(logging.Formatter):
    """Formatter colouring the level name with ANSI escapes."""

    COLORS: ClassVar[dict[int, str]] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def configure_logging(config: LogSettings | None = None) -> None:
    """Configure the root logger from the ``log_config`` section."""
    config = config or LogSettings()

    handler = logging.StreamHandler(sys.stdout)
    formatter_cls = ColorFormatter if config.use_color else logging.Formatter
    handler.setFormatter(formatter_cls(LOG_FORMAT))

    logging.basicConfig(
        level=config.log_level.upper(),
        handlers=[handler],
        force=True,
    )
