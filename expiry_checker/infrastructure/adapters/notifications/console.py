"""Console notification sender."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .base import BaseNotificationSender

if TYPE_CHECKING:
    from ....domain.entities import Alert


class ConsoleNotificationSender(BaseNotificationSender):
    """Print notifications to standard output."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the console sender."""
        super().__init__()
        self._stream = stream

    async def send(self, alert: Alert) -> None:
        """Print a single alert."""
        self._write(self.format_alert_line(alert))

    async def send_errors(self, messages: list[str]) -> None:
        """Print the cycle's error report."""
        if not messages:
            return
        self._write("Errors occurred:\n" + "\n".join(messages))

    def _write(self, text: str) -> None:
        """Write a line, logging instead of failing on output errors."""
        stream = self._stream or sys.stdout
        try:
            print(text, file=stream, flush=True)
        except (OSError, ValueError):
            self._logger.exception("Failed to write notification to console")
