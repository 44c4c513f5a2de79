"""Base notification sender with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ....domain.entities import Alert


class BaseNotificationSender(ABC):
    """Abstract base class for notification senders."""

    def __init__(self) -> None:
        """Initialize the notification sender."""
        self._logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def send(self, alert: Alert) -> None:
        """Send notification for the given alert."""
        ...

    @abstractmethod
    async def send_errors(self, messages: list[str]) -> None:
        """Send a report of errors encountered during a check cycle."""
        ...

    def is_configured(self) -> bool:
        """Check if the sender is properly configured."""
        return True

    def format_alert_line(self, alert: Alert) -> str:
        """Format an alert as a single plain-text line."""
        return f"{alert.severity.emoji} {alert.message}"
