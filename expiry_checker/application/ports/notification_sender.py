"""Port for notification sending - driven/secondary port."""

from typing import Protocol

from ...domain.entities import Alert


class NotificationSender(Protocol):
    """
    Port for sending notifications.

    This is a driven (secondary) port that defines how the application
    sends notifications to external systems.
    """

    async def send(self, alert: Alert) -> None:
        """
        Deliver a single alert.

        Args:
            alert: The alert to deliver.

        Raises:
            DeliveryFailedError: If delivery failed after all retries.
        """
        ...

    async def send_errors(self, messages: list[str]) -> None:
        """
        Deliver a report of problems encountered during a check cycle.

        Raises:
            DeliveryFailedError: If delivery failed after all retries.
        """
        ...

    def is_configured(self) -> bool:
        """
        Check if this notification sender is properly configured.

        Returns:
            True if the sender is ready to send notifications.
        """
        ...
