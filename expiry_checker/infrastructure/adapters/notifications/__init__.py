"""Notification sender adapter implementations."""

from .base import BaseNotificationSender
from .console import ConsoleNotificationSender
from .telegram import TelegramConfig, TelegramNotificationSender

__all__ = [
    "BaseNotificationSender",
    "ConsoleNotificationSender",
    "TelegramConfig",
    "TelegramNotificationSender",
]
