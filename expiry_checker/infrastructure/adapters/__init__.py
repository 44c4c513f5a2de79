"""Infrastructure adapters - Implementations of application ports."""

from .notifications import (
    ConsoleNotificationSender,
    TelegramConfig,
    TelegramNotificationSender,
)
from .registration import WhoisRegistrationLookup
from .sources import FileDomainSource, SelectelConfig, SelectelDomainSource
from .tls import TlsCertificateInspector

__all__ = [
    "ConsoleNotificationSender",
    "FileDomainSource",
    "SelectelConfig",
    "SelectelDomainSource",
    "TelegramConfig",
    "TelegramNotificationSender",
    "TlsCertificateInspector",
    "WhoisRegistrationLookup",
]
