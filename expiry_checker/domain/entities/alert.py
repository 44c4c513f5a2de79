"""Alert entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from ..value_objects import AlertKind, AlertSeverity
from .certificate_status import CertificateStatus
from .domain_status import DomainStatus


def plural_days(days: int) -> str:
    """Return 'day' or 'days' for the given count."""
    return "day" if abs(days) == 1 else "days"


def describe_expiry(days_remaining: int) -> str:
    """'expires in N days' or 'expired N days ago'."""
    if days_remaining >= 0:
        return f"expires in {days_remaining} {plural_days(days_remaining)}"
    return f"expired {abs(days_remaining)} {plural_days(days_remaining)} ago"


@dataclass(frozen=True, slots=True)
class Alert:
    """A single expiry alert to be delivered to every notifier."""

    hostname: str
    kind: AlertKind
    days_remaining: int
    expiry_date: datetime
    message: str
    serial: str = ""
    issuer: str = ""

    @property
    def is_expired(self) -> bool:
        """Check if the subject has already expired."""
        return self.days_remaining < 0

    @property
    def severity(self) -> AlertSeverity:
        """Severity derived from the days remaining."""
        return AlertSeverity.for_days(self.days_remaining)

    @property
    def expiry_phrase(self) -> str:
        """Human-readable time until (or since) expiry."""
        return describe_expiry(self.days_remaining)

    @classmethod
    def for_certificate(cls, status: CertificateStatus) -> Self:
        """Build a certificate alert from a certificate status."""
        serial = f" {status.serial}" if status.serial else ""
        message = (
            f"Certificate{serial} ({status.issuer}) for {status.hostname} "
            f"{describe_expiry(status.days_remaining)}"
        )
        return cls(
            hostname=status.hostname,
            kind=AlertKind.CERTIFICATE_EXPIRING,
            days_remaining=status.days_remaining,
            expiry_date=status.expiry_date,
            message=message,
            serial=status.serial,
            issuer=status.issuer,
        )

    @classmethod
    def for_domain(cls, status: DomainStatus) -> Self:
        """Build a domain registration alert from a domain status."""
        return cls(
            hostname=status.hostname,
            kind=AlertKind.DOMAIN_EXPIRING,
            days_remaining=status.days_remaining,
            expiry_date=status.expiry_date,
            message=f"Domain {status.hostname} {describe_expiry(status.days_remaining)}",
        )
