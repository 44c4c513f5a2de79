"""Certificate status entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from ._time import as_utc, days_between


@dataclass(frozen=True, slots=True)
class CertificateStatus:
    """Expiry of the leaf certificate served by a host."""

    hostname: str
    expiry_date: datetime
    days_remaining: int
    serial: str = ""
    issuer: str = "Unknown"

    @property
    def is_expired(self) -> bool:
        """Check if the certificate has already expired."""
        return self.days_remaining < 0

    @classmethod
    def from_expiry(
        cls,
        hostname: str,
        expiry_date: datetime,
        *,
        serial: str = "",
        issuer: str = "Unknown",
        now: datetime | None = None,
    ) -> Self:
        """Factory method computing days remaining from the expiry date."""
        return cls(
            hostname=hostname,
            expiry_date=as_utc(expiry_date),
            days_remaining=days_between(expiry_date, now),
            serial=serial,
            issuer=issuer,
        )
