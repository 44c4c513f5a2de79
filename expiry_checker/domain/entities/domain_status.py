"""Domain registration status entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from ._time import as_utc, days_between


@dataclass(frozen=True, slots=True)
class DomainStatus:
    """Registration expiry of a registrable domain."""

    hostname: str
    expiry_date: datetime
    days_remaining: int
    registrar: str = "Unknown"

    @property
    def is_expired(self) -> bool:
        """Check if the registration has already expired."""
        return self.days_remaining < 0

    @classmethod
    def from_expiry(
        cls,
        hostname: str,
        expiry_date: datetime,
        *,
        registrar: str = "Unknown",
        now: datetime | None = None,
    ) -> Self:
        """Factory method computing days remaining from the expiry date."""
        return cls(
            hostname=hostname,
            expiry_date=as_utc(expiry_date),
            days_remaining=days_between(expiry_date, now),
            registrar=registrar,
        )
