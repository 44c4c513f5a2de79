"""Alert severity value object."""

from enum import StrEnum, auto
from typing import Self

# At or below this many days an alert is shown as critical.
CRITICAL_DAYS = 2


class AlertSeverity(StrEnum):
    """Severity of an alert, derived from the days remaining."""

    CRITICAL = auto()
    WARNING = auto()

    @classmethod
    def for_days(cls, days_remaining: int) -> Self:
        """Pick the severity for the given number of days remaining."""
        if days_remaining <= CRITICAL_DAYS:
            return cls.CRITICAL
        return cls.WARNING

    @property
    def emoji(self) -> str:
        """Get emoji representation for this severity."""
        match self:
            case AlertSeverity.CRITICAL:
                return "🔴"
            case AlertSeverity.WARNING:
                return "🟡"
