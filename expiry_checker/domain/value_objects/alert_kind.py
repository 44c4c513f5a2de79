"""Alert kind value object."""

from enum import StrEnum, auto


class AlertKind(StrEnum):
    """What an alert is about."""

    CERTIFICATE_EXPIRING = auto()
    DOMAIN_EXPIRING = auto()

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        match self:
            case AlertKind.CERTIFICATE_EXPIRING:
                return "SSL certificate"
            case AlertKind.DOMAIN_EXPIRING:
                return "Domain"
