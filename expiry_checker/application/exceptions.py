"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class ConfigurationError(ApplicationError):
    """Raised when configuration is missing or invalid."""


class SourceUnavailableError(ApplicationError):
    """Raised when a domain source cannot produce its host list."""


class CertificateUnreachableError(ApplicationError):
    """Raised when a host's certificate cannot be retrieved."""

    def __init__(self, hostname: str, reason: str) -> None:
        super().__init__(f"{hostname}: {reason}")
        self.hostname = hostname
        self.reason = reason


class RegistrationLookupError(ApplicationError):
    """Raised when a domain's registration expiry cannot be determined."""


class DeliveryFailedError(ApplicationError):
    """Raised when a notification could not be delivered."""
