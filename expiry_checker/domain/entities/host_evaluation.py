"""Per-host evaluation result."""

from dataclasses import dataclass

from .certificate_status import CertificateStatus
from .domain_status import DomainStatus


@dataclass(frozen=True, slots=True)
class HostEvaluation:
    """
    Outcome of evaluating a single hostname.

    Either side may be missing: ``certificate`` is None when the TLS check
    failed (see ``certificate_error``), ``domain`` is None when registration
    checks are disabled or the lookup failed (see ``domain_error``).
    """

    hostname: str
    certificate: CertificateStatus | None = None
    certificate_error: str | None = None
    certificate_error_expected: bool = False
    domain: DomainStatus | None = None
    domain_error: str | None = None

    @property
    def certificate_failed(self) -> bool:
        """Check if the certificate could not be evaluated."""
        return self.certificate_error is not None

    @property
    def domain_failed(self) -> bool:
        """Check if the registration lookup failed."""
        return self.domain_error is not None
