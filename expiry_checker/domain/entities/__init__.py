"""Domain entities - Immutable results produced during a check cycle."""

from .alert import Alert
from .certificate_status import CertificateStatus
from .domain_status import DomainStatus
from .host_evaluation import HostEvaluation

__all__ = [
    "Alert",
    "CertificateStatus",
    "DomainStatus",
    "HostEvaluation",
]
