"""TLS certificate inspection adapter."""

from .certificate_inspector import TlsCertificateInspector, parse_certificate

__all__ = ["TlsCertificateInspector", "parse_certificate"]
