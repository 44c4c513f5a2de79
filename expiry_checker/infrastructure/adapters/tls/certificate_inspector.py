"""Certificate inspector reading leaf certificates over TLS."""

from __future__ import annotations

import asyncio
import logging
import socket
import ssl
from datetime import datetime

from cryptography import x509
from cryptography.x509.oid import NameOID

from ....application.exceptions import CertificateUnreachableError
from ....domain.entities import CertificateStatus

logger = logging.getLogger(__name__)

HTTPS_PORT = 443


def parse_certificate(
    hostname: str, der: bytes, *, now: datetime | None = None
) -> CertificateStatus:
    """
    Build a CertificateStatus from a DER encoded certificate.

    Raises:
        CertificateUnreachableError: If the certificate cannot be parsed.
    """
    try:
        certificate = x509.load_der_x509_certificate(der)
    except ValueError as e:
        raise CertificateUnreachableError(hostname, f"Certificate parse error: {e}") from e

    organizations = certificate.issuer.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)
    issuer = str(organizations[0].value) if organizations else "Unknown"

    return CertificateStatus.from_expiry(
        hostname,
        certificate.not_valid_after_utc,
        serial=format(certificate.serial_number, "X"),
        issuer=issuer,
        now=now,
    )


class TlsCertificateInspector:
    """
    Reads the certificate a host presents on its HTTPS port.

    Verification is disabled so that expired, self-signed and mismatched
    certificates can still be read.
    """

    def __init__(self, *, port: int = HTTPS_PORT, timeout: float = 5.0) -> None:
        """Initialize the inspector."""
        self._port = port
        self._timeout = timeout
        self._context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        self._context.check_hostname = False
        self._context.verify_mode = ssl.CERT_NONE

    async def inspect(self, hostname: str) -> CertificateStatus:
        """
        Fetch and parse the leaf certificate of ``hostname``.

        Raises:
            CertificateUnreachableError: If the handshake cannot complete.
        """
        try:
            der = await asyncio.to_thread(self._fetch_der, hostname)
        except (OSError, UnicodeError) as e:
            raise CertificateUnreachableError(hostname, str(e) or e.__class__.__name__) from e

        return parse_certificate(hostname, der)

    def _fetch_der(self, hostname: str) -> bytes:
        """Blocking handshake returning the peer certificate in DER form."""
        ascii_host = hostname.encode("idna").decode("ascii")

        with socket.create_connection((ascii_host, self._port), timeout=self._timeout) as sock:
            with self._context.wrap_socket(sock, server_hostname=ascii_host) as tls:
                der = tls.getpeercert(binary_form=True)

        if not der:
            raise CertificateUnreachableError(hostname, "No certificate found")
        return der
