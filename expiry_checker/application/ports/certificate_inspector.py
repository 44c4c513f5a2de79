"""Port for certificate retrieval - driven/secondary port."""

from typing import Protocol

from ...domain.entities import CertificateStatus


class CertificateInspector(Protocol):
    """Port for reading the certificate a host presents over TLS."""

    async def inspect(self, hostname: str) -> CertificateStatus:
        """
        Fetch the leaf certificate of ``hostname``.

        Raises:
            CertificateUnreachableError: If the handshake cannot complete.
        """
        ...
