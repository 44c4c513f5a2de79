"""Tests for the TLS certificate inspector."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from expiry_checker.application.exceptions import CertificateUnreachableError
from expiry_checker.infrastructure.adapters.tls import TlsCertificateInspector
from expiry_checker.infrastructure.adapters.tls.certificate_inspector import parse_certificate

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def make_der(*, organization: str | None = "Test CA", days: int = 10, serial: int = 0xA1B2) -> bytes:
    key = ec.generate_private_key(ec.SECP256R1())
    attributes = [x509.NameAttribute(NameOID.COMMON_NAME, "a.example")]
    if organization:
        attributes.append(x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization))
    name = x509.Name(attributes)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(serial)
        .not_valid_before(NOW - timedelta(days=80))
        .not_valid_after(NOW + timedelta(days=days, hours=6))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.DER)


class TestParseCertificate:
    """Tests for parse_certificate."""

    def test_reads_expiry_serial_and_issuer(self) -> None:
        """Expiry, serial and issuer organization are extracted."""
        status = parse_certificate("a.example", make_der(), now=NOW)

        assert status.hostname == "a.example"
        assert status.days_remaining == 10
        assert status.expiry_date == NOW + timedelta(days=10, hours=6)
        assert status.serial == "A1B2"
        assert status.issuer == "Test CA"

    def test_issuer_without_organization(self) -> None:
        """A missing issuer organization is reported as Unknown."""
        status = parse_certificate("a.example", make_der(organization=None), now=NOW)
        assert status.issuer == "Unknown"

    def test_expired_certificate(self) -> None:
        """Expired certificates have negative days remaining."""
        status = parse_certificate("a.example", make_der(days=-3), now=NOW)
        assert status.days_remaining < 0
        assert status.is_expired is True

    def test_garbage_rejected(self) -> None:
        """Unparseable data is a certificate failure."""
        with pytest.raises(CertificateUnreachableError, match="parse error"):
            parse_certificate("a.example", b"not a certificate")


class TestTlsCertificateInspector:
    """Tests for TlsCertificateInspector."""

    def test_inspect_parses_fetched_certificate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The fetched certificate is parsed."""
        inspector = TlsCertificateInspector()
        der = make_der(days=400)
        monkeypatch.setattr(inspector, "_fetch_der", lambda hostname: der)

        status = asyncio.run(inspector.inspect("a.example"))

        assert status.hostname == "a.example"
        assert status.serial == "A1B2"

    def test_connection_errors_mapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Socket errors become certificate failures carrying the reason."""
        inspector = TlsCertificateInspector()

        def refuse(hostname: str) -> bytes:
            raise ConnectionRefusedError(111, "Connection refused")

        monkeypatch.setattr(inspector, "_fetch_der", refuse)

        with pytest.raises(CertificateUnreachableError) as excinfo:
            asyncio.run(inspector.inspect("a.example"))

        assert excinfo.value.hostname == "a.example"
        assert "Connection refused" in excinfo.value.reason
