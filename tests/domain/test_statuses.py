"""Tests for CertificateStatus and DomainStatus entities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from expiry_checker.domain.entities import CertificateStatus, DomainStatus

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


class TestDaysRemaining:
    """Days remaining are floored toward the past."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(days=3), 3),
            (timedelta(days=3, hours=23), 3),
            (timedelta(hours=23), 0),
            (timedelta(hours=-1), -1),
            (timedelta(days=-1), -1),
            (timedelta(days=-1, hours=-1), -2),
        ],
    )
    def test_partial_days_round_down(self, delta: timedelta, expected: int) -> None:
        """Partial days never count as a full day."""
        status = CertificateStatus.from_expiry("a.example", NOW + delta, now=NOW)
        assert status.days_remaining == expected

    def test_naive_datetime_assumed_utc(self) -> None:
        """Naive expiry dates are treated as UTC."""
        naive = (NOW + timedelta(days=10)).replace(tzinfo=None)
        status = DomainStatus.from_expiry("example.com", naive, now=NOW)
        assert status.days_remaining == 10
        assert status.expiry_date.tzinfo is UTC


class TestCertificateStatus:
    """Tests for CertificateStatus entity."""

    def test_expired_certificate(self, expired_certificate: CertificateStatus) -> None:
        """Expired certificates have negative days remaining."""
        assert expired_certificate.is_expired is True
        assert expired_certificate.days_remaining == -5

    def test_valid_certificate(self, healthy_certificate: CertificateStatus) -> None:
        """Valid certificates are not expired."""
        assert healthy_certificate.is_expired is False
        assert healthy_certificate.days_remaining == 30

    def test_status_is_frozen(self, healthy_certificate: CertificateStatus) -> None:
        """Statuses should be immutable."""
        with pytest.raises(AttributeError):
            healthy_certificate.days_remaining = 1  # type: ignore[misc]
