"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from expiry_checker.application.exceptions import (
    CertificateUnreachableError,
    DeliveryFailedError,
    RegistrationLookupError,
    SourceUnavailableError,
)
from expiry_checker.domain.entities import Alert, CertificateStatus, DomainStatus
from expiry_checker.domain.value_objects import AlarmThresholds


def expiring_in(days: int) -> datetime:
    """An expiry date ``days`` whole days from now."""
    return datetime.now(UTC) + timedelta(days=days, hours=1)


class FakeSource:
    """Domain source returning a fixed host list or failing."""

    name = "fake"

    def __init__(self, hostnames: list[str] | None = None, error: str | None = None) -> None:
        self._hostnames = hostnames or []
        self._error = error
        self.calls = 0

    async def list_hostnames(self) -> list[str]:
        self.calls += 1
        if self._error:
            raise SourceUnavailableError(self._error)
        return list(self._hostnames)


class FakeInspector:
    """Certificate inspector answering from a table of days remaining."""

    def __init__(
        self,
        days: dict[str, int] | None = None,
        failures: dict[str, str] | None = None,
        hang: set[str] | None = None,
    ) -> None:
        self._days = days or {}
        self._failures = failures or {}
        self._hang = hang or set()
        self.inspected: list[str] = []
        self.active = 0
        self.max_active = 0

    async def inspect(self, hostname: str) -> CertificateStatus:
        self.inspected.append(hostname)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(0)
            if hostname in self._hang:
                await asyncio.sleep(3600)
            if hostname in self._failures:
                raise CertificateUnreachableError(hostname, self._failures[hostname])
            return CertificateStatus.from_expiry(
                hostname,
                expiring_in(self._days.get(hostname, 365)),
                serial="0A1B",
                issuer="Test CA",
            )
        finally:
            self.active -= 1


class FakeLookup:
    """Registration lookup answering from a table of days remaining."""

    def __init__(self, days: dict[str, int] | None = None, failures: set[str] | None = None) -> None:
        self._days = days or {}
        self._failures = failures or set()
        self.looked_up: list[str] = []

    async def lookup(self, domain: str) -> DomainStatus:
        self.looked_up.append(domain)
        if domain in self._failures:
            msg = f"No expiry date found in WHOIS data for {domain}"
            raise RegistrationLookupError(msg)
        return DomainStatus.from_expiry(domain, expiring_in(self._days.get(domain, 365)))


class RecordingSender:
    """Notification sender recording everything it is asked to deliver."""

    def __init__(self, *, fail: bool = False, configured: bool = True) -> None:
        self._fail = fail
        self._configured = configured
        self.alerts: list[Alert] = []
        self.error_reports: list[list[str]] = []

    async def send(self, alert: Alert) -> None:
        self.alerts.append(alert)
        if self._fail:
            msg = "delivery failed"
            raise DeliveryFailedError(msg)

    async def send_errors(self, messages: list[str]) -> None:
        self.error_reports.append(list(messages))
        if self._fail:
            msg = "delivery failed"
            raise DeliveryFailedError(msg)

    def is_configured(self) -> bool:
        return self._configured


@pytest.fixture
def default_thresholds() -> AlarmThresholds:
    """Default alarm thresholds."""
    return AlarmThresholds(alarm_days=7, ssl_alarm_days=7)


@pytest.fixture
def expiring_certificate() -> CertificateStatus:
    """A certificate expiring within the default threshold."""
    return CertificateStatus.from_expiry(
        "a.example", expiring_in(3), serial="0A1B", issuer="Test CA"
    )


@pytest.fixture
def healthy_certificate() -> CertificateStatus:
    """A certificate far from expiry."""
    return CertificateStatus.from_expiry(
        "b.example", expiring_in(30), serial="0C2D", issuer="Test CA"
    )


@pytest.fixture
def expired_certificate() -> CertificateStatus:
    """A certificate that has already expired."""
    return CertificateStatus.from_expiry(
        "old.example", datetime.now(UTC) - timedelta(days=4, hours=1), issuer="Test CA"
    )
