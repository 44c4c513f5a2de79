"""Helpers shared by the expiry statuses."""

from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """Return an aware datetime, assuming UTC for naive values."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def days_between(expiry_date: datetime, now: datetime | None = None) -> int:
    """
    Whole days from ``now`` until ``expiry_date``.

    Partial days are floored, so anything expiring later today is 0 and
    anything that expired an hour ago is -1.
    """
    now = as_utc(now) if now else datetime.now(UTC)
    return (as_utc(expiry_date) - now).days
