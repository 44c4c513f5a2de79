"""Registration lookup using WHOIS."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

import whois

from ....application.exceptions import RegistrationLookupError
from ....domain.entities import DomainStatus

logger = logging.getLogger(__name__)

# Line prefixes carrying the expiry date in raw WHOIS output, per registry.
EXPIRY_PATTERNS = (
    "paid-till:",
    "registry expiry date:",
    "expiry date:",
    "registrar registration expiration date:",
    "expiration date:",
    "expires:",
    "expire:",
    "expiration time:",
)

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%Y.%m.%d",
    "%d-%b-%Y",
    "%d.%m.%Y",
    "%d/%m/%Y",
)


def _parse_date(value: str) -> datetime | None:
    """Parse a WHOIS date in any of the known formats."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    else:
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)  # noqa: DTZ007
        except ValueError:
            continue
        if "%H" not in fmt:
            # Date-only values expire at the end of that day.
            parsed = parsed.replace(hour=23, minute=59, second=59)
        return parsed.replace(tzinfo=UTC)

    return None


def parse_expiry_from_text(text: str) -> datetime | None:
    """Find the expiry date in raw WHOIS output."""
    for line in text.splitlines():
        stripped = line.strip()
        lowered = stripped.lower()
        if not any(pattern in lowered for pattern in EXPIRY_PATTERNS):
            continue

        _, _, value = stripped.partition(":")
        parsed = _parse_date(value.strip())
        if parsed:
            return parsed

    return None


def _first(value: Any) -> Any:
    """WHOIS fields may hold a single value or a list of them."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


class WhoisRegistrationLookup:
    """Registration lookup querying WHOIS servers via python-whois."""

    async def lookup(self, domain: str) -> DomainStatus:
        """
        Look up when ``domain`` expires.

        Raises:
            RegistrationLookupError: If the lookup fails or has no expiry date.
        """
        try:
            record = await asyncio.to_thread(whois.whois, domain)
        except Exception as e:
            msg = f"WHOIS lookup for {domain} failed: {e}"
            raise RegistrationLookupError(msg) from e

        expiry_date = _first(record.get("expiration_date"))
        if not isinstance(expiry_date, datetime):
            expiry_date = parse_expiry_from_text(getattr(record, "text", "") or "")
        if expiry_date is None:
            msg = f"No expiry date found in WHOIS data for {domain}"
            raise RegistrationLookupError(msg)

        registrar = _first(record.get("registrar")) or "Unknown"
        logger.debug("Domain %s expires %s", domain, expiry_date.isoformat())
        return DomainStatus.from_expiry(domain, expiry_date, registrar=str(registrar))
