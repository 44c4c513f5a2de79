"""Domain source listing DNS records of a Selectel cloud project."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from ....application.exceptions import ConfigurationError, SourceUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SelectelConfig:
    """Selectel account credentials."""

    account_id: str
    user: str
    password: str
    project_name: str
    timeout: float = 30.0

    def validate(self) -> None:
        """Validate that every credential field is present."""
        missing = [
            name
            for name in ("account_id", "user", "password", "project_name")
            if not getattr(self, name)
        ]
        if missing:
            msg = f"Missing required Selectel settings: {', '.join(missing)}"
            raise ConfigurationError(msg)


def _results(response: httpx.Response) -> list[dict[str, Any]]:
    """Return the object items of a paginated ``result`` list."""
    body = response.json()
    if not isinstance(body, dict):
        msg = f"unexpected response body of type {type(body).__name__}"
        raise ValueError(msg)

    result = body.get("result") or []
    if not isinstance(result, list):
        msg = f"unexpected result of type {type(result).__name__}"
        raise ValueError(msg)
    return [item for item in result if isinstance(item, dict)]


class SelectelDomainSource:
    """
    Domain source using the Selectel DNS API.

    Authenticates with Keystone password credentials scoped to the
    project, then lists every enabled A and CNAME record of every enabled
    zone.
    """

    AUTH_URL: ClassVar[str] = "https://cloud.api.selcloud.ru/identity/v3/auth/tokens"
    DNS_BASE_URL: ClassVar[str] = "https://api.selectel.ru/domains/v2"
    ALLOWED_TYPES: ClassVar[frozenset[str]] = frozenset({"A", "CNAME"})

    def __init__(
        self,
        config: SelectelConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the source.

        Args:
            config: Selectel account credentials.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ConfigurationError: If a credential field is missing.
        """
        config.validate()
        self._config = config
        self._transport = transport

    @property
    def name(self) -> str:
        """Short name of the source."""
        return f"selectel:{self._config.project_name}"

    async def list_hostnames(self) -> list[str]:
        """
        Retrieve hostnames from all enabled zones of the project.

        Raises:
            SourceUnavailableError: If authentication or zone listing fails.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as client:
                token = await self._authenticate(client)
                zones = await self._get_zones(client, token)
                hostnames = await self._get_hostnames(client, token, zones)
        except (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError) as e:
            msg = f"Selectel API request failed: {e}"
            raise SourceUnavailableError(msg) from e

        logger.info("Retrieved %d hostnames from %d Selectel zones", len(hostnames), len(zones))
        return hostnames

    def _auth_payload(self) -> dict[str, Any]:
        """Build the Keystone password authentication request body."""
        return {
            "auth": {
                "identity": {
                    "methods": ["password"],
                    "password": {
                        "user": {
                            "name": self._config.user,
                            "domain": {"name": self._config.account_id},
                            "password": self._config.password,
                        },
                    },
                },
                "scope": {
                    "project": {
                        "name": self._config.project_name,
                        "domain": {"name": self._config.account_id},
                    },
                },
            },
        }

    async def _authenticate(self, client: httpx.AsyncClient) -> str:
        """Acquire a project-scoped token."""
        response = await client.post(self.AUTH_URL, json=self._auth_payload())
        token = response.headers.get("X-Subject-Token")

        if not response.is_success or not token:
            logger.error(
                "Selectel authentication failed: status=%s body=%s",
                response.status_code,
                response.text,
            )
            msg = f"Selectel authentication failed with status {response.status_code}"
            raise SourceUnavailableError(msg)

        return token

    async def _get_zones(self, client: httpx.AsyncClient, token: str) -> list[str]:
        """List identifiers of enabled zones."""
        response = await client.get(
            f"{self.DNS_BASE_URL}/zones", headers={"X-Auth-Token": token}
        )
        if not response.is_success:
            msg = f"Failed to list Selectel zones: status {response.status_code}"
            raise SourceUnavailableError(msg)

        return [
            str(zone["id"])
            for zone in _results(response)
            if not zone.get("disabled", True) and zone.get("id")
        ]

    async def _get_hostnames(
        self, client: httpx.AsyncClient, token: str, zones: list[str]
    ) -> list[str]:
        """List enabled A/CNAME record names across the given zones."""
        hostnames: list[str] = []

        for zone_id in zones:
            response = await client.get(
                f"{self.DNS_BASE_URL}/zones/{zone_id}/rrset",
                headers={"X-Auth-Token": token},
            )
            if not response.is_success:
                logger.error(
                    "Failed to list records for zone %s: status %s",
                    zone_id,
                    response.status_code,
                )
                continue

            try:
                rrsets = _results(response)
            except ValueError as e:
                logger.error("Malformed records for zone %s: %s", zone_id, e)
                continue

            for record in rrsets:
                name = self._map_record(record)
                if name and name not in hostnames:
                    hostnames.append(name)

        return hostnames

    def _map_record(self, rrset: dict[str, Any]) -> str | None:
        """Return the hostname of an enabled A/CNAME rrset, else None."""
        name = rrset.get("name")
        if not isinstance(name, str) or not name:
            return None
        if rrset.get("type") not in self.ALLOWED_TYPES:
            return None

        records = rrset.get("records") or [{}]
        first = records[0] if isinstance(records, list) else None
        if not isinstance(first, dict) or first.get("disabled", True):
            return None

        return name.rstrip(".")
