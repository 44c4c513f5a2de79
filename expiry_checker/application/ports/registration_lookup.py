"""Port for domain registration lookups - driven/secondary port."""

from typing import Protocol

from ...domain.entities import DomainStatus


class RegistrationLookup(Protocol):
    """Port for finding when a registrable domain expires."""

    async def lookup(self, domain: str) -> DomainStatus:
        """
        Look up the registration expiry of ``domain``.

        Raises:
            RegistrationLookupError: If no expiry date can be determined.
        """
        ...
