"""Port for domain sources - driven/secondary port."""

from typing import Protocol


class DomainSource(Protocol):
    """
    Port for retrieving the hostnames to check.

    This is a driven (secondary) port that defines how the application
    learns which hosts exist, whether from a file or a cloud provider.
    """

    @property
    def name(self) -> str:
        """Short name of the source, used in logs and error reports."""
        ...

    async def list_hostnames(self) -> list[str]:
        """
        Retrieve the current set of hostnames.

        Returns:
            Hostnames in source order, without duplicates.

        Raises:
            SourceUnavailableError: If the source cannot be read.
        """
        ...
