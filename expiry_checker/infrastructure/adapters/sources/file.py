"""Domain source reading hostnames from a local file."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ....application.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


def parse_hostnames(content: str) -> list[str]:
    """Parse a newline-delimited host list, ignoring blanks and comments."""
    hostnames: list[str] = []
    for line in content.splitlines():
        name = line.strip()
        if not name or name.startswith("#"):
            continue
        if name not in hostnames:
            hostnames.append(name)
    return hostnames


class FileDomainSource:
    """Domain source backed by a newline-delimited hostname file."""

    def __init__(self, filename: str | Path) -> None:
        """Initialize the source with the path of the hostname file."""
        self._path = Path(filename)

    @property
    def name(self) -> str:
        """Short name of the source."""
        return f"file:{self._path}"

    async def list_hostnames(self) -> list[str]:
        """
        Read hostnames from the file.

        Raises:
            SourceUnavailableError: If the file cannot be read.
        """
        try:
            content = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read hostname file {self._path}: {e}"
            raise SourceUnavailableError(msg) from e

        hostnames = parse_hostnames(content)
        logger.info("Read %d hostnames from %s", len(hostnames), self._path)
        return hostnames
