"""Telegram bot notification sender."""

from __future__ import annotations

import asyncio
import html
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import httpx

from ....application.exceptions import DeliveryFailedError
from ....domain.value_objects import AlertKind
from .base import BaseNotificationSender

if TYPE_CHECKING:
    from ....domain.entities import Alert


@dataclass(frozen=True, slots=True)
class TelegramConfig:
    """Telegram notification configuration."""

    bot_token: str = ""
    chat_id: str = ""
    retries: int = 5
    retry_interval: float = 1.0
    timeout: float = 3.0

    def __post_init__(self) -> None:
        """Validate the retry bound."""
        if self.retries < 0:
            msg = f"Telegram retries must be non-negative, got {self.retries}"
            raise ValueError(msg)


def chunk_messages(header: str, messages: list[str], limit: int) -> list[list[str]]:
    """
    Split messages into groups that fit into one Telegram message each.

    Every group is sent as ``header`` followed by its messages, separated
    by blank lines.
    """
    separator = 2
    chunks: list[list[str]] = []
    current: list[str] = []
    length = len(header) + separator

    for message in messages:
        size = len(message) + separator
        if current and length + size > limit:
            chunks.append(current)
            current = []
            length = len(header) + separator
        current.append(message)
        length += size

    if current:
        chunks.append(current)
    return chunks


def retry_after_seconds(response: httpx.Response) -> float | None:
    """Return the back-off Telegram asks for in a 429 response, if any."""
    if response.status_code != httpx.codes.TOO_MANY_REQUESTS:
        return None
    try:
        retry_after = response.json()["parameters"]["retry_after"]
    except (ValueError, TypeError, KeyError):
        return None
    if isinstance(retry_after, bool) or not isinstance(retry_after, int | float):
        return None
    return float(retry_after)


class TelegramNotificationSender(BaseNotificationSender):
    """Send notifications to a Telegram chat via the Bot API."""

    API_BASE_URL: ClassVar[str] = "https://api.telegram.org"
    MAX_MESSAGE_LENGTH: ClassVar[int] = 4096
    # Room left for the "[i/n] " part counter.
    PART_PREFIX_RESERVE: ClassVar[int] = 16

    def __init__(
        self,
        config: TelegramConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Telegram sender."""
        super().__init__()
        self._config = config
        self._transport = transport

    @property
    def api_url(self) -> str:
        """URL of the sendMessage method for the configured bot."""
        return f"{self.API_BASE_URL}/bot{self._config.bot_token}/sendMessage"

    def is_configured(self) -> bool:
        """Check if Telegram is properly configured."""
        return bool(self._config.bot_token and self._config.chat_id)

    async def send(self, alert: Alert) -> None:
        """Send a single alert."""
        await self._send_message(self._build_alert_text(alert))

    async def send_errors(self, messages: list[str]) -> None:
        """Send the error report, split to fit Telegram's size limit."""
        if not messages:
            return

        header = "🔴 <b>Errors occurred:</b>"
        entries = [f"<code>{html.escape(m)}</code>" for m in messages]
        chunks = chunk_messages(
            header, entries, self.MAX_MESSAGE_LENGTH - self.PART_PREFIX_RESERVE
        )

        for index, chunk in enumerate(chunks, start=1):
            prefix = f"[{index}/{len(chunks)}] " if len(chunks) > 1 else ""
            await self._send_message(f"{prefix}{header}\n\n" + "\n\n".join(chunk))

    def _build_alert_text(self, alert: Alert) -> str:
        """Build the HTML message for an alert."""
        host = html.escape(alert.hostname)
        link = f'<a href="https://{host}">{host}</a>'
        expiry = f"<b>{html.escape(alert.expiry_phrase.capitalize())}</b>"

        if alert.kind is AlertKind.DOMAIN_EXPIRING:
            return f"{alert.severity.emoji} <b>Domain</b>: {link}\n└ {expiry}"

        serial = f" {html.escape(alert.serial)}" if alert.serial else ""
        return (
            f"{alert.severity.emoji} <b>Certificate{serial}</b>\n"
            f"├ Issuer: <code>{html.escape(alert.issuer)}</code>\n"
            f"├ Host: {link}\n"
            f"└ {expiry}"
        )

    async def _send_message(self, text: str) -> None:
        """
        Send one message, retrying transient failures.

        Makes one attempt plus up to ``retries`` more, sleeping
        ``retry_interval`` seconds between attempts, or longer when a 429
        response carries ``retry_after``.

        Raises:
            DeliveryFailedError: If every attempt failed.
        """
        payload = {
            "chat_id": self._config.chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        attempts = self._config.retries + 1
        last_error: Exception | None = None

        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = await client.post(self.api_url, json=payload)
                    response.raise_for_status()
                except httpx.HTTPError as e:
                    last_error = e
                    delay = self._config.retry_interval
                    if isinstance(e, httpx.HTTPStatusError):
                        retry_after = retry_after_seconds(e.response)
                        if retry_after is not None:
                            delay = max(delay, retry_after)
                    self._logger.warning(
                        "Telegram delivery attempt %d/%d failed: %s",
                        attempt,
                        attempts,
                        e,
                    )
                else:
                    self._logger.debug("Telegram message sent on attempt %d", attempt)
                    return

                if attempt < attempts:
                    await asyncio.sleep(delay)

        msg = f"Telegram message not delivered after {attempts} attempts: {last_error}"
        raise DeliveryFailedError(msg)
