"""Outbound mail clients.

Mail is handed to an HTTP relay that accepts one JSON message per request:

    POST {relay_url}
    {"from": ..., "to": ..., "subject": ..., "html": ...}
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx
import logfire

from scribe.adapter.error import MailDeliveryError


@dataclass(frozen=True)
class MailMessage:
    """A rendered message ready to send."""

    to: str
    subject: str
    html: str


class MailClient(ABC):
    """Interface for sending notification mail."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether messages can be delivered at all."""
        pass

    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        """Deliver one message.

        Raises:
            MailDeliveryError: If the message could not be delivered
        """
        pass


class HttpMailClient(MailClient):
    """Mail client that posts messages to an HTTP mail relay."""

    def __init__(
        self,
        relay_url: str | None,
        sender: str,
        api_key: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize relay client.

        Args:
            relay_url: Relay endpoint; None disables delivery
            sender: From address
            api_key: Bearer token for the relay, if it requires one
            timeout: Request timeout in seconds
        """
        self.relay_url = relay_url
        self.sender = sender
        self.api_key = api_key
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.relay_url)

    async def send(self, message: MailMessage) -> None:
        if not self.relay_url:
            logfire.info("Mail relay not configured, message dropped", to=message.to)
            return

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "from": self.sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.relay_url, json=payload, headers=headers
                )
            except httpx.HTTPError as e:
                logfire.error("Mail relay request failed", error=str(e))
                raise MailDeliveryError(f"Mail relay request failed: {e}") from e

            if response.status_code >= 400:
                logfire.error(
                    "Mail relay rejected message",
                    status_code=response.status_code,
                    response_text=response.text,
                )
                raise MailDeliveryError(
                    f"Mail relay returned {response.status_code}: {response.text}"
                )

        logfire.info("Mail sent", to=message.to, subject=message.subject)


class MockMailClient(MailClient):
    """Mail client that keeps messages in an outbox for assertions."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self.outbox: list[MailMessage] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def send(self, message: MailMessage) -> None:
        self.outbox.append(message)
