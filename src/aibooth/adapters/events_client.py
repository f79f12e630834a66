"""Read-only client for the event configuration backend."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EventsClient(Protocol):
    """Interface for listing configured events."""

    async def list_events(self) -> list[dict[str, object]]:
        """Return raw event documents."""


@dataclass
class HttpxEventsClient(EventsClient):
    """HTTPX-backed events client."""

    server_link: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, server_link: str, timeout: float = 15) -> "HttpxEventsClient":
        """Create an events client with a managed httpx session."""
        return cls(
            server_link=server_link, http_client=httpx.AsyncClient(), timeout=timeout
        )

    async def list_events(self) -> list[dict[str, object]]:
        """Fetch all events."""
        url = f"{self.server_link.rstrip('/')}/events"
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()
        events = payload.get("data") if isinstance(payload, dict) else None
        return events if isinstance(events, list) else []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
