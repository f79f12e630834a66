"""Event branding lookup with graceful degradation."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError as PydanticValidationError

from aibooth.adapters.events_client import EventsClient
from aibooth.domain.branding import EventBranding, EventRecord
from aibooth.domain.errors import ConfigFetchFailure
from aibooth.services.cache import BrandingCache

logger = logging.getLogger(__name__)


@dataclass
class BrandingService:
    """Reads logo and placement for the viewfinder overlay."""

    events_client: EventsClient
    cache: BrandingCache

    async def get_branding(self, event_id: str) -> EventBranding:
        """Return branding for the event, or empty branding on any failure."""
        cached = self.cache.get(event_id)
        if cached is not None:
            return cached
        try:
            branding = await self.fetch_branding(event_id)
        except ConfigFetchFailure:
            logger.exception(
                "Failed to fetch event branding", extra={"event_id": event_id}
            )
            return EventBranding.empty()
        self.cache.set(event_id, branding)
        return branding

    async def fetch_branding(self, event_id: str) -> EventBranding:
        """Fetch branding from the backend, raising ConfigFetchFailure."""
        try:
            events = await self.events_client.list_events()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise ConfigFetchFailure("Failed to fetch event details") from exc
        for raw in events:
            if not isinstance(raw, dict) or raw.get("_id") != event_id:
                continue
            try:
                event = EventRecord.model_validate(raw)
            except PydanticValidationError as exc:
                raise ConfigFetchFailure("Malformed event document") from exc
            return EventBranding.from_event(event)
        logger.info("Event not found, using no branding", extra={"event_id": event_id})
        return EventBranding.empty()
