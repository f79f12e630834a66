"""TTL cache for event branding lookups."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from aibooth.domain.branding import EventBranding


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _CacheEntry:
    branding: EventBranding
    expires_at: datetime


@dataclass
class BrandingCache:
    """Keeps recently fetched branding per event id."""

    ttl_seconds: int = 60
    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, _CacheEntry] = field(default_factory=dict, init=False)

    def get(self, event_id: str) -> EventBranding | None:
        """Return cached branding if it hasn't expired."""
        entry = self._entries.get(event_id)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            self._entries.pop(event_id, None)
            return None
        return entry.branding

    def set(self, event_id: str, branding: EventBranding) -> None:
        expires_at = self.clock() + timedelta(seconds=self.ttl_seconds)
        self._entries[event_id] = _CacheEntry(branding=branding, expires_at=expires_at)
