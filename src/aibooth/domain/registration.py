"""Artifact registration payloads and share links."""

from dataclasses import dataclass

from aibooth.domain.delivery import ValidatedContact


@dataclass(frozen=True)
class RegistrationRequest:
    """Everything the event backend needs to link an artifact to an event."""

    artifact_id: str
    event_id: str
    upload_location: str
    delivery: ValidatedContact


def build_share_url(gallery_base_url: str, event_id: str, artifact_id: str) -> str:
    """Return the guest-facing gallery link for an artifact."""
    return f"{gallery_base_url.rstrip('/')}/#/aibooth/{event_id}/{artifact_id}"
