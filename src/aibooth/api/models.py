"""Pydantic models for the kiosk HTTP API."""

from pydantic import BaseModel

from aibooth.domain.delivery import DeliveryChannel
from aibooth.domain.session import SessionSnapshot


class ChannelRequest(BaseModel):
    """Guest picked a delivery option."""

    channel: DeliveryChannel


class ContactRequest(BaseModel):
    """Guest typed into the contact field."""

    contact: str


class EmailDomainRequest(BaseModel):
    """Guest tapped a suggested email domain."""

    domain: str


class SubmitRequest(BaseModel):
    """Final submission of the delivery choice."""

    channel: DeliveryChannel | None = None
    contact: str | None = None


class SessionView(BaseModel):
    """Session state as shown by the kiosk front end."""

    event_id: str
    state: str
    capture_enabled: bool
    countdown_remaining: int
    has_image: bool
    artifact_id: str | None = None
    channel: str | None = None
    draft_contact: str = ""
    contact: str | None = None
    upload_location: str | None = None
    share_url: str | None = None
    failure_kind: str | None = None
    failure_message: str | None = None
    validation_error: str | None = None

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionView":
        return cls(
            event_id=snapshot.event_id,
            state=snapshot.state.value,
            capture_enabled=snapshot.capture_enabled,
            countdown_remaining=snapshot.countdown_remaining,
            has_image=snapshot.has_image,
            artifact_id=snapshot.artifact_id,
            channel=snapshot.channel,
            draft_contact=snapshot.draft_contact,
            contact=snapshot.contact,
            upload_location=snapshot.upload_location,
            share_url=snapshot.share_url,
            failure_kind=snapshot.failure_kind.value if snapshot.failure_kind else None,
            failure_message=snapshot.failure_message,
            validation_error=snapshot.validation_error,
        )


class OutcomeView(BaseModel):
    """Terminal result of a submission."""

    status: str
    share_url: str | None = None
    artifact_id: str | None = None
    failure_kind: str | None = None
    message: str | None = None
    session: SessionView
