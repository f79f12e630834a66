"""Domain models for kiosk capture sessions."""

from dataclasses import dataclass, field
from enum import StrEnum

from aibooth.domain.delivery import ChannelSelection, ValidatedContact


class SessionState(StrEnum):
    """States of the countdown and capture pipeline."""

    IDLE = "IDLE"
    COUNTING = "COUNTING"
    CAPTURED = "CAPTURED"
    AWAITING_CHANNEL_CHOICE = "AWAITING_CHANNEL_CHOICE"
    UPLOADING = "UPLOADING"
    REGISTERING = "REGISTERING"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


TERMINAL_STATES = frozenset({SessionState.DELIVERED, SessionState.FAILED})


class FailureKind(StrEnum):
    """Why a session ended in the failed state."""

    UPLOAD_FAILURE = "UploadFailure"
    REGISTRATION_FAILURE = "RegistrationFailure"


@dataclass
class Session:
    """One capture attempt by the kiosk for one event."""

    event_id: str
    state: SessionState = SessionState.IDLE
    countdown_remaining: int = 0
    captured_image: bytes | None = None
    artifact_id: str | None = None
    selection: ChannelSelection = field(default_factory=ChannelSelection)
    delivery: ValidatedContact | None = None
    upload_location: str | None = None
    share_url: str | None = None
    failure_kind: FailureKind | None = None
    failure_message: str | None = None
    validation_error: str | None = None

    @property
    def capture_enabled(self) -> bool:
        """Capture is only possible from a fresh session."""
        return self.state is SessionState.IDLE

    def release_image(self) -> None:
        self.captured_image = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for presentation layers."""

    event_id: str
    state: SessionState
    capture_enabled: bool
    countdown_remaining: int
    has_image: bool
    artifact_id: str | None
    channel: str | None
    draft_contact: str
    contact: str | None
    upload_location: str | None
    share_url: str | None
    failure_kind: FailureKind | None
    failure_message: str | None
    validation_error: str | None

    @classmethod
    def of(cls, session: Session) -> "SessionSnapshot":
        delivery = session.delivery
        return cls(
            event_id=session.event_id,
            state=session.state,
            capture_enabled=session.capture_enabled,
            countdown_remaining=(
                session.countdown_remaining
                if session.state is SessionState.COUNTING
                else 0
            ),
            has_image=session.captured_image is not None,
            artifact_id=session.artifact_id,
            channel=(
                str(session.selection.channel) if session.selection.channel else None
            ),
            draft_contact=session.selection.draft_contact,
            contact=delivery.contact if delivery else None,
            upload_location=session.upload_location,
            share_url=session.share_url,
            failure_kind=session.failure_kind,
            failure_message=session.failure_message,
            validation_error=session.validation_error,
        )


@dataclass(frozen=True)
class Delivered:
    """Terminal success: the artifact is stored and registered."""

    share_url: str
    artifact_id: str
    upload_location: str


@dataclass(frozen=True)
class Failed:
    """Terminal failure of the upload or registration step."""

    kind: FailureKind
    message: str
    artifact_id: str | None = None
    upload_location: str | None = None


PipelineOutcome = Delivered | Failed
