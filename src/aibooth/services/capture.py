"""Countdown, capture and delivery state machine for the kiosk."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from aibooth.domain.delivery import ChannelSelection, DeliveryChannel
from aibooth.domain.errors import (
    IdentifierError,
    RegistrationFailure,
    SessionStateError,
    UploadFailure,
    ValidationError,
)
from aibooth.domain.registration import RegistrationRequest
from aibooth.domain.session import (
    TERMINAL_STATES,
    Delivered,
    Failed,
    FailureKind,
    PipelineOutcome,
    Session,
    SessionSnapshot,
    SessionState,
)
from aibooth.services.distribution import DistributionSelector
from aibooth.services.identifiers import IdentifierGenerator, storage_key

logger = logging.getLogger(__name__)


class CaptureDevice(Protocol):
    """Camera abstraction fired when the countdown reaches zero."""

    async def capture(self) -> bytes:
        """Capture a frame and return it as JPEG bytes."""


class ArtifactUploader(Protocol):
    """Durable object storage for captured artifacts."""

    async def upload(self, image: bytes, key: str) -> str:
        """Store the image publicly under key and return its URL."""


class MetadataRegistrar(Protocol):
    """Event backend that links artifacts to an event gallery."""

    async def register(self, request: RegistrationRequest) -> str:
        """Create the artifact record and return the guest share URL."""


@dataclass
class CountdownCaptureController:
    """Drives one kiosk session from countdown to a delivered share link.

    The controller is the only owner of mutable session state. Upload and
    registration run one after the other under a lock, so at most one
    pipeline is in flight per kiosk. Failures never retry on their own: the
    operator resets and captures again, which mints a fresh identifier.
    """

    event_id: str
    capture_device: CaptureDevice
    uploader: ArtifactUploader
    registrar: MetadataRegistrar
    identifier_generator: IdentifierGenerator = field(
        default_factory=IdentifierGenerator
    )
    distribution_selector: DistributionSelector = field(
        default_factory=DistributionSelector
    )
    countdown_seconds: int = 3
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    session: Session = field(init=False)
    _lock: asyncio.Lock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.countdown_seconds < 1:
            raise ValueError("countdown_seconds must be at least 1")
        self.session = Session(event_id=self.event_id)
        self._lock = asyncio.Lock()

    def snapshot(self) -> SessionSnapshot:
        """Return a consistent read-only view of the current session."""
        return SessionSnapshot.of(self.session)

    def bind_event(self, event_id: str) -> None:
        """Point an idle kiosk at a different event."""
        self._require(SessionState.IDLE, "change event")
        self.event_id = event_id
        self.session = Session(event_id=event_id)

    def start_countdown(self) -> bool:
        """Begin the countdown; returns False when capture is disabled."""
        if not self.session.capture_enabled:
            logger.info(
                "Countdown rejected",
                extra={"state": str(self.session.state)},
            )
            return False
        self.session.state = SessionState.COUNTING
        self.session.countdown_remaining = self.countdown_seconds
        return True

    async def tick(self) -> None:
        """Advance the countdown by one second, capturing at zero."""
        async with self._lock:
            session = self.session
            self._require(SessionState.COUNTING, "tick")
            session.countdown_remaining -= 1
            if session.countdown_remaining > 0:
                return
            try:
                image = await self.capture_device.capture()
            except Exception:
                logger.exception(
                    "Capture failed, returning to idle",
                    extra={"event_id": session.event_id},
                )
                self.session = Session(event_id=self.event_id)
                return
            session.captured_image = image
            session.state = SessionState.CAPTURED

    async def run_countdown(self) -> None:
        """Tick once per second until the capture fires."""
        for _ in range(self.session.countdown_remaining):
            if self.session.state is not SessionState.COUNTING:
                return
            await self.sleep(1)
            await self.tick()

    def retake(self) -> None:
        """Discard the captured image and return to idle."""
        self._require(SessionState.CAPTURED, "retake")
        self.session.release_image()
        self.session = Session(event_id=self.event_id)

    def open_channel_choice(self) -> None:
        self._require(SessionState.CAPTURED, "choose a delivery option")
        self.session.state = SessionState.AWAITING_CHANNEL_CHOICE

    def close_channel_choice(self) -> None:
        """Back out of the channel prompt, keeping the captured image."""
        self._require(SessionState.AWAITING_CHANNEL_CHOICE, "close the prompt")
        self.session.selection = ChannelSelection()
        self.session.validation_error = None
        self.session.state = SessionState.CAPTURED

    def select_channel(self, channel: DeliveryChannel) -> None:
        """Make channel the active one; a different channel drops the draft."""
        self._require(SessionState.AWAITING_CHANNEL_CHOICE, "select a channel")
        self.session.selection = self.session.selection.switch(channel)
        self.session.validation_error = None

    def enter_contact(self, raw_contact: str) -> None:
        self._require(SessionState.AWAITING_CHANNEL_CHOICE, "enter a contact")
        self.session.selection = self.session.selection.with_contact(raw_contact)

    def apply_email_domain(self, domain: str) -> None:
        """Complete the email draft with a suggested domain."""
        self._require(SessionState.AWAITING_CHANNEL_CHOICE, "enter a contact")
        selection = self.session.selection.switch(DeliveryChannel.EMAIL)
        self.session.selection = selection.with_email_domain(domain)

    async def submit(
        self,
        channel: DeliveryChannel | None = None,
        contact: str | None = None,
    ) -> PipelineOutcome:
        """Validate the guest's choice, then upload and register the artifact.

        Raises ValidationError, leaving the session awaiting a channel
        choice, when the contact is rejected. Upload and registration
        failures are returned as a Failed outcome.
        """
        async with self._lock:
            session = self.session
            if session.state is SessionState.CAPTURED:
                session.state = SessionState.AWAITING_CHANNEL_CHOICE
            self._require(SessionState.AWAITING_CHANNEL_CHOICE, "submit")
            if channel is not None:
                self.select_channel(channel)
            if contact is not None:
                self.enter_contact(contact)
            try:
                delivery = self.distribution_selector.validate(
                    session.selection.channel, session.selection.draft_contact
                )
            except ValidationError as exc:
                session.validation_error = str(exc)
                logger.info(
                    "Delivery contact rejected",
                    extra={"channel": session.selection.channel},
                )
                raise
            session.validation_error = None
            session.delivery = delivery
            return await self._deliver(session)

    def reset(self) -> None:
        """Dismiss a terminal result and start over with a fresh session."""
        if self.session.state not in TERMINAL_STATES:
            raise SessionStateError(
                f"Cannot reset while {self.session.state.value.lower()}"
            )
        self.session.release_image()
        self.session = Session(event_id=self.event_id)

    async def _deliver(self, session: Session) -> PipelineOutcome:
        image = session.captured_image
        if image is None:
            raise SessionStateError("No captured image to deliver")
        session.state = SessionState.UPLOADING
        try:
            artifact_id = self.identifier_generator.generate()
        except IdentifierError as exc:
            logger.exception("Identifier generation failed")
            return self._fail(session, FailureKind.UPLOAD_FAILURE, str(exc))
        session.artifact_id = artifact_id

        try:
            location = await self.uploader.upload(image, storage_key(artifact_id))
        except UploadFailure as exc:
            logger.warning(
                "Artifact upload failed",
                extra={"artifact_id": artifact_id, "error": str(exc)},
            )
            return self._fail(session, FailureKind.UPLOAD_FAILURE, str(exc))
        except Exception:
            logger.exception(
                "Artifact upload crashed", extra={"artifact_id": artifact_id}
            )
            return self._fail(
                session, FailureKind.UPLOAD_FAILURE, "Failed to upload image"
            )
        session.upload_location = location

        session.state = SessionState.REGISTERING
        request = RegistrationRequest(
            artifact_id=artifact_id,
            event_id=session.event_id,
            upload_location=location,
            delivery=session.delivery,
        )
        try:
            share_url = await self.registrar.register(request)
        except RegistrationFailure as exc:
            logger.warning(
                "Artifact registration failed, stored object is orphaned",
                extra={
                    "artifact_id": artifact_id,
                    "upload_location": location,
                    "error": str(exc),
                },
            )
            return self._fail(session, FailureKind.REGISTRATION_FAILURE, str(exc))
        except Exception:
            logger.exception(
                "Artifact registration crashed, stored object is orphaned",
                extra={"artifact_id": artifact_id, "upload_location": location},
            )
            return self._fail(
                session, FailureKind.REGISTRATION_FAILURE, "Failed to submit details"
            )

        session.share_url = share_url
        session.state = SessionState.DELIVERED
        session.release_image()
        logger.info(
            "Artifact delivered",
            extra={"artifact_id": artifact_id, "channel": request.delivery.channel},
        )
        return Delivered(
            share_url=share_url, artifact_id=artifact_id, upload_location=location
        )

    def _fail(self, session: Session, kind: FailureKind, message: str) -> Failed:
        session.state = SessionState.FAILED
        session.failure_kind = kind
        session.failure_message = message
        session.release_image()
        return Failed(
            kind=kind,
            message=message,
            artifact_id=session.artifact_id,
            upload_location=session.upload_location,
        )

    def _require(self, state: SessionState, action: str) -> None:
        if self.session.state is not state:
            raise SessionStateError(
                f"Cannot {action} while {self.session.state.value.lower()}"
            )
