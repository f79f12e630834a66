"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from aibooth.adapters.events_client import EventsClient
from aibooth.config import Settings
from aibooth.containers import AppContainer
from aibooth.domain.errors import (
    CaptureError,
    RegistrationFailure,
    UploadFailure,
)
from aibooth.domain.registration import RegistrationRequest, build_share_url
from aibooth.services.branding import BrandingService
from aibooth.services.cache import BrandingCache
from aibooth.services.capture import (
    ArtifactUploader,
    CaptureDevice,
    CountdownCaptureController,
    MetadataRegistrar,
)
from aibooth.services.distribution import DistributionSelector
from aibooth.services.identifiers import IdentifierGenerator

GALLERY_BASE_URL = "https://gallery.example"
FAKE_JPEG = b"\xff\xd8\xff\xe0fake-jpeg"


@dataclass
class FakeCaptureDevice(CaptureDevice):
    """Fake camera that returns static bytes and counts shots."""

    content: bytes = FAKE_JPEG
    fail: bool = False
    calls: int = 0

    async def capture(self) -> bytes:
        self.calls += 1
        if self.fail:
            raise CaptureError("camera unplugged")
        return self.content


@dataclass
class FakeUploader(ArtifactUploader):
    """Fake object storage that records uploads."""

    base_url: str = "https://bucket.s3"
    fail: bool = False
    uploads: list[tuple[str, bytes]] = field(default_factory=list)

    async def upload(self, image: bytes, key: str) -> str:
        self.uploads.append((key, image))
        if self.fail:
            raise UploadFailure("Failed to upload image")
        return f"{self.base_url}/{key}"


@dataclass
class FakeRegistrar(MetadataRegistrar):
    """Fake event backend that records registrations."""

    gallery_base_url: str = GALLERY_BASE_URL
    rejection: str | None = None
    requests: list[RegistrationRequest] = field(default_factory=list)

    async def register(self, request: RegistrationRequest) -> str:
        self.requests.append(request)
        if self.rejection is not None:
            raise RegistrationFailure(self.rejection)
        return build_share_url(
            self.gallery_base_url, request.event_id, request.artifact_id
        )


@dataclass
class FakeEventsClient(EventsClient):
    """Fake events backend with a static event list."""

    events: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "_id": "evt1",
                "name": "Launch party",
                "branding_logo": "https://cdn.example/logo.png",
                "logo_placement": "TR",
            }
        ]
    )
    error: Exception | None = None
    calls: int = 0

    async def list_events(self) -> list[dict[str, object]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.events


async def no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def settings() -> Settings:
    return Settings(
        server_link="https://backend.example",
        kiosk_event_id="evt1",
        gallery_base_url=GALLERY_BASE_URL,
        s3_bucket="kiosk-bucket",
        s3_region="us-east-1",
        aws_access_key_id="test-key",
        aws_secret_access_key="test-secret",
        environment="local",
    )


@pytest.fixture
def capture_device() -> FakeCaptureDevice:
    return FakeCaptureDevice()


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def registrar() -> FakeRegistrar:
    return FakeRegistrar()


@pytest.fixture
def events_client() -> FakeEventsClient:
    return FakeEventsClient()


@pytest.fixture
def controller(
    capture_device: FakeCaptureDevice,
    uploader: FakeUploader,
    registrar: FakeRegistrar,
) -> CountdownCaptureController:
    return CountdownCaptureController(
        event_id="evt1",
        capture_device=capture_device,
        uploader=uploader,
        registrar=registrar,
        identifier_generator=IdentifierGenerator(),
        distribution_selector=DistributionSelector(),
        countdown_seconds=3,
        sleep=no_sleep,
    )


@pytest.fixture
def container(
    settings: Settings,
    controller: CountdownCaptureController,
    events_client: FakeEventsClient,
) -> AppContainer:
    branding_service = BrandingService(
        events_client=events_client,
        cache=BrandingCache(ttl_seconds=settings.branding_cache_ttl_seconds),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        capture_controller=controller,
        branding_service=branding_service,
        close_resources=close_resources,
    )
