"""Dependency container wiring for the kiosk."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from aibooth.adapters.events_client import HttpxEventsClient
from aibooth.adapters.opencv_camera import OpenCVCaptureDevice
from aibooth.adapters.registration_client import HttpxMetadataRegistrar
from aibooth.adapters.s3_uploader import S3ArtifactUploader
from aibooth.adapters.supabase_storage_uploader import SupabaseArtifactUploader
from aibooth.config import Settings, parse_country_code
from aibooth.services.branding import BrandingService
from aibooth.services.cache import BrandingCache
from aibooth.services.capture import ArtifactUploader, CountdownCaptureController
from aibooth.services.distribution import DistributionSelector
from aibooth.services.identifiers import IdentifierGenerator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    capture_controller: CountdownCaptureController
    branding_service: BrandingService
    close_resources: Callable[[], Awaitable[None]]


def build_uploader(settings: Settings) -> ArtifactUploader:
    """Create the object storage uploader selected by settings."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires supabase_url and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseArtifactUploader(client=client, bucket=settings.supabase_bucket)
    if not settings.s3_bucket:
        raise ValueError("S3 storage requires s3_bucket")
    return S3ArtifactUploader.create(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        public_base_url=settings.s3_public_base_url,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timeout = resolved_settings.http_timeout_seconds
    camera = OpenCVCaptureDevice(
        camera_index=resolved_settings.camera_index,
        width=resolved_settings.camera_width,
        height=resolved_settings.camera_height,
        jpeg_quality=resolved_settings.photo_quality,
    )
    registrar = HttpxMetadataRegistrar.create(
        server_link=resolved_settings.server_link,
        gallery_base_url=resolved_settings.gallery_base_url,
        timeout=timeout,
    )
    events_client = HttpxEventsClient.create(
        server_link=resolved_settings.server_link, timeout=timeout
    )
    controller = CountdownCaptureController(
        event_id=resolved_settings.kiosk_event_id,
        capture_device=camera,
        uploader=build_uploader(resolved_settings),
        registrar=registrar,
        identifier_generator=IdentifierGenerator(),
        distribution_selector=DistributionSelector(
            country_code=parse_country_code(resolved_settings.phone_country_code),
            min_digits=resolved_settings.phone_min_digits,
        ),
        countdown_seconds=resolved_settings.countdown_seconds,
    )
    branding_service = BrandingService(
        events_client=events_client,
        cache=BrandingCache(ttl_seconds=resolved_settings.branding_cache_ttl_seconds),
    )

    async def close_resources() -> None:
        await registrar.close()
        await events_client.close()
        await camera.close()

    return AppContainer(
        settings=resolved_settings,
        capture_controller=controller,
        branding_service=branding_service,
        close_resources=close_resources,
    )
