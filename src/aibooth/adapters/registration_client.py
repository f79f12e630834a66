"""Event backend client that registers uploaded artifacts."""

from dataclasses import dataclass

import httpx

from aibooth.domain.errors import RegistrationFailure
from aibooth.domain.registration import RegistrationRequest, build_share_url
from aibooth.services.capture import MetadataRegistrar


@dataclass
class HttpxMetadataRegistrar(MetadataRegistrar):
    """Registers artifacts through the backend's /add-photo endpoint."""

    server_link: str
    gallery_base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(
        cls, server_link: str, gallery_base_url: str, timeout: float = 15
    ) -> "HttpxMetadataRegistrar":
        """Create a registrar with a managed httpx session."""
        return cls(
            server_link=server_link,
            gallery_base_url=gallery_base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def register(self, request: RegistrationRequest) -> str:
        """Append the artifact to the event gallery and return its share URL."""
        share_url = build_share_url(
            self.gallery_base_url, request.event_id, request.artifact_id
        )
        payload = {
            "fileID": request.artifact_id,
            "eventID": request.event_id,
            "imageUrl": request.upload_location,
            "phoneNumber": request.delivery.phone_number,
            "email": request.delivery.email,
            "qr": request.delivery.qr,
            "generated_url": share_url,
        }
        url = f"{self.server_link.rstrip('/')}/add-photo"
        try:
            response = await self.http_client.post(
                url, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise RegistrationFailure("Failed to submit details") from exc
        if not isinstance(body, dict) or body.get("status") != "ok":
            detail = body.get("data") if isinstance(body, dict) else None
            raise RegistrationFailure(str(detail or "Backend rejected the photo"))
        return share_url

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
