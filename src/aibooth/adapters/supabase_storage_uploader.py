"""Supabase Storage artifact storage."""

import asyncio
from dataclasses import dataclass

import httpx
from storage3.utils import StorageException
from supabase import Client

from aibooth.domain.errors import UploadFailure
from aibooth.services.capture import ArtifactUploader


@dataclass
class SupabaseArtifactUploader(ArtifactUploader):
    """Writes artifacts to a public Supabase Storage bucket."""

    client: Client
    bucket: str

    async def upload(self, image: bytes, key: str) -> str:
        """Upload the image and return the bucket's public URL for it."""
        storage = self.client.storage.from_(self.bucket)
        try:
            await asyncio.to_thread(
                storage.upload,
                key,
                image,
                {"content-type": "image/jpeg", "upsert": "false"},
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise UploadFailure("Failed to upload image") from exc
        url = storage.get_public_url(key)
        if not url:
            raise UploadFailure("Storage returned no public URL")
        return url.rstrip("?")
