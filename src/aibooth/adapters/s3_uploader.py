"""Amazon S3 artifact storage."""

import asyncio
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from aibooth.domain.errors import UploadFailure
from aibooth.services.capture import ArtifactUploader


@dataclass
class S3ArtifactUploader(ArtifactUploader):
    """Writes artifacts to a public-read S3 bucket."""

    client: Any
    bucket: str
    region: str
    public_base_url: str | None = None

    @classmethod
    def create(
        cls,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        public_base_url: str | None = None,
    ) -> "S3ArtifactUploader":
        """Create an uploader with its own boto3 client."""
        client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        return cls(
            client=client,
            bucket=bucket,
            region=region,
            public_base_url=public_base_url,
        )

    async def upload(self, image: bytes, key: str) -> str:
        """PUT the image and return its public URL."""
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=image,
                ContentType="image/jpeg",
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as exc:
            raise UploadFailure("Failed to upload image") from exc
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
