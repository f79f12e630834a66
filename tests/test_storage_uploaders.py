"""Tests for object storage uploaders."""

import asyncio
from dataclasses import dataclass, field

import boto3
import httpx
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber
from storage3.utils import StorageException

from aibooth.adapters.s3_uploader import S3ArtifactUploader
from aibooth.adapters.supabase_storage_uploader import SupabaseArtifactUploader
from aibooth.domain.errors import UploadFailure


def _s3_client():  # type: ignore[no-untyped-def]
    return boto3.client(
        "s3",
        region_name="us-west-2",
        aws_access_key_id="test-key",
        aws_secret_access_key="test-secret",
    )


def test_s3_uploader_puts_public_jpeg() -> None:
    client = _s3_client()
    uploader = S3ArtifactUploader(client=client, bucket="kiosk", region="us-west-2")

    with Stubber(client) as stubber:
        stubber.add_response(
            "put_object",
            {"ETag": '"etag"'},
            {
                "Bucket": "kiosk",
                "Key": "abc123.jpg",
                "Body": b"jpeg-bytes",
                "ContentType": "image/jpeg",
                "ACL": "public-read",
            },
        )
        location = asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))
        stubber.assert_no_pending_responses()

    assert location == "https://kiosk.s3.us-west-2.amazonaws.com/abc123.jpg"


def test_s3_uploader_wraps_client_errors() -> None:
    client = _s3_client()
    uploader = S3ArtifactUploader(client=client, bucket="kiosk", region="us-west-2")

    with Stubber(client) as stubber:
        stubber.add_client_error(
            "put_object", service_error_code="AccessDenied", http_status_code=403
        )
        with pytest.raises(UploadFailure):
            asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))


def test_s3_uploader_wraps_connection_errors() -> None:
    class OfflineClient:
        def put_object(self, **_kwargs) -> None:  # type: ignore[no-untyped-def]
            raise EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")

    uploader = S3ArtifactUploader(
        client=OfflineClient(), bucket="kiosk", region="us-east-1"
    )

    with pytest.raises(UploadFailure):
        asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))


def test_s3_uploader_uses_public_base_url() -> None:
    uploader = S3ArtifactUploader(
        client=None,
        bucket="kiosk",
        region="us-east-1",
        public_base_url="https://cdn.example/photos/",
    )

    assert uploader.public_url("abc.jpg") == "https://cdn.example/photos/abc.jpg"


@dataclass
class FakeBucket:
    name: str
    error: Exception | None = None
    uploads: list[tuple[str, bytes, dict[str, str]]] = field(default_factory=list)

    def upload(self, path: str, file: bytes, file_options: dict[str, str]) -> None:
        if self.error is not None:
            raise self.error
        self.uploads.append((path, file, file_options))

    def get_public_url(self, path: str) -> str:
        base = "https://example.supabase.co/storage/v1/object/public"
        return f"{base}/{self.name}/{path}?"


@dataclass
class FakeStorage:
    buckets: dict[str, FakeBucket] = field(default_factory=dict)

    def from_(self, name: str) -> FakeBucket:
        if name not in self.buckets:
            self.buckets[name] = FakeBucket(name=name)
        return self.buckets[name]


@dataclass
class FakeSupabaseClient:
    storage: FakeStorage = field(default_factory=FakeStorage)


def test_supabase_uploader_uploads_and_returns_public_url() -> None:
    client = FakeSupabaseClient()
    uploader = SupabaseArtifactUploader(client=client, bucket="aibooth")

    location = asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))

    assert location == (
        "https://example.supabase.co/storage/v1/object/public/aibooth/abc123.jpg"
    )
    path, content, options = client.storage.buckets["aibooth"].uploads[0]
    assert path == "abc123.jpg"
    assert content == b"jpeg-bytes"
    assert options["content-type"] == "image/jpeg"
    assert options["upsert"] == "false"


def test_supabase_uploader_wraps_errors() -> None:
    client = FakeSupabaseClient()
    client.storage.from_("aibooth").error = StorageException("bucket not found")
    uploader = SupabaseArtifactUploader(client=client, bucket="aibooth")

    with pytest.raises(UploadFailure):
        asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))


def test_supabase_uploader_wraps_transport_errors() -> None:
    client = FakeSupabaseClient()
    client.storage.from_("aibooth").error = httpx.ConnectError("offline")
    uploader = SupabaseArtifactUploader(client=client, bucket="aibooth")

    with pytest.raises(UploadFailure):
        asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))


def test_supabase_uploader_lets_programming_errors_propagate() -> None:
    client = FakeSupabaseClient()
    client.storage.from_("aibooth").error = TypeError("bad file options")
    uploader = SupabaseArtifactUploader(client=client, bucket="aibooth")

    with pytest.raises(TypeError):
        asyncio.run(uploader.upload(b"jpeg-bytes", "abc123.jpg"))
