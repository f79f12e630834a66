"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Kiosk settings loaded from environment variables."""

    server_link: str
    kiosk_event_id: str
    gallery_base_url: str = "https://lumetrymedia.github.io/PhotoShare"
    countdown_seconds: int = 3
    phone_country_code: str = "+1"
    phone_min_digits: int = 10
    http_timeout_seconds: float = 15
    branding_cache_ttl_seconds: int = 60

    storage_backend: Literal["s3", "supabase"] = "s3"
    s3_bucket: str | None = None
    s3_region: str = "us-east-1"
    s3_public_base_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_bucket: str = "aibooth"

    camera_index: int = 0
    camera_width: int = 1920
    camera_height: int = 1080
    photo_quality: int = 95

    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_country_code(raw: str) -> str:
    """Normalize a configured country code like '1' or '+44' to '+<digits>'."""
    cleaned = raw.strip().lstrip("+")
    if not cleaned.isdigit():
        raise ValueError(f"Invalid phone country code: {raw!r}")
    return f"+{cleaned}"
