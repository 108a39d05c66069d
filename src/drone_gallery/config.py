"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str
    require_classification: bool = True
    fixed_location_id: int | None = Field(default=None, ge=1, le=6)
    request_timeout: float | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip whitespace and trailing slashes from a base address."""
    cleaned = raw.strip().rstrip("/")
    if not cleaned:
        raise ValueError("api_base_url must not be empty")
    if "://" not in cleaned:
        cleaned = f"http://{cleaned}"
    return cleaned
