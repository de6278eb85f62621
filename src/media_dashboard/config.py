"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_LANGUAGES = ("en", "de")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    s3_bucket_name: str
    aws_region: str
    google_client_id: str
    google_client_secret: str
    session_secret: str
    public_base_url: str = "http://localhost:3000"
    supported_languages: str = ",".join(DEFAULT_LANGUAGES)
    locales_dir: str = "locales"
    session_max_age_seconds: int = 14 * 24 * 60 * 60
    session_https_only: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_supported_languages(raw: str | None) -> tuple[str, ...]:
    """Parse the comma-separated language list, keeping order."""
    if raw is None:
        return DEFAULT_LANGUAGES
    languages: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in languages:
            languages.append(value)
    return tuple(languages) or DEFAULT_LANGUAGES
