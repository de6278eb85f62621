"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

import boto3
from botocore.config import Config

from media_dashboard.adapters.file_translation_cache import FileTranslationCache
from media_dashboard.adapters.google_oauth_client import HttpxGoogleOAuthClient
from media_dashboard.adapters.s3_image_repository import S3ImageRepository
from media_dashboard.adapters.s3_translation_repository import (
    S3TranslationRepository,
)
from media_dashboard.config import Settings, parse_supported_languages
from media_dashboard.services.auth import AuthService
from media_dashboard.services.images import ImageService
from media_dashboard.services.translations import TranslationRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    translation_registry: TranslationRegistry
    image_service: ImageService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    s3_client = boto3.client(
        "s3",
        region_name=resolved_settings.aws_region,
        config=Config(signature_version="s3v4"),
    )
    translation_registry = TranslationRegistry(
        store=S3TranslationRepository(s3_client, resolved_settings.s3_bucket_name),
        cache=FileTranslationCache(Path(resolved_settings.locales_dir)),
        supported_languages=parse_supported_languages(
            resolved_settings.supported_languages
        ),
    )
    image_service = ImageService(
        repository=S3ImageRepository(s3_client, resolved_settings.s3_bucket_name),
        bucket_name=resolved_settings.s3_bucket_name,
        region=resolved_settings.aws_region,
    )
    auth_service = AuthService(
        providers={
            "google": HttpxGoogleOAuthClient.create(
                client_id=resolved_settings.google_client_id,
                client_secret=resolved_settings.google_client_secret,
            )
        },
        public_base_url=resolved_settings.public_base_url,
    )

    async def close_resources() -> None:
        await auth_service.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        translation_registry=translation_registry,
        image_service=image_service,
        close_resources=close_resources,
    )
