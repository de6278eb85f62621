"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from media_dashboard.api.app import create_app
from media_dashboard.config import Settings
from media_dashboard.containers import AppContainer
from media_dashboard.domain.errors import OAuthExchangeError, UpstreamUnavailableError
from media_dashboard.domain.models import UserProfile
from media_dashboard.services.auth import AuthService, OAuthClient
from media_dashboard.services.images import ImageRepository, ImageService
from media_dashboard.services.translations import (
    TranslationCache,
    TranslationRegistry,
    TranslationStore,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@dataclass
class InMemoryTranslationStore(TranslationStore):
    """In-memory remote translation store for tests."""

    documents: dict[str, dict[str, str]] = field(default_factory=dict)
    fetched: list[str] = field(default_factory=list)
    fail_fetch: set[str] = field(default_factory=set)
    fail_save: bool = False

    def fetch(self, language: str) -> dict[str, str]:
        self.fetched.append(language)
        if language in self.fail_fetch:
            raise UpstreamUnavailableError(f"fetch failed for {language}")
        return dict(self.documents.get(language, {}))

    def save(self, language: str, translations: dict[str, str]) -> None:
        if self.fail_save:
            raise UpstreamUnavailableError(f"save failed for {language}")
        self.documents[language] = dict(translations)


@dataclass
class InMemoryTranslationCache(TranslationCache):
    """In-memory local translation cache for tests."""

    files: dict[str, dict[str, str]] = field(default_factory=dict)
    fail_save: bool = False

    def load(self, language: str) -> dict[str, str]:
        return dict(self.files.get(language, {}))

    def save(self, language: str, translations: dict[str, str]) -> None:
        if self.fail_save:
            raise OSError("disk full")
        self.files[language] = dict(translations)


@dataclass
class InMemoryImageRepository(ImageRepository):
    """In-memory object store for images."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    calls: int = 0
    fail: bool = False

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        self.calls += 1
        if self.fail:
            raise UpstreamUnavailableError("upload failed")
        self.objects[key] = (body, content_type)

    def list_keys(self, prefix: str) -> list[str]:
        self.calls += 1
        if self.fail:
            raise UpstreamUnavailableError("list failed")
        return sorted(key for key in self.objects if key.startswith(prefix))


@dataclass
class FakeOAuthClient(OAuthClient):
    """Fake identity provider that accepts a single code."""

    profile: UserProfile = field(
        default_factory=lambda: UserProfile(
            id="google-123",
            display_name="Ada Lovelace",
            photo_url="https://example.com/ada.png",
        )
    )
    valid_code: str = "good-code"
    exchanged: list[tuple[str, str]] = field(default_factory=list)
    closed: bool = False
    outage: bool = False

    def authorization_url(self, state: str, redirect_uri: str) -> str:
        return f"https://idp.test/authorize?state={state}&redirect_uri={redirect_uri}"

    async def exchange_code(self, code: str, redirect_uri: str) -> UserProfile:
        self.exchanged.append((code, redirect_uri))
        if self.outage:
            raise UpstreamUnavailableError("identity provider down")
        if code != self.valid_code:
            raise OAuthExchangeError("bad code")
        return self.profile

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        s3_bucket_name="media-bucket",
        aws_region="eu-central-1",
        google_client_id="client-id",
        google_client_secret="client-secret",
        session_secret="session-secret",
        locales_dir=str(tmp_path / "locales"),
    )


@pytest.fixture
def translation_store() -> InMemoryTranslationStore:
    return InMemoryTranslationStore()


@pytest.fixture
def translation_cache() -> InMemoryTranslationCache:
    return InMemoryTranslationCache()


@pytest.fixture
def image_repository() -> InMemoryImageRepository:
    return InMemoryImageRepository()


@pytest.fixture
def oauth_client() -> FakeOAuthClient:
    return FakeOAuthClient()


@pytest.fixture
def container(
    settings: Settings,
    translation_store: InMemoryTranslationStore,
    translation_cache: InMemoryTranslationCache,
    image_repository: InMemoryImageRepository,
    oauth_client: FakeOAuthClient,
) -> AppContainer:
    auth_service = AuthService(
        providers={"google": oauth_client},
        public_base_url=settings.public_base_url,
    )
    translation_registry = TranslationRegistry(
        store=translation_store,
        cache=translation_cache,
        supported_languages=("en", "de"),
    )
    image_service = ImageService(
        repository=image_repository,
        bucket_name=settings.s3_bucket_name,
        region=settings.aws_region,
        clock=lambda: FIXED_NOW,
    )

    async def close_resources() -> None:
        await auth_service.close()

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        translation_registry=translation_registry,
        image_service=image_service,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def log_in(client: TestClient, code: str = "good-code") -> None:
    """Walk the OAuth redirect flow against the fake provider."""
    response = client.get("/auth/google", follow_redirects=False)
    state = parse_qs(urlparse(response.headers["location"]).query)["state"][0]
    client.get(
        "/auth/google/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    log_in(client)
    return client


@pytest.fixture
def app_logs(caplog, monkeypatch):
    """Capture app logs even after configure_logging disabled propagation."""
    monkeypatch.setattr(logging.getLogger("media_dashboard"), "propagate", True)
    caplog.set_level(logging.INFO, logger="media_dashboard")
    return caplog
