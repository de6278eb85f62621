"""OAuth login flow orchestration."""

import secrets
from dataclasses import dataclass
from typing import Protocol

from media_dashboard.domain.errors import OAuthExchangeError
from media_dashboard.domain.models import UserProfile


class OAuthClient(Protocol):
    """Interface for an OAuth authorization-code identity provider."""

    def authorization_url(self, state: str, redirect_uri: str) -> str:
        """Return the provider URL the browser should be sent to."""

    async def exchange_code(self, code: str, redirect_uri: str) -> UserProfile:
        """Exchange an authorization code for the user's profile."""

    async def close(self) -> None:
        """Release any underlying resources."""


@dataclass(frozen=True)
class LoginRedirect:
    """Where to send the browser and the state to remember."""

    url: str
    state: str


@dataclass
class AuthService:
    """Starts and completes OAuth logins for the configured providers."""

    providers: dict[str, OAuthClient]
    public_base_url: str

    def has_provider(self, provider: str) -> bool:
        """Return True when the provider is configured."""
        return provider in self.providers

    def callback_url(self, provider: str) -> str:
        """Return the fixed callback URL registered for a provider."""
        return f"{self.public_base_url.rstrip('/')}/auth/{provider}/callback"

    def begin_login(self, provider: str) -> LoginRedirect:
        """Create a fresh state and the provider authorization URL."""
        state = secrets.token_urlsafe(24)
        url = self.providers[provider].authorization_url(
            state=state, redirect_uri=self.callback_url(provider)
        )
        return LoginRedirect(url=url, state=state)

    async def complete_login(  # noqa: PLR0913
        self,
        provider: str,
        *,
        code: str | None,
        state: str | None,
        expected_state: str | None,
        error: str | None = None,
    ) -> UserProfile:
        """Validate the callback parameters and fetch the user's profile."""
        if error:
            raise OAuthExchangeError(f"Provider returned error: {error}")
        if not code:
            raise OAuthExchangeError("Missing authorization code")
        if not expected_state or not state:
            raise OAuthExchangeError("Missing OAuth state")
        if not secrets.compare_digest(state, expected_state):
            raise OAuthExchangeError("OAuth state mismatch")
        return await self.providers[provider].exchange_code(
            code=code, redirect_uri=self.callback_url(provider)
        )

    async def close(self) -> None:
        """Close every provider client."""
        for client in self.providers.values():
            await client.close()
