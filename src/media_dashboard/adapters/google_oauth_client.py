"""Google OAuth2 authorization-code client."""

from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from media_dashboard.domain.errors import OAuthExchangeError, UpstreamUnavailableError
from media_dashboard.domain.models import UserProfile
from media_dashboard.services.auth import OAuthClient

AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

# Basic profile only; account selection is forced on every login.
SCOPES = ["profile"]
PROMPT = "select_account"


@dataclass
class HttpxGoogleOAuthClient(OAuthClient):
    """Google identity provider client using httpx."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, client_id: str, client_secret: str) -> "HttpxGoogleOAuthClient":
        """Create a Google OAuth client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, state: str, redirect_uri: str) -> str:
        """Build the consent screen URL."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "prompt": PROMPT,
            "state": state,
        }
        return f"{AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> UserProfile:
        """Trade the authorization code for a token and load the profile."""
        token_response = await self._send(
            "POST",
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        access_token = token_response.json().get("access_token")
        if not access_token:
            raise OAuthExchangeError("Google token response had no access_token")
        profile_response = await self._send(
            "GET",
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        payload = profile_response.json()
        subject = payload.get("sub")
        if not subject:
            raise OAuthExchangeError("Google profile had no subject")
        return UserProfile(
            id=str(subject),
            display_name=str(payload.get("name") or ""),
            photo_url=payload.get("picture"),
        )

    async def _send(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        try:
            response = await self.http_client.request(method, url, timeout=10, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Google request to {url} failed") from exc
        if response.status_code >= httpx.codes.INTERNAL_SERVER_ERROR:
            raise UpstreamUnavailableError(
                f"Google returned {response.status_code} for {url}"
            )
        if response.is_error:
            raise OAuthExchangeError(
                f"Google rejected the request with {response.status_code}"
            )
        return response

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
