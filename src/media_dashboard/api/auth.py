"""Session-based authentication gate and OAuth login routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from media_dashboard.api.views import login_page
from media_dashboard.domain.errors import OAuthExchangeError
from media_dashboard.domain.models import UserProfile

if TYPE_CHECKING:
    from media_dashboard.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SESSION_USER_KEY = "user"
SESSION_STATE_KEY = "oauth_state"
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


class AuthenticationRequiredError(Exception):
    """Raised when a protected route is requested without a session."""


def current_user(request: Request) -> UserProfile | None:
    """Return the logged-in user's profile, if any."""
    return UserProfile.from_session(request.session.get(SESSION_USER_KEY))


async def require_user(request: Request) -> UserProfile:
    """Ensure the request belongs to a logged-in user."""
    user = current_user(request)
    if user is None:
        raise AuthenticationRequiredError
    return user


def redirect_to(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=status.HTTP_302_FOUND)


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def login() -> HTMLResponse:
    """Render the sign-in page."""
    return HTMLResponse(login_page())


@router.get("/auth/{provider}")
async def begin_login(provider: str, request: Request) -> RedirectResponse:
    """Send the browser to the identity provider."""
    container: AppContainer = request.app.state.container
    if not container.auth_service.has_provider(provider):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    login_redirect = container.auth_service.begin_login(provider)
    request.session[SESSION_STATE_KEY] = login_redirect.state
    return redirect_to(login_redirect.url)


@router.get("/auth/{provider}/callback")
async def complete_login(
    provider: str,
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish the OAuth flow and attach the profile to the session."""
    container: AppContainer = request.app.state.container
    if not container.auth_service.has_provider(provider):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    try:
        profile = await container.auth_service.complete_login(
            provider,
            code=code,
            state=state,
            expected_state=expected_state,
            error=error,
        )
    except OAuthExchangeError:
        logger.warning("OAuth login failed", exc_info=True, extra={"provider": provider})
        return redirect_to(LOGIN_PATH)
    request.session[SESSION_USER_KEY] = profile.to_session()
    return redirect_to(DASHBOARD_PATH)


@router.get("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Drop the session and return to the sign-in page."""
    request.session.clear()
    return redirect_to(LOGIN_PATH)
