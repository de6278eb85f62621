"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Request, Response, UploadFile, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from media_dashboard.api import views
from media_dashboard.api.auth import (
    DASHBOARD_PATH,
    LOGIN_PATH,
    AuthenticationRequiredError,
    current_user,
    redirect_to,
    require_user,
)
from media_dashboard.api.auth import router as auth_router
from media_dashboard.api.translations import router as translations_router
from media_dashboard.app_logging import configure_logging
from media_dashboard.containers import AppContainer
from media_dashboard.domain.errors import UpstreamUnavailableError
from media_dashboard.domain.models import StoredImage, UserProfile

UPLOAD_FIELD = "image"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.translation_registry.bootstrap()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        SessionMiddleware,
        secret_key=container.settings.session_secret,
        max_age=container.settings.session_max_age_seconds,
        https_only=container.settings.session_https_only,
    )

    @app.exception_handler(AuthenticationRequiredError)
    async def authentication_required(
        request: Request, exc: AuthenticationRequiredError
    ) -> RedirectResponse:
        return redirect_to(LOGIN_PATH)

    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_unavailable(
        request: Request, exc: UpstreamUnavailableError
    ) -> PlainTextResponse:
        logger.error(
            "Upstream call failed: %s", exc, exc_info=exc, extra={"path": request.url.path}
        )
        return PlainTextResponse(
            "Upstream service unavailable.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    app.include_router(auth_router)
    app.include_router(translations_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def index(request: Request) -> RedirectResponse:
        """Send users to the dashboard or the sign-in page."""
        if current_user(request) is None:
            return redirect_to(LOGIN_PATH)
        return redirect_to(DASHBOARD_PATH)

    @app.get("/dashboard", response_class=HTMLResponse)
    async def dashboard(user: UserProfile = Depends(require_user)) -> HTMLResponse:
        """Render the dashboard with the user's profile."""
        return HTMLResponse(views.dashboard_page(user))

    @app.get("/images", response_class=HTMLResponse, dependencies=[Depends(require_user)])
    async def images() -> HTMLResponse:
        """Render the upload form."""
        return HTMLResponse(views.upload_page())

    @app.get(
        "/translation", response_class=HTMLResponse, dependencies=[Depends(require_user)]
    )
    async def translation(request: Request) -> HTMLResponse:
        """Render the translation editor."""
        state_container: AppContainer = request.app.state.container
        return HTMLResponse(
            views.translation_page(state_container.translation_registry.languages())
        )

    @app.post("/upload", response_class=HTMLResponse, dependencies=[Depends(require_user)])
    async def upload(
        request: Request, image: UploadFile | None = File(default=None)
    ) -> Response:
        """Store one uploaded image and show its public URL."""
        if image is None or not image.filename:
            return PlainTextResponse(
                "No file uploaded.", status_code=status.HTTP_400_BAD_REQUEST
            )
        state_container: AppContainer = request.app.state.container
        content = await image.read()
        try:
            stored = state_container.image_service.upload(
                filename=image.filename,
                content=content,
                content_type=image.content_type,
            )
        except UpstreamUnavailableError:
            logger.exception("Error uploading image", extra={"image": image.filename})
            return PlainTextResponse(
                "Failed to upload image.",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return HTMLResponse(views.upload_result_page(stored))

    @app.get(
        "/list-images", response_class=HTMLResponse, dependencies=[Depends(require_user)]
    )
    async def list_images(request: Request) -> Response:
        """Render every stored image URL."""
        images = _load_images(request, logger)
        if images is None:
            return _listing_failed()
        return HTMLResponse(views.image_list_page(images))

    @app.get("/gallery", response_class=HTMLResponse, dependencies=[Depends(require_user)])
    async def gallery(request: Request) -> Response:
        """Render stored images as a grid."""
        images = _load_images(request, logger)
        if images is None:
            return _listing_failed()
        return HTMLResponse(views.gallery_page(images))

    return app


def _load_images(request: Request, logger: logging.Logger) -> list[StoredImage] | None:
    """List images, or None when the object store failed."""
    state_container: AppContainer = request.app.state.container
    try:
        return state_container.image_service.list_images()
    except UpstreamUnavailableError:
        logger.exception("Error listing images")
        return None


def _listing_failed() -> PlainTextResponse:
    return PlainTextResponse(
        "Failed to list images.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
