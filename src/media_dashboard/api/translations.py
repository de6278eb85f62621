"""Translation JSON API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from media_dashboard.api.auth import require_user
from media_dashboard.api.translation_models import TranslationUpdate
from media_dashboard.domain.errors import UpstreamUnavailableError

if TYPE_CHECKING:
    from media_dashboard.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/translation", tags=["translations"])


@router.post("/update", dependencies=[Depends(require_user)])
async def update_translation(
    payload: TranslationUpdate, request: Request
) -> dict[str, bool]:
    """Set one key and persist the language."""
    container: AppContainer = request.app.state.container
    try:
        container.translation_registry.update(
            payload.language, payload.key, payload.value
        )
    except UpstreamUnavailableError as exc:
        logger.exception(
            "Error uploading translation file", extra={"language": payload.language}
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update translation.",
        ) from exc
    return {"success": True}


@router.get("/{language}")
async def read_all_translations(language: str, request: Request) -> dict[str, str]:
    """Return a language's dictionary straight from the remote store."""
    container: AppContainer = request.app.state.container
    try:
        return container.translation_registry.fetch_remote(language)
    except UpstreamUnavailableError as exc:
        logger.exception("Error loading translations", extra={"language": language})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load translations.",
        ) from exc


@router.get("/{language}/{key}")
async def read_translation(language: str, key: str, request: Request) -> dict[str, str]:
    """Return one translated value, empty when unknown."""
    container: AppContainer = request.app.state.container
    return {"value": container.translation_registry.get(language, key)}
