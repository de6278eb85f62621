"""ASGI entrypoint for the media dashboard."""

from media_dashboard.api.app import create_app
from media_dashboard.containers import build_container

app = create_app(build_container())
