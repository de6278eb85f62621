"""Image upload and listing service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol

from media_dashboard.domain.models import StoredImage

logger = logging.getLogger(__name__)

IMAGE_PREFIX = "images/"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ImageRepository(Protocol):
    """Object storage interface for images."""

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Store a binary object under the given key."""

    def list_keys(self, prefix: str) -> list[str]:
        """Return every object key under the prefix."""


@dataclass
class ImageService:
    """Stores uploaded images and derives their public URLs."""

    repository: ImageRepository
    bucket_name: str
    region: str
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    def upload(
        self, filename: str, content: bytes, content_type: str | None
    ) -> StoredImage:
        """Store an uploaded file and return where it can be fetched."""
        key = self.build_key(filename)
        self.repository.put_object(
            key, content, content_type or DEFAULT_CONTENT_TYPE
        )
        image = StoredImage(key=key, url=self.public_url(key))
        logger.info("Uploaded image to object store: %s", image.url)
        return image

    def list_images(self) -> list[StoredImage]:
        """Return every stored image with its public URL."""
        return [
            StoredImage(key=key, url=self.public_url(key))
            for key in self.repository.list_keys(IMAGE_PREFIX)
            if key != IMAGE_PREFIX
        ]

    def build_key(self, filename: str) -> str:
        """Derive a storage key from the upload time and file extension."""
        millis = int(self.clock().timestamp() * 1000)
        return f"{IMAGE_PREFIX}{millis}{PurePosixPath(filename).suffix}"

    def public_url(self, key: str) -> str:
        """Return the public object URL for a key."""
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"
