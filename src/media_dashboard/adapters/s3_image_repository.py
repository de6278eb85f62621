"""S3-backed image repository."""

from dataclasses import dataclass

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from media_dashboard.domain.errors import UpstreamUnavailableError
from media_dashboard.services.images import ImageRepository


@dataclass
class S3ImageRepository(ImageRepository):
    """Stores and lists image objects in an S3 bucket."""

    client: BaseClient
    bucket_name: str

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Upload image bytes with their content type."""
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamUnavailableError(f"Failed to upload {key}") from exc

    def list_keys(self, prefix: str) -> list[str]:
        """List object keys under a prefix with a single call."""
        try:
            response = self.client.list_objects_v2(
                Bucket=self.bucket_name, Prefix=prefix
            )
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamUnavailableError(f"Failed to list {prefix}") from exc
        return [item["Key"] for item in response.get("Contents", [])]
