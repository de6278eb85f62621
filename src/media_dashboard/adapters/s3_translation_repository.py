"""S3-backed translation store."""

import json
from dataclasses import dataclass

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from media_dashboard.domain.errors import UpstreamUnavailableError
from media_dashboard.services.translations import (
    TranslationDictionary,
    TranslationStore,
    normalize_dictionary,
)

TRANSLATION_PREFIX = "translations/"
_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class S3TranslationRepository(TranslationStore):
    """Stores one JSON document per language in an S3 bucket."""

    client: BaseClient
    bucket_name: str

    def fetch(self, language: str) -> TranslationDictionary:
        """Return the stored dictionary, or an empty one when the key is absent."""
        try:
            response = self.client.get_object(
                Bucket=self.bucket_name, Key=translation_key(language)
            )
            body = response["Body"].read()
        except ClientError as exc:
            if is_not_found(exc):
                return {}
            raise UpstreamUnavailableError(
                f"Failed to fetch translations for {language}"
            ) from exc
        except BotoCoreError as exc:
            raise UpstreamUnavailableError(
                f"Failed to fetch translations for {language}"
            ) from exc
        try:
            decoded = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UpstreamUnavailableError(
                f"Stored translations for {language} are not valid JSON"
            ) from exc
        translations = normalize_dictionary(decoded)
        if translations is None:
            raise UpstreamUnavailableError(
                f"Stored translations for {language} are not a JSON object"
            )
        return translations

    def save(self, language: str, translations: TranslationDictionary) -> None:
        """Upload the full dictionary as pretty-printed JSON."""
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=translation_key(language),
                Body=json.dumps(translations, indent=2, ensure_ascii=False).encode(
                    "utf-8"
                ),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            raise UpstreamUnavailableError(
                f"Failed to store translations for {language}"
            ) from exc


def translation_key(language: str) -> str:
    """Return the object key holding a language's dictionary."""
    return f"{TRANSLATION_PREFIX}{language}.json"


def is_not_found(exc: ClientError) -> bool:
    """Return True when the S3 error means the object does not exist."""
    code = str(exc.response.get("Error", {}).get("Code", ""))
    return code in _NOT_FOUND_CODES
