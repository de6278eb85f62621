"""Local JSON file cache for translation dictionaries."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from media_dashboard.services.translations import (
    TranslationCache,
    TranslationDictionary,
    normalize_dictionary,
)

logger = logging.getLogger(__name__)


@dataclass
class FileTranslationCache(TranslationCache):
    """Keeps one pretty-printed JSON file per language in a directory."""

    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, language: str) -> Path:
        """Return the cache file path for a language.

        Raises ValueError when the language would point outside the directory.
        """
        path = self.directory / f"{language}.json"
        if path.resolve().parent != self.directory.resolve():
            raise ValueError(f"Unsafe language code: {language!r}")
        return path

    def load(self, language: str) -> TranslationDictionary:
        """Read the cached dictionary, treating missing or corrupt files as empty."""
        path = self.path_for(language)
        if not path.exists():
            return {}
        try:
            decoded = json.loads(path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable translation cache %s", path)
            return {}
        translations = normalize_dictionary(decoded)
        if translations is None:
            logger.warning("Ignoring non-object translation cache %s", path)
            return {}
        return translations

    def save(self, language: str, translations: TranslationDictionary) -> None:
        """Replace the cache file atomically."""
        path = self.path_for(language)
        payload = json.dumps(translations, indent=2, ensure_ascii=False)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{language}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
