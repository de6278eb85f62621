"""Translation registry backed by a remote store and a local file cache.

The remote store is the authority. The local cache only makes cold starts
cheap: when it holds a non-empty dictionary for a language, bootstrap uses it
without asking the remote store. Nothing refreshes the local cache when the
remote copy changes from another process.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Protocol

from media_dashboard.domain.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

TranslationDictionary = dict[str, str]


class TranslationStore(Protocol):
    """Remote persistence interface for translation dictionaries."""

    def fetch(self, language: str) -> TranslationDictionary:
        """Return the stored dictionary, or an empty one when absent."""

    def save(self, language: str, translations: TranslationDictionary) -> None:
        """Persist the full dictionary for a language."""


class TranslationCache(Protocol):
    """Local persistence interface for translation dictionaries."""

    def load(self, language: str) -> TranslationDictionary:
        """Return the cached dictionary, or an empty one when absent."""

    def save(self, language: str, translations: TranslationDictionary) -> None:
        """Write the full dictionary for a language."""


@dataclass
class TranslationRegistry:
    """Owns the in-memory translations for every language.

    Updates for the same language are serialized, and a new dictionary only
    becomes visible after the remote store accepted it.
    """

    store: TranslationStore
    cache: TranslationCache
    supported_languages: tuple[str, ...]
    _dictionaries: dict[str, TranslationDictionary] = field(
        default_factory=dict, init=False, repr=False
    )
    _locks: dict[str, threading.Lock] = field(
        default_factory=dict, init=False, repr=False
    )
    _locks_guard: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def bootstrap(self) -> None:
        """Populate every supported language from the cache or remote store."""
        for language in self.supported_languages:
            try:
                self._bootstrap_language(language)
            except (UpstreamUnavailableError, OSError):
                logger.exception(
                    "Failed to load translations", extra={"language": language}
                )

    def _bootstrap_language(self, language: str) -> None:
        cached = self.cache.load(language)
        if cached:
            logger.info("Loaded %s translations from local cache", language)
            self._dictionaries[language] = cached
            return
        remote = self.store.fetch(language)
        logger.info("Loaded %s translations from remote store", language)
        self._dictionaries[language] = remote
        self.cache.save(language, remote)

    def languages(self) -> list[str]:
        """Return the languages known to the process."""
        return list(self.supported_languages)

    def get(self, language: str, key: str) -> str:
        """Return a translated value, or an empty string when missing."""
        dictionary = self._dictionaries.get(language)
        if dictionary is None:
            return ""
        return dictionary.get(key, "")

    def snapshot(self, language: str) -> TranslationDictionary:
        """Return a copy of the in-memory dictionary for a language."""
        return dict(self._dictionaries.get(language, {}))

    def fetch_remote(self, language: str) -> TranslationDictionary:
        """Read a language straight from the remote store."""
        return self.store.fetch(language)

    def update(self, language: str, key: str, value: str) -> None:
        """Set a key and persist the language to both tiers.

        Raises UpstreamUnavailableError when the remote store rejects the
        write; the in-memory and cached dictionaries are left untouched then.
        """
        with self._lock_for(language):
            candidate = dict(self._dictionaries.get(language, {}))
            candidate[key] = value
            self.store.save(language, candidate)
            try:
                self.cache.save(language, candidate)
            except OSError:
                logger.exception(
                    "Failed to write local translation cache",
                    extra={"language": language},
                )
            self._dictionaries[language] = candidate

    def _lock_for(self, language: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(language)
            if lock is None:
                lock = threading.Lock()
                self._locks[language] = lock
            return lock


def normalize_dictionary(raw: object) -> TranslationDictionary | None:
    """Coerce decoded JSON into a flat string dictionary.

    Returns None when the payload is not a JSON object.
    """
    if not isinstance(raw, dict):
        return None
    return {str(key): _as_text(value) for key, value in raw.items()}


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)

