"""Tests for the translation registry."""

import threading

import pytest

from media_dashboard.domain.errors import UpstreamUnavailableError
from media_dashboard.services.translations import (
    TranslationRegistry,
    normalize_dictionary,
)
from tests.conftest import InMemoryTranslationCache, InMemoryTranslationStore


def _registry(
    store: InMemoryTranslationStore, cache: InMemoryTranslationCache
) -> TranslationRegistry:
    return TranslationRegistry(
        store=store, cache=cache, supported_languages=("en", "de")
    )


def test_bootstrap_prefers_local_cache_without_remote_call() -> None:
    store = InMemoryTranslationStore(documents={"en": {"hello": "Remote"}})
    cache = InMemoryTranslationCache(files={"en": {"hello": "Local"}})
    registry = _registry(store, cache)

    registry.bootstrap()

    assert registry.snapshot("en") == {"hello": "Local"}
    assert "en" not in store.fetched
    assert store.fetched == ["de"]


def test_bootstrap_falls_back_to_remote_and_writes_cache() -> None:
    store = InMemoryTranslationStore(documents={"de": {"hello": "Hallo"}})
    cache = InMemoryTranslationCache()
    registry = _registry(store, cache)

    registry.bootstrap()

    assert registry.snapshot("de") == {"hello": "Hallo"}
    assert cache.files["de"] == {"hello": "Hallo"}


def test_bootstrap_writes_empty_cache_when_remote_missing() -> None:
    store = InMemoryTranslationStore()
    cache = InMemoryTranslationCache()
    registry = _registry(store, cache)

    registry.bootstrap()

    assert registry.snapshot("en") == {}
    assert cache.files == {"en": {}, "de": {}}


def test_bootstrap_failure_is_isolated_per_language(app_logs) -> None:
    store = InMemoryTranslationStore(
        documents={"de": {"hello": "Hallo"}}, fail_fetch={"en"}
    )
    cache = InMemoryTranslationCache()
    registry = _registry(store, cache)

    registry.bootstrap()

    assert registry.get("en", "hello") == ""
    assert registry.get("de", "hello") == "Hallo"
    assert "en" not in cache.files
    assert "Failed to load translations" in app_logs.text


def test_get_returns_empty_string_for_missing_key_or_language() -> None:
    registry = _registry(
        InMemoryTranslationStore(),
        InMemoryTranslationCache(files={"en": {"hello": "Hello"}}),
    )
    registry.bootstrap()

    assert registry.get("en", "hello") == "Hello"
    assert registry.get("en", "missing") == ""
    assert registry.get("fr", "hello") == ""


def test_update_persists_to_remote_and_local() -> None:
    store = InMemoryTranslationStore()
    cache = InMemoryTranslationCache()
    registry = _registry(store, cache)
    registry.bootstrap()

    registry.update("en", "hello", "Hello World")

    assert registry.fetch_remote("en") == {"hello": "Hello World"}
    assert cache.files["en"] == {"hello": "Hello World"}
    assert registry.get("en", "hello") == "Hello World"


def test_update_creates_unknown_language() -> None:
    store = InMemoryTranslationStore()
    registry = _registry(store, InMemoryTranslationCache())

    registry.update("fr", "hello", "Bonjour")

    assert registry.get("fr", "hello") == "Bonjour"
    assert store.documents["fr"] == {"hello": "Bonjour"}


def test_update_keeps_state_when_remote_save_fails() -> None:
    store = InMemoryTranslationStore(fail_save=True)
    cache = InMemoryTranslationCache(files={"en": {"hello": "Hello"}})
    registry = _registry(store, cache)
    registry.bootstrap()

    with pytest.raises(UpstreamUnavailableError):
        registry.update("en", "hello", "Changed")

    assert registry.get("en", "hello") == "Hello"
    assert cache.files["en"] == {"hello": "Hello"}


def test_update_survives_local_cache_failure(app_logs) -> None:
    store = InMemoryTranslationStore()
    cache = InMemoryTranslationCache(fail_save=True)
    registry = _registry(store, cache)

    registry.update("en", "hello", "Hello")

    assert registry.get("en", "hello") == "Hello"
    assert store.documents["en"] == {"hello": "Hello"}
    assert "Failed to write local translation cache" in app_logs.text


def test_snapshot_is_a_copy() -> None:
    registry = _registry(InMemoryTranslationStore(), InMemoryTranslationCache())
    registry.update("en", "hello", "Hello")

    snapshot = registry.snapshot("en")
    snapshot["hello"] = "Tampered"

    assert registry.get("en", "hello") == "Hello"


def test_concurrent_updates_keep_every_key() -> None:
    store = InMemoryTranslationStore()
    registry = _registry(store, InMemoryTranslationCache())

    threads = [
        threading.Thread(target=registry.update, args=("en", f"key-{i}", str(i)))
        for i in range(20)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.snapshot("en")) == 20
    assert store.documents["en"] == registry.snapshot("en")


def test_normalize_dictionary_coerces_values() -> None:
    assert normalize_dictionary({"a": 1, "b": None, "c": "x"}) == {
        "a": "1",
        "b": "",
        "c": "x",
    }
    assert normalize_dictionary(["not", "a", "dict"]) is None
