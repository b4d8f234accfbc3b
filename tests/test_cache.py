"""Tests for the in-memory cache."""

from labeliq.services.cache import InMemoryCache


def test_cache_returns_stored_value() -> None:
    cache = InMemoryCache()
    cache.set("fdc:food:1", {"fdcId": 1}, ttl_seconds=60)

    assert cache.get("fdc:food:1") == {"fdcId": 1}
    assert cache.get("missing") is None


def test_cache_expires_entries() -> None:
    cache = InMemoryCache()
    cache.set("fdc:food:1", "value", ttl_seconds=0)

    assert cache.get("fdc:food:1") is None
    assert len(cache) == 0


def test_cache_evicts_oldest_when_full() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)
    cache.set("c", 3, ttl_seconds=60)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3
