"""Tests for the TTL cache."""

from __future__ import annotations

from smart_money.common.cache import MemoryCache


class FakeClock:
    def __init__(self) -> None:
        self.t = 1_000.0

    def __call__(self) -> float:
        return self.t


def test_get_before_expiry():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set("k", {"a": 1}, ttl=60)

    clock.t += 59
    assert cache.get("k") == {"a": 1}


def test_expired_entry_dropped():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    cache.set("k", [1, 2], ttl=60)

    clock.t += 61
    assert cache.get("k") is None
    assert len(cache) == 0


def test_last_write_wins_and_clear():
    cache = MemoryCache()
    cache.set("k", 1, ttl=60)
    cache.set("k", 2, ttl=60)
    assert cache.get("k") == 2

    cache.clear()
    assert cache.get("k") is None
    assert cache.get("missing") is None
