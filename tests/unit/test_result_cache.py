import pytest

from promptsmith.config import CacheConfig
from promptsmith.storage.cache import InMemoryResultCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def result(orchestrator):
    return orchestrator.process("Create a SQL table for orders with 3 columns.", domain="sql")


def test_round_trip_returns_equal_copy(result) -> None:
    cache = InMemoryResultCache(clock=FakeClock())

    cache.set("key", result, ttl_seconds=60)
    restored = cache.get("key")

    assert restored == result
    assert restored is not result
    assert restored.metadata.processing_time_ms == result.metadata.processing_time_ms
    assert restored.analysis.entities == result.analysis.entities


def test_entries_expire(result) -> None:
    clock = FakeClock()
    cache = InMemoryResultCache(clock=clock)
    cache.set("key", result, ttl_seconds=30)

    clock.now += 29
    assert cache.get("key") is not None
    assert cache.ttl_remaining("key") == pytest.approx(1.0)

    clock.now += 1
    assert cache.get("key") is None
    assert len(cache) == 0


def test_non_positive_ttl_is_not_stored(result) -> None:
    cache = InMemoryResultCache(clock=FakeClock())

    cache.set("key", result, ttl_seconds=0)

    assert cache.get("key") is None


def test_least_recently_used_entry_is_evicted(result) -> None:
    cache = InMemoryResultCache(CacheConfig(max_entries=2), clock=FakeClock())
    cache.set("a", result, ttl_seconds=60)
    cache.set("b", result, ttl_seconds=60)

    assert cache.get("a") is not None
    cache.set("c", result, ttl_seconds=60)

    assert cache.get("b") is None
    assert cache.get("a") is not None
    assert cache.get("c") is not None


def test_clear_removes_everything(result) -> None:
    cache = InMemoryResultCache(clock=FakeClock())
    cache.set("a", result, ttl_seconds=60)

    cache.clear()

    assert len(cache) == 0
    assert cache.ttl_remaining("a") is None
