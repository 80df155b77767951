"""
Unit tests for the in-memory key-value store.
"""

import pytest

from app.adapters.outbound.cache.store import InMemoryStore, create_store
from app.adapters.configuration.config import settings


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    return InMemoryStore(clock=clock)


class TestInMemoryStore:

    async def test_get_missing_key(self, memory_store):
        assert await memory_store.get("missing") is None

    async def test_set_and_get(self, memory_store):
        await memory_store.set("key", {"a": [1, 2]})
        assert await memory_store.get("key") == {"a": [1, 2]}

    async def test_returned_values_are_copies(self, memory_store):
        await memory_store.set("key", [1, 2])
        value = await memory_store.get("key")
        value.append(3)
        assert await memory_store.get("key") == [1, 2]

    async def test_entry_expires_after_ttl(self, memory_store, clock):
        await memory_store.set("key", "value", ttl=10)
        clock.advance(9.9)
        assert await memory_store.get("key") == "value"
        clock.advance(0.1)
        assert await memory_store.get("key") is None

    async def test_zero_ttl_is_never_stored(self, memory_store, clock):
        await memory_store.set("key", "old")
        await memory_store.set("key", "new", ttl=0)
        clock.advance(1000)
        assert await memory_store.get("key") is None
        assert len(memory_store) == 0

    async def test_ttl_reports_remaining_seconds(self, memory_store, clock):
        await memory_store.set("key", "value", ttl=60)
        clock.advance(15)
        assert await memory_store.ttl("key") == pytest.approx(45)
        await memory_store.set("forever", "value")
        assert await memory_store.ttl("forever") is None
        assert await memory_store.ttl("missing") is None

    async def test_delete(self, memory_store):
        await memory_store.set("key", "value")
        await memory_store.delete("key")
        await memory_store.delete("key")
        assert await memory_store.get("key") is None

    async def test_sweep_removes_only_expired(self, memory_store, clock):
        await memory_store.set("short", 1, ttl=5)
        await memory_store.set("long", 2, ttl=50)
        await memory_store.set("forever", 3)
        clock.advance(10)

        assert await memory_store.sweep() == 1
        assert len(memory_store) == 2
        assert await memory_store.get("long") == 2


class TestCreateStore:

    async def test_memory_backend(self, monkeypatch):
        monkeypatch.setattr(settings, "STORE_BACKEND", "memory")
        store = await create_store()
        assert isinstance(store, InMemoryStore)

    async def test_auto_without_redis_url_uses_memory(self, monkeypatch):
        monkeypatch.setattr(settings, "STORE_BACKEND", "auto")
        monkeypatch.setattr(settings, "REDIS_URL", None)
        store = await create_store()
        assert isinstance(store, InMemoryStore)

    async def test_redis_backend_requires_url(self, monkeypatch):
        monkeypatch.setattr(settings, "STORE_BACKEND", "redis")
        monkeypatch.setattr(settings, "REDIS_URL", None)
        with pytest.raises(RuntimeError):
            await create_store()
