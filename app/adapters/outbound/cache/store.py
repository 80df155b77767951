# app/adapters/outbound/cache/store.py

"""
Shared key-value stores.

Backs the rate limiter windows and the response cache. The in-memory
store serves tests and single-process deployments; the Redis store
shares state between processes and relies on native key expiry.
"""

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.adapters.configuration.config import settings
from app.application.ports.outbound import IKeyValueStore

logger = logging.getLogger(__name__)


class InMemoryStore(IKeyValueStore):
    """
    Process-local store with per-key expiry.

    Values are kept JSON-encoded so callers never share mutable objects,
    matching what a distributed backend would hand back.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        # Structure: {key: (encoded_value, expires_at or None)}
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _is_expired(self, expires_at: Optional[float], now: float) -> bool:
        return expires_at is not None and expires_at <= now

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            encoded, expires_at = entry
            if self._is_expired(expires_at, self._clock()):
                del self._data[key]
                return None
        return json.loads(encoded)

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        encoded = json.dumps(value)
        with self._lock:
            # A non-positive ttl expires the entry at once
            if ttl is not None and ttl <= 0:
                self._data.pop(key, None)
                return
            expires_at = self._clock() + ttl if ttl is not None else None
            self._data[key] = (encoded, expires_at)

    async def ttl(self, key: str) -> Optional[float]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            _, expires_at = entry
            if expires_at is None:
                return None
            remaining = expires_at - self._clock()
            if remaining <= 0:
                del self._data[key]
                return None
            return remaining

    async def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    async def sweep(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [key for key, (_, expires_at) in self._data.items()
                       if self._is_expired(expires_at, now)]
            for key in expired:
                del self._data[key]
        if expired:
            logger.debug(f"Swept {len(expired)} expired keys from in-memory store")
        return len(expired)

    def __len__(self) -> int:
        return len(self._data)


class RedisStore(IKeyValueStore):
    """
    Redis-backed store. Expiry is native, so sweep() has nothing to do.
    """

    def __init__(self, redis_url: str, key_prefix: str = "rbac:"):
        self._client = redis.from_url(redis_url, decode_responses=True)
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def ping(self) -> bool:
        return await self._client.ping()

    async def get(self, key: str) -> Optional[Any]:
        data = await self._client.get(self._key(key))
        if data is None:
            return None
        return json.loads(data)

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        encoded = json.dumps(value)
        if ttl is not None and ttl <= 0:
            await self._client.delete(self._key(key))
        elif ttl is not None:
            await self._client.set(self._key(key), encoded, px=max(1, int(ttl * 1000)))
        else:
            await self._client.set(self._key(key), encoded)

    async def ttl(self, key: str) -> Optional[float]:
        remaining_ms = await self._client.pttl(self._key(key))
        # -2: missing key, -1: no expiry
        if remaining_ms is None or remaining_ms < 0:
            return None
        return remaining_ms / 1000

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def sweep(self) -> int:
        return 0

    async def close(self) -> None:
        await self._client.aclose()


async def create_store() -> IKeyValueStore:
    """
    Build the store selected by STORE_BACKEND.

    "auto" uses Redis when REDIS_URL is set and reachable, in-memory otherwise.
    "redis" requires REDIS_URL and fails startup if Redis is unreachable.
    """
    backend = settings.STORE_BACKEND

    if backend == "memory":
        logger.info("Using in-memory key-value store")
        return InMemoryStore()

    if backend == "redis" and not settings.REDIS_URL:
        raise RuntimeError("STORE_BACKEND=redis requires REDIS_URL")

    if settings.REDIS_URL:
        store = RedisStore(settings.REDIS_URL)
        try:
            await store.ping()
            logger.info("Using Redis key-value store")
            return store
        except (RedisError, OSError) as e:
            await store.close()
            if backend == "redis":
                raise
            logger.warning(f"Redis unavailable ({e}), falling back to in-memory store")

    logger.info("Using in-memory key-value store")
    return InMemoryStore()
