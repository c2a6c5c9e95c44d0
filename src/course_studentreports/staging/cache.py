"""Key/value backends for the transient staging cache.

Values are JSON-serialisable structures (lists of dicts).
"""
from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol

import redis

from ..core.exceptions import CacheError

logger = logging.getLogger(__name__)


class StagingCache(Protocol):
    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class InMemoryBackend(StagingCache):
    """In-memory cache backend for development/testing (single process only)."""

    def __init__(self, ttl_seconds: Optional[int] = None, *, clock: Callable[[], float] = time.monotonic):
        self._ttl = int(ttl_seconds) if ttl_seconds else None
        self._clock = clock
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry["expires"] is not None and self._clock() >= entry["expires"]:
                del self._cache[key]
                return None
            return entry["value"]

    def set(self, key: str, value: Any) -> None:
        now = self._clock()
        expires = now + self._ttl if self._ttl else None
        with self._lock:
            self._sweep(now)
            self._cache[key] = {"value": value, "expires": expires}

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def _sweep(self, now: float) -> None:
        """Drop expired entries; caller holds the lock."""
        expired = [k for k, e in self._cache.items() if e["expires"] is not None and now >= e["expires"]]
        for k in expired:
            del self._cache[k]

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None


class RedisBackend(StagingCache):
    """Redis cache backend; entries expire after the configured TTL."""

    def __init__(self, client: redis.Redis, ttl_seconds: Optional[int] = None):
        self._redis = client
        self._ttl = int(ttl_seconds) if ttl_seconds else None

    @classmethod
    def from_url(cls, url: str, ttl_seconds: Optional[int] = None) -> "RedisBackend":
        return cls(redis.Redis.from_url(url, decode_responses=True), ttl_seconds)

    def get(self, key: str) -> Optional[Any]:
        try:
            value = self._redis.get(key)
        except redis.RedisError as e:
            logger.error("Cache get failed for key '%s': %s", key, e)
            raise CacheError(f"Cache get failed: {e}") from e
        if value is None:
            return None
        return json.loads(value)

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        try:
            if self._ttl:
                self._redis.setex(key, self._ttl, payload)
            else:
                self._redis.set(key, payload)
        except redis.RedisError as e:
            logger.error("Cache set failed for key '%s': %s", key, e)
            raise CacheError(f"Cache set failed: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            return self._redis.delete(key) > 0
        except redis.RedisError as e:
            logger.error("Cache delete failed for key '%s': %s", key, e)
            raise CacheError(f"Cache delete failed: {e}") from e


def build_cache(*, backend: str, ttl_seconds: Optional[int] = None, redis_url: Optional[str] = None) -> StagingCache:
    backend = (backend or "memory").lower()
    if backend == "redis":
        if not redis_url:
            raise CacheError("REDIS_URL is required for the redis staging backend")
        return RedisBackend.from_url(redis_url, ttl_seconds)
    if backend == "memory":
        return InMemoryBackend(ttl_seconds)
    raise CacheError(f"Unknown staging cache backend: {backend!r}")
