from __future__ import annotations

import redis

from dinedash.application.ports.cache import CacheStore
from dinedash.infrastructure.cache.redis_client import get_redis_client


class RedisCacheStore(CacheStore):
    """TTL string store backed by Redis ``GET`` / ``SET EX``."""

    def __init__(
        self,
        client: redis.Redis | None = None,
        timeout_seconds: float = 1.0,
    ) -> None:
        self._client = client
        self._timeout_seconds = timeout_seconds

    def _redis(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis_client(timeout_seconds=self._timeout_seconds)
        return self._client

    def get(self, key: str) -> str | None:
        value = self._redis().get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._redis().set(name=key, value=value, ex=ttl_seconds)
