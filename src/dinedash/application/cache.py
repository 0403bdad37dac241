from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Callable, TypeVar

from pydantic import TypeAdapter, ValidationError

from dinedash.application.metrics.analytics import (
    record_cache_error,
    record_cache_hit,
    record_cache_miss,
)
from dinedash.application.ports.cache import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_PREFIX = "dinedash"

TRENDS_TTL_SECONDS = 900
TOP_RESTAURANTS_TTL_SECONDS = 900
FILTERED_ANALYTICS_TTL_SECONDS = 900
RESTAURANT_STATS_TTL_SECONDS = 300
RESTAURANT_LIST_TTL_SECONDS = 300
METADATA_TTL_SECONDS = 3600


def fingerprint(operation: str, **params: Any) -> str:
    canonical = json.dumps(params, sort_keys=True, default=str, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:{operation}:{digest}"


def _operation_of(key: str) -> str:
    parts = key.split(":")
    if len(parts) >= 3 and parts[0] == KEY_PREFIX:
        return parts[1]
    return "unknown"


class ResponseCache:
    """Get-or-compute wrapper over a TTL key-value store.

    Misses are not deduplicated across concurrent callers; each caller runs
    its producer once. A failing or missing store only disables caching.
    """

    def __init__(self, store: CacheStore | None) -> None:
        self._store = store
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, response_type: type[T]) -> TypeAdapter[T]:
        adapter = self._adapters.get(response_type)
        if adapter is None:
            adapter = TypeAdapter(response_type)
            self._adapters[response_type] = adapter
        return adapter

    def _cache_get(self, key: str) -> str | None:
        if self._store is None:
            return None
        try:
            return self._store.get(key)
        except Exception:
            record_cache_error(_operation_of(key))
            logger.warning("cache_get_failed", extra={"cache_key": key}, exc_info=True)
            return None

    def _cache_set(self, key: str, value: str, ttl_seconds: int) -> None:
        if self._store is None:
            return
        try:
            self._store.set(key, value, ttl_seconds=ttl_seconds)
        except Exception:
            record_cache_error(_operation_of(key))
            logger.warning("cache_set_failed", extra={"cache_key": key}, exc_info=True)

    def get_or_compute(
        self,
        key: str,
        ttl_seconds: int,
        response_type: type[T],
        producer: Callable[[], T],
    ) -> T:
        operation = _operation_of(key)
        adapter = self._adapter(response_type)

        cached = self._cache_get(key)
        if cached is not None:
            try:
                value = adapter.validate_json(cached)
            except ValidationError:
                logger.warning("cache_payload_invalid", extra={"cache_key": key})
            else:
                record_cache_hit(operation)
                return value

        record_cache_miss(operation)
        value = producer()
        self._cache_set(key, adapter.dump_json(value).decode("utf-8"), ttl_seconds)
        return value
