from __future__ import annotations

import logging

from dinedash.application.analytics.aggregator import MetricsAggregator
from dinedash.application.cache import ResponseCache
from dinedash.application.validation import RequestValidator
from dinedash.infrastructure.cache.cache_store import RedisCacheStore
from dinedash.infrastructure.cache.redis_client import redis_configured
from dinedash.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from dinedash.infrastructure.db.repositories.restaurant_repo import (
    SqlAlchemyRestaurantRepository,
)

logger = logging.getLogger(__name__)

_cache_warning_emitted = False


def restaurant_repository() -> SqlAlchemyRestaurantRepository:
    return SqlAlchemyRestaurantRepository()


def order_repository() -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository()


def response_cache() -> ResponseCache:
    global _cache_warning_emitted
    if redis_configured():
        return ResponseCache(RedisCacheStore())
    if not _cache_warning_emitted:
        logger.warning("response_cache_disabled")
        _cache_warning_emitted = True
    return ResponseCache(None)


def metrics_aggregator() -> MetricsAggregator:
    return MetricsAggregator(order_repository())


def request_validator() -> RequestValidator:
    return RequestValidator(restaurant_repository())
