from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

CACHE_REQUESTS_TOTAL = Counter(
    "dinedash_cache_requests_total",
    "Total number of analytics cache lookups by outcome.",
    ["operation", "result"],
)

AGGREGATION_DURATION_SECONDS = Histogram(
    "dinedash_aggregation_duration_seconds",
    "Time spent computing an aggregate from the datastore.",
    ["operation"],
)

VALIDATION_FAILURES_TOTAL = Counter(
    "dinedash_validation_failures_total",
    "Total number of rejected analytics requests.",
    ["endpoint"],
)


def record_cache_hit(operation: str) -> None:
    CACHE_REQUESTS_TOTAL.labels(operation=operation, result="hit").inc()


def record_cache_miss(operation: str) -> None:
    CACHE_REQUESTS_TOTAL.labels(operation=operation, result="miss").inc()


def record_cache_error(operation: str) -> None:
    CACHE_REQUESTS_TOTAL.labels(operation=operation, result="error").inc()


def record_validation_failure(endpoint: str) -> None:
    VALIDATION_FAILURES_TOTAL.labels(endpoint=endpoint).inc()


@contextmanager
def observe_aggregation(operation: str) -> Iterator[None]:
    started = time.perf_counter()
    try:
        yield
    finally:
        AGGREGATION_DURATION_SECONDS.labels(operation=operation).observe(
            time.perf_counter() - started
        )
