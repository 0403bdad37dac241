from __future__ import annotations

from dinedash.application.cache import METADATA_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import FilterMetaResponse, OrderDateRangeResponse
from dinedash.application.ports.repositories import OrderRepository, RestaurantRepository
from dinedash.domain.analytics.entities import HOURS_IN_DAY


class GetFilterMeta:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        order_repository: OrderRepository,
        cache: ResponseCache,
        ttl_seconds: int = METADATA_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._order_repository = order_repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(self) -> FilterMetaResponse:
        return FilterMetaResponse(
            date_range=self._date_range(),
            locations=self._cache.get_or_compute(
                fingerprint("locations"),
                self._ttl_seconds,
                list[str],
                self._restaurant_repository.distinct_locations,
            ),
            cuisines=self._cache.get_or_compute(
                fingerprint("cuisines"),
                self._ttl_seconds,
                list[str],
                self._restaurant_repository.distinct_cuisines,
            ),
            hours=list(range(HOURS_IN_DAY)),
        )

    def _date_range(self) -> OrderDateRangeResponse:
        def compute() -> OrderDateRangeResponse:
            min_date, max_date = self._order_repository.order_date_range()
            return OrderDateRangeResponse(
                min_date=min_date.isoformat() if min_date else None,
                max_date=max_date.isoformat() if max_date else None,
            )

        return self._cache.get_or_compute(
            fingerprint("order_date_range"),
            self._ttl_seconds,
            OrderDateRangeResponse,
            compute,
        )
