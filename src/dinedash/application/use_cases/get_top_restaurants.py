from __future__ import annotations

from dinedash.application.analytics.aggregator import DEFAULT_TOP_LIMIT, MetricsAggregator
from dinedash.application.cache import TOP_RESTAURANTS_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import TopRestaurantsResponse
from dinedash.application.mappers.analytics_mapper import (
    to_date_window,
    to_ranked_restaurant_response,
)
from dinedash.application.ports.repositories import RestaurantRepository
from dinedash.domain.analytics.entities import DateRange


class GetTopRestaurants:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        aggregator: MetricsAggregator,
        cache: ResponseCache,
        ttl_seconds: int = TOP_RESTAURANTS_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._aggregator = aggregator
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(
        self,
        date_range: DateRange,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> TopRestaurantsResponse:
        key = fingerprint(
            "top_restaurants",
            start=date_range.start,
            end=date_range.end,
            limit=limit,
        )
        return self._cache.get_or_compute(
            key,
            self._ttl_seconds,
            TopRestaurantsResponse,
            lambda: self._compute(date_range, limit),
        )

    def _compute(self, date_range: DateRange, limit: int) -> TopRestaurantsResponse:
        rankings = self._aggregator.top_restaurants(date_range, limit)
        return TopRestaurantsResponse(
            date_range=to_date_window(date_range),
            total_restaurants_analyzed=self._restaurant_repository.count(),
            rankings=[to_ranked_restaurant_response(ranked) for ranked in rankings],
        )
