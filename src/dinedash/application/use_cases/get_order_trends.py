from __future__ import annotations

from dinedash.application.analytics.aggregator import MetricsAggregator
from dinedash.application.cache import TRENDS_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import TrendsResponse
from dinedash.application.errors import RestaurantNotFoundError
from dinedash.application.mappers.analytics_mapper import (
    to_daily_metric_response,
    to_trends_date_range,
    to_trends_summary,
)
from dinedash.application.mappers.restaurant_mapper import to_restaurant_ref
from dinedash.application.ports.repositories import RestaurantRepository
from dinedash.domain.analytics.aggregation import summarize_trend
from dinedash.domain.analytics.entities import DateRange
from dinedash.domain.common.ids import RestaurantId


class GetOrderTrends:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        aggregator: MetricsAggregator,
        cache: ResponseCache,
        ttl_seconds: int = TRENDS_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._aggregator = aggregator
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(self, restaurant_id: RestaurantId, date_range: DateRange) -> TrendsResponse:
        key = fingerprint(
            "trends",
            restaurant_id=restaurant_id,
            start=date_range.start,
            end=date_range.end,
        )
        return self._cache.get_or_compute(
            key,
            self._ttl_seconds,
            TrendsResponse,
            lambda: self._compute(restaurant_id, date_range),
        )

    def _compute(self, restaurant_id: RestaurantId, date_range: DateRange) -> TrendsResponse:
        restaurant = self._restaurant_repository.get(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")

        metrics = self._aggregator.daily_metrics(restaurant_id, date_range)
        return TrendsResponse(
            restaurant=to_restaurant_ref(restaurant),
            date_range=to_trends_date_range(date_range),
            daily_metrics=[to_daily_metric_response(metric) for metric in metrics],
            summary=to_trends_summary(summarize_trend(metrics)),
        )
