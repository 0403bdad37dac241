from __future__ import annotations

from dataclasses import asdict

from dinedash.application.analytics.aggregator import MetricsAggregator
from dinedash.application.cache import (
    FILTERED_ANALYTICS_TTL_SECONDS,
    ResponseCache,
    fingerprint,
)
from dinedash.application.dto.responses import FilteredAnalyticsResponse
from dinedash.application.mappers.analytics_mapper import to_breakdown_row, to_filtered_summary
from dinedash.application.ports.repositories import RestaurantRepository
from dinedash.domain.analytics.entities import GroupBy, OrderFilter, format_hour
from dinedash.domain.common.money import format_amount

CURRENCY_SYMBOL = "₹"
UNBOUNDED = "∞"


class GetFilteredAnalytics:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        aggregator: MetricsAggregator,
        cache: ResponseCache,
        ttl_seconds: int = FILTERED_ANALYTICS_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._aggregator = aggregator
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(
        self,
        order_filter: OrderFilter,
        group_by: GroupBy = GroupBy.DAY,
    ) -> FilteredAnalyticsResponse:
        key = fingerprint("filtered_analytics", group_by=group_by.value, **asdict(order_filter))
        return self._cache.get_or_compute(
            key,
            self._ttl_seconds,
            FilteredAnalyticsResponse,
            lambda: self._compute(order_filter, group_by),
        )

    def _compute(self, order_filter: OrderFilter, group_by: GroupBy) -> FilteredAnalyticsResponse:
        summary, breakdown = self._aggregator.grouped_analytics(order_filter, group_by)
        return FilteredAnalyticsResponse(
            filters_applied=self._describe_filters(order_filter),
            summary=to_filtered_summary(summary),
            breakdown=[to_breakdown_row(group) for group in breakdown],
        )

    def _describe_filters(self, order_filter: OrderFilter) -> dict[str, str]:
        applied: dict[str, str] = {}

        if order_filter.restaurant_id is not None:
            restaurant = self._restaurant_repository.get(order_filter.restaurant_id)
            applied["restaurant"] = (
                restaurant.describe()
                if restaurant is not None
                else f"ID: {order_filter.restaurant_id}"
            )

        date_range = order_filter.date_range
        if date_range is not None:
            applied["date_range"] = date_range.describe()

        if order_filter.has_amount_range:
            floor = order_filter.amount_floor
            ceiling = order_filter.amount_ceiling
            low = format_amount(floor) if floor is not None else "0"
            high = format_amount(ceiling) if ceiling is not None else UNBOUNDED
            applied["amount_range"] = f"{CURRENCY_SYMBOL}{low} - {CURRENCY_SYMBOL}{high}"

        hour_range = order_filter.hour_range
        if hour_range is not None:
            start_hour, end_hour = hour_range
            applied["hour_range"] = f"{format_hour(start_hour)} - {format_hour(end_hour)}"

        return applied
