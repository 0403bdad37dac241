from __future__ import annotations

from opentelemetry import trace

from dinedash.application.metrics.analytics import observe_aggregation
from dinedash.application.ports.repositories import OrderRepository
from dinedash.domain.analytics.aggregation import (
    build_breakdown,
    build_daily_metrics,
    rank_restaurants,
    summarize_breakdown,
)
from dinedash.domain.analytics.entities import (
    AnalyticsSummary,
    DailyMetric,
    DateRange,
    GroupBy,
    GroupedMetric,
    OrderFilter,
    RankedRestaurant,
)
from dinedash.domain.common.ids import RestaurantId

MIN_TOP_LIMIT = 1
MAX_TOP_LIMIT = 10
DEFAULT_TOP_LIMIT = 3

tracer = trace.get_tracer(__name__)


class MetricsAggregator:
    """Computes grouped order metrics; assumes validated input."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def daily_metrics(
        self,
        restaurant_id: RestaurantId,
        date_range: DateRange,
    ) -> list[DailyMetric]:
        with tracer.start_as_current_span("aggregate.daily_metrics"), observe_aggregation(
            "daily_metrics"
        ):
            totals = self._order_repository.daily_totals(restaurant_id, date_range)
            if not totals:
                return []
            hourly = self._order_repository.hourly_counts_by_day(restaurant_id, date_range)
            return build_daily_metrics(totals, hourly)

    def top_restaurants(
        self,
        date_range: DateRange,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> list[RankedRestaurant]:
        if limit < MIN_TOP_LIMIT or limit > MAX_TOP_LIMIT:
            raise ValueError(f"limit must be between {MIN_TOP_LIMIT} and {MAX_TOP_LIMIT}")

        with tracer.start_as_current_span("aggregate.top_restaurants"), observe_aggregation(
            "top_restaurants"
        ):
            rows = self._order_repository.revenue_by_restaurant(date_range, limit)
            return rank_restaurants(rows[:limit])

    def grouped_analytics(
        self,
        order_filter: OrderFilter,
        group_by: GroupBy = GroupBy.DAY,
    ) -> tuple[AnalyticsSummary, list[GroupedMetric]]:
        with tracer.start_as_current_span("aggregate.grouped_analytics") as span:
            span.set_attribute("dinedash.group_by", group_by.value)
            with observe_aggregation("grouped_analytics"):
                rows = self._order_repository.grouped_totals(order_filter, group_by)
                breakdown = build_breakdown(rows)
                return summarize_breakdown(breakdown), breakdown
