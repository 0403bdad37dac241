from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dinedash.application.analytics.aggregator import MetricsAggregator
from dinedash.domain.analytics.entities import (
    DailyTotalsRow,
    DateRange,
    GroupBy,
    GroupTotalsRow,
    HourlyCountRow,
    OrderFilter,
    RestaurantRevenueRow,
)
from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.restaurant.entities import Restaurant
from dinedash.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

JUNE_22 = date(2025, 6, 22)


class FakeOrderRepository:
    def __init__(self) -> None:
        self.totals: list[DailyTotalsRow] = []
        self.hourly: list[HourlyCountRow] = []
        self.revenue_rows: list[RestaurantRevenueRow] = []
        self.group_rows: list[GroupTotalsRow] = []
        self.calls: list[str] = []

    def daily_totals(self, restaurant_id, date_range):
        self.calls.append("daily_totals")
        return self.totals

    def hourly_counts_by_day(self, restaurant_id, date_range):
        self.calls.append("hourly_counts_by_day")
        return self.hourly

    def revenue_by_restaurant(self, date_range, limit):
        self.calls.append("revenue_by_restaurant")
        return self.revenue_rows

    def grouped_totals(self, order_filter, group_by):
        self.calls.append("grouped_totals")
        return self.group_rows


def _restaurant(restaurant_id: int) -> Restaurant:
    return Restaurant(
        restaurant_id=RestaurantId(restaurant_id),
        name=f"Restaurant {restaurant_id}",
        location="Delhi",
        cuisine="Italian",
    )


def test_daily_metrics_skips_hourly_query_without_orders() -> None:
    repository = FakeOrderRepository()
    aggregator = MetricsAggregator(repository)

    metrics = aggregator.daily_metrics(RestaurantId(1), DateRange(start=JUNE_22, end=JUNE_22))

    assert metrics == []
    assert repository.calls == ["daily_totals"]


def test_daily_metrics_for_two_orders() -> None:
    repository = FakeOrderRepository()
    repository.totals = [DailyTotalsRow(day=JUNE_22, order_count=2, revenue=Decimal("300"))]
    repository.hourly = [
        HourlyCountRow(day=JUNE_22, hour=10, order_count=1),
        HourlyCountRow(day=JUNE_22, hour=14, order_count=1),
    ]

    metrics = MetricsAggregator(repository).daily_metrics(
        RestaurantId(1),
        DateRange(start=JUNE_22, end=JUNE_22),
    )

    assert [(m.order_count, m.total_revenue, m.peak_hour.hour) for m in metrics] == [
        (2, Decimal("300.00"), 10)
    ]


@pytest.mark.parametrize("limit", [0, 11])
def test_top_restaurants_rejects_out_of_range_limit(limit: int) -> None:
    aggregator = MetricsAggregator(FakeOrderRepository())

    with pytest.raises(ValueError):
        aggregator.top_restaurants(DateRange(start=JUNE_22, end=JUNE_22), limit)


def test_top_restaurants_never_exceeds_limit() -> None:
    repository = FakeOrderRepository()
    repository.revenue_rows = [
        RestaurantRevenueRow(_restaurant(index), 1, Decimal(100 - index)) for index in range(1, 6)
    ]

    ranked = MetricsAggregator(repository).top_restaurants(
        DateRange(start=JUNE_22, end=JUNE_22),
        limit=3,
    )

    assert [entry.rank for entry in ranked] == [1, 2, 3]
    assert [entry.restaurant.restaurant_id for entry in ranked] == [1, 2, 3]


def test_top_restaurants_returns_fewer_when_fewer_have_orders(seeded_engine) -> None:
    aggregator = MetricsAggregator(SqlAlchemyOrderRepository(engine=seeded_engine))

    ranked = aggregator.top_restaurants(DateRange(start=JUNE_22, end=JUNE_22), limit=3)

    assert [entry.restaurant.name for entry in ranked] == ["Sushi Bay", "Tandoori Treats"]
    assert [entry.total_revenue for entry in ranked] == [Decimal("900.00"), Decimal("300.00")]
    assert sum(entry.revenue_percentage for entry in ranked) == Decimal("100.00")


def test_grouped_analytics_summary_matches_breakdown(seeded_engine) -> None:
    aggregator = MetricsAggregator(SqlAlchemyOrderRepository(engine=seeded_engine))

    summary, breakdown = aggregator.grouped_analytics(OrderFilter(), GroupBy.HOUR)

    assert summary.filtered_orders == sum(group.order_count for group in breakdown) == 10
    assert summary.total_revenue == Decimal("2305.50")
    assert summary.avg_order_value == Decimal("230.55")
    assert [group.group_label for group in breakdown] == [0, 10, 12, 14, 19, 20, 21, 23]
