from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dinedash.domain.analytics.aggregation import (
    build_breakdown,
    build_daily_metrics,
    most_common_peak_hour,
    peak_hours_by_day,
    rank_restaurants,
    summarize_breakdown,
    summarize_trend,
)
from dinedash.domain.analytics.entities import (
    DailyTotalsRow,
    DateRange,
    GroupTotalsRow,
    HourlyCountRow,
    OrderFilter,
    PeakHour,
    RestaurantRevenueRow,
    format_hour,
)
from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.restaurant.entities import Restaurant

JUNE_22 = date(2025, 6, 22)
JUNE_23 = date(2025, 6, 23)
JUNE_24 = date(2025, 6, 24)


def _restaurant(restaurant_id: int, name: str) -> Restaurant:
    return Restaurant(
        restaurant_id=RestaurantId(restaurant_id),
        name=name,
        location="Mumbai",
        cuisine="Japanese",
    )


def test_two_orders_on_one_day_pick_lowest_hour_as_peak() -> None:
    metrics = build_daily_metrics(
        [DailyTotalsRow(day=JUNE_22, order_count=2, revenue=Decimal("300"))],
        [
            HourlyCountRow(day=JUNE_22, hour=14, order_count=1),
            HourlyCountRow(day=JUNE_22, hour=10, order_count=1),
        ],
    )

    assert len(metrics) == 1
    metric = metrics[0]
    assert metric.order_count == 2
    assert metric.total_revenue == Decimal("300.00")
    assert metric.avg_order_value == Decimal("150.00")
    assert metric.peak_hour == PeakHour(hour=10, order_count=1)
    assert metric.peak_hour.hour_formatted == "10:00 AM"
    assert metric.day_of_week == "Sunday"


def test_peak_hour_prefers_highest_count() -> None:
    peaks = peak_hours_by_day(
        [
            HourlyCountRow(day=JUNE_23, hour=9, order_count=1),
            HourlyCountRow(day=JUNE_23, hour=19, order_count=4),
            HourlyCountRow(day=JUNE_23, hour=13, order_count=4),
            HourlyCountRow(day=JUNE_24, hour=2, order_count=0),
        ]
    )

    assert peaks == {JUNE_23: PeakHour(hour=13, order_count=4)}


def test_days_without_orders_are_omitted_and_sorted() -> None:
    metrics = build_daily_metrics(
        [
            DailyTotalsRow(day=JUNE_24, order_count=1, revenue=Decimal("10")),
            DailyTotalsRow(day=JUNE_23, order_count=0, revenue=Decimal("0")),
            DailyTotalsRow(day=JUNE_22, order_count=3, revenue=Decimal("100")),
        ],
        [],
    )

    assert [metric.day for metric in metrics] == [JUNE_22, JUNE_24]
    assert metrics[0].avg_order_value == Decimal("33.33")
    assert metrics[0].peak_hour.hour_formatted == "N/A"


def test_trend_summary_totals_match_daily_metrics() -> None:
    metrics = build_daily_metrics(
        [
            DailyTotalsRow(day=JUNE_22, order_count=2, revenue=Decimal("300.00")),
            DailyTotalsRow(day=JUNE_23, order_count=3, revenue=Decimal("280.00")),
            DailyTotalsRow(day=JUNE_24, order_count=1, revenue=Decimal("75.00")),
        ],
        [
            HourlyCountRow(day=JUNE_22, hour=10, order_count=1),
            HourlyCountRow(day=JUNE_22, hour=14, order_count=1),
            HourlyCountRow(day=JUNE_23, hour=14, order_count=2),
            HourlyCountRow(day=JUNE_23, hour=19, order_count=1),
            HourlyCountRow(day=JUNE_24, hour=14, order_count=1),
        ],
    )

    summary = summarize_trend(metrics)

    assert summary.total_orders == sum(metric.order_count for metric in metrics) == 6
    assert summary.total_revenue == Decimal("655.00")
    assert summary.avg_order_value == Decimal("109.17")
    assert summary.most_common_peak_hour == 14
    assert summary.most_common_peak_hour_formatted == "2:00 PM"


def test_most_common_peak_hour_tie_keeps_earliest_day() -> None:
    metrics = build_daily_metrics(
        [
            DailyTotalsRow(day=JUNE_22, order_count=1, revenue=Decimal("1")),
            DailyTotalsRow(day=JUNE_23, order_count=1, revenue=Decimal("1")),
        ],
        [
            HourlyCountRow(day=JUNE_22, hour=18, order_count=1),
            HourlyCountRow(day=JUNE_23, hour=9, order_count=1),
        ],
    )

    assert most_common_peak_hour(metrics) == 18


def test_empty_trend_summary_is_zeroed() -> None:
    summary = summarize_trend([])

    assert summary.total_orders == 0
    assert summary.total_revenue == Decimal("0.00")
    assert summary.avg_order_value == Decimal("0.00")
    assert summary.most_common_peak_hour == 0


def test_ranking_orders_by_revenue_and_shares_sum_to_hundred() -> None:
    ranked = rank_restaurants(
        [
            RestaurantRevenueRow(_restaurant(101, "Tandoori Treats"), 6, Decimal("655.00")),
            RestaurantRevenueRow(_restaurant(102, "Sushi Bay"), 2, Decimal("1350.50")),
            RestaurantRevenueRow(_restaurant(103, "Pasta Palace"), 2, Decimal("300.00")),
        ]
    )

    assert [entry.rank for entry in ranked] == [1, 2, 3]
    assert [entry.restaurant.restaurant_id for entry in ranked] == [102, 101, 103]
    revenues = [entry.total_revenue for entry in ranked]
    assert revenues == sorted(revenues, reverse=True)
    assert [entry.revenue_percentage for entry in ranked] == [
        Decimal("58.58"),
        Decimal("28.41"),
        Decimal("13.01"),
    ]
    total_share = sum(entry.revenue_percentage for entry in ranked)
    assert abs(total_share - Decimal("100")) <= Decimal("0.01")
    assert ranked[1].avg_order_value == Decimal("109.17")


def test_ranking_tie_prefers_lower_restaurant_id() -> None:
    ranked = rank_restaurants(
        [
            RestaurantRevenueRow(_restaurant(7, "Later"), 1, Decimal("50")),
            RestaurantRevenueRow(_restaurant(3, "Earlier"), 1, Decimal("50")),
        ]
    )

    assert [entry.restaurant.restaurant_id for entry in ranked] == [3, 7]
    assert [entry.revenue_percentage for entry in ranked] == [Decimal("50.00"), Decimal("50.00")]


def test_ranking_of_zero_revenue_has_zero_share() -> None:
    ranked = rank_restaurants(
        [RestaurantRevenueRow(_restaurant(1, "Free Lunch"), 2, Decimal("0"))]
    )

    assert ranked[0].revenue_percentage == Decimal("0.00")
    assert ranked[0].avg_order_value == Decimal("0.00")


def test_breakdown_summary_adds_up_groups() -> None:
    breakdown = build_breakdown(
        [
            GroupTotalsRow(label=10, order_count=1, revenue=Decimal("100")),
            GroupTotalsRow(label=14, order_count=3, revenue=Decimal("400")),
            GroupTotalsRow(label=16, order_count=0, revenue=Decimal("0")),
        ]
    )
    summary = summarize_breakdown(breakdown)

    assert [group.group_label for group in breakdown] == [10, 14]
    assert breakdown[1].avg_order_value == Decimal("133.33")
    assert summary.filtered_orders == 4
    assert summary.total_revenue == Decimal("500.00")
    assert summary.avg_order_value == Decimal("125.00")


def test_empty_breakdown_summary() -> None:
    summary = summarize_breakdown([])

    assert summary.filtered_orders == 0
    assert summary.total_revenue == Decimal("0.00")
    assert summary.avg_order_value == Decimal("0.00")


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "12:00 AM"), (9, "9:00 AM"), (12, "12:00 PM"), (14, "2:00 PM"), (23, "11:00 PM")],
)
def test_format_hour_uses_twelve_hour_clock(hour: int, expected: str) -> None:
    assert format_hour(hour) == expected


def test_format_hour_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        format_hour(24)


def test_date_range_counts_both_ends() -> None:
    assert DateRange(start=JUNE_22, end=JUNE_22).days == 1
    assert DateRange(start=JUNE_22, end=JUNE_24).describe() == "2025-06-22 to 2025-06-24"
    with pytest.raises(ValueError):
        DateRange(start=JUNE_24, end=JUNE_22)


def test_order_filter_ignores_zero_amounts_and_half_ranges() -> None:
    order_filter = OrderFilter(
        start_date=JUNE_22,
        min_amount=Decimal("0"),
        max_amount=Decimal("0"),
        start_hour=9,
    )

    assert order_filter.date_range is None
    assert order_filter.amount_floor is None
    assert order_filter.amount_ceiling is None
    assert not order_filter.has_amount_range
    assert order_filter.hour_range is None


def test_order_filter_keeps_nonzero_bounds() -> None:
    order_filter = OrderFilter(
        min_amount=Decimal("0"),
        max_amount=Decimal("500"),
        start_hour=0,
        end_hour=5,
    )

    assert order_filter.amount_floor is None
    assert order_filter.amount_ceiling == Decimal("500")
    assert order_filter.has_amount_range
    assert order_filter.hour_range == (0, 5)
