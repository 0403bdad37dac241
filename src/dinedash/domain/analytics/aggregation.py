"""Pure aggregation steps applied on top of grouped datastore rows.

The datastore returns bucketed counts and revenue sums; everything that turns
those rows into dashboard metrics (rounding, peak-hour selection, ranking,
revenue share and summaries) lives here so it can be reasoned about without a
database.

Tie-breaking rules:

* peak hour of a day: highest order count, lowest hour number on ties;
* most common peak hour: highest frequency, earliest day on ties;
* revenue ranking: highest revenue, lowest restaurant id on ties.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from dinedash.domain.analytics.entities import (
    AnalyticsSummary,
    DailyMetric,
    DailyTotalsRow,
    GroupedMetric,
    GroupTotalsRow,
    HourlyCountRow,
    PeakHour,
    RankedRestaurant,
    RestaurantRevenueRow,
    TrendSummary,
)
from dinedash.domain.common.money import mean_amount, percentage_of, round_money, to_decimal


def peak_hours_by_day(rows: Iterable[HourlyCountRow]) -> dict[date, PeakHour]:
    peaks: dict[date, PeakHour] = {}
    for row in rows:
        if row.order_count <= 0:
            continue
        current = peaks.get(row.day)
        if (
            current is None
            or row.order_count > current.order_count
            or (row.order_count == current.order_count and row.hour < current.hour)
        ):
            peaks[row.day] = PeakHour(hour=row.hour, order_count=row.order_count)
    return peaks


def build_daily_metrics(
    totals: Iterable[DailyTotalsRow],
    hourly: Iterable[HourlyCountRow],
) -> list[DailyMetric]:
    peaks = peak_hours_by_day(hourly)
    return [
        DailyMetric(
            day=row.day,
            order_count=row.order_count,
            total_revenue=round_money(row.revenue),
            avg_order_value=mean_amount(row.revenue, row.order_count),
            peak_hour=peaks.get(row.day, PeakHour.empty()),
        )
        for row in sorted(totals, key=lambda item: item.day)
        if row.order_count > 0
    ]


def most_common_peak_hour(metrics: Sequence[DailyMetric]) -> int:
    frequencies = Counter(metric.peak_hour.hour for metric in metrics)
    if not frequencies:
        return 0
    # max() keeps the first maximum, and Counter preserves first-seen order
    return max(frequencies, key=frequencies.__getitem__)


def summarize_trend(metrics: Sequence[DailyMetric]) -> TrendSummary:
    total_orders = sum(metric.order_count for metric in metrics)
    total_revenue = round_money(sum((metric.total_revenue for metric in metrics), Decimal("0")))
    return TrendSummary(
        total_orders=total_orders,
        total_revenue=total_revenue,
        avg_order_value=mean_amount(total_revenue, total_orders),
        most_common_peak_hour=most_common_peak_hour(metrics),
    )


def rank_restaurants(rows: Iterable[RestaurantRevenueRow]) -> list[RankedRestaurant]:
    ordered = sorted(
        rows,
        key=lambda row: (-to_decimal(row.revenue), row.restaurant.restaurant_id),
    )
    # share is relative to the returned set only
    ranked_total = sum((to_decimal(row.revenue) for row in ordered), Decimal("0"))
    return [
        RankedRestaurant(
            rank=position,
            restaurant=row.restaurant,
            total_revenue=round_money(row.revenue),
            total_orders=row.order_count,
            avg_order_value=mean_amount(row.revenue, row.order_count),
            revenue_percentage=percentage_of(row.revenue, ranked_total),
        )
        for position, row in enumerate(ordered, start=1)
    ]


def build_breakdown(rows: Iterable[GroupTotalsRow]) -> list[GroupedMetric]:
    return [
        GroupedMetric(
            group_label=row.label,
            order_count=row.order_count,
            total_revenue=round_money(row.revenue),
            avg_order_value=mean_amount(row.revenue, row.order_count),
        )
        for row in rows
        if row.order_count > 0
    ]


def summarize_breakdown(breakdown: Sequence[GroupedMetric]) -> AnalyticsSummary:
    filtered_orders = sum(group.order_count for group in breakdown)
    total_revenue = round_money(sum((group.total_revenue for group in breakdown), Decimal("0")))
    return AnalyticsSummary(
        filtered_orders=filtered_orders,
        total_revenue=total_revenue,
        avg_order_value=mean_amount(total_revenue, filtered_orders),
    )
