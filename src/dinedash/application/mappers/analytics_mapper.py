from __future__ import annotations

from datetime import date

from dinedash.application.dto.responses import (
    BreakdownRowResponse,
    DailyMetricResponse,
    DateWindowResponse,
    FilteredSummaryResponse,
    PeakHourResponse,
    RankedRestaurantResponse,
    RankingMetricsResponse,
    TrendsDateRangeResponse,
    TrendsSummaryResponse,
)
from dinedash.application.mappers.restaurant_mapper import to_restaurant_profile
from dinedash.domain.analytics.entities import (
    AnalyticsSummary,
    DailyMetric,
    DateRange,
    GroupedMetric,
    GroupLabel,
    RankedRestaurant,
    TrendSummary,
)


def to_trends_date_range(date_range: DateRange) -> TrendsDateRangeResponse:
    return TrendsDateRangeResponse(
        start=date_range.start.isoformat(),
        end=date_range.end.isoformat(),
        days=date_range.days,
    )


def to_date_window(date_range: DateRange) -> DateWindowResponse:
    return DateWindowResponse(
        start=date_range.start.isoformat(),
        end=date_range.end.isoformat(),
    )


def to_daily_metric_response(metric: DailyMetric) -> DailyMetricResponse:
    return DailyMetricResponse(
        date=metric.day.isoformat(),
        day_of_week=metric.day_of_week,
        order_count=metric.order_count,
        total_revenue=float(metric.total_revenue),
        avg_order_value=float(metric.avg_order_value),
        peak_hour=PeakHourResponse(
            hour=metric.peak_hour.hour,
            hour_formatted=metric.peak_hour.hour_formatted,
            order_count=metric.peak_hour.order_count,
        ),
    )


def to_trends_summary(summary: TrendSummary) -> TrendsSummaryResponse:
    return TrendsSummaryResponse(
        total_orders=summary.total_orders,
        total_revenue=float(summary.total_revenue),
        avg_order_value=float(summary.avg_order_value),
        most_common_peak_hour=summary.most_common_peak_hour,
        most_common_peak_hour_formatted=summary.most_common_peak_hour_formatted,
    )


def to_ranked_restaurant_response(ranked: RankedRestaurant) -> RankedRestaurantResponse:
    return RankedRestaurantResponse(
        rank=ranked.rank,
        restaurant=to_restaurant_profile(ranked.restaurant),
        metrics=RankingMetricsResponse(
            total_revenue=float(ranked.total_revenue),
            total_orders=ranked.total_orders,
            avg_order_value=float(ranked.avg_order_value),
            revenue_percentage=float(ranked.revenue_percentage),
        ),
    )


def _label(value: GroupLabel) -> int | str:
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_breakdown_row(group: GroupedMetric) -> BreakdownRowResponse:
    return BreakdownRowResponse(
        group=_label(group.group_label),
        order_count=group.order_count,
        total_revenue=float(group.total_revenue),
        avg_order_value=float(group.avg_order_value),
    )


def to_filtered_summary(summary: AnalyticsSummary) -> FilteredSummaryResponse:
    return FilteredSummaryResponse(
        filtered_orders=summary.filtered_orders,
        total_revenue=float(summary.total_revenue),
        avg_order_value=float(summary.avg_order_value),
    )
