from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Union

from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.restaurant.entities import Restaurant

HOURS_IN_DAY = 24
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

GroupLabel = Union[date, int, str]


class GroupBy(str, Enum):
    DAY = "day"
    HOUR = "hour"
    RESTAURANT = "restaurant"


def format_hour(hour: int) -> str:
    """Format an hour of day on a 12-hour clock, e.g. 14 -> "2:00 PM"."""
    if hour < 0 or hour >= HOURS_IN_DAY:
        raise ValueError("hour must be between 0 and 23")
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:00 {suffix}"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("end must be on or after start")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def describe(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class OrderFilter:
    restaurant_id: RestaurantId | None = None
    start_date: date | None = None
    end_date: date | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    start_hour: int | None = None
    end_hour: int | None = None

    @property
    def date_range(self) -> DateRange | None:
        if self.start_date is None or self.end_date is None:
            return None
        return DateRange(start=self.start_date, end=self.end_date)

    @property
    def amount_floor(self) -> Decimal | None:
        # a zero bound does not constrain anything
        return self.min_amount if self.min_amount else None

    @property
    def amount_ceiling(self) -> Decimal | None:
        return self.max_amount if self.max_amount else None

    @property
    def has_amount_range(self) -> bool:
        return self.amount_floor is not None or self.amount_ceiling is not None

    @property
    def hour_range(self) -> tuple[int, int] | None:
        if self.start_hour is None or self.end_hour is None:
            return None
        return self.start_hour, self.end_hour


@dataclass(frozen=True)
class DailyTotalsRow:
    day: date
    order_count: int
    revenue: Decimal


@dataclass(frozen=True)
class HourlyCountRow:
    day: date
    hour: int
    order_count: int


@dataclass(frozen=True)
class RestaurantRevenueRow:
    restaurant: Restaurant
    order_count: int
    revenue: Decimal


@dataclass(frozen=True)
class GroupTotalsRow:
    label: GroupLabel
    order_count: int
    revenue: Decimal


@dataclass(frozen=True)
class PeakHour:
    hour: int
    order_count: int

    @classmethod
    def empty(cls) -> PeakHour:
        return cls(hour=0, order_count=0)

    @property
    def hour_formatted(self) -> str:
        if self.order_count == 0:
            return "N/A"
        return format_hour(self.hour)


@dataclass(frozen=True)
class DailyMetric:
    day: date
    order_count: int
    total_revenue: Decimal
    avg_order_value: Decimal
    peak_hour: PeakHour

    @property
    def day_of_week(self) -> str:
        return WEEKDAY_NAMES[self.day.weekday()]


@dataclass(frozen=True)
class TrendSummary:
    total_orders: int
    total_revenue: Decimal
    avg_order_value: Decimal
    most_common_peak_hour: int

    @property
    def most_common_peak_hour_formatted(self) -> str:
        return format_hour(self.most_common_peak_hour)


@dataclass(frozen=True)
class RankedRestaurant:
    rank: int
    restaurant: Restaurant
    total_revenue: Decimal
    total_orders: int
    avg_order_value: Decimal
    revenue_percentage: Decimal


@dataclass(frozen=True)
class GroupedMetric:
    group_label: GroupLabel
    order_count: int
    total_revenue: Decimal
    avg_order_value: Decimal


@dataclass(frozen=True)
class AnalyticsSummary:
    filtered_orders: int
    total_revenue: Decimal
    avg_order_value: Decimal
