from __future__ import annotations

from datetime import date
from typing import Iterable, Literal, Protocol

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
from dinedash.domain.restaurant.entities import Restaurant, RestaurantStats

SortField = Literal["name", "location", "cuisine"]
SortOrder = Literal["asc", "desc"]


class RestaurantRepository(Protocol):
    def get(self, restaurant_id: RestaurantId) -> Restaurant | None: ...

    def exists(self, restaurant_id: RestaurantId) -> bool: ...

    def count(self) -> int: ...

    def find_all(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        cuisine: str | None = None,
        sort: SortField = "name",
        order: SortOrder = "asc",
    ) -> list[Restaurant]: ...

    def distinct_locations(self) -> list[str]: ...

    def distinct_cuisines(self) -> list[str]: ...


class OrderRepository(Protocol):
    def daily_totals(
        self,
        restaurant_id: RestaurantId,
        date_range: DateRange,
    ) -> list[DailyTotalsRow]: ...

    def hourly_counts_by_day(
        self,
        restaurant_id: RestaurantId,
        date_range: DateRange,
    ) -> list[HourlyCountRow]: ...

    def revenue_by_restaurant(
        self,
        date_range: DateRange,
        limit: int,
    ) -> list[RestaurantRevenueRow]: ...

    def grouped_totals(
        self,
        order_filter: OrderFilter,
        group_by: GroupBy,
    ) -> list[GroupTotalsRow]: ...

    def order_date_range(self) -> tuple[date | None, date | None]: ...

    def stats_for_restaurants(
        self,
        restaurant_ids: Iterable[RestaurantId],
    ) -> dict[RestaurantId, RestaurantStats]: ...
