from __future__ import annotations

from typing import Generic, TypeVar, Union

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class RestaurantStatsResponse(BaseModel):
    total_orders: int
    total_revenue: float
    avg_order_value: float


class RestaurantResponse(BaseModel):
    id: int
    name: str
    location: str
    cuisine: str
    stats: RestaurantStatsResponse


class RestaurantListMetaResponse(BaseModel):
    total: int


class RestaurantListResponse(BaseModel):
    data: list[RestaurantResponse] = Field(default_factory=list)
    meta: RestaurantListMetaResponse


class RestaurantMetaResponse(BaseModel):
    locations: list[str] = Field(default_factory=list)
    cuisines: list[str] = Field(default_factory=list)


class RestaurantRefResponse(BaseModel):
    id: int
    name: str


class RestaurantProfileResponse(BaseModel):
    id: int
    name: str
    location: str
    cuisine: str


class TrendsDateRangeResponse(BaseModel):
    start: str
    end: str
    days: int


class PeakHourResponse(BaseModel):
    hour: int
    hour_formatted: str
    order_count: int


class DailyMetricResponse(BaseModel):
    date: str
    day_of_week: str
    order_count: int
    total_revenue: float
    avg_order_value: float
    peak_hour: PeakHourResponse


class TrendsSummaryResponse(BaseModel):
    total_orders: int
    total_revenue: float
    avg_order_value: float
    most_common_peak_hour: int
    most_common_peak_hour_formatted: str


class TrendsResponse(BaseModel):
    restaurant: RestaurantRefResponse
    date_range: TrendsDateRangeResponse
    daily_metrics: list[DailyMetricResponse] = Field(default_factory=list)
    summary: TrendsSummaryResponse


class DateWindowResponse(BaseModel):
    start: str
    end: str


class RankingMetricsResponse(BaseModel):
    total_revenue: float
    total_orders: int
    avg_order_value: float
    revenue_percentage: float


class RankedRestaurantResponse(BaseModel):
    rank: int
    restaurant: RestaurantProfileResponse
    metrics: RankingMetricsResponse


class TopRestaurantsResponse(BaseModel):
    date_range: DateWindowResponse
    total_restaurants_analyzed: int
    rankings: list[RankedRestaurantResponse] = Field(default_factory=list)


class FilteredSummaryResponse(BaseModel):
    filtered_orders: int
    total_revenue: float
    avg_order_value: float


class BreakdownRowResponse(BaseModel):
    group: Union[int, str]
    order_count: int
    total_revenue: float
    avg_order_value: float


class FilteredAnalyticsResponse(BaseModel):
    filters_applied: dict[str, str] = Field(default_factory=dict)
    summary: FilteredSummaryResponse
    breakdown: list[BreakdownRowResponse] = Field(default_factory=list)


class OrderDateRangeResponse(BaseModel):
    min_date: str | None = None
    max_date: str | None = None


class FilterMetaResponse(BaseModel):
    date_range: OrderDateRangeResponse
    locations: list[str] = Field(default_factory=list)
    cuisines: list[str] = Field(default_factory=list)
    hours: list[int] = Field(default_factory=list)
