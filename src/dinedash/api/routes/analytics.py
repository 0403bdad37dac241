from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from dinedash.api import dependencies
from dinedash.application.dto.responses import (
    DataResponse,
    FilteredAnalyticsResponse,
    FilterMetaResponse,
    TopRestaurantsResponse,
    TrendsResponse,
)
from dinedash.application.use_cases.get_filter_meta import GetFilterMeta
from dinedash.application.use_cases.get_filtered_analytics import GetFilteredAnalytics
from dinedash.application.use_cases.get_order_trends import GetOrderTrends
from dinedash.application.use_cases.get_top_restaurants import GetTopRestaurants
from dinedash.application.validation import RequestValidator

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _request_validator() -> RequestValidator:
    return dependencies.request_validator()


def _order_trends_use_case() -> GetOrderTrends:
    return GetOrderTrends(
        restaurant_repository=dependencies.restaurant_repository(),
        aggregator=dependencies.metrics_aggregator(),
        cache=dependencies.response_cache(),
    )


def _top_restaurants_use_case() -> GetTopRestaurants:
    return GetTopRestaurants(
        restaurant_repository=dependencies.restaurant_repository(),
        aggregator=dependencies.metrics_aggregator(),
        cache=dependencies.response_cache(),
    )


def _filtered_analytics_use_case() -> GetFilteredAnalytics:
    return GetFilteredAnalytics(
        restaurant_repository=dependencies.restaurant_repository(),
        aggregator=dependencies.metrics_aggregator(),
        cache=dependencies.response_cache(),
    )


def _filter_meta_use_case() -> GetFilterMeta:
    return GetFilterMeta(
        restaurant_repository=dependencies.restaurant_repository(),
        order_repository=dependencies.order_repository(),
        cache=dependencies.response_cache(),
    )


@router.get("/trends", response_model=DataResponse[TrendsResponse])
def order_trends(request: Request) -> DataResponse[TrendsResponse]:
    query = _request_validator().trends(dict(request.query_params))
    payload = _order_trends_use_case().execute(query.restaurant_id, query.date_range)
    return DataResponse[TrendsResponse](data=payload)


@router.get("/top-restaurants", response_model=DataResponse[TopRestaurantsResponse])
def top_restaurants(request: Request) -> DataResponse[TopRestaurantsResponse]:
    query = _request_validator().top_restaurants(dict(request.query_params))
    payload = _top_restaurants_use_case().execute(query.date_range, query.limit)
    return DataResponse[TopRestaurantsResponse](data=payload)


@router.post("/filter", response_model=DataResponse[FilteredAnalyticsResponse])
def filtered_analytics(
    payload: dict[str, Any] | None = Body(default=None),
) -> DataResponse[FilteredAnalyticsResponse]:
    query = _request_validator().filter(payload)
    result = _filtered_analytics_use_case().execute(query.order_filter, query.group_by)
    return DataResponse[FilteredAnalyticsResponse](data=result)


@router.get("/meta", response_model=DataResponse[FilterMetaResponse])
def filter_meta() -> DataResponse[FilterMetaResponse]:
    return DataResponse[FilterMetaResponse](data=_filter_meta_use_case().execute())
