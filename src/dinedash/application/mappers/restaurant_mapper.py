from __future__ import annotations

from dinedash.application.dto.responses import (
    RestaurantProfileResponse,
    RestaurantRefResponse,
    RestaurantResponse,
    RestaurantStatsResponse,
)
from dinedash.domain.restaurant.entities import Restaurant, RestaurantStats


def to_stats_response(stats: RestaurantStats) -> RestaurantStatsResponse:
    return RestaurantStatsResponse(
        total_orders=stats.total_orders,
        total_revenue=float(stats.total_revenue),
        avg_order_value=float(stats.avg_order_value),
    )


def to_restaurant_response(
    restaurant: Restaurant,
    stats: RestaurantStats | None = None,
) -> RestaurantResponse:
    return RestaurantResponse(
        id=int(restaurant.restaurant_id),
        name=restaurant.name,
        location=restaurant.location,
        cuisine=restaurant.cuisine,
        stats=to_stats_response(stats or RestaurantStats()),
    )


def to_restaurant_ref(restaurant: Restaurant) -> RestaurantRefResponse:
    return RestaurantRefResponse(id=int(restaurant.restaurant_id), name=restaurant.name)


def to_restaurant_profile(restaurant: Restaurant) -> RestaurantProfileResponse:
    return RestaurantProfileResponse(
        id=int(restaurant.restaurant_id),
        name=restaurant.name,
        location=restaurant.location,
        cuisine=restaurant.cuisine,
    )
