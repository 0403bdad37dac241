from __future__ import annotations

from dinedash.application.cache import RESTAURANT_LIST_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import RestaurantListMetaResponse, RestaurantListResponse
from dinedash.application.mappers.restaurant_mapper import to_restaurant_response
from dinedash.application.ports.repositories import (
    OrderRepository,
    RestaurantRepository,
    SortField,
    SortOrder,
)


class ListRestaurants:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        order_repository: OrderRepository,
        cache: ResponseCache,
        ttl_seconds: int = RESTAURANT_LIST_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._order_repository = order_repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        cuisine: str | None = None,
        sort: SortField = "name",
        order: SortOrder = "asc",
    ) -> RestaurantListResponse:
        key = fingerprint(
            "restaurants",
            search=search,
            location=location,
            cuisine=cuisine,
            sort=sort,
            order=order,
        )

        def compute() -> RestaurantListResponse:
            restaurants = self._restaurant_repository.find_all(
                search=search,
                location=location,
                cuisine=cuisine,
                sort=sort,
                order=order,
            )
            stats = self._order_repository.stats_for_restaurants(
                restaurant.restaurant_id for restaurant in restaurants
            )
            return RestaurantListResponse(
                data=[
                    to_restaurant_response(restaurant, stats.get(restaurant.restaurant_id))
                    for restaurant in restaurants
                ],
                meta=RestaurantListMetaResponse(total=len(restaurants)),
            )

        return self._cache.get_or_compute(key, self._ttl_seconds, RestaurantListResponse, compute)
