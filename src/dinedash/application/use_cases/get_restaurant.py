from __future__ import annotations

from dinedash.application.cache import RESTAURANT_STATS_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import RestaurantResponse
from dinedash.application.errors import RestaurantNotFoundError
from dinedash.application.mappers.restaurant_mapper import to_restaurant_response
from dinedash.application.ports.repositories import OrderRepository, RestaurantRepository
from dinedash.domain.common.ids import RestaurantId


class GetRestaurant:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        order_repository: OrderRepository,
        cache: ResponseCache,
        ttl_seconds: int = RESTAURANT_STATS_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._order_repository = order_repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(self, restaurant_id: RestaurantId) -> RestaurantResponse:
        return self._cache.get_or_compute(
            fingerprint("restaurant_stats", restaurant_id=restaurant_id),
            self._ttl_seconds,
            RestaurantResponse,
            lambda: self._compute(restaurant_id),
        )

    def _compute(self, restaurant_id: RestaurantId) -> RestaurantResponse:
        restaurant = self._restaurant_repository.get(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(f"restaurant {restaurant_id} not found")
        stats = self._order_repository.stats_for_restaurants([restaurant_id])
        return to_restaurant_response(restaurant, stats.get(restaurant_id))
