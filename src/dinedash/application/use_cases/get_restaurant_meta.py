from __future__ import annotations

from dinedash.application.cache import METADATA_TTL_SECONDS, ResponseCache, fingerprint
from dinedash.application.dto.responses import RestaurantMetaResponse
from dinedash.application.ports.repositories import RestaurantRepository


class GetRestaurantMeta:
    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        cache: ResponseCache,
        ttl_seconds: int = METADATA_TTL_SECONDS,
    ) -> None:
        self._restaurant_repository = restaurant_repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(self) -> RestaurantMetaResponse:
        return RestaurantMetaResponse(
            locations=self._cache.get_or_compute(
                fingerprint("locations"),
                self._ttl_seconds,
                list[str],
                self._restaurant_repository.distinct_locations,
            ),
            cuisines=self._cache.get_or_compute(
                fingerprint("cuisines"),
                self._ttl_seconds,
                list[str],
                self._restaurant_repository.distinct_cuisines,
            ),
        )
