from __future__ import annotations

from fastapi import APIRouter, Request

from dinedash.api import dependencies
from dinedash.application.dto.responses import (
    DataResponse,
    RestaurantListResponse,
    RestaurantMetaResponse,
    RestaurantResponse,
)
from dinedash.application.use_cases.get_restaurant import GetRestaurant
from dinedash.application.use_cases.get_restaurant_meta import GetRestaurantMeta
from dinedash.application.use_cases.list_restaurants import ListRestaurants
from dinedash.application.validation import RequestValidator
from dinedash.domain.common.ids import RestaurantId

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


def _request_validator() -> RequestValidator:
    return dependencies.request_validator()


def _list_restaurants_use_case() -> ListRestaurants:
    return ListRestaurants(
        restaurant_repository=dependencies.restaurant_repository(),
        order_repository=dependencies.order_repository(),
        cache=dependencies.response_cache(),
    )


def _get_restaurant_use_case() -> GetRestaurant:
    return GetRestaurant(
        restaurant_repository=dependencies.restaurant_repository(),
        order_repository=dependencies.order_repository(),
        cache=dependencies.response_cache(),
    )


def _restaurant_meta_use_case() -> GetRestaurantMeta:
    return GetRestaurantMeta(
        restaurant_repository=dependencies.restaurant_repository(),
        cache=dependencies.response_cache(),
    )


@router.get("", response_model=RestaurantListResponse)
def list_restaurants(request: Request) -> RestaurantListResponse:
    query = _request_validator().restaurant_list(dict(request.query_params))
    return _list_restaurants_use_case().execute(
        search=query.search,
        location=query.location,
        cuisine=query.cuisine,
        sort=query.sort,
        order=query.order,
    )


# registered before /{restaurant_id} so "meta" is not parsed as an id
@router.get("/meta", response_model=DataResponse[RestaurantMetaResponse])
def restaurant_meta() -> DataResponse[RestaurantMetaResponse]:
    return DataResponse[RestaurantMetaResponse](data=_restaurant_meta_use_case().execute())


@router.get("/{restaurant_id}", response_model=DataResponse[RestaurantResponse])
def get_restaurant(restaurant_id: int) -> DataResponse[RestaurantResponse]:
    payload = _get_restaurant_use_case().execute(RestaurantId(restaurant_id))
    return DataResponse[RestaurantResponse](data=payload)
