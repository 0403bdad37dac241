"""Request validation for the analytics and restaurant endpoints.

Each method takes the raw query parameters or JSON body, parses it with the
request models and applies the checks that need more than one field or the
datastore. Failures raise ``RequestValidationFailedError`` carrying
field-level messages keyed by dotted field name (``date_range.end``); nothing
downstream runs on invalid input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from dinedash.application.dto.requests import (
    FilterRequest,
    RestaurantListRequest,
    TopRestaurantsRequest,
    TrendsRequest,
)
from dinedash.application.errors import RequestValidationFailedError
from dinedash.application.metrics.analytics import record_validation_failure
from dinedash.application.ports.repositories import (
    RestaurantRepository,
    SortField,
    SortOrder,
)
from dinedash.domain.analytics.entities import DateRange, GroupBy, OrderFilter
from dinedash.domain.common.ids import RestaurantId

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class TrendsQuery:
    restaurant_id: RestaurantId
    date_range: DateRange


@dataclass(frozen=True)
class TopRestaurantsQuery:
    date_range: DateRange
    limit: int


@dataclass(frozen=True)
class FilterQuery:
    order_filter: OrderFilter
    group_by: GroupBy


@dataclass(frozen=True)
class RestaurantListQuery:
    search: str | None
    location: str | None
    cuisine: str | None
    sort: SortField
    order: SortOrder


def _clean(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    # blank values count as absent, like omitted query parameters
    if not raw:
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, Mapping):
            value = _clean(value)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        cleaned[key] = value
    return cleaned


def _describe_error(field: str, error: Mapping[str, Any]) -> str:
    error_type = error.get("type")
    if error_type == "missing":
        return f"The {field} field is required."
    if error_type == "value_error":
        ctx = error.get("ctx") or {}
        return f"The {field} field {ctx.get('error', 'is invalid')}."
    return f"The {field} field is invalid: {error.get('msg', 'invalid value')}."


def messages_from_errors(errors: list[Mapping[str, Any]]) -> dict[str, list[str]]:
    messages: dict[str, list[str]] = {}
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        messages.setdefault(field, []).append(_describe_error(field, error))
    return messages


def _parse(model: type[ModelT], raw: Mapping[str, Any] | None, endpoint: str) -> ModelT:
    try:
        return model.model_validate(_clean(raw))
    except ValidationError as exc:
        record_validation_failure(endpoint)
        raise RequestValidationFailedError(messages_from_errors(exc.errors())) from exc


def _check_order(
    messages: dict[str, list[str]],
    field: str,
    start_field: str,
    start: date | None,
    end: date | None,
) -> None:
    if start is not None and end is not None and end < start:
        messages.setdefault(field, []).append(
            f"The {field} field must be a date after or equal to {start_field}."
        )


class RequestValidator:
    def __init__(self, restaurant_repository: RestaurantRepository) -> None:
        self._restaurant_repository = restaurant_repository

    def _check_restaurant(
        self,
        messages: dict[str, list[str]],
        restaurant_id: int | None,
    ) -> None:
        if restaurant_id is None:
            return
        if not self._restaurant_repository.exists(RestaurantId(restaurant_id)):
            messages.setdefault("restaurant_id", []).append(
                "The selected restaurant_id is invalid."
            )

    @staticmethod
    def _raise_if_any(messages: dict[str, list[str]], endpoint: str) -> None:
        if messages:
            record_validation_failure(endpoint)
            raise RequestValidationFailedError(messages)

    def trends(self, params: Mapping[str, Any] | None) -> TrendsQuery:
        request = _parse(TrendsRequest, params, "trends")
        messages: dict[str, list[str]] = {}
        _check_order(messages, "end_date", "start_date", request.start_date, request.end_date)
        self._check_restaurant(messages, request.restaurant_id)
        self._raise_if_any(messages, "trends")
        return TrendsQuery(
            restaurant_id=RestaurantId(request.restaurant_id),
            date_range=DateRange(start=request.start_date, end=request.end_date),
        )

    def top_restaurants(self, params: Mapping[str, Any] | None) -> TopRestaurantsQuery:
        request = _parse(TopRestaurantsRequest, params, "top_restaurants")
        messages: dict[str, list[str]] = {}
        _check_order(messages, "end_date", "start_date", request.start_date, request.end_date)
        self._raise_if_any(messages, "top_restaurants")
        return TopRestaurantsQuery(
            date_range=DateRange(start=request.start_date, end=request.end_date),
            limit=request.limit,
        )

    def filter(self, body: Mapping[str, Any] | None) -> FilterQuery:
        request = _parse(FilterRequest, body, "filter")
        messages: dict[str, list[str]] = {}

        date_range = request.date_range
        if date_range is not None:
            _check_order(
                messages,
                "date_range.end",
                "date_range.start",
                date_range.start,
                date_range.end,
            )
        self._check_restaurant(messages, request.restaurant_id)
        self._raise_if_any(messages, "filter")

        amount_range = request.amount_range
        hour_range = request.hour_range
        return FilterQuery(
            order_filter=OrderFilter(
                restaurant_id=(
                    RestaurantId(request.restaurant_id)
                    if request.restaurant_id is not None
                    else None
                ),
                start_date=date_range.start if date_range else None,
                end_date=date_range.end if date_range else None,
                min_amount=amount_range.minimum if amount_range else None,
                max_amount=amount_range.maximum if amount_range else None,
                start_hour=hour_range.start if hour_range else None,
                end_hour=hour_range.end if hour_range else None,
            ),
            group_by=request.group_by or GroupBy.DAY,
        )

    def restaurant_list(self, params: Mapping[str, Any] | None) -> RestaurantListQuery:
        request = _parse(RestaurantListRequest, params, "restaurant_list")
        return RestaurantListQuery(
            search=request.search,
            location=request.location,
            cuisine=request.cuisine,
            sort=request.sort,
            order=request.order,
        )
