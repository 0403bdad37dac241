from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from dinedash.domain.analytics.entities import GroupBy

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_iso_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise ValueError("must be a date in YYYY-MM-DD format")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValueError("must be a valid calendar date") from exc


IsoDate = Annotated[date, BeforeValidator(_parse_iso_date)]
Hour = Annotated[int, Field(ge=0, le=23)]
NonNegativeAmount = Annotated[Decimal, Field(ge=0)]


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class TrendsRequest(RequestModel):
    restaurant_id: int
    start_date: IsoDate
    end_date: IsoDate


class TopRestaurantsRequest(RequestModel):
    start_date: IsoDate
    end_date: IsoDate
    limit: int = Field(default=3, ge=1, le=10)


class DateRangeBody(RequestModel):
    start: IsoDate | None = None
    end: IsoDate | None = None


class AmountRangeBody(RequestModel):
    minimum: NonNegativeAmount | None = Field(default=None, alias="min")
    maximum: NonNegativeAmount | None = Field(default=None, alias="max")


class HourRangeBody(RequestModel):
    start: Hour | None = None
    end: Hour | None = None


class FilterRequest(RequestModel):
    restaurant_id: int | None = None
    date_range: DateRangeBody | None = None
    amount_range: AmountRangeBody | None = None
    hour_range: HourRangeBody | None = None
    group_by: GroupBy | None = None


class RestaurantListRequest(RequestModel):
    search: str | None = None
    location: str | None = None
    cuisine: str | None = None
    sort: Literal["name", "location", "cuisine"] = "name"
    order: Literal["asc", "desc"] = "asc"
