from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy import Date, Engine, extract, func, select
from sqlalchemy.orm import Session

from dinedash.application.ports.repositories import OrderRepository
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
from dinedash.infrastructure.db.models.order import OrderModel
from dinedash.infrastructure.db.models.restaurant import RestaurantModel
from dinedash.infrastructure.db.session import get_engine

_order_day = func.date(OrderModel.order_time, type_=Date)
_order_hour = extract("hour", OrderModel.order_time)
_order_count = func.count(OrderModel.id)
_revenue = func.sum(OrderModel.order_amount)


def _window(date_range: DateRange) -> list[Any]:
    # inclusive of both boundary days
    starts_at = datetime.combine(date_range.start, time.min)
    ends_at = datetime.combine(date_range.end, time.max)
    return [OrderModel.order_time >= starts_at, OrderModel.order_time <= ends_at]


def _filter_conditions(order_filter: OrderFilter) -> list[Any]:
    conditions: list[Any] = []
    if order_filter.restaurant_id is not None:
        conditions.append(OrderModel.restaurant_id == int(order_filter.restaurant_id))
    date_range = order_filter.date_range
    if date_range is not None:
        conditions.extend(_window(date_range))
    if order_filter.amount_floor is not None:
        conditions.append(OrderModel.order_amount >= order_filter.amount_floor)
    if order_filter.amount_ceiling is not None:
        conditions.append(OrderModel.order_amount <= order_filter.amount_ceiling)
    hour_range = order_filter.hour_range
    if hour_range is not None:
        start_hour, end_hour = hour_range
        conditions.append(_order_hour >= start_hour)
        conditions.append(_order_hour <= end_hour)
    return conditions


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def daily_totals(
        self,
        restaurant_id: RestaurantId,
        date_range: DateRange,
    ) -> list[DailyTotalsRow]:
        statement = (
            select(_order_day, _order_count, _revenue)
            .where(OrderModel.restaurant_id == int(restaurant_id), *_window(date_range))
            .group_by(_order_day)
            .order_by(_order_day)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            DailyTotalsRow(day=_as_date(day), order_count=int(count), revenue=_as_decimal(revenue))
            for day, count, revenue in rows
        ]

    def hourly_counts_by_day(
        self,
        restaurant_id: RestaurantId,
        date_range: DateRange,
    ) -> list[HourlyCountRow]:
        statement = (
            select(_order_day, _order_hour, _order_count)
            .where(OrderModel.restaurant_id == int(restaurant_id), *_window(date_range))
            .group_by(_order_day, _order_hour)
            .order_by(_order_day, _order_hour)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            HourlyCountRow(day=_as_date(day), hour=int(hour), order_count=int(count))
            for day, hour, count in rows
        ]

    def revenue_by_restaurant(
        self,
        date_range: DateRange,
        limit: int,
    ) -> list[RestaurantRevenueRow]:
        revenue = _revenue.label("revenue")
        statement = (
            select(
                RestaurantModel.id,
                RestaurantModel.name,
                RestaurantModel.location,
                RestaurantModel.cuisine,
                _order_count,
                revenue,
            )
            .join(OrderModel, OrderModel.restaurant_id == RestaurantModel.id)
            .where(*_window(date_range))
            .group_by(
                RestaurantModel.id,
                RestaurantModel.name,
                RestaurantModel.location,
                RestaurantModel.cuisine,
            )
            .order_by(revenue.desc(), RestaurantModel.id.asc())
            .limit(limit)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            RestaurantRevenueRow(
                restaurant=Restaurant(
                    restaurant_id=RestaurantId(restaurant_id),
                    name=name,
                    location=location,
                    cuisine=cuisine,
                ),
                order_count=int(count),
                revenue=_as_decimal(total),
            )
            for restaurant_id, name, location, cuisine, count, total in rows
        ]

    def grouped_totals(
        self,
        order_filter: OrderFilter,
        group_by: GroupBy,
    ) -> list[GroupTotalsRow]:
        conditions = _filter_conditions(order_filter)

        if group_by is GroupBy.RESTAURANT:
            revenue = _revenue.label("revenue")
            statement = (
                select(RestaurantModel.name, _order_count, revenue)
                .select_from(OrderModel)
                .join(RestaurantModel, OrderModel.restaurant_id == RestaurantModel.id)
                .where(*conditions)
                .group_by(RestaurantModel.id, RestaurantModel.name)
                .order_by(revenue.desc(), RestaurantModel.id.asc())
            )
        elif group_by is GroupBy.HOUR:
            statement = (
                select(_order_hour, _order_count, _revenue)
                .where(*conditions)
                .group_by(_order_hour)
                .order_by(_order_hour)
            )
        else:
            statement = (
                select(_order_day, _order_count, _revenue)
                .where(*conditions)
                .group_by(_order_day)
                .order_by(_order_day)
            )

        with Session(self._engine) as session:
            rows = session.execute(statement).all()

        return [
            GroupTotalsRow(
                label=self._group_label(group_by, label),
                order_count=int(count),
                revenue=_as_decimal(total),
            )
            for label, count, total in rows
        ]

    def order_date_range(self) -> tuple[date | None, date | None]:
        statement = select(func.min(OrderModel.order_time), func.max(OrderModel.order_time))
        with Session(self._engine) as session:
            first, last = session.execute(statement).one()
        return (
            _as_date(first) if first is not None else None,
            _as_date(last) if last is not None else None,
        )

    def stats_for_restaurants(
        self,
        restaurant_ids: Iterable[RestaurantId],
    ) -> dict[RestaurantId, RestaurantStats]:
        ids = [int(restaurant_id) for restaurant_id in restaurant_ids]
        if not ids:
            return {}

        statement = (
            select(OrderModel.restaurant_id, _order_count, _revenue)
            .where(OrderModel.restaurant_id.in_(ids))
            .group_by(OrderModel.restaurant_id)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return {
            RestaurantId(restaurant_id): RestaurantStats(
                total_orders=int(count),
                revenue=_as_decimal(total),
            )
            for restaurant_id, count, total in rows
        }

    @staticmethod
    def _group_label(group_by: GroupBy, value: Any) -> date | int | str:
        if group_by is GroupBy.DAY:
            return _as_date(value)
        if group_by is GroupBy.HOUR:
            return int(value)
        return str(value)
