from __future__ import annotations

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from dinedash.application.ports.repositories import (
    RestaurantRepository,
    SortField,
    SortOrder,
)
from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.restaurant.entities import Restaurant
from dinedash.infrastructure.db.models.restaurant import RestaurantModel
from dinedash.infrastructure.db.session import get_engine

_SORT_COLUMNS = {
    "name": RestaurantModel.name,
    "location": RestaurantModel.location,
    "cuisine": RestaurantModel.cuisine,
}


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        with Session(self._engine) as session:
            model = session.get(RestaurantModel, int(restaurant_id))
            if model is None:
                return None
            return self._to_domain(model)

    def exists(self, restaurant_id: RestaurantId) -> bool:
        statement = (
            select(RestaurantModel.id).where(RestaurantModel.id == int(restaurant_id)).limit(1)
        )
        with Session(self._engine) as session:
            value = session.execute(statement).scalar_one_or_none()
        return value is not None

    def count(self) -> int:
        statement = select(func.count()).select_from(RestaurantModel)
        with Session(self._engine) as session:
            return int(session.execute(statement).scalar_one())

    def find_all(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        cuisine: str | None = None,
        sort: SortField = "name",
        order: SortOrder = "asc",
    ) -> list[Restaurant]:
        statement = select(RestaurantModel)
        if search:
            statement = statement.where(RestaurantModel.name.icontains(search, autoescape=True))
        if location:
            statement = statement.where(RestaurantModel.location == location)
        if cuisine:
            statement = statement.where(RestaurantModel.cuisine == cuisine)

        sort_column = _SORT_COLUMNS.get(sort, RestaurantModel.name)
        primary = sort_column.desc() if order == "desc" else sort_column.asc()
        statement = statement.order_by(primary, RestaurantModel.id.asc())

        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def distinct_locations(self) -> list[str]:
        return self._distinct(RestaurantModel.location)

    def distinct_cuisines(self) -> list[str]:
        return self._distinct(RestaurantModel.cuisine)

    def _distinct(self, column: InstrumentedAttribute[str]) -> list[str]:
        statement = select(column).distinct().order_by(column)
        with Session(self._engine) as session:
            return [value for value in session.execute(statement).scalars().all()]

    @staticmethod
    def _to_domain(model: RestaurantModel) -> Restaurant:
        return Restaurant(
            restaurant_id=RestaurantId(model.id),
            name=model.name,
            location=model.location,
            cuisine=model.cuisine,
        )
