from __future__ import annotations

import argparse
import json
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from dinedash.infrastructure.db.models.order import OrderModel
from dinedash.infrastructure.db.models.restaurant import RestaurantModel
from dinedash.infrastructure.db.session import get_engine

RowT = TypeVar("RowT", bound=BaseModel)

RESTAURANTS_FILE = "restaurants.json"
ORDERS_FILE = "orders.json"
BATCH_SIZE = 500


class RestaurantSeed(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=100)
    cuisine: str = Field(min_length=1, max_length=50)


class OrderSeed(BaseModel):
    id: int = Field(gt=0)
    restaurant_id: int = Field(gt=0)
    order_amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    order_time: datetime


class SeedDataError(Exception):
    pass


def _default_data_dir() -> Path:
    return Path(os.getenv("SEED_DATA_DIR", "./data"))


def load_rows(path: Path, row_type: type[RowT]) -> list[RowT]:
    if not path.is_file():
        raise SeedDataError(f"{path} does not exist")
    raw: Any = json.loads(path.read_text(encoding="utf-8"))
    try:
        return TypeAdapter(list[row_type]).validate_python(raw)  # type: ignore[valid-type]
    except ValidationError as exc:
        raise SeedDataError(f"{path.name} has invalid rows:\n{exc}") from exc


def _naive(value: datetime) -> datetime:
    # order_time is stored as local wall-clock time
    return value.replace(tzinfo=None)


def _check_references(restaurants: list[RestaurantSeed], orders: list[OrderSeed]) -> None:
    known = {restaurant.id for restaurant in restaurants}
    missing = sorted({order.restaurant_id for order in orders} - known)
    if missing:
        raise SeedDataError(f"orders reference unknown restaurants: {missing}")


def _batches(rows: list[dict[str, Any]]) -> list[list[dict[str, Any]]]:
    return [rows[index : index + BATCH_SIZE] for index in range(0, len(rows), BATCH_SIZE)]


def seed(data_dir: Path) -> tuple[int, int]:
    restaurants = load_rows(data_dir / RESTAURANTS_FILE, RestaurantSeed)
    orders = load_rows(data_dir / ORDERS_FILE, OrderSeed)
    _check_references(restaurants, orders)

    engine = get_engine(timeout_seconds=2.0)
    required_tables = {RestaurantModel.__tablename__, OrderModel.__tablename__}
    if not required_tables.issubset(set(inspect(engine).get_table_names())):
        raise SeedDataError("schema missing, run `alembic upgrade head` first")

    restaurant_rows = [restaurant.model_dump() for restaurant in restaurants]
    order_rows = [
        {**order.model_dump(), "order_time": _naive(order.order_time)} for order in orders
    ]

    with Session(engine) as session:
        for batch in _batches(restaurant_rows):
            statement = insert(RestaurantModel).values(batch)
            session.execute(
                statement.on_conflict_do_update(
                    index_elements=[RestaurantModel.id],
                    set_={
                        "name": statement.excluded.name,
                        "location": statement.excluded.location,
                        "cuisine": statement.excluded.cuisine,
                    },
                )
            )

        for batch in _batches(order_rows):
            statement = insert(OrderModel).values(batch)
            session.execute(
                statement.on_conflict_do_update(
                    index_elements=[OrderModel.id],
                    set_={
                        "restaurant_id": statement.excluded.restaurant_id,
                        "order_amount": statement.excluded.order_amount,
                        "order_time": statement.excluded.order_time,
                    },
                )
            )

        session.commit()

    return len(restaurants), len(orders)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load restaurants and orders from JSON files.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding restaurants.json and orders.json. Defaults to $SEED_DATA_DIR.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    data_dir = args.data_dir or _default_data_dir()
    try:
        restaurant_count, order_count = seed(data_dir)
    except SeedDataError as exc:
        print(f"seed failed: {exc}")
        return 1

    print(f"seeded {restaurant_count} restaurants and {order_count} orders")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
