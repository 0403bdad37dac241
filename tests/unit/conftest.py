from __future__ import annotations

import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from dinedash.infrastructure.db.models.order import OrderModel
from dinedash.infrastructure.db.models.restaurant import Base, RestaurantModel

RESTAURANTS = [
    (101, "Tandoori Treats", "Bangalore", "North Indian"),
    (102, "Sushi Bay", "Mumbai", "Japanese"),
    (103, "Pasta Palace", "Delhi", "Italian"),
    (104, "Burger Hub", "Mumbai", "American"),
]

# (id, restaurant_id, amount, order_time)
ORDERS = [
    (1, 101, "100.00", datetime(2025, 6, 22, 10, 0)),
    (2, 101, "200.00", datetime(2025, 6, 22, 14, 0)),
    (3, 101, "50.00", datetime(2025, 6, 23, 14, 30)),
    (4, 101, "150.00", datetime(2025, 6, 23, 14, 45)),
    (5, 101, "80.00", datetime(2025, 6, 23, 19, 5)),
    (6, 102, "900.00", datetime(2025, 6, 22, 20, 0)),
    (7, 102, "450.50", datetime(2025, 6, 24, 21, 15)),
    (8, 103, "300.00", datetime(2025, 6, 23, 12, 0)),
    (9, 103, "0.00", datetime(2025, 6, 23, 23, 59)),
    (10, 101, "75.00", datetime(2025, 6, 25, 0, 10)),
]


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.get_calls = 0

    def get(self, key: str) -> str | None:
        self.get_calls += 1
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value
        self.ttls[key] = ttl_seconds


class BrokenCacheStore:
    def get(self, key: str) -> str | None:
        raise ConnectionError("cache unavailable")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("cache unavailable")


def _sqlite_engine() -> Engine:
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def empty_engine() -> Iterator[Engine]:
    engine = _sqlite_engine()
    yield engine
    engine.dispose()


@pytest.fixture()
def seeded_engine() -> Iterator[Engine]:
    engine = _sqlite_engine()
    with Session(engine) as session:
        session.add_all(
            RestaurantModel(id=rid, name=name, location=location, cuisine=cuisine)
            for rid, name, location, cuisine in RESTAURANTS
        )
        session.flush()
        session.add_all(
            OrderModel(
                id=oid,
                restaurant_id=rid,
                order_amount=Decimal(amount),
                order_time=order_time,
            )
            for oid, rid, amount, order_time in ORDERS
        )
        session.commit()
    yield engine
    engine.dispose()


@pytest.fixture()
def cache_store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture()
def broken_cache_store() -> BrokenCacheStore:
    return BrokenCacheStore()
