from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dinedash.api import dependencies
from dinedash.api.main import app
from dinedash.application.cache import ResponseCache
from dinedash.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from dinedash.infrastructure.db.repositories.restaurant_repo import (
    SqlAlchemyRestaurantRepository,
)


@pytest.fixture()
def api_client(monkeypatch, seeded_engine, cache_store) -> Iterator[TestClient]:
    monkeypatch.setattr(
        dependencies,
        "restaurant_repository",
        lambda: SqlAlchemyRestaurantRepository(engine=seeded_engine),
    )
    monkeypatch.setattr(
        dependencies,
        "order_repository",
        lambda: SqlAlchemyOrderRepository(engine=seeded_engine),
    )
    monkeypatch.setattr(dependencies, "response_cache", lambda: ResponseCache(cache_store))

    with TestClient(app) as client:
        yield client
