from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dinedash.infrastructure.cache import redis_client
from dinedash.infrastructure.cache.cache_store import RedisCacheStore


class FakeRedis:
    def __init__(self) -> None:
        self.values: dict[str, object] = {}
        self.expiries: dict[str, int] = {}

    def get(self, name: str) -> object | None:
        return self.values.get(name)

    def set(self, name: str, value: str, ex: int | None = None) -> bool:
        self.values[name] = value
        if ex is not None:
            self.expiries[name] = ex
        return True


def test_set_then_get_with_expiry() -> None:
    fake = FakeRedis()
    store = RedisCacheStore(client=fake)  # type: ignore[arg-type]

    store.set("dinedash:trends:abc", '{"ok":true}', ttl_seconds=900)

    assert store.get("dinedash:trends:abc") == '{"ok":true}'
    assert fake.expiries["dinedash:trends:abc"] == 900
    assert store.get("dinedash:trends:missing") is None


def test_get_decodes_bytes() -> None:
    fake = FakeRedis()
    fake.values["key"] = "₹100".encode("utf-8")
    store = RedisCacheStore(client=fake)  # type: ignore[arg-type]

    assert store.get("key") == "₹100"


def test_set_rejects_non_positive_ttl() -> None:
    store = RedisCacheStore(client=FakeRedis())  # type: ignore[arg-type]

    with pytest.raises(ValueError):
        store.set("key", "value", ttl_seconds=0)


def test_ping_redis_is_false_when_unconfigured(monkeypatch) -> None:
    monkeypatch.delenv("REDIS_URL", raising=False)

    assert not redis_client.redis_configured()
    assert redis_client.ping_redis() is False
    with pytest.raises(RuntimeError):
        redis_client.get_redis_client()
