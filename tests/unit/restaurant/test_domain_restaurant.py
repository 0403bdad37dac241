from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.common.money import format_amount, mean_amount, percentage_of, round_money
from dinedash.domain.restaurant.entities import Restaurant, RestaurantStats


def test_restaurant_requires_name() -> None:
    with pytest.raises(ValueError):
        Restaurant(restaurant_id=RestaurantId(1), name="  ", location="Delhi", cuisine="Italian")


def test_restaurant_description_includes_id() -> None:
    restaurant = Restaurant(
        restaurant_id=RestaurantId(103),
        name="Pasta Palace",
        location="Delhi",
        cuisine="Italian",
    )

    assert restaurant.describe() == "Pasta Palace (ID: 103)"


def test_stats_without_orders_are_zero() -> None:
    stats = RestaurantStats()

    assert stats.total_orders == 0
    assert stats.total_revenue == Decimal("0.00")
    assert stats.avg_order_value == Decimal("0.00")


def test_stats_round_half_up() -> None:
    stats = RestaurantStats(total_orders=2, revenue=Decimal("100.01"))

    assert stats.avg_order_value == Decimal("50.01")


def test_stats_reject_negative_counts() -> None:
    with pytest.raises(ValueError):
        RestaurantStats(total_orders=-1)


def test_money_helpers() -> None:
    assert round_money("2.675") == Decimal("2.68")
    assert round_money(0.125) == Decimal("0.13")
    assert mean_amount(Decimal("10"), 0) == Decimal("0.00")
    assert percentage_of(1, 3) == Decimal("33.33")
    assert percentage_of(5, 0) == Decimal("0.00")
    assert format_amount(Decimal("100.00")) == "100"
    assert format_amount(Decimal("99.50")) == "99.5"
    assert format_amount(Decimal("1E+3")) == "1000"
