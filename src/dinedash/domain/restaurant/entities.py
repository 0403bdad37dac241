from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from dinedash.domain.common.ids import RestaurantId
from dinedash.domain.common.money import ZERO, mean_amount, round_money


@dataclass(frozen=True)
class Restaurant:
    restaurant_id: RestaurantId
    name: str
    location: str
    cuisine: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")

    def describe(self) -> str:
        return f"{self.name} (ID: {self.restaurant_id})"


@dataclass(frozen=True)
class RestaurantStats:
    total_orders: int = 0
    revenue: Decimal = field(default=ZERO)

    def __post_init__(self) -> None:
        if self.total_orders < 0:
            raise ValueError("total_orders must be >= 0")

    @property
    def total_revenue(self) -> Decimal:
        return round_money(self.revenue)

    @property
    def avg_order_value(self) -> Decimal:
        return mean_amount(self.revenue, self.total_orders)
