from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Amount = Union[Decimal, float, int, str, None]


def to_decimal(value: Amount) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Amount) -> Decimal:
    """Round half away from zero to two decimals."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def mean_amount(total: Amount, count: int) -> Decimal:
    if count <= 0:
        return ZERO
    return round_money(to_decimal(total) / count)


def percentage_of(part: Amount, whole: Amount) -> Decimal:
    whole_value = to_decimal(whole)
    if whole_value <= 0:
        return ZERO
    return round_money(to_decimal(part) * 100 / whole_value)


def format_amount(value: Amount) -> str:
    """Render an amount without trailing zeros, e.g. 100 or 99.5."""
    normalized = to_decimal(value).normalize()
    return format(normalized, "f")
