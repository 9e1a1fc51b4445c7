from decimal import Decimal, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Coerce a stored amount (Decimal, float, int or None) to a 2-place Decimal"""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity: int, unit_price: Decimal) -> Decimal:
    """quantity × unit_price, rounded half-up to the cent"""
    return (Decimal(quantity) * to_money(unit_price)).quantize(CENT, rounding=ROUND_HALF_UP)
