from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal

from domain.money import Money


def format_rate(rate: Money | Decimal) -> str:
    """Shortest fixed-point form of a rate: 4.1500 -> 4.15, 4.15E+2 -> 415."""
    value = Money(rate).value
    normalized = value.normalize(Context(prec=max(len(value.as_tuple().digits), 1)))
    return f"{normalized:f}"


def format_money(value: Money, places: int = 2) -> str:
    rounded = value.round(places, ROUND_HALF_EVEN).value
    return f"{rounded:.{places}f}"
