"""Bounds a caller can put on a single exchange.

An exchange is either unbounded (move everything), bounded by how much of the
source currency may leave the source account, or bounded by how much of the
target currency must arrive in the target account.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import InvalidArgument
from .money import Money, MoneyLike


@dataclass(frozen=True)
class NoLimit:
    pass


@dataclass(frozen=True)
class SourceLimit:
    amount: Money

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _non_negative(self.amount))


@dataclass(frozen=True)
class TargetLimit:
    amount: Money

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _non_negative(self.amount))


def _non_negative(amount: MoneyLike) -> Money:
    money = Money(amount)
    if money < 0:
        raise InvalidArgument(f"Exchange limit must be >= 0, got {money}")
    return money


Limit = Union[NoLimit, SourceLimit, TargetLimit]

NO_LIMIT = NoLimit()


__all__ = ["Limit", "NO_LIMIT", "NoLimit", "SourceLimit", "TargetLimit"]
