from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from .errors import InvalidArgument
from .money import Money, MoneyLike

CurrencyId = NewType("CurrencyId", str)


@dataclass(frozen=True)
class ExchangeRate:
    """Rate for one direction of a currency pair.

    `target_amount = source_amount * value`.
    """

    source_currency: CurrencyId
    target_currency: CurrencyId
    value: Money

    def __post_init__(self) -> None:
        # Accept plain numbers and strings for `value`; the dataclass is frozen.
        object.__setattr__(self, "value", Money(self.value))
        if self.value <= 0:
            raise InvalidArgument(f"Exchange rate must be positive, got {self.value}")
        if self.source_currency == self.target_currency:
            raise InvalidArgument(f"Exchange rate needs two different currencies, got {self.source_currency} twice")

    @classmethod
    def of(cls, source_currency: str, target_currency: str, value: MoneyLike) -> ExchangeRate:
        return cls(CurrencyId(source_currency), CurrencyId(target_currency), Money(value))

    @property
    def pair(self) -> tuple[CurrencyId, CurrencyId]:
        return self.source_currency, self.target_currency


def currency_id(code: str) -> CurrencyId:
    """Normalise a currency code, e.g. " eur" -> "EUR"."""
    return CurrencyId(code.strip().upper())


__all__ = ["CurrencyId", "ExchangeRate", "currency_id"]
