from __future__ import annotations

from typing import Iterable, Iterator, Protocol

from domain.exchange_rate import ExchangeRate, currency_id
from domain.money import MoneyLike


class RateNotFoundError(LookupError):
    def __init__(self, source_currency: str, target_currency: str) -> None:
        self.source_currency = source_currency
        self.target_currency = target_currency
        super().__init__(f"No exchange rate for {source_currency}->{target_currency}")


class RateSource(Protocol):
    """Lookup interface for source→target exchange rates."""

    def find(self, source_currency: str, target_currency: str) -> ExchangeRate: ...


class RateTable(RateSource):
    """Rates keyed by (source, target) pair.

    Only directly registered pairs are returned; no cross rates are derived.
    """

    def __init__(self, rates: Iterable[ExchangeRate] | None = None) -> None:
        self._rates: dict[tuple[str, str], ExchangeRate] = {}
        for rate in rates or ():
            self.add(rate)

    def add(self, rate: ExchangeRate, *, overwrite: bool = True) -> None:
        normalized = ExchangeRate(
            currency_id(rate.source_currency),
            currency_id(rate.target_currency),
            rate.value,
        )
        key = normalized.pair
        if key in self._rates and not overwrite:
            msg = f"Exchange rate for {key[0]}->{key[1]} already registered"
            raise ValueError(msg)
        self._rates[key] = normalized

    def set(self, source_currency: str, target_currency: str, value: MoneyLike) -> ExchangeRate:
        rate = ExchangeRate.of(source_currency, target_currency, value)
        self.add(rate)
        return self.find(source_currency, target_currency)

    def find(self, source_currency: str, target_currency: str) -> ExchangeRate:
        key = (currency_id(source_currency), currency_id(target_currency))
        try:
            return self._rates[key]
        except KeyError:
            raise RateNotFoundError(*key) from None

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        source, target = pair
        return (currency_id(str(source)), currency_id(str(target))) in self._rates

    def __iter__(self) -> Iterator[ExchangeRate]:
        return iter(self._rates.values())

    def __len__(self) -> int:
        return len(self._rates)


__all__ = ["RateNotFoundError", "RateSource", "RateTable"]
