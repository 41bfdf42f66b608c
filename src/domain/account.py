from __future__ import annotations

from .errors import InvalidArgument
from .exchange_rate import CurrencyId
from .money import Money, MoneyLike


class Account:
    """Balance held in a single currency.

    The account is a passive ledger: `withdraw` does not check for sufficient
    funds. Callers that must not overdraw (like `CurrencyExchanger`) clamp the
    amount before calling it.
    """

    def __init__(self, currency: CurrencyId, balance: MoneyLike = 0) -> None:
        self._currency = currency
        self._balance = Money(balance)

    @property
    def currency(self) -> CurrencyId:
        return self._currency

    @property
    def balance(self) -> Money:
        return self._balance

    def withdraw(self, amount: MoneyLike | None) -> None:
        self._balance -= self._check_amount(amount)

    def deposit(self, amount: MoneyLike | None) -> None:
        self._balance += self._check_amount(amount)

    def can_cover(self, amount: MoneyLike) -> bool:
        return self._balance >= Money(amount)

    def _check_amount(self, amount: MoneyLike | None) -> Money:
        if amount is None:
            raise InvalidArgument("Amount of money can't be None")
        return Money(amount)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(currency={self._currency!r}, balance={self._balance})"


__all__ = ["Account"]
