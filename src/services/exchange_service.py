from __future__ import annotations

import logging
import threading
from typing import Mapping

from domain.account import Account
from domain.calculator import Calculator
from domain.currency_exchanger import CurrencyExchanger, ExchangeReceipt
from domain.errors import InvalidArgument
from domain.exchange_rate import CurrencyId, currency_id
from domain.limit import NO_LIMIT, Limit, SourceLimit, TargetLimit
from domain.money import Money, MoneyLike

from .rate_table import RateSource, RateTable

logger = logging.getLogger(__name__)


class AccountNotFoundError(LookupError):
    def __init__(self, currency: str) -> None:
        self.currency = currency
        super().__init__(f"No account in currency {currency}")


class ExchangeService:
    """Exchanges money between a user's accounts, one account per currency.

    Each exchange withdraws from one account and deposits into another. The
    two steps are not atomic on their own, so exchanges are serialised with a
    lock.
    """

    def __init__(
        self,
        *,
        rates: RateSource | None = None,
        calculator: Calculator | None = None,
    ) -> None:
        self.rates = rates if rates is not None else RateTable()
        self.calculator = calculator if calculator is not None else Calculator()
        self._accounts: dict[CurrencyId, Account] = {}
        self._lock = threading.Lock()

    def open_account(self, currency: str, balance: MoneyLike = 0) -> Account:
        code = currency_id(currency)
        account = Account(code, balance)
        with self._lock:
            self._accounts[code] = account
        return account

    def set_balance(self, balances: Mapping[str, MoneyLike]) -> None:
        for currency, balance in balances.items():
            self.open_account(currency, balance)

    def set_exchange_rate(self, rates: Mapping[tuple[str, str], MoneyLike]) -> None:
        if not isinstance(self.rates, RateTable):
            msg = f"Cannot register rates on a read-only rate source {type(self.rates).__name__}"
            raise TypeError(msg)
        for (source, target), value in rates.items():
            self.rates.set(source, target, value)

    def find_account(self, currency: str) -> Account:
        code = currency_id(currency)
        try:
            return self._accounts[code]
        except KeyError:
            raise AccountNotFoundError(code) from None

    def get_balance(self, currency: str) -> Money:
        return self.find_account(currency).balance

    def accounts(self) -> dict[CurrencyId, Money]:
        with self._lock:
            return {currency: account.balance for currency, account in self._accounts.items()}

    def exchange_money(
        self,
        source: str,
        target: str,
        amount: Mapping[str, MoneyLike] | None = None,
    ) -> ExchangeReceipt:
        """Exchange money from the `source` account into the `target` account.

        `amount` bounds the exchange and is keyed by currency: a source-currency
        key limits what leaves the source account, a target-currency key what
        arrives on the target account. Without it the whole source balance is
        exchanged.
        """
        source_account = self.find_account(source)
        target_account = self.find_account(target)
        rate = self.rates.find(source_account.currency, target_account.currency)
        limit = limit_from_amount(amount, source_account.currency, target_account.currency)

        exchanger = CurrencyExchanger(source_account, target_account, rate.value, calculator=self.calculator)
        with self._lock:
            receipt = exchanger.exchange(limit)
        logger.debug("Balances after exchange: %s", self.accounts())
        return receipt


def limit_from_amount(
    amount: Mapping[str, MoneyLike] | None,
    source: CurrencyId,
    target: CurrencyId,
) -> Limit:
    """Turn a currency-keyed amount into an exchange limit."""
    if amount is None:
        return NO_LIMIT

    by_currency = {currency_id(currency): value for currency, value in amount.items()}
    if source in by_currency:
        return SourceLimit(by_currency[source])
    if target in by_currency:
        return TargetLimit(by_currency[target])

    keys = ",".join(str(key) for key in amount.keys())
    raise InvalidArgument(
        f"Neither source nor target currency specified as limit. [{source},{target}] should include one of {keys}"
    )


__all__ = ["AccountNotFoundError", "ExchangeService", "limit_from_amount"]
