from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel, model_validator

from .account import Account
from .calculator import Calculator
from .errors import InvalidArgument
from .limit import NO_LIMIT, Limit, NoLimit, SourceLimit, TargetLimit
from .money import Money, MoneyLike

logger = logging.getLogger(__name__)


class ExchangeReceipt(BaseModel):
    """What a single exchange moved between two accounts."""

    source_currency: str
    target_currency: str
    rate: Decimal
    requested_amount: Decimal
    source_amount: Decimal
    target_amount: Decimal
    clamped: bool = False

    @model_validator(mode="after")
    def _validate_amounts(self) -> ExchangeReceipt:
        if self.source_amount < 0:
            raise ValueError("source_amount must be >= 0")
        if self.target_amount < 0:
            raise ValueError("target_amount must be >= 0")
        return self


class CurrencyExchanger:
    """Exchange money from a source account into a target account.

    The rate is fixed for the lifetime of the exchanger. All amounts are
    computed before either account is touched, so a failing exchange leaves
    both balances unchanged.
    """

    def __init__(
        self,
        source_account: Account,
        target_account: Account,
        rate: MoneyLike | None,
        *,
        calculator: Calculator | None = None,
    ) -> None:
        if rate is None:
            raise InvalidArgument("Exchange rate can't be None")
        if source_account.currency == target_account.currency:
            raise InvalidArgument(f"Cannot exchange {source_account.currency} into itself")
        self._source_account = source_account
        self._target_account = target_account
        self._rate = Money(rate)
        if self._rate <= 0:
            raise InvalidArgument(f"Exchange rate must be positive, got {self._rate}")
        self._calculator = calculator if calculator is not None else Calculator()

    @property
    def rate(self) -> Money:
        return self._rate

    @property
    def calculator(self) -> Calculator:
        return self._calculator

    def exchange(self, limit: Limit = NO_LIMIT) -> ExchangeReceipt:
        requested_amount = self._compute_source_amount(limit)

        available = self._source_account.balance
        source_amount = requested_amount
        if not self._source_account.can_cover(requested_amount):
            logger.debug(
                "Clamping %s %s to available balance %s",
                requested_amount,
                self._source_account.currency,
                available,
            )
            source_amount = available

        if source_amount < Money.zero():
            raise InvalidArgument(f"Cannot exchange a negative amount of money: {source_amount}")

        target_amount = self._calculator.compute_target_amount(source_amount, self._rate)
        receipt = ExchangeReceipt(
            source_currency=self._source_account.currency,
            target_currency=self._target_account.currency,
            rate=self._rate.value,
            requested_amount=requested_amount.value,
            source_amount=source_amount.value,
            target_amount=target_amount.value,
            clamped=source_amount != requested_amount,
        )

        self._source_account.withdraw(source_amount)
        self._target_account.deposit(target_amount)
        logger.info(
            "Exchanged %s %s into %s %s at rate %s",
            source_amount,
            self._source_account.currency,
            target_amount,
            self._target_account.currency,
            self._rate,
        )
        return receipt

    def _compute_source_amount(self, limit: Limit) -> Money:
        match limit:
            case NoLimit():
                return self._source_account.balance
            case SourceLimit(amount=amount):
                return amount
            case TargetLimit(amount=amount):
                return self._calculator.compute_source_amount(amount, self._rate)
            case _:
                raise InvalidArgument(f"Unsupported exchange limit: {limit!r}")


__all__ = ["CurrencyExchanger", "ExchangeReceipt"]
