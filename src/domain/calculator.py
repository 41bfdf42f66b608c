from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from .errors import InvalidArgument
from .money import Money, MoneyLike

DEFAULT_PLACES = 2


class Calculator:
    """Converts amounts of money according to an exchange rate."""

    def __init__(self, places: int = DEFAULT_PLACES) -> None:
        if places < 0:
            raise InvalidArgument(f"places must be >= 0, got {places}")
        self.places = places
        # Smallest currency unit, 0.01 for two places.
        self.unit = Money(Decimal(1).scaleb(-places))

    def compute_target_amount(self, amount: MoneyLike | None, rate: MoneyLike | None) -> Money:
        """Amount of target currency received when `amount` is exchanged at `rate`."""
        amount, rate = self._check_amount_and_rate(amount, rate)
        return amount * rate

    def compute_source_amount(self, target_amount: MoneyLike | None, rate: MoneyLike | None) -> Money:
        """Amount of source currency needed to receive `target_amount` at `rate`.

        The result never converts back to less than `target_amount`. When we
        have to pay for something in a foreign currency, asking for the exact
        price is enough to be sure we can cover it; the cost is at most one
        extra unit of the source currency.
        """
        target_amount, rate = self._check_amount_and_rate(target_amount, rate)
        source_amount = (target_amount / rate).round(self.places, ROUND_HALF_EVEN)
        return self._increase_if_lower_than_expected(source_amount, target_amount, rate)

    def _check_amount_and_rate(self, amount: MoneyLike | None, rate: MoneyLike | None) -> tuple[Money, Money]:
        if rate is None:
            raise InvalidArgument("Exchange rate can't be None")
        if amount is None:
            raise InvalidArgument("Amount of money can't be None")
        rate = Money(rate)
        if rate <= 0:
            raise InvalidArgument(f"Exchange rate must be positive, got {rate}")
        return Money(amount), rate

    def _increase_if_lower_than_expected(self, source_amount: Money, target_amount: Money, rate: Money) -> Money:
        if target_amount > self.compute_target_amount(source_amount, rate):
            return source_amount + self.unit
        return source_amount


__all__ = ["Calculator", "DEFAULT_PLACES"]
