import pytest

from domain.errors import InvalidArgument
from domain.exchange_rate import ExchangeRate, currency_id
from domain.limit import SourceLimit, TargetLimit
from domain.money import Money
from tests.constants import EUR, PLN


def test_exchange_rate_coerces_value_to_money() -> None:
    rate = ExchangeRate.of("EUR", "PLN", 4.15)

    assert rate.value == Money("4.15")
    assert rate.pair == (EUR, PLN)


@pytest.mark.parametrize("value", ["0", "-1", None])
def test_exchange_rate_rejects_invalid_values(value: str | None) -> None:
    with pytest.raises(InvalidArgument):
        ExchangeRate.of("EUR", "PLN", value)  # type: ignore[arg-type]


def test_exchange_rate_rejects_same_currency() -> None:
    with pytest.raises(InvalidArgument):
        ExchangeRate(EUR, EUR, Money("1"))


def test_currency_id_normalizes_codes() -> None:
    assert currency_id(" eur ") == EUR


def test_limits_hold_money() -> None:
    assert SourceLimit("50").amount == Money("50")
    assert TargetLimit(Money("200.03")).amount == Money("200.03")


@pytest.mark.parametrize("limit_type", [SourceLimit, TargetLimit])
def test_limits_reject_missing_or_negative_amounts(limit_type: type) -> None:
    with pytest.raises(InvalidArgument):
        limit_type(None)
    with pytest.raises(InvalidArgument):
        limit_type(Money("-1"))
