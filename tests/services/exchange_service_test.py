import threading

import pytest

from domain.errors import InvalidArgument
from domain.limit import NO_LIMIT, SourceLimit, TargetLimit
from domain.money import Money
from services.exchange_service import AccountNotFoundError, ExchangeService, limit_from_amount
from services.rate_table import RateNotFoundError
from tests.constants import EUR, PLN


def test_exchange_of_all_money_from_eur_account(exchange_service: ExchangeService) -> None:
    exchange_service.exchange_money("eur", "pln")

    assert exchange_service.get_balance("eur") == 0
    assert exchange_service.get_balance("pln") == 415


def test_exchange_with_source_currency_limit(exchange_service: ExchangeService) -> None:
    exchange_service.exchange_money("eur", "pln", {"eur": 50})

    assert exchange_service.get_balance("EUR") == Money("50")
    assert exchange_service.get_balance("PLN") == Money("207.50")


def test_exchange_with_target_currency_limit(exchange_service: ExchangeService) -> None:
    receipt = exchange_service.exchange_money("eur", "pln", {"pln": "200.03"})

    assert receipt.source_amount == Money("48.20")
    assert exchange_service.accounts() == {EUR: Money("51.80"), PLN: Money("200.03")}


def test_exchange_with_unrelated_limit_fails(exchange_service: ExchangeService) -> None:
    with pytest.raises(InvalidArgument, match="Neither source nor target"):
        exchange_service.exchange_money("eur", "pln", {"usd": 10})

    assert exchange_service.get_balance("eur") == Money("100")


def test_exchange_requires_known_accounts_and_rate(exchange_service: ExchangeService) -> None:
    with pytest.raises(AccountNotFoundError):
        exchange_service.exchange_money("eur", "usd")
    with pytest.raises(RateNotFoundError):
        exchange_service.exchange_money("pln", "eur")


def test_limit_from_amount() -> None:
    assert limit_from_amount(None, EUR, PLN) == NO_LIMIT
    assert limit_from_amount({"eur": 5}, EUR, PLN) == SourceLimit(Money("5"))
    assert limit_from_amount({"PLN": "7.5"}, EUR, PLN) == TargetLimit(Money("7.5"))


def test_concurrent_exchanges_never_overdraw() -> None:
    service = ExchangeService()
    service.set_balance({"EUR": 1000, "PLN": 0})
    service.set_exchange_rate({("EUR", "PLN"): "4"})

    def worker() -> None:
        for _ in range(20):
            service.exchange_money("EUR", "PLN", {"EUR": 3})

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert service.get_balance("EUR") == Money("520")
    assert service.get_balance("PLN") == Money("1920")
