from pathlib import Path

import pytest

from domain.account import Account
from domain.calculator import Calculator
from domain.currency_exchanger import CurrencyExchanger
from domain.money import Money
from services.exchange_service import ExchangeService
from tests.constants import EUR, PLN

EUR_PLN_RATE = Money("4.15")


@pytest.fixture(scope="function")
def calculator() -> Calculator:
    return Calculator()


@pytest.fixture(scope="function")
def eur_account() -> Account:
    return Account(EUR, Money("100"))


@pytest.fixture(scope="function")
def pln_account() -> Account:
    return Account(PLN, Money("0"))


@pytest.fixture(scope="function")
def exchanger(eur_account: Account, pln_account: Account, calculator: Calculator) -> CurrencyExchanger:
    return CurrencyExchanger(eur_account, pln_account, EUR_PLN_RATE, calculator=calculator)


@pytest.fixture(scope="function")
def exchange_service() -> ExchangeService:
    service = ExchangeService()
    service.set_balance({"eur": 100, "pln": 0})
    service.set_exchange_rate({("eur", "pln"): "4.15"})
    return service


@pytest.fixture(scope="function")
def write_csv(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
