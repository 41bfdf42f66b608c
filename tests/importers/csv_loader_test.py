import pytest

from domain.errors import InvalidArgument
from domain.money import Money
from importers.csv_loader import load_balances, load_rates
from tests.constants import EUR, PLN


def test_load_balances(write_csv) -> None:
    path = write_csv("balances.csv", "currency,balance\neur,100\n PLN , 0.50 \n\n")

    assert load_balances(path) == {EUR: Money("100"), PLN: Money("0.50")}


def test_load_rates(write_csv) -> None:
    path = write_csv("rates.csv", "source,target,rate\nEUR,PLN,4.15\npln,eur,0.24\n")

    rates = load_rates(path)

    assert [rate.pair for rate in rates] == [(EUR, PLN), (PLN, EUR)]
    assert rates[0].value == Money("4.15")


def test_missing_columns_raise(write_csv) -> None:
    path = write_csv("rates.csv", "source,rate\nEUR,4.15\n")

    with pytest.raises(ValueError, match="missing required columns: target"):
        load_rates(path)


def test_empty_file_raises(write_csv) -> None:
    path = write_csv("balances.csv", "")

    with pytest.raises(ValueError, match="empty or missing headers"):
        load_balances(path)


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        load_balances(tmp_path / "nope.csv")


def test_invalid_numbers_raise(write_csv) -> None:
    with pytest.raises(InvalidArgument):
        load_rates(write_csv("rates.csv", "source,target,rate\nEUR,PLN,abc\n"))
    with pytest.raises(InvalidArgument):
        load_rates(write_csv("rates.csv", "source,target,rate\nEUR,PLN,0\n"))


def test_negative_balance_raises(write_csv) -> None:
    path = write_csv("balances.csv", "currency,balance\nEUR,-1\n")

    with pytest.raises(ValueError, match="negative balance"):
        load_balances(path)
