from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Mapping, Sequence

from config import config
from domain.calculator import Calculator
from domain.currency_exchanger import ExchangeReceipt
from domain.money import Money
from importers.csv_loader import load_balances, load_rates
from services.exchange_service import ExchangeService
from services.rate_table import RateTable
from utils.formatting import format_money, format_rate

logger = logging.getLogger(__name__)


def build_exchange_service(balances_csv: Path, rates_csv: Path, *, places: int) -> ExchangeService:
    service = ExchangeService(rates=RateTable(load_rates(rates_csv)), calculator=Calculator(places=places))
    service.set_balance(load_balances(balances_csv))
    return service


def run(
    balances_csv: Path,
    rates_csv: Path,
    *,
    source: str,
    target: str,
    source_limit: str | None = None,
    target_limit: str | None = None,
    places: int = 2,
) -> ExchangeReceipt:
    # Setup components
    service = build_exchange_service(balances_csv, rates_csv, places=places)
    logger.info("Loaded %d accounts and %d rates", len(service.accounts()), len(service.rates))

    amount: dict[str, str] | None = None
    if source_limit is not None:
        amount = {source: source_limit}
    elif target_limit is not None:
        amount = {target: target_limit}

    receipt = service.exchange_money(source, target, amount)

    # Print summary
    print_receipt(receipt, places=places)
    print_balances(service.accounts(), places=places)
    return receipt


def print_receipt(receipt: ExchangeReceipt, *, places: int) -> None:
    print("Exchange summary:")
    print(f"  Rate:      {receipt.source_currency}->{receipt.target_currency} {format_rate(receipt.rate)}")
    print(f"  Requested: {format_money(Money(receipt.requested_amount), places)} {receipt.source_currency}")
    print(f"  Withdrawn: {format_money(Money(receipt.source_amount), places)} {receipt.source_currency}")
    print(f"  Deposited: {format_money(Money(receipt.target_amount), places)} {receipt.target_currency}")
    if receipt.clamped:
        print("  Limit exceeded the source balance; exchanged the whole balance instead.")


def print_balances(balances: Mapping[str, Money], *, places: int) -> None:
    print("Balances:")
    for currency in sorted(balances):
        print(f"  {currency}: {format_money(balances[currency], places)}")


def main(argv: Sequence[str] | None = None) -> int:
    settings = config()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
    parser = argparse.ArgumentParser(description="Exchange money between two accounts at a fixed rate.")
    parser.add_argument("--balances", type=Path, default=settings.balances_csv)
    parser.add_argument("--rates", type=Path, default=settings.rates_csv)
    parser.add_argument("--source", required=True, help="Currency to exchange from, e.g. EUR")
    parser.add_argument("--target", required=True, help="Currency to exchange into, e.g. PLN")
    limit_group = parser.add_mutually_exclusive_group()
    limit_group.add_argument("--source-limit", help="Maximum amount of the source currency to exchange")
    limit_group.add_argument("--target-limit", help="Amount of the target currency to receive")
    parser.add_argument("--places", type=int, default=settings.money_places)
    args = parser.parse_args(argv)
    try:
        run(
            args.balances,
            args.rates,
            source=args.source,
            target=args.target,
            source_limit=args.source_limit,
            target_limit=args.target_limit,
            places=args.places,
        )
    except (LookupError, ValueError, ArithmeticError) as err:
        logger.error("Exchange failed: %s", err)
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
