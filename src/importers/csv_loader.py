from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator

from domain.exchange_rate import CurrencyId, ExchangeRate, currency_id
from domain.money import Money

BALANCE_COLUMNS = {"currency", "balance"}
RATE_COLUMNS = {"source", "target", "rate"}


def load_balances(csv_path: Path) -> dict[CurrencyId, Money]:
    """Load opening account balances.

    Each row should contain: currency,balance
    A currency listed twice keeps its last balance.
    """
    balances: dict[CurrencyId, Money] = {}
    for row in _read_rows(csv_path, BALANCE_COLUMNS):
        balance = Money(row["balance"])
        if balance < 0:
            raise ValueError(f"Balance CSV {csv_path} has a negative balance for {row['currency'].strip()}")
        balances[currency_id(row["currency"])] = balance
    return balances


def load_rates(csv_path: Path) -> list[ExchangeRate]:
    """Load exchange rates.

    Each row should contain: source,target,rate
    where target_amount = source_amount * rate.
    """
    return [
        ExchangeRate(currency_id(row["source"]), currency_id(row["target"]), Money(row["rate"]))
        for row in _read_rows(csv_path, RATE_COLUMNS)
    ]


def _read_rows(csv_path: Path, required: set[str]) -> Iterator[dict[str, str]]:
    if not csv_path.exists():
        raise ValueError(f"CSV file {csv_path} does not exist")

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV {csv_path} is empty or missing headers")

        missing = required - {name.strip() for name in reader.fieldnames}
        if missing:
            raise ValueError(f"CSV {csv_path} missing required columns: {', '.join(sorted(missing))}")

        for row in reader:
            cleaned = {key.strip(): (value or "").strip() for key, value in row.items() if key is not None}
            if not any(cleaned.values()):
                continue
            yield cleaned


__all__ = ["load_balances", "load_rates"]
