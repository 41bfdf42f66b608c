"""Domain models and types for the currency exchange engine.

Money arithmetic, accounts, exchange rates and the exchanger itself live here.
They hold no I/O so the exchange rules can be tested on their own.
"""

__all__ = [
    "account",
    "calculator",
    "currency_exchanger",
    "errors",
    "exchange_rate",
    "limit",
    "money",
]
