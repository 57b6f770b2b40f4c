from .currency import (
    DEFAULT_DIVISION_COSTS,
    DEFAULT_EXCHANGE_RATES,
    DEFAULT_REWARD_MULTIPLIERS,
    Currency,
    parse_currency,
)
from .ledger import CurrencyLedger

__all__ = [
    "Currency",
    "CurrencyLedger",
    "DEFAULT_DIVISION_COSTS",
    "DEFAULT_EXCHANGE_RATES",
    "DEFAULT_REWARD_MULTIPLIERS",
    "parse_currency",
]
