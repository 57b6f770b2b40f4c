from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union


class Currency(str, Enum):
    """The five divisions of the economy, cheapest first."""

    GOLD = "gold"
    TOKENS = "tokens"
    DNG = "dng"
    HERO = "hero"
    ETH = "eth"


CurrencyLike = Union[Currency, str]

# 1000:1 for every upgrade step. The live game also listed tokens -> gold at
# 1000; exchanges here only move up the chain. A config file can add the pair
# back through SimulationConfig.exchange_rates.
DEFAULT_EXCHANGE_RATES: Dict[Tuple[Currency, Currency], int] = {
    (Currency.GOLD, Currency.TOKENS): 1000,
    (Currency.TOKENS, Currency.DNG): 1000,
    (Currency.DNG, Currency.HERO): 1000,
    (Currency.HERO, Currency.ETH): 1000,
}

# Entry cost per session. Gold and ETH divisions are free to enter.
DEFAULT_DIVISION_COSTS: Dict[Currency, int] = {
    Currency.GOLD: 0,
    Currency.TOKENS: 1,
    Currency.DNG: 1,
    Currency.HERO: 1,
    Currency.ETH: 0,
}

DEFAULT_REWARD_MULTIPLIERS: Dict[Currency, int] = {
    Currency.GOLD: 1,
    Currency.TOKENS: 2,
    Currency.DNG: 5,
    Currency.HERO: 10,
    Currency.ETH: 20,
}


def parse_currency(value: CurrencyLike) -> Optional[Currency]:
    """Return the Currency for a code, or None if the code is not recognised."""
    if isinstance(value, Currency):
        return value
    try:
        return Currency(str(value).lower())
    except ValueError:
        return None
