from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..events import CurrencyChangedEvent, EventBus
from .currency import (
    DEFAULT_DIVISION_COSTS,
    DEFAULT_EXCHANGE_RATES,
    Currency,
    CurrencyLike,
    parse_currency,
)

logger = logging.getLogger(__name__)


def _zero_balances() -> Dict[Currency, int]:
    return {c: 0 for c in Currency}


@dataclass
class CurrencyLedger:
    """Balances for the five currency divisions of one player.

    Balances never go below zero. Exchange and division-entry tables are static
    and shared; they are not part of the ledger's identity or its snapshot.
    Emits CurrencyChangedEvent on every balance change when an EventBus is attached.
    """

    balances: Dict[Currency, int] = field(default_factory=_zero_balances)
    exchange_rates: Mapping[Tuple[Currency, Currency], int] = field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES), repr=False, compare=False
    )
    division_costs: Mapping[Currency, int] = field(
        default_factory=lambda: dict(DEFAULT_DIVISION_COSTS), repr=False, compare=False
    )
    event_bus: Optional[EventBus] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        normalized = _zero_balances()
        for code, amount in self.balances.items():
            currency = parse_currency(code)
            if currency is None:
                raise ValueError(f"Unknown currency in ledger balances: {code!r}")
            if int(amount) < 0:
                raise ValueError(f"Balance for {currency.value} cannot be negative")
            normalized[currency] = int(amount)
        self.balances = normalized

    def balance(self, currency: CurrencyLike) -> int:
        c = parse_currency(currency)
        if c is None:
            return 0
        return self.balances[c]

    def add(self, currency: CurrencyLike, amount: int, reason: str = "adjust") -> int:
        """Add (or, with a negative amount, deduct) currency, flooring the balance at 0.

        Returns the delta actually applied. Unknown currencies are ignored.
        """
        c = parse_currency(currency)
        if c is None:
            logger.warning("Ignoring add of %s to unknown currency %r", amount, currency)
            return 0
        old = self.balances[c]
        new = max(0, old + int(amount))
        self._set(c, new, reason)
        return new - old

    def can_afford(self, currency: CurrencyLike, cost: int) -> bool:
        c = parse_currency(currency)
        if c is None:
            return False
        return self.balances[c] >= cost

    def division_cost(self, currency: CurrencyLike) -> int:
        c = parse_currency(currency)
        if c is None:
            return 0
        return int(self.division_costs.get(c, 0))

    def charge_division_cost(self, currency: CurrencyLike) -> bool:
        """Charge the per-session entry cost for a division.

        Affordability is checked before anything is deducted: with too little
        balance the ledger is left untouched and False is returned.
        """
        c = parse_currency(currency)
        if c is None:
            logger.warning("Cannot charge division cost for unknown currency %r", currency)
            return False
        cost = self.division_cost(c)
        if cost <= 0:
            return True
        if self.balances[c] < cost:
            logger.debug(
                "Division %s unaffordable: have %s, need %s", c.value, self.balances[c], cost
            )
            return False
        self._set(c, self.balances[c] - cost, "division_entry")
        return True

    def rate(self, from_currency: CurrencyLike, to_currency: CurrencyLike) -> Optional[int]:
        src = parse_currency(from_currency)
        dst = parse_currency(to_currency)
        if src is None or dst is None:
            return None
        return self.exchange_rates.get((src, dst))

    def exchange(self, from_currency: CurrencyLike, to_currency: CurrencyLike, amount: int) -> bool:
        """Buy ``amount`` units of ``to_currency`` paying ``amount * rate`` of ``from_currency``.

        Either both balances change or neither does.
        """
        src = parse_currency(from_currency)
        dst = parse_currency(to_currency)
        if src is None or dst is None:
            logger.warning("Exchange with unknown currency: %r -> %r", from_currency, to_currency)
            return False
        if amount <= 0:
            return False
        rate = self.exchange_rates.get((src, dst))
        if rate is None:
            logger.debug("No exchange rate for %s -> %s", src.value, dst.value)
            return False
        required = amount * rate
        if self.balances[src] < required:
            logger.debug(
                "Exchange %s -> %s refused: have %s, need %s",
                src.value, dst.value, self.balances[src], required,
            )
            return False
        self._set(src, self.balances[src] - required, "exchange")
        self._set(dst, self.balances[dst] + amount, "exchange")
        return True

    def to_dict(self) -> Dict[str, int]:
        return {c.value: self.balances[c] for c in Currency}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], **kwargs: Any) -> "CurrencyLedger":
        balances = {code: int(amount) for code, amount in data.items()}
        return cls(balances=balances, **kwargs)  # type: ignore[arg-type]

    def _set(self, currency: Currency, new: int, reason: str) -> None:
        old = self.balances[currency]
        if old == new:
            return
        self.balances[currency] = new
        logger.debug("%s balance: old=%s new=%s (reason=%s)", currency.value, old, new, reason)
        if self.event_bus is not None:
            self.event_bus.emit(
                CurrencyChangedEvent(
                    currency=currency.value,
                    old_amount=old,
                    new_amount=new,
                    delta=new - old,
                    reason=reason,
                )
            )
