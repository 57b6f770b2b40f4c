from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .economy.currency import (
    DEFAULT_DIVISION_COSTS,
    DEFAULT_EXCHANGE_RATES,
    DEFAULT_REWARD_MULTIPLIERS,
    Currency,
)
from .economy.ledger import CurrencyLedger
from .events import EventBus
from .exceptions import ConfigError
from .inventory.store import InventoryLimits, InventoryStore
from .progression.scaling import MAX_SCALING_FLOOR
from .schemas import format_errors, validation_errors

logger = logging.getLogger(__name__)

DEFAULT_STARTING_GOLD = 100


@dataclass(frozen=True)
class SimulationConfig:
    """
    Static tables shared by every player state in a process.

    Defaults match the live game. A JSON file may override any subset of keys:
      - exchange_rates: list of {"from": code, "to": code, "rate": int}
      - division_costs: {code: int}
      - reward_multipliers: {code: int}
      - inventory_limits: {"unique_entries", "take_chest_entries", "stack_entries", "max_keys"}
      - max_scaling_floor: int
      - starting_gold: int, granted to new players in both the ledger and the carried purse
    """

    exchange_rates: Mapping[Tuple[Currency, Currency], int] = field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES)
    )
    division_costs: Mapping[Currency, int] = field(default_factory=lambda: dict(DEFAULT_DIVISION_COSTS))
    reward_multipliers: Mapping[Currency, int] = field(
        default_factory=lambda: dict(DEFAULT_REWARD_MULTIPLIERS)
    )
    inventory_limits: InventoryLimits = field(default_factory=InventoryLimits)
    max_scaling_floor: int = MAX_SCALING_FLOOR
    starting_gold: int = DEFAULT_STARTING_GOLD

    def reward_multiplier(self, currency: Currency) -> int:
        return int(self.reward_multipliers.get(currency, 1))

    def new_ledger(self, event_bus: Optional[EventBus] = None) -> CurrencyLedger:
        return CurrencyLedger(
            exchange_rates=self.exchange_rates,
            division_costs=self.division_costs,
            event_bus=event_bus,
        )

    def new_inventory(self) -> InventoryStore:
        return InventoryStore(limits=self.inventory_limits)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exchange_rates": [
                {"from": src.value, "to": dst.value, "rate": rate}
                for (src, dst), rate in self.exchange_rates.items()
            ],
            "division_costs": {c.value: v for c, v in self.division_costs.items()},
            "reward_multipliers": {c.value: v for c, v in self.reward_multipliers.items()},
            "inventory_limits": self.inventory_limits.to_dict(),
            "max_scaling_floor": self.max_scaling_floor,
            "starting_gold": self.starting_gold,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "SimulationConfig":
        """Build a config from raw data, validating it against the bundled schema.

        Missing keys keep their defaults. Raises ConfigError on malformed input.
        """
        errors = validation_errors("config", data)
        if errors:
            for err in errors:
                logger.error("Config validation error at %s: %s", list(err.path), err.message)
            raise ConfigError(f"Invalid simulation config: {format_errors(errors)}")

        defaults = SimulationConfig()
        rates: Dict[Tuple[Currency, Currency], int] = dict(defaults.exchange_rates)
        if "exchange_rates" in data:
            rates = {}
            for entry in data["exchange_rates"]:
                key = (Currency(entry["from"]), Currency(entry["to"]))
                if key[0] == key[1]:
                    raise ConfigError(f"Exchange rate from {key[0].value} to itself")
                if key in rates:
                    raise ConfigError(f"Duplicate exchange rate {key[0].value} -> {key[1].value}")
                rates[key] = int(entry["rate"])

        costs = dict(defaults.division_costs)
        costs.update({Currency(k): int(v) for k, v in data.get("division_costs", {}).items()})
        multipliers = dict(defaults.reward_multipliers)
        multipliers.update({Currency(k): int(v) for k, v in data.get("reward_multipliers", {}).items()})

        try:
            limits = InventoryLimits(**{**defaults.inventory_limits.to_dict(), **data.get("inventory_limits", {})})
        except ValueError as e:
            raise ConfigError(str(e)) from e

        return SimulationConfig(
            exchange_rates=rates,
            division_costs=costs,
            reward_multipliers=multipliers,
            inventory_limits=limits,
            max_scaling_floor=int(data.get("max_scaling_floor", defaults.max_scaling_floor)),
            starting_gold=int(data.get("starting_gold", defaults.starting_gold)),
        )

    @staticmethod
    def from_json(path: Union[str, Path]) -> "SimulationConfig":
        """Load a config file. A missing file yields the defaults; a broken one raises ConfigError."""
        p = Path(path)
        if not p.exists():
            logger.warning("Simulation config not found at %s; using defaults", p)
            return SimulationConfig()
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {p}: {e}") from e
        logger.info("Loaded simulation config from %s", p)
        return SimulationConfig.from_dict(data)
