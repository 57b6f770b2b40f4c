from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..clock import Clock, SystemClock
from ..config import SimulationConfig
from ..economy.currency import Currency, CurrencyLike, parse_currency
from ..economy.ledger import CurrencyLedger
from ..effects.catalog import EffectCatalog, EffectCategory
from ..effects.definitions import default_catalog
from ..effects.engine import EffectInstance, EffectInstanceEngine, TurnSummary
from ..effects.modifiers import EffectModifiers, summarize_modifiers
from ..events import EffectAppliedEvent, EffectExpiredEvent, EventBus
from ..inventory.store import InventoryStore
from ..progression.scaling import gold_reward_for_floor
from ..progression.tracker import ENTRANCE_FLOOR, ProgressionTracker

logger = logging.getLogger(__name__)

DEFAULT_MAX_HEALTH = 10
DEFAULT_MAX_MANA = 10


@dataclass
class PlayerSimulationState:
    """Everything the simulation core knows about one player.

    Owned by a single caller at a time. The catalog, clock, config and event bus
    are injected collaborators; they are shared, never serialized and do not take
    part in equality.
    """

    player_id: str
    division: Currency = Currency.GOLD
    ledger: CurrencyLedger = field(default_factory=CurrencyLedger)
    inventory: InventoryStore = field(default_factory=InventoryStore)
    progression: ProgressionTracker = field(default_factory=ProgressionTracker)
    effects: List[EffectInstance] = field(default_factory=list)
    health: int = DEFAULT_MAX_HEALTH
    max_health: int = DEFAULT_MAX_HEALTH
    mana: int = DEFAULT_MAX_MANA
    max_mana: int = DEFAULT_MAX_MANA
    battle_effects_used: List[str] = field(default_factory=list)

    catalog: EffectCatalog = field(default_factory=default_catalog, repr=False, compare=False)
    clock: Clock = field(default_factory=SystemClock, repr=False, compare=False)
    config: SimulationConfig = field(default_factory=SimulationConfig, repr=False, compare=False)
    event_bus: Optional[EventBus] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        division = parse_currency(self.division)
        if division is None:
            raise ValueError(f"Unknown division: {self.division!r}")
        self.division = division
        if self.max_health < 0 or self.max_mana < 0:
            raise ValueError("max_health and max_mana must be >= 0")
        self.health = max(0, min(self.health, self.max_health))
        self.mana = max(0, min(self.mana, self.max_mana))
        if self.event_bus is not None and self.ledger.event_bus is None:
            self.ledger.event_bus = self.event_bus
        self._engine = EffectInstanceEngine(self.catalog, self.clock)

    @classmethod
    def new(
        cls,
        player_id: str,
        config: Optional[SimulationConfig] = None,
        catalog: Optional[EffectCatalog] = None,
        clock: Optional[Clock] = None,
        event_bus: Optional[EventBus] = None,
    ) -> "PlayerSimulationState":
        """A fresh player at the dungeon entrance, wired to the given collaborators."""
        cfg = config or SimulationConfig()
        ledger = cfg.new_ledger(event_bus)
        ledger.add(Currency.GOLD, cfg.starting_gold, reason="starting_gold")
        inventory = cfg.new_inventory()
        inventory.gold = cfg.starting_gold
        return cls(
            player_id=player_id,
            ledger=ledger,
            inventory=inventory,
            catalog=catalog or default_catalog(),
            clock=clock or SystemClock(),
            config=cfg,
            event_bus=event_bus,
        )

    @property
    def engine(self) -> EffectInstanceEngine:
        return self._engine

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    # Effects

    def has_effect(self, effect_id: str) -> bool:
        return any(inst.effect_id == effect_id for inst in self.effects)

    def modifiers(self) -> EffectModifiers:
        return summarize_modifiers(self.effects, self.catalog)

    def apply_effect(
        self,
        effect_id: str,
        duration_override: Optional[int] = None,
        overrides: Optional[Mapping[str, float]] = None,
    ) -> bool:
        """Apply an effect, returning True if it was added or its timer refreshed.

        Refused (False, no change) for unknown ids, for once-per-battle effects
        already used this battle, for negative effects while immune, and when an
        existing instance already has at least as many turns left.
        """
        definition = self.catalog.get(effect_id)
        if definition is None:
            logger.warning("Player %s: cannot apply unknown effect '%s'", self.player_id, effect_id)
            return False
        if definition.once_per_battle and effect_id in self.battle_effects_used:
            logger.debug("Player %s: %s already used this battle", self.player_id, effect_id)
            return False
        if definition.category == EffectCategory.NEGATIVE and self.modifiers().effect_immunity:
            logger.debug("Player %s: immune to %s", self.player_id, effect_id)
            return False

        instance = self._engine.create_instance(effect_id, duration_override, overrides)
        if instance is None:
            return False

        current = None
        if not definition.stackable:
            current = next((inst for inst in self.effects if inst.effect_id == effect_id), None)
        before = current.turns_remaining if current is not None else None
        self._engine.apply_with_duration_rule(self.effects, instance)

        if current is not None and current.turns_remaining == before:
            return False
        if definition.once_per_battle:
            self.battle_effects_used.append(effect_id)
        if self.event_bus is not None:
            self.event_bus.emit(
                EffectAppliedEvent(
                    player_id=self.player_id,
                    effect_id=effect_id,
                    duration=instance.duration,
                    refreshed=current is not None,
                )
            )
        return True

    def remove_effect(self, effect_id: str) -> int:
        """Drop every instance of an effect, e.g. when the item granting it is unequipped."""
        kept = [inst for inst in self.effects if inst.effect_id != effect_id]
        removed = len(self.effects) - len(kept)
        self.effects = kept
        return removed

    def resolve_effects_for_turn(self, actor_name: Optional[str] = None) -> TurnSummary:
        """Tick every active effect once and apply the totals to health and mana."""
        summary = self._engine.resolve_all(self.effects, actor_name or self.player_id)
        self.effects = summary.kept
        self.health = max(0, min(self.max_health, self.health - summary.damage + summary.healing))
        self.mana = max(0, min(self.max_mana, self.mana + summary.mana))
        for inst in summary.expired:
            self._end_health_multiplier(inst, summary)
        if summary.damage or summary.healing or summary.mana:
            logger.debug(
                "Player %s turn: -%d hp +%d hp +%d mp => %d/%d hp %d/%d mp",
                self.player_id, summary.damage, summary.healing, summary.mana,
                self.health, self.max_health, self.mana, self.max_mana,
            )
        if self.event_bus is not None:
            for inst in summary.expired:
                self.event_bus.emit(EffectExpiredEvent(player_id=self.player_id, effect_id=inst.effect_id))
        return summary

    def _end_health_multiplier(self, instance: EffectInstance, summary: TurnSummary) -> None:
        """Undo a temporary health multiplier (petrification) once its effect runs out."""
        definition = self.catalog.get(instance.effect_id)
        if definition is None or instance.turns_remaining > 0:
            return
        multiplier = float(instance.overrides.get("health_multiplier", definition.health_multiplier))
        if multiplier <= 1:
            return
        before = self.health
        self.health = math.ceil(self.health / multiplier)
        summary.messages.append(f"{definition.name} ends, health returns to normal")
        logger.debug("Player %s: %s ended, health %d -> %d", self.player_id, instance.effect_id, before, self.health)

    def start_battle(self) -> None:
        self.battle_effects_used.clear()

    # Economy

    def enter_division(self, currency: CurrencyLike) -> bool:
        """Pay the entry cost of a division and switch to it. No change if unaffordable."""
        target = parse_currency(currency)
        if target is None:
            logger.warning("Player %s: unknown division %r", self.player_id, currency)
            return False
        if not self.ledger.charge_division_cost(target):
            return False
        self.division = target
        logger.debug("Player %s entered %s division", self.player_id, target.value)
        return True

    def reward_multiplier(self) -> int:
        return self.config.reward_multiplier(self.division)

    def gold_reward(self, base_gold: int) -> int:
        """Gold for a reward on the current floor, scaled by depth and division."""
        scaled = gold_reward_for_floor(base_gold, self.progression.current_floor, self.config.max_scaling_floor)
        return scaled * self.reward_multiplier()

    # Progression

    def record_exploration(self) -> bool:
        if not self.progression.can_explore():
            return False
        self.progression.increment_exploration()
        return True

    def advance_floor(self, floors: int = 1) -> int:
        return self.progression.advance_floor(floors)

    def reset_after_defeat(self) -> None:
        """Lose the run: carried items and effects go, currencies and records stay."""
        self.inventory.clear()
        self.effects = []
        self.battle_effects_used.clear()
        self.progression.current_floor = ENTRANCE_FLOOR
        self.progression.reset_exploration()
        self.health = self.max_health
        self.mana = self.max_mana
        logger.info("Player %s was defeated; run state reset", self.player_id)

    # Snapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "division": self.division.value,
            "ledger": self.ledger.to_dict(),
            "inventory": self.inventory.to_dict(),
            "progression": self.progression.to_dict(),
            "effects": [inst.to_dict() for inst in self.effects],
            "health": self.health,
            "max_health": self.max_health,
            "mana": self.mana,
            "max_mana": self.max_mana,
            "battle_effects_used": list(self.battle_effects_used),
        }

    @staticmethod
    def from_dict(
        data: Mapping[str, Any],
        config: Optional[SimulationConfig] = None,
        catalog: Optional[EffectCatalog] = None,
        clock: Optional[Clock] = None,
        event_bus: Optional[EventBus] = None,
    ) -> "PlayerSimulationState":
        cfg = config or SimulationConfig()
        ledger = CurrencyLedger.from_dict(
            data.get("ledger", {}),
            exchange_rates=cfg.exchange_rates,
            division_costs=cfg.division_costs,
            event_bus=event_bus,
        )
        return PlayerSimulationState(
            player_id=str(data["player_id"]),
            division=Currency(data.get("division", Currency.GOLD.value)),
            ledger=ledger,
            inventory=InventoryStore.from_dict(data.get("inventory", {}), limits=cfg.inventory_limits),
            progression=ProgressionTracker.from_dict(data.get("progression", {})),
            effects=[EffectInstance.from_dict(e) for e in data.get("effects", [])],
            health=int(data.get("health", DEFAULT_MAX_HEALTH)),
            max_health=int(data.get("max_health", DEFAULT_MAX_HEALTH)),
            mana=int(data.get("mana", DEFAULT_MAX_MANA)),
            max_mana=int(data.get("max_mana", DEFAULT_MAX_MANA)),
            battle_effects_used=list(data.get("battle_effects_used", [])),
            catalog=catalog or default_catalog(),
            clock=clock or SystemClock(),
            config=cfg,
            event_bus=event_bus,
        )
