"""
Entry points used by command handlers.

Each operation takes a loaded PlayerSimulationState, mutates it in place and
hands it back (with a success flag where the action can be refused) so callers
can chain straight into persistence and rendering.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..economy.currency import CurrencyLike
from ..inventory.store import ItemLike
from .player import PlayerSimulationState

logger = logging.getLogger(__name__)


@dataclass
class TurnOutcome:
    state: PlayerSimulationState
    damage: int = 0
    healing: int = 0
    mana: int = 0
    messages: List[str] = field(default_factory=list)


def apply_effect(
    state: PlayerSimulationState, effect_id: str, duration_override: Optional[int] = None
) -> PlayerSimulationState:
    state.apply_effect(effect_id, duration_override)
    return state


def resolve_effects_for_turn(state: PlayerSimulationState, actor_name: Optional[str] = None) -> TurnOutcome:
    summary = state.resolve_effects_for_turn(actor_name)
    return TurnOutcome(
        state=state,
        damage=summary.damage,
        healing=summary.healing,
        mana=summary.mana,
        messages=list(summary.messages),
    )


def add_currency(state: PlayerSimulationState, currency: CurrencyLike, amount: int) -> PlayerSimulationState:
    state.ledger.add(currency, amount, reason="grant")
    return state


def exchange_currency(
    state: PlayerSimulationState, from_currency: CurrencyLike, to_currency: CurrencyLike, amount: int
) -> Tuple[PlayerSimulationState, bool]:
    ok = state.ledger.exchange(from_currency, to_currency, amount)
    return state, ok


def add_inventory_item(
    state: PlayerSimulationState, descriptor: ItemLike, quantity: int = 1
) -> Tuple[PlayerSimulationState, bool]:
    ok = state.inventory.add(descriptor, quantity)
    if not ok:
        logger.debug("Player %s: no room for %s x%d", state.player_id, descriptor, quantity)
    return state, ok


def advance_floor(state: PlayerSimulationState) -> PlayerSimulationState:
    state.advance_floor()
    return state


def record_exploration(state: PlayerSimulationState) -> Tuple[PlayerSimulationState, bool]:
    ok = state.record_exploration()
    return state, ok


__all__ = [
    "TurnOutcome",
    "add_currency",
    "add_inventory_item",
    "advance_floor",
    "apply_effect",
    "exchange_currency",
    "record_exploration",
    "resolve_effects_for_turn",
]
