from .codec import SCHEMA_VERSION, decode_state, encode_state, migrate_data
from .operations import (
    TurnOutcome,
    add_currency,
    add_inventory_item,
    advance_floor,
    apply_effect,
    exchange_currency,
    record_exploration,
    resolve_effects_for_turn,
)
from .player import PlayerSimulationState

__all__ = [
    "PlayerSimulationState",
    "SCHEMA_VERSION",
    "TurnOutcome",
    "add_currency",
    "add_inventory_item",
    "advance_floor",
    "apply_effect",
    "decode_state",
    "encode_state",
    "exchange_currency",
    "migrate_data",
    "record_exploration",
    "resolve_effects_for_turn",
]
