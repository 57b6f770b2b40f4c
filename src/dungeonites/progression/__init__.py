from .scaling import (
    MAX_SCALING_FLOOR,
    drop_rate_for_floor,
    effective_floor,
    gold_reward_for_floor,
    monster_scaling_factor,
    weapon_damage_for_floor,
)
from .tracker import (
    ENTRANCE_FLOOR,
    ProgressionTracker,
    can_explore,
    max_explorations_for_floor,
)

__all__ = [
    "ENTRANCE_FLOOR",
    "MAX_SCALING_FLOOR",
    "ProgressionTracker",
    "can_explore",
    "drop_rate_for_floor",
    "effective_floor",
    "gold_reward_for_floor",
    "max_explorations_for_floor",
    "monster_scaling_factor",
    "weapon_damage_for_floor",
]
