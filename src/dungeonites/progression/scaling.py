"""Floor-based reward scaling. Every formula stops growing at the scaling cap."""
from __future__ import annotations

import math

MAX_SCALING_FLOOR = 500


def effective_floor(floor: int, cap: int = MAX_SCALING_FLOOR) -> int:
    return min(max(0, floor), cap)


def monster_scaling_factor(floor: int, cap: int = MAX_SCALING_FLOOR) -> float:
    """+10% monster stats per completed 20-floor cycle, starting after floor 20."""
    eff = effective_floor(floor, cap)
    if eff <= 20:
        return 1.0
    cycles = (eff - 1) // 20
    return 1.0 + cycles * 0.1


def weapon_damage_for_floor(base_damage: int, floor: int, cap: int = MAX_SCALING_FLOOR) -> int:
    eff = effective_floor(floor, cap)
    if eff <= 20:
        return base_damage
    multiplier = (eff // 20) * 0.1
    return math.ceil(base_damage * (1 + multiplier))


def gold_reward_for_floor(base_gold: int, floor: int, cap: int = MAX_SCALING_FLOOR) -> int:
    return base_gold + effective_floor(floor, cap) * 3


def drop_rate_for_floor(
    base_chance: float, floor: int, per_step: float = 0.05, cap: int = MAX_SCALING_FLOOR
) -> float:
    """Drop chance improves by ``per_step`` every 25 floors."""
    return base_chance + (effective_floor(floor, cap) // 25) * per_step
