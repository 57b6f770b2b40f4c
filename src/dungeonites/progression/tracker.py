from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)

ENTRANCE_FLOOR = 0
MAX_EXPLORATIONS = 10


def max_explorations_for_floor(floor: int) -> int:
    """Exploration quota for a dungeon floor.

    Floors 1-9 allow 3 explorations and floors 10-20 allow 5. Past floor 20 the
    quota is ``min(10, 5 + (floor - 20) // 10)``, so floor 21 still allows 5
    and the first extra exploration arrives at floor 30.
    The entrance (floor 0) is not explorable; callers must special-case it.
    """
    if floor <= 9:
        return 3
    if floor <= 20:
        return 5
    return min(MAX_EXPLORATIONS, 5 + (floor - 20) // 10)


def can_explore(floor: int, current_count: int) -> bool:
    return current_count < max_explorations_for_floor(floor)


@dataclass
class ProgressionTracker:
    """Tracks floor depth and how many explorations were used on the current floor."""

    current_floor: int = ENTRANCE_FLOOR
    explorations: int = 0
    highest_floor: int = ENTRANCE_FLOOR
    total_explorations: int = 0

    def __post_init__(self) -> None:
        if self.current_floor < 0:
            raise ValueError("current_floor must be >= 0")
        if self.explorations < 0 or self.total_explorations < 0:
            raise ValueError("exploration counters must be >= 0")
        if self.highest_floor < self.current_floor:
            self.highest_floor = self.current_floor

    @property
    def max_explorations(self) -> int:
        return max_explorations_for_floor(self.current_floor)

    @property
    def remaining_explorations(self) -> int:
        if self.current_floor == ENTRANCE_FLOOR:
            return 0
        return max(0, self.max_explorations - self.explorations)

    def can_explore(self) -> bool:
        if self.current_floor == ENTRANCE_FLOOR:
            return False
        return can_explore(self.current_floor, self.explorations)

    def increment_exploration(self) -> None:
        self.explorations += 1
        self.total_explorations += 1
        logger.debug(
            "Exploration %d/%d on floor %d",
            self.explorations, self.max_explorations, self.current_floor,
        )

    def reset_exploration(self) -> None:
        self.explorations = 0

    def advance_floor(self, floors: int = 1) -> int:
        """Descend ``floors`` levels and reset the per-floor exploration counter."""
        if floors < 1:
            raise ValueError("floors must be >= 1")
        self.current_floor += floors
        self.highest_floor = max(self.highest_floor, self.current_floor)
        self.reset_exploration()
        logger.debug("Advanced to floor %d (highest=%d)", self.current_floor, self.highest_floor)
        return self.current_floor

    def to_dict(self) -> Dict[str, int]:
        return {
            "current_floor": self.current_floor,
            "explorations": self.explorations,
            "highest_floor": self.highest_floor,
            "total_explorations": self.total_explorations,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ProgressionTracker":
        return ProgressionTracker(
            current_floor=int(data.get("current_floor", ENTRANCE_FLOOR)),
            explorations=int(data.get("explorations", 0)),
            highest_floor=int(data.get("highest_floor", ENTRANCE_FLOOR)),
            total_explorations=int(data.get("total_explorations", 0)),
        )
