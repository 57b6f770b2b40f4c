from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

INSTANT = 0
PERMANENT = -1


class EffectCategory(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    SPECIAL = "special"


@dataclass(frozen=True)
class EffectDefinition:
    """Static description of a status effect.

    Modifiers are sparse: anything a definition does not mention stays at its
    zero value. ``duration`` is a turn count, ``INSTANT`` (0) for one-shot
    effects or ``PERMANENT`` (-1) for effects removed only by an outside cause
    such as unequipping the item that granted them.
    """

    id: str
    name: str
    category: EffectCategory
    duration: int
    description: str = ""
    stackable: bool = False
    once_per_battle: bool = False

    # Per-turn ticks
    health_per_turn: int = 0
    mana_per_turn: int = 0
    damage_per_turn: int = 0
    # One-shot amounts for instant effects
    health_restore: int = 0
    mana_restore: int = 0
    # Combat modifiers (0 means "not set"; multipliers are neutral at 0 or 1)
    damage_multiplier: float = 0.0
    damage_vulnerability: float = 0.0
    damage_bonus: int = 0
    damage_reduction: float = 0.0
    armor_reduction: float = 0.0
    crit_bonus: int = 0
    loot_bonus: int = 0
    drain_amount: int = 0
    health_multiplier: float = 0.0
    magic_punish_damage: int = 0
    # Flags
    disable_weapons: bool = False
    disable_magic: bool = False
    disable_primary_weapon: bool = False
    disable_all_actions: bool = False
    untargetable: bool = False
    effect_immunity: bool = False
    ignore_armor: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("EffectDefinition.id cannot be empty")
        if self.duration < PERMANENT:
            raise ValueError(f"Effect '{self.id}' has invalid duration {self.duration}")

    @property
    def is_instant(self) -> bool:
        return self.duration == INSTANT

    @property
    def is_permanent(self) -> bool:
        return self.duration == PERMANENT

    def modifier(self, name: str) -> Any:
        if name not in MODIFIER_FIELDS:
            raise KeyError(f"Unknown effect modifier: {name}")
        return getattr(self, name)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "EffectDefinition":
        known = {f.name for f in fields(EffectDefinition)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown effect definition keys: {sorted(unknown)}")
        kwargs: Dict[str, Any] = dict(data)
        kwargs["category"] = EffectCategory(data["category"])
        return EffectDefinition(**kwargs)


_NON_MODIFIER_FIELDS = {"id", "name", "category", "duration", "description", "stackable", "once_per_battle"}

MODIFIER_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(EffectDefinition) if f.name not in _NON_MODIFIER_FIELDS
)


class EffectCatalog:
    """
    Read-only table of effect definitions keyed by id.

    Built once at startup and injected wherever effects are created or
    resolved. Lookups of unknown ids return None rather than raising.
    """

    def __init__(self, definitions: Iterable[EffectDefinition]) -> None:
        table: Dict[str, EffectDefinition] = {}
        for definition in definitions:
            if definition.id in table:
                raise ValueError(f"Effect '{definition.id}' defined twice")
            table[definition.id] = definition
        self._definitions: Mapping[str, EffectDefinition] = MappingProxyType(table)
        logger.debug("Built effect catalog with %d definitions", len(table))

    def get(self, effect_id: str) -> Optional[EffectDefinition]:
        return self._definitions.get(effect_id)

    def has(self, effect_id: str) -> bool:
        return effect_id in self._definitions

    def all(self) -> Tuple[EffectDefinition, ...]:
        return tuple(self._definitions.values())

    def by_category(self, category: EffectCategory) -> Tuple[EffectDefinition, ...]:
        return tuple(d for d in self._definitions.values() if d.category == category)

    def __contains__(self, effect_id: object) -> bool:
        return effect_id in self._definitions

    def __iter__(self) -> Iterator[EffectDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
