from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable

from .catalog import EffectCatalog

logger = logging.getLogger(__name__)


@dataclass
class EffectModifiers:
    """Combat modifiers granted by all of an actor's active effects at once.

    - damage_multiplier: Factor on outgoing damage (1.0 means no change).
    - damage_vulnerability: Factor on incoming damage.
    - damage_bonus / crit_bonus / loot_bonus: Flat additive bonuses.
    - damage_reduction / armor_reduction: Fractions in 0..1; the strongest wins.
    - Flags are set if any active effect sets them.
    """

    damage_multiplier: float = 1.0
    damage_vulnerability: float = 1.0
    damage_bonus: int = 0
    crit_bonus: int = 0
    loot_bonus: int = 0
    damage_reduction: float = 0.0
    armor_reduction: float = 0.0
    disable_weapons: bool = False
    disable_magic: bool = False
    disable_primary_weapon: bool = False
    disable_all_actions: bool = False
    untargetable: bool = False
    effect_immunity: bool = False
    ignore_armor: bool = False

    def combine(self, other: EffectModifiers) -> EffectModifiers:
        """Combine two modifier sets, multiplying factors and adding bonuses."""
        return EffectModifiers(
            damage_multiplier=self.damage_multiplier * other.damage_multiplier,
            damage_vulnerability=self.damage_vulnerability * other.damage_vulnerability,
            damage_bonus=self.damage_bonus + other.damage_bonus,
            crit_bonus=self.crit_bonus + other.crit_bonus,
            loot_bonus=self.loot_bonus + other.loot_bonus,
            damage_reduction=min(1.0, max(self.damage_reduction, other.damage_reduction)),
            armor_reduction=min(1.0, max(self.armor_reduction, other.armor_reduction)),
            disable_weapons=self.disable_weapons or other.disable_weapons,
            disable_magic=self.disable_magic or other.disable_magic,
            disable_primary_weapon=self.disable_primary_weapon or other.disable_primary_weapon,
            disable_all_actions=self.disable_all_actions or other.disable_all_actions,
            untargetable=self.untargetable or other.untargetable,
            effect_immunity=self.effect_immunity or other.effect_immunity,
            ignore_armor=self.ignore_armor or other.ignore_armor,
        )

    @property
    def can_act(self) -> bool:
        return not self.disable_all_actions

    @property
    def can_use_weapons(self) -> bool:
        return self.can_act and not self.disable_weapons

    @property
    def can_use_primary_weapon(self) -> bool:
        return self.can_use_weapons and not self.disable_primary_weapon

    @property
    def can_use_magic(self) -> bool:
        return self.can_act and not self.disable_magic

    def to_dict(self) -> Dict:
        return {
            "damage_multiplier": self.damage_multiplier,
            "damage_vulnerability": self.damage_vulnerability,
            "damage_bonus": self.damage_bonus,
            "crit_bonus": self.crit_bonus,
            "loot_bonus": self.loot_bonus,
            "damage_reduction": self.damage_reduction,
            "armor_reduction": self.armor_reduction,
            "disable_weapons": self.disable_weapons,
            "disable_magic": self.disable_magic,
            "disable_primary_weapon": self.disable_primary_weapon,
            "disable_all_actions": self.disable_all_actions,
            "untargetable": self.untargetable,
            "effect_immunity": self.effect_immunity,
            "ignore_armor": self.ignore_armor,
        }


def summarize_modifiers(instances: Iterable, catalog: EffectCatalog) -> EffectModifiers:
    """Aggregate the combat modifiers of every instance whose definition is known.

    Instance overrides take precedence over definition values. A zero
    multiplier on a definition means "not set" and counts as 1.0.
    """
    total = EffectModifiers()
    for instance in instances:
        definition = catalog.get(instance.effect_id)
        if definition is None:
            continue

        def value(name: str):
            if name in instance.overrides:
                return instance.overrides[name]
            return definition.modifier(name)

        part = EffectModifiers(
            damage_multiplier=float(value("damage_multiplier") or 1.0),
            damage_vulnerability=float(value("damage_vulnerability") or 1.0),
            damage_bonus=int(value("damage_bonus")),
            crit_bonus=int(value("crit_bonus")),
            loot_bonus=int(value("loot_bonus")),
            damage_reduction=float(value("damage_reduction")),
            armor_reduction=float(value("armor_reduction")),
            disable_weapons=bool(value("disable_weapons")),
            disable_magic=bool(value("disable_magic")),
            disable_primary_weapon=bool(value("disable_primary_weapon")),
            disable_all_actions=bool(value("disable_all_actions")),
            untargetable=bool(value("untargetable")),
            effect_immunity=bool(value("effect_immunity")),
            ignore_armor=bool(value("ignore_armor")),
        )
        total = total.combine(part)
    logger.debug("Summarized effect modifiers => %s", total)
    return total
