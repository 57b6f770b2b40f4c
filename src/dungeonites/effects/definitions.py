"""Built-in status effects of Dungeonites Heroes Challenge."""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from .catalog import INSTANT, PERMANENT, EffectCatalog, EffectCategory, EffectDefinition

POS = EffectCategory.POSITIVE
NEG = EffectCategory.NEGATIVE

BUILTIN_EFFECTS: Tuple[EffectDefinition, ...] = (
    # Positive
    EffectDefinition(
        id="healing", name="Healing", category=POS, duration=1,
        description="Restores health over time", health_per_turn=4,
    ),
    EffectDefinition(
        id="healing_rain", name="Healing Rain", category=POS, duration=2,
        description="Restores health over time from nature's blessing", health_per_turn=4,
    ),
    EffectDefinition(
        id="mana_rain", name="Mana Rain", category=POS, duration=2,
        description="Restores mana over time", mana_per_turn=4,
    ),
    EffectDefinition(
        id="enraged", name="Enraged", category=POS, duration=2,
        description="Increased damage from rage", damage_bonus=2,
    ),
    EffectDefinition(
        id="empowered", name="Empowered", category=POS, duration=3,
        description="Deal 25% more damage", damage_multiplier=1.25,
    ),
    EffectDefinition(
        id="invisible", name="Invisible", category=POS, duration=2,
        description="Cannot be targeted by attacks", untargetable=True,
    ),
    EffectDefinition(
        id="shielded", name="Shielded", category=POS, duration=3,
        description="Reduce damage taken by 50% and immunity to effects",
        damage_reduction=0.5, effect_immunity=True,
    ),
    EffectDefinition(
        id="drunk_whiskey", name="Drunk on Whiskey", category=POS, duration=1,
        description="Significantly increased critical hit chance", crit_bonus=50,
    ),
    # Equipment granted; magnitudes are scaled per instance by item rarity.
    EffectDefinition(
        id="regenerating", name="Regenerating", category=POS, duration=PERMANENT,
        description="Slowly regenerates health and mana", health_per_turn=1, mana_per_turn=1,
    ),
    EffectDefinition(
        id="lucky", name="Lucky", category=POS, duration=PERMANENT,
        description="Increased chance to find rare loot", loot_bonus=5,
    ),
    EffectDefinition(
        id="fate_accepted", name="Fate Accepted", category=POS, duration=INSTANT,
        description="Successfully cheated death", health_restore=4, mana_restore=4,
        once_per_battle=True,
    ),
    # Negative
    EffectDefinition(
        id="poisoned", name="Poisoned", category=NEG, duration=3,
        description="Takes poison damage over time", damage_per_turn=1,
    ),
    EffectDefinition(
        id="burning", name="Burning", category=NEG, duration=2,
        description="Takes fire damage over time", damage_per_turn=1,
    ),
    EffectDefinition(
        id="bleeding", name="Bleeding", category=NEG, duration=6,
        description="Loses blood over time", damage_per_turn=1,
    ),
    EffectDefinition(
        id="decay", name="Decay", category=NEG, duration=10,
        description="Slowly withers away", damage_per_turn=1,
    ),
    EffectDefinition(
        id="frozen", name="Frozen", category=NEG, duration=2,
        description="Cannot use weapons or magic", disable_weapons=True, disable_magic=True,
    ),
    EffectDefinition(
        id="paralyzed", name="Paralyzed", category=NEG, duration=2,
        description="Cannot use weapons", disable_weapons=True,
    ),
    EffectDefinition(
        id="stunned", name="Stunned", category=NEG, duration=1,
        description="Cannot use primary weapon", disable_primary_weapon=True,
    ),
    EffectDefinition(
        id="petrified", name="Petrified", category=NEG, duration=3,
        description="Cannot make any moves, health doubled but halved when effect ends",
        disable_all_actions=True, health_multiplier=2.0,
    ),
    EffectDefinition(
        id="silenced", name="Silenced", category=NEG, duration=3,
        description="Spells and magic fail to cast, punishes caster with damage",
        disable_magic=True, magic_punish_damage=3,
    ),
    EffectDefinition(
        id="weakened", name="Weakened", category=NEG, duration=3,
        description="Deal 25% less damage", damage_multiplier=0.75,
    ),
    EffectDefinition(
        id="broken_armor", name="Broken Armor", category=NEG, duration=3,
        description="Armor reduced by 100%", armor_reduction=1.0,
    ),
    EffectDefinition(
        id="cursed", name="Cursed", category=NEG, duration=5,
        description="Take damage each turn but deal extra damage",
        damage_per_turn=1, damage_multiplier=1.2,
    ),
    # Neutral
    EffectDefinition(
        id="berserking", name="Berserking", category=EffectCategory.NEUTRAL, duration=3,
        description="Deal and take 25% more damage",
        damage_multiplier=1.25, damage_vulnerability=1.25,
    ),
    # Special (attached to a single hit)
    EffectDefinition(
        id="health_drain", name="Health Drain", category=EffectCategory.SPECIAL, duration=1,
        description="Drains health from target to attacker", drain_amount=1,
    ),
    EffectDefinition(
        id="pierce", name="Pierce", category=EffectCategory.SPECIAL, duration=1,
        description="Damage ignores armor", ignore_armor=True,
    ),
)


@lru_cache(maxsize=1)
def default_catalog() -> EffectCatalog:
    """The built-in catalog. Constructed once; safe to share between players."""
    return EffectCatalog(BUILTIN_EFFECTS)
