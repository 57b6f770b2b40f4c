from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..clock import Clock, SystemClock
from .catalog import INSTANT, MODIFIER_FIELDS, PERMANENT, EffectCatalog, EffectDefinition

logger = logging.getLogger(__name__)


@dataclass
class EffectInstance:
    """One application of an effect definition to one actor.

    ``duration`` is the length the instance was (last) applied with and
    ``turns_remaining`` counts it down. ``overrides`` replaces definition
    modifiers for this instance only, e.g. rarity-scaled regeneration.
    """

    effect_id: str
    duration: int
    turns_remaining: int
    applied_at: int
    overrides: Dict[str, float] = field(default_factory=dict)

    @property
    def is_instant(self) -> bool:
        return self.duration == INSTANT

    @property
    def is_permanent(self) -> bool:
        return self.duration == PERMANENT

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "effect_id": self.effect_id,
            "duration": self.duration,
            "turns_remaining": self.turns_remaining,
            "applied_at": self.applied_at,
        }
        if self.overrides:
            data["overrides"] = dict(self.overrides)
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "EffectInstance":
        return EffectInstance(
            effect_id=str(data["effect_id"]),
            duration=int(data["duration"]),
            turns_remaining=int(data["turns_remaining"]),
            applied_at=int(data["applied_at"]),
            overrides=dict(data.get("overrides", {})),
        )


@dataclass
class TurnResult:
    damage: int = 0
    healing: int = 0
    mana: int = 0
    messages: List[str] = field(default_factory=list)
    expired: bool = False


@dataclass
class TurnSummary:
    """Totals of one resolution pass over an actor's effects."""

    damage: int = 0
    healing: int = 0
    mana: int = 0
    messages: List[str] = field(default_factory=list)
    kept: List[EffectInstance] = field(default_factory=list)
    expired: List[EffectInstance] = field(default_factory=list)


class EffectInstanceEngine:
    """Creates, stacks and ticks effect instances using an injected catalog and clock."""

    def __init__(self, catalog: EffectCatalog, clock: Optional[Clock] = None) -> None:
        self.catalog = catalog
        self.clock: Clock = clock or SystemClock()

    def create_instance(
        self,
        effect_id: str,
        duration_override: Optional[int] = None,
        overrides: Optional[Mapping[str, float]] = None,
    ) -> Optional[EffectInstance]:
        """Build a fresh instance, or return None if the id is not in the catalog."""
        definition = self.catalog.get(effect_id)
        if definition is None:
            logger.warning("Cannot create unknown effect '%s'", effect_id)
            return None
        duration = definition.duration if duration_override is None else int(duration_override)
        if duration < PERMANENT:
            raise ValueError(f"Invalid duration {duration} for effect '{effect_id}'")
        extra = dict(overrides or {})
        unknown = set(extra) - set(MODIFIER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown modifier overrides for '{effect_id}': {sorted(unknown)}")
        return EffectInstance(
            effect_id=effect_id,
            duration=duration,
            turns_remaining=duration,
            applied_at=self.clock.now_ms(),
            overrides=extra,
        )

    def can_stack(self, existing: List[EffectInstance], effect_id: str) -> bool:
        definition = self.catalog.get(effect_id)
        if definition is None:
            return False
        if definition.stackable:
            return True
        return not any(inst.effect_id == effect_id for inst in existing)

    def apply_with_duration_rule(
        self, existing: List[EffectInstance], new: EffectInstance
    ) -> List[EffectInstance]:
        """Merge ``new`` into ``existing`` (in place) using refresh-on-improvement.

        A same-id instance only has its timer replaced when the new duration is
        strictly longer than what it has left; magnitudes never combine and the
        new instance is discarded. Stackable definitions always get their own
        instance.
        """
        definition = self.catalog.get(new.effect_id)
        if definition is not None and definition.stackable:
            existing.append(new)
            return existing

        current = next((inst for inst in existing if inst.effect_id == new.effect_id), None)
        if current is None:
            existing.append(new)
            logger.debug("Applied %s for %d turns", new.effect_id, new.duration)
            return existing

        if new.duration > current.turns_remaining:
            logger.debug(
                "Refreshed %s: %d turns left -> %d", new.effect_id, current.turns_remaining, new.duration
            )
            current.duration = new.duration
            current.turns_remaining = new.duration
            current.applied_at = self.clock.now_ms()
        else:
            logger.debug(
                "Kept %s at %d turns (offered %d)", new.effect_id, current.turns_remaining, new.duration
            )
        return existing

    def resolve_turn(self, instance: EffectInstance, actor_name: str = "Target") -> TurnResult:
        """Tick one instance for one turn and report what it did."""
        result = TurnResult()
        definition = self.catalog.get(instance.effect_id)
        if definition is None:
            logger.warning("Dropping instance of unknown effect '%s'", instance.effect_id)
            result.expired = True
            return result

        damage = int(self._value(definition, instance, "damage_per_turn"))
        healing = int(self._value(definition, instance, "health_per_turn"))
        mana = int(self._value(definition, instance, "mana_per_turn"))
        if damage:
            result.damage += damage
            result.messages.append(f"{actor_name} takes {damage} damage from {definition.name}")
        if healing:
            result.healing += healing
            result.messages.append(f"{actor_name} heals {healing} health from {definition.name}")
        if mana:
            result.mana += mana
            result.messages.append(f"{actor_name} restores {mana} mana from {definition.name}")

        if instance.duration == INSTANT:
            restore_hp = int(self._value(definition, instance, "health_restore"))
            restore_mp = int(self._value(definition, instance, "mana_restore"))
            if restore_hp:
                result.healing += restore_hp
                result.messages.append(f"{actor_name} is instantly healed for {restore_hp} health by {definition.name}")
            if restore_mp:
                result.mana += restore_mp
                result.messages.append(f"{actor_name} instantly restores {restore_mp} mana from {definition.name}")
            result.expired = True
        elif instance.duration > 0:
            instance.turns_remaining -= 1
            if instance.turns_remaining <= 0:
                result.expired = True
                result.messages.append(f"{definition.name} effect has worn off")
        return result

    def resolve_all(self, instances: List[EffectInstance], actor_name: str = "Target") -> TurnSummary:
        """Fold ``resolve_turn`` over instances in their stored order."""
        summary = TurnSummary()
        for instance in instances:
            result = self.resolve_turn(instance, actor_name)
            summary.damage += result.damage
            summary.healing += result.healing
            summary.mana += result.mana
            summary.messages.extend(result.messages)
            if result.expired:
                summary.expired.append(instance)
            else:
                summary.kept.append(instance)
        return summary

    @staticmethod
    def _value(definition: EffectDefinition, instance: EffectInstance, name: str) -> float:
        if name in instance.overrides:
            return instance.overrides[name]
        return definition.modifier(name)
