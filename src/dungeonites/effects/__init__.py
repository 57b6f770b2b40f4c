"""Status effects: static catalog, per-actor instances and modifier aggregation."""

from .catalog import INSTANT, MODIFIER_FIELDS, PERMANENT, EffectCatalog, EffectCategory, EffectDefinition
from .definitions import BUILTIN_EFFECTS, default_catalog
from .engine import EffectInstance, EffectInstanceEngine, TurnResult, TurnSummary
from .modifiers import EffectModifiers, summarize_modifiers

__all__ = [
    "BUILTIN_EFFECTS",
    "EffectCatalog",
    "EffectCategory",
    "EffectDefinition",
    "EffectInstance",
    "EffectInstanceEngine",
    "EffectModifiers",
    "INSTANT",
    "MODIFIER_FIELDS",
    "PERMANENT",
    "TurnResult",
    "TurnSummary",
    "default_catalog",
    "summarize_modifiers",
]
