from .store import (
    CapacityProfile,
    InventoryLimits,
    InventoryStore,
    ItemCategory,
    ItemDescriptor,
    StackEntry,
    category_of,
)

__all__ = [
    "CapacityProfile",
    "InventoryLimits",
    "InventoryStore",
    "ItemCategory",
    "ItemDescriptor",
    "StackEntry",
    "category_of",
]
