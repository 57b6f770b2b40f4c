from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class ItemCategory(str, Enum):
    WEAPONS = "weapons"
    ARMOR = "armor"
    CONSUMABLES = "consumables"
    SHARDS = "shards"
    SCROLLS = "scrolls"
    CHESTS = "chests"
    KEYS = "keys"
    GOLD = "gold"


UNIQUE_CATEGORIES = frozenset({ItemCategory.WEAPONS, ItemCategory.ARMOR, ItemCategory.CHESTS})
STACKABLE_CATEGORIES = frozenset({ItemCategory.CONSUMABLES, ItemCategory.SHARDS, ItemCategory.SCROLLS})


class CapacityProfile(Enum):
    """Which bound configuration applies to an insertion.

    GENERAL is used by loot and shop paths. TAKE_CHEST is the stricter bound
    used when a player picks up an unopened chest to carry it along.
    """

    GENERAL = "general"
    TAKE_CHEST = "take_chest"


@dataclass(frozen=True)
class InventoryLimits:
    unique_entries: int = 20
    take_chest_entries: int = 10
    stack_entries: int = 20
    max_keys: int = 100

    def __post_init__(self) -> None:
        for name in ("unique_entries", "take_chest_entries", "stack_entries", "max_keys"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"InventoryLimits.{name} must be a positive integer, got {value!r}")
        if self.take_chest_entries > self.unique_entries:
            raise ValueError("take_chest_entries cannot exceed unique_entries")

    def bound_for(self, category: ItemCategory, profile: CapacityProfile = CapacityProfile.GENERAL) -> Optional[int]:
        """Return the bound for a category, or None when the category is unbounded."""
        if category == ItemCategory.CHESTS and profile == CapacityProfile.TAKE_CHEST:
            return self.take_chest_entries
        if category in UNIQUE_CATEGORIES:
            return self.unique_entries
        if category in STACKABLE_CATEGORIES:
            return self.stack_entries
        if category == ItemCategory.KEYS:
            return self.max_keys
        return None

    def to_dict(self) -> Dict[str, int]:
        return {
            "unique_entries": self.unique_entries,
            "take_chest_entries": self.take_chest_entries,
            "stack_entries": self.stack_entries,
            "max_keys": self.max_keys,
        }


@dataclass(frozen=True)
class ItemDescriptor:
    """Describes an item being added to the inventory.

    The category is an explicit tag; it is never inferred from the name.
    ``attributes`` carries free-form item data (rarity, keys required, ...).
    """

    name: str
    category: Optional[ItemCategory] = None
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.category is not None:
            data["category"] = self.category.value
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ItemDescriptor":
        category = data.get("category")
        return ItemDescriptor(
            name=str(data["name"]),
            category=ItemCategory(category) if category else None,
            attributes=dict(data.get("attributes", {})),
        )


ItemLike = Union[ItemDescriptor, str]


@dataclass
class StackEntry:
    name: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity}


def category_of(item: ItemLike) -> ItemCategory:
    """Classify an item by its explicit tag.

    Untagged items default to consumables; the bare names "keys" and "gold"
    address the two scalar counters.
    """
    if isinstance(item, ItemDescriptor):
        if item.category is not None:
            return item.category
        name = item.name
    else:
        name = str(item)
    if name == ItemCategory.KEYS.value:
        return ItemCategory.KEYS
    if name == ItemCategory.GOLD.value:
        return ItemCategory.GOLD
    return ItemCategory.CONSUMABLES


def _as_descriptor(item: ItemLike, category: ItemCategory) -> ItemDescriptor:
    if isinstance(item, ItemDescriptor):
        if item.category == category:
            return item
        return ItemDescriptor(name=item.name, category=category, attributes=item.attributes)
    return ItemDescriptor(name=str(item), category=category)


def _item_name(item: ItemLike) -> str:
    return item.name if isinstance(item, ItemDescriptor) else str(item)


@dataclass
class InventoryStore:
    """
    Category-bounded item collections for one player.

    - weapons, armor, chests: lists of unique entries (one slot each)
    - consumables, shards, scrolls: stacks merged by name
    - keys: bounded counter
    - gold: unbounded counter

    Full conditions are reported by returning False; the inventory is never
    partially modified.
    """

    weapons: List[ItemDescriptor] = field(default_factory=list)
    armor: List[ItemDescriptor] = field(default_factory=list)
    chests: List[ItemDescriptor] = field(default_factory=list)
    consumables: List[StackEntry] = field(default_factory=list)
    shards: List[StackEntry] = field(default_factory=list)
    scrolls: List[StackEntry] = field(default_factory=list)
    keys: int = 0
    gold: int = 0
    limits: InventoryLimits = field(default_factory=InventoryLimits, repr=False, compare=False)

    def __post_init__(self) -> None:
        for category in UNIQUE_CATEGORIES | STACKABLE_CATEGORIES:
            bound = self.limits.bound_for(category)
            assert bound is not None
            if len(self._collection(category)) > bound:
                raise ValueError(f"{category.value} holds more than {bound} entries")
        if not 0 <= self.keys <= self.limits.max_keys:
            raise ValueError(f"keys must be within [0, {self.limits.max_keys}]")
        if self.gold < 0:
            raise ValueError("gold cannot be negative")

    def category_of(self, item: ItemLike) -> ItemCategory:
        return category_of(item)

    def size(self, category: ItemCategory) -> int:
        if category == ItemCategory.KEYS:
            return self.keys
        if category == ItemCategory.GOLD:
            return self.gold
        return len(self._collection(category))

    def can_add(self, category: ItemCategory, profile: CapacityProfile = CapacityProfile.GENERAL) -> bool:
        if category == ItemCategory.GOLD:
            return True
        bound = self.limits.bound_for(category, profile)
        assert bound is not None
        return self.size(category) < bound

    def add(
        self,
        item: ItemLike,
        quantity: int = 1,
        profile: CapacityProfile = CapacityProfile.GENERAL,
    ) -> bool:
        """Add ``quantity`` of an item to the collection its category selects.

        Raises ValueError for non-positive quantities.
        """
        if quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity}")
        category = category_of(item)

        if category == ItemCategory.GOLD:
            self.gold += quantity
            logger.debug("Added %d gold (total=%d)", quantity, self.gold)
            return True

        if category == ItemCategory.KEYS:
            if self.keys >= self.limits.max_keys:
                logger.debug("Key ring full (%d)", self.keys)
                return False
            self.keys = min(self.limits.max_keys, self.keys + quantity)
            logger.debug("Added keys; now %d", self.keys)
            return True

        if category in STACKABLE_CATEGORIES:
            return self._add_stackable(category, _item_name(item), quantity)

        bound = self.limits.bound_for(category, profile)
        assert bound is not None
        entries: List[ItemDescriptor] = self._collection(category)
        if len(entries) + quantity > bound:
            logger.debug("%s full (%d/%d); cannot add %s", category.value, len(entries), bound, _item_name(item))
            return False
        descriptor = _as_descriptor(item, category)
        entries.extend([descriptor] * quantity)
        logger.debug("Added %d x %s to %s (%d/%d)", quantity, descriptor.name, category.value, len(entries), bound)
        return True

    def take_chest(self, chest: ItemLike) -> bool:
        """Carry an unopened chest, using the stricter take-chest bound."""
        return self.add(_as_descriptor(chest, ItemCategory.CHESTS), profile=CapacityProfile.TAKE_CHEST)

    def quantity_of(self, item: ItemLike) -> int:
        category = category_of(item)
        if category == ItemCategory.KEYS:
            return self.keys
        if category == ItemCategory.GOLD:
            return self.gold
        name = _item_name(item)
        if category in STACKABLE_CATEGORIES:
            entry = self._find_stack(category, name)
            return entry.quantity if entry else 0
        return sum(1 for d in self._collection(category) if d.name == name)

    def remove(self, item: ItemLike, quantity: int = 1) -> bool:
        """Remove ``quantity`` of an item. Returns False (and changes nothing) if not enough is held."""
        if quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity}")
        category = category_of(item)
        if category == ItemCategory.KEYS:
            return self.spend_keys(quantity)
        if category == ItemCategory.GOLD:
            if self.gold < quantity:
                return False
            self.gold -= quantity
            return True
        if self.quantity_of(item) < quantity:
            return False
        name = _item_name(item)
        if category in STACKABLE_CATEGORIES:
            entry = self._find_stack(category, name)
            assert entry is not None
            entry.quantity -= quantity
            if entry.quantity == 0:
                self._collection(category).remove(entry)
            logger.debug("Removed %d x %s from %s", quantity, name, category.value)
            return True
        entries: List[ItemDescriptor] = self._collection(category)
        for _ in range(quantity):
            idx = next(i for i, d in enumerate(entries) if d.name == name)
            entries.pop(idx)
        logger.debug("Removed %d x %s from %s", quantity, name, category.value)
        return True

    def spend_keys(self, count: int) -> bool:
        if count < 0:
            raise ValueError("Cannot spend a negative number of keys")
        if self.keys < count:
            return False
        self.keys -= count
        return True

    def clear(self) -> None:
        """Empty every collection, e.g. after a run ends in defeat."""
        for category in UNIQUE_CATEGORIES | STACKABLE_CATEGORIES:
            self._collection(category).clear()
        self.keys = 0
        self.gold = 0
        logger.debug("Inventory cleared")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weapons": [d.to_dict() for d in self.weapons],
            "armor": [d.to_dict() for d in self.armor],
            "chests": [d.to_dict() for d in self.chests],
            "consumables": [e.to_dict() for e in self.consumables],
            "shards": [e.to_dict() for e in self.shards],
            "scrolls": [e.to_dict() for e in self.scrolls],
            "keys": self.keys,
            "gold": self.gold,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any], limits: Optional[InventoryLimits] = None) -> "InventoryStore":
        def stacks(key: str) -> List[StackEntry]:
            return [StackEntry(name=str(e["name"]), quantity=int(e["quantity"])) for e in data.get(key, [])]

        def uniques(key: str) -> List[ItemDescriptor]:
            return [ItemDescriptor.from_dict(d) for d in data.get(key, [])]

        return InventoryStore(
            weapons=uniques("weapons"),
            armor=uniques("armor"),
            chests=uniques("chests"),
            consumables=stacks("consumables"),
            shards=stacks("shards"),
            scrolls=stacks("scrolls"),
            keys=int(data.get("keys", 0)),
            gold=int(data.get("gold", 0)),
            limits=limits or InventoryLimits(),
        )

    def _collection(self, category: ItemCategory) -> list:
        return getattr(self, category.value)

    def _find_stack(self, category: ItemCategory, name: str) -> Optional[StackEntry]:
        for entry in self._collection(category):
            if entry.name == name:
                return entry
        return None

    def _add_stackable(self, category: ItemCategory, name: str, quantity: int) -> bool:
        existing = self._find_stack(category, name)
        if existing is not None:
            # Merging never consumes a new slot, so the distinct-entry bound does not apply.
            existing.quantity += quantity
            logger.debug("Stacked %d x %s in %s (total=%d)", quantity, name, category.value, existing.quantity)
            return True
        entries: List[StackEntry] = self._collection(category)
        if len(entries) >= self.limits.stack_entries:
            logger.debug("%s full (%d distinct); cannot add %s", category.value, len(entries), name)
            return False
        entries.append(StackEntry(name=name, quantity=quantity))
        logger.debug("Added new stack %s x%d to %s", name, quantity, category.value)
        return True
