import pytest

from dungeonites.inventory import (
    CapacityProfile,
    InventoryLimits,
    InventoryStore,
    ItemCategory,
    ItemDescriptor,
    StackEntry,
    category_of,
)


def weapon(name):
    return ItemDescriptor(name=name, category=ItemCategory.WEAPONS)


def chest(name="Wooden Chest"):
    return ItemDescriptor(name=name, category=ItemCategory.CHESTS)


def test_category_tags():
    assert category_of(weapon("Sword")) == ItemCategory.WEAPONS
    assert category_of("Health Potion") == ItemCategory.CONSUMABLES
    assert category_of(ItemDescriptor(name="Mystery")) == ItemCategory.CONSUMABLES
    assert category_of("keys") == ItemCategory.KEYS
    assert category_of("gold") == ItemCategory.GOLD
    # Names never drive classification
    assert category_of("Sword of Chests") == ItemCategory.CONSUMABLES


def test_stackables_merge_by_name():
    inv = InventoryStore()
    assert inv.add("Health Potion", 2)
    assert inv.add("Health Potion", 3)
    assert inv.consumables == [StackEntry("Health Potion", 5)]
    assert inv.size(ItemCategory.CONSUMABLES) == 1


def test_merge_allowed_when_distinct_bound_reached():
    inv = InventoryStore(consumables=[StackEntry(f"Potion {i}", 1) for i in range(19)] + [StackEntry("Health Potion", 2)])
    assert inv.size(ItemCategory.CONSUMABLES) == 20
    assert inv.add("Health Potion")
    assert inv.quantity_of("Health Potion") == 3
    assert not inv.add("Mana Potion")
    assert inv.quantity_of("Mana Potion") == 0
    assert inv.size(ItemCategory.CONSUMABLES) == 20


def test_unique_list_bound():
    inv = InventoryStore()
    for i in range(20):
        assert inv.add(weapon(f"Blade {i}"))
    assert not inv.can_add(ItemCategory.WEAPONS)
    assert not inv.add(weapon("One Too Many"))
    assert len(inv.weapons) == 20


def test_unique_list_quantity_is_all_or_nothing():
    inv = InventoryStore()
    for i in range(18):
        inv.add(weapon(f"Blade {i}"))
    assert not inv.add(weapon("Dagger"), quantity=3)
    assert len(inv.weapons) == 18
    assert inv.add(weapon("Dagger"), quantity=2)
    assert inv.quantity_of(weapon("Dagger")) == 2


def test_take_chest_uses_stricter_bound():
    inv = InventoryStore()
    for i in range(10):
        assert inv.take_chest(chest(f"Chest {i}"))
    assert not inv.take_chest(chest("Chest 10"))
    assert len(inv.chests) == 10
    # The general path still allows up to 20
    assert inv.can_add(ItemCategory.CHESTS)
    assert not inv.can_add(ItemCategory.CHESTS, CapacityProfile.TAKE_CHEST)
    assert inv.add(chest("Loot Chest"))
    assert len(inv.chests) == 11


def test_keys_are_bounded_and_clamped():
    inv = InventoryStore(keys=98)
    assert inv.add("keys", 5)
    assert inv.keys == 100
    assert not inv.add("keys")
    assert inv.keys == 100


def test_gold_is_unbounded():
    inv = InventoryStore()
    assert inv.add("gold", 10_000_000)
    assert inv.add("gold", 1)
    assert inv.gold == 10_000_001


def test_non_positive_quantity_raises():
    inv = InventoryStore()
    with pytest.raises(ValueError):
        inv.add("Health Potion", 0)
    with pytest.raises(ValueError):
        inv.add("Health Potion", -2)
    with pytest.raises(ValueError):
        inv.remove("Health Potion", 0)


def test_remove_and_spend_keys():
    inv = InventoryStore(keys=3)
    inv.add("Health Potion", 2)
    inv.add(weapon("Sword"))
    assert not inv.remove("Health Potion", 3)
    assert inv.remove("Health Potion", 2)
    assert inv.consumables == []
    assert inv.remove(weapon("Sword"))
    assert not inv.remove(weapon("Sword"))
    assert not inv.spend_keys(4)
    assert inv.spend_keys(3)
    assert inv.keys == 0


def test_clear():
    inv = InventoryStore(keys=4, gold=9)
    inv.add("Health Potion")
    inv.take_chest(chest())
    inv.clear()
    assert inv == InventoryStore()


def test_limits_validation():
    with pytest.raises(ValueError):
        InventoryLimits(unique_entries=0)
    with pytest.raises(ValueError):
        InventoryLimits(unique_entries=5, take_chest_entries=6)
    with pytest.raises(ValueError):
        InventoryStore(keys=101)


def test_custom_limits():
    inv = InventoryStore(limits=InventoryLimits(stack_entries=1))
    assert inv.add("Health Potion")
    assert not inv.add("Mana Potion")


def test_dict_round_trip():
    inv = InventoryStore(keys=2, gold=30)
    inv.add(ItemDescriptor(name="Axe", category=ItemCategory.WEAPONS, attributes={"rarity": "rare"}))
    inv.add(ItemDescriptor(name="Fire Shard", category=ItemCategory.SHARDS), 4)
    inv.take_chest(chest())
    restored = InventoryStore.from_dict(inv.to_dict())
    assert restored == inv
    assert restored.weapons[0].attributes == {"rarity": "rare"}
