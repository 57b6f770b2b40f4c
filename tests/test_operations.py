from dungeonites.inventory import ItemCategory, ItemDescriptor, StackEntry
from dungeonites.state import (
    PlayerSimulationState,
    TurnOutcome,
    add_currency,
    add_inventory_item,
    advance_floor,
    apply_effect,
    exchange_currency,
    record_exploration,
    resolve_effects_for_turn,
)


def make_state(clock):
    return PlayerSimulationState.new("op-player", clock=clock)


def test_effect_operations(clock):
    state = make_state(clock)
    assert apply_effect(state, "burning") is state
    outcome = resolve_effects_for_turn(state)
    assert isinstance(outcome, TurnOutcome)
    assert outcome.state is state
    assert outcome.damage == 1
    assert outcome.messages == ["op-player takes 1 damage from Burning"]

    apply_effect(state, "burning", duration_override=6)
    assert state.effects[0].turns_remaining == 6


def test_currency_operations(clock):
    state = make_state(clock)
    add_currency(state, "gold", 1400)
    state, ok = exchange_currency(state, "gold", "tokens", 1)
    assert ok
    assert state.ledger.balance("gold") == 500
    assert state.ledger.balance("tokens") == 1

    state, ok = exchange_currency(state, "gold", "tokens", 1)
    assert not ok
    assert state.ledger.balance("gold") == 500

    add_currency(state, "gold", -10_000)
    assert state.ledger.balance("gold") == 0


def test_inventory_operation_merges_at_bound(clock):
    state = make_state(clock)
    state.inventory.consumables = [StackEntry(f"Potion {i}", 1) for i in range(19)]
    state.inventory.consumables.append(StackEntry("Health Potion", 1))

    state, ok = add_inventory_item(state, "Health Potion")
    assert ok
    assert state.inventory.quantity_of("Health Potion") == 2

    state, ok = add_inventory_item(state, "Mana Potion", 2)
    assert not ok
    assert state.inventory.size(ItemCategory.CONSUMABLES) == 20

    state, ok = add_inventory_item(state, ItemDescriptor(name="Mace", category=ItemCategory.WEAPONS))
    assert ok


def test_floor_operations(clock):
    state = make_state(clock)
    state, ok = record_exploration(state)
    assert not ok
    advance_floor(state)
    assert state.progression.current_floor == 1
    results = [record_exploration(state)[1] for _ in range(4)]
    assert results == [True, True, True, False]
    advance_floor(state)
    assert state.progression.explorations == 0
