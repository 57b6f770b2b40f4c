import pytest

from dungeonites.clock import ManualClock
from dungeonites.config import SimulationConfig
from dungeonites.economy import Currency
from dungeonites.events import EffectAppliedEvent, EffectExpiredEvent, EventBus
from dungeonites.inventory import ItemCategory, ItemDescriptor
from dungeonites.state import PlayerSimulationState


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def state(clock, bus):
    return PlayerSimulationState.new("p1", clock=clock, event_bus=bus)


def test_new_state_defaults(state):
    assert state.division == Currency.GOLD
    assert state.progression.current_floor == 0
    assert state.effects == []
    assert state.health == state.max_health == 10
    assert state.ledger.event_bus is state.event_bus


def test_poisoned_scenario(state):
    assert state.apply_effect("poisoned")
    messages = []
    for _ in range(3):
        messages.extend(state.resolve_effects_for_turn("Hero").messages)
    assert state.health == 7
    assert state.effects == []
    assert messages.count("Hero takes 1 damage from Poisoned") == 3
    assert messages[-1] == "Poisoned effect has worn off"


def test_reapply_refreshes_but_never_downgrades(state, clock):
    state.apply_effect("poisoned")
    state.resolve_effects_for_turn()
    clock.advance(10)
    assert state.apply_effect("poisoned")
    assert state.effects[0].turns_remaining == 3
    assert not state.apply_effect("poisoned", duration_override=1)
    assert state.effects[0].turns_remaining == 3
    assert len(state.effects) == 1


def test_unknown_effect_is_noop(state):
    assert not state.apply_effect("nonexistent")
    assert state.effects == []


def test_totals_are_clamped(state):
    state.health = 9
    state.apply_effect("healing_rain")
    state.resolve_effects_for_turn()
    assert state.health == 10

    state.health = 1
    state.apply_effect("decay")
    state.apply_effect("bleeding")
    state.effects = [e for e in state.effects if e.effect_id != "healing_rain"]
    state.resolve_effects_for_turn()
    assert state.health == 0
    assert not state.is_alive


def test_instant_effect_applies_on_next_resolution(state):
    state.health = 2
    state.mana = 1
    assert state.apply_effect("fate_accepted")
    summary = state.resolve_effects_for_turn()
    assert summary.healing == 4
    assert state.health == 6
    assert state.mana == 5
    assert state.effects == []


def test_once_per_battle(state):
    assert state.apply_effect("fate_accepted")
    state.resolve_effects_for_turn()
    assert not state.apply_effect("fate_accepted")
    state.start_battle()
    assert state.apply_effect("fate_accepted")


def test_effect_immunity_blocks_negative_effects(state):
    state.apply_effect("shielded")
    assert not state.apply_effect("poisoned")
    assert state.apply_effect("empowered")
    assert state.modifiers().damage_reduction == 0.5


def test_remove_effect(state):
    state.apply_effect("regenerating", overrides={"health_per_turn": 2})
    assert state.has_effect("regenerating")
    assert state.remove_effect("regenerating") == 1
    assert not state.has_effect("regenerating")


def test_effect_events(state, bus):
    applied, expired = [], []
    bus.subscribe(EffectAppliedEvent, applied.append)
    bus.subscribe(EffectExpiredEvent, expired.append)

    state.apply_effect("healing")
    state.apply_effect("healing", duration_override=4)
    state.apply_effect("healing", duration_override=1)
    assert [(e.effect_id, e.duration, e.refreshed) for e in applied] == [
        ("healing", 1, False),
        ("healing", 4, True),
    ]
    for _ in range(4):
        state.resolve_effects_for_turn()
    assert expired == [EffectExpiredEvent(player_id="p1", effect_id="healing")]


def test_enter_division(state):
    assert not state.enter_division("tokens")
    assert state.division == Currency.GOLD
    state.ledger.add("tokens", 1)
    assert state.enter_division("tokens")
    assert state.division == Currency.TOKENS
    assert state.ledger.balance("tokens") == 0
    assert state.reward_multiplier() == 2
    assert state.enter_division("eth")
    assert state.reward_multiplier() == 20
    assert not state.enter_division("silver")


def test_gold_reward_scales_by_floor_and_division(state):
    state.advance_floor(5)
    assert state.gold_reward(10) == 25
    state.ledger.add("tokens", 1)
    state.enter_division("tokens")
    assert state.gold_reward(10) == 50


def test_exploration_flow(state):
    assert not state.record_exploration()
    state.advance_floor()
    assert [state.record_exploration() for _ in range(4)] == [True, True, True, False]
    state.advance_floor()
    assert state.progression.explorations == 0
    assert state.record_exploration()


def test_reset_after_defeat_keeps_currencies(state):
    state.ledger.add("gold", 500)
    state.inventory.add(ItemDescriptor(name="Sword", category=ItemCategory.WEAPONS))
    state.advance_floor(12)
    state.apply_effect("cursed")
    state.health = 1
    state.reset_after_defeat()
    assert state.ledger.balance("gold") == 600
    assert state.inventory.weapons == []
    assert state.effects == []
    assert state.progression.current_floor == 0
    assert state.progression.highest_floor == 12
    assert state.health == state.max_health


def test_dict_round_trip(state):
    state.ledger.add("gold", 1234)
    state.inventory.add("Health Potion", 3)
    state.inventory.take_chest(ItemDescriptor(name="Iron Chest", category=ItemCategory.CHESTS))
    state.advance_floor(3)
    state.record_exploration()
    state.apply_effect("poisoned")
    state.apply_effect("lucky", overrides={"loot_bonus": 7})
    state.apply_effect("fate_accepted")

    restored = PlayerSimulationState.from_dict(state.to_dict(), clock=ManualClock())
    assert restored == state
    assert restored.to_dict() == state.to_dict()


def test_from_dict_uses_config_limits():
    cfg = SimulationConfig.from_dict({"inventory_limits": {"stack_entries": 1}})
    restored = PlayerSimulationState.from_dict({"player_id": "p2"}, config=cfg)
    assert restored.inventory.add("Health Potion")
    assert not restored.inventory.add("Mana Potion")


def test_invalid_division_rejected():
    with pytest.raises(ValueError):
        PlayerSimulationState(player_id="x", division="copper")


def test_new_player_starts_with_gold(state):
    assert state.ledger.balance("gold") == 100
    assert state.inventory.gold == 100


def test_starting_gold_comes_from_config(clock):
    cfg = SimulationConfig.from_dict({"starting_gold": 0})
    broke = PlayerSimulationState.new("p3", config=cfg, clock=clock)
    assert broke.ledger.balance("gold") == 0
    assert broke.inventory.gold == 0


def test_petrified_halves_health_when_it_ends(state):
    assert state.apply_effect("petrified")
    assert not state.modifiers().can_act
    for _ in range(2):
        state.resolve_effects_for_turn()
        assert state.health == 10
    summary = state.resolve_effects_for_turn("Hero")
    assert state.effects == []
    assert state.health == 5
    assert summary.messages[-1] == "Petrified ends, health returns to normal"


def test_petrified_end_rounds_up(state):
    state.health = 7
    state.apply_effect("petrified", duration_override=1)
    state.resolve_effects_for_turn()
    assert state.health == 4


def test_removed_petrification_does_not_halve(state):
    state.apply_effect("petrified")
    state.remove_effect("petrified")
    state.resolve_effects_for_turn()
    assert state.health == 10
