"""
Tests for strike distributions and simulation-context assembly.
"""

import pytest

from conftest import LEATHER_ARMOR_ID, make_adventurer
from outcome_core.damage import (
    build_beast_damage_options,
    build_hero_damage_options,
    build_simulation_context,
    context_from_options,
    min_positive_damage,
    total_probability,
)
from outcome_core.models import Beast, DamageOption, Equipment, Item, Stats
from outcome_core.rules import StrikeDamage


class TestHeroOptions:

    def test_luck_splits_base_and_critical(self):
        options = dict(build_hero_damage_options(10, 20, 25))
        assert options == {10: pytest.approx(0.75), 20: pytest.approx(0.25)}

    def test_equal_base_and_critical_collapse(self):
        assert build_hero_damage_options(10, 10, 50) == (DamageOption(10, 1.0),)

    def test_luck_is_clamped(self):
        options = build_hero_damage_options(10, 20, 250)
        assert options == (DamageOption(20, 1.0),)


class TestBeastOptions:

    def test_probability_mass_sums_to_one(self, adventurer, blade_beast):
        options = build_beast_damage_options(adventurer, blade_beast, 0.2)
        assert total_probability(options) == pytest.approx(1.0)

    def test_identical_slots_aggregate(self, adventurer, blade_beast):
        options = dict(build_beast_damage_options(adventurer, blade_beast, 0.2))
        assert options == {37: pytest.approx(0.8), 74: pytest.approx(0.2)}

    def test_armoured_slot_spreads_mass(self, blade_beast):
        equipment = Equipment(weapon=Item(42, xp=100), chest=Item(LEATHER_ARMOR_ID, xp=100))
        adventurer = make_adventurer(equipment=equipment)
        options = dict(build_beast_damage_options(adventurer, blade_beast, 0.0))
        # chest: 25 - 10 armour; other four slots unarmoured
        assert options == {15: pytest.approx(0.2), 37: pytest.approx(0.8)}

    def test_missing_slot_data_falls_back_to_chest(self, adventurer, blade_beast):
        options = build_beast_damage_options(adventurer, blade_beast, 0.5, slot_damage={})
        assert options == (DamageOption(37, 1.0),)

    def test_partial_slot_data_uses_known_slots(self, adventurer, blade_beast):
        slot_damage = {"chest": StrikeDamage(10, 20), "head": None}
        options = dict(build_beast_damage_options(adventurer, blade_beast, 0.5, slot_damage))
        assert options == {10: pytest.approx(0.5), 20: pytest.approx(0.5)}


class TestSimulationContext:

    def test_missing_combatant(self, adventurer, blade_beast):
        assert build_simulation_context(None, blade_beast) is None
        assert build_simulation_context(adventurer, None) is None

    def test_defeated_combatant(self, blade_beast):
        assert build_simulation_context(make_adventurer(health=0), blade_beast) is None
        dead_beast = Beast(id=30, level=5, tier=1, health=0)
        assert build_simulation_context(make_adventurer(), dead_beast) is None

    def test_context_fields(self, adventurer, blade_beast):
        context = build_simulation_context(adventurer, blade_beast, initial_beast_strike=True)
        assert context.hero_options == (DamageOption(25, 1.0),)
        assert context.initial_hero_hp == 100
        assert context.effective_beast_hp == 60
        assert context.initial_beast_strike is True
        assert context.min_hero_damage == 25
        assert context.min_beast_damage == 37

    def test_fight_in_progress_uses_remaining_beast_health(self, blade_beast):
        adventurer = make_adventurer(beast_health=12)
        context = build_simulation_context(adventurer, blade_beast)
        assert context.effective_beast_hp == 12

    def test_luck_feeds_hero_crit(self, blade_beast):
        adventurer = make_adventurer(stats=Stats(luck=40))
        context = build_simulation_context(adventurer, blade_beast)
        assert dict(context.hero_options) == {25: pytest.approx(0.6), 75: pytest.approx(0.4)}

    def test_context_from_options_rejects_empty(self):
        with pytest.raises(ValueError):
            context_from_options([], [(5, 1.0)], hero_hp=10, beast_hp=10)

    def test_min_positive_damage(self):
        options = [DamageOption(0, 0.5), DamageOption(7, 0.25), DamageOption(3, 0.25)]
        assert min_positive_damage(options) == 3
        assert min_positive_damage([DamageOption(0, 1.0)]) == 0
