"""
Tests for bag-driven gear suggestions.
"""

import pytest

import outcome_core.gear as gear
from conftest import KATANA_ID, LEATHER_ARMOR_ID, make_adventurer
from outcome_core import suggest_best_gear
from outcome_core.gear import (
    Evaluation,
    GearScore,
    apply_selection,
    build_candidates,
    build_updated_bag,
    evaluate_selections,
    loadout_selections,
    single_slot_selections,
)
from outcome_core.models import Equipment, Item, SimulationResult

DEMON_HUSK_ID = 47
SHORT_SWORD_ID = 46
METAL_CHEST_ID = 77
PENDANT_ID = 1
SILVER_RING_ID = 4


def counting_scorer(calls):
    def scorer(adventurer, beast, initial_beast_strike):
        calls.append((adventurer.equipment, initial_beast_strike))
        return gear._default_scorer(adventurer, beast, initial_beast_strike)

    return scorer


def unarmed(health=100, xp=100):
    return make_adventurer(health=health, xp=xp, equipment=Equipment())


# =============================================================================
# Scores
# =============================================================================


class TestGearScore:

    def test_win_rate_first(self):
        assert GearScore(64.0, 90, 10, 100, 10).beats(GearScore(50.0, 0, 99, 0, 99))

    @pytest.mark.parametrize(
        "better, worse",
        [
            (GearScore(50.0, 30, 10, 80, 20), GearScore(50.0, 40, 90, 10, 90)),
            (GearScore(50.0, 30, 20, 80, 20), GearScore(50.0, 30, 10, 10, 90)),
            (GearScore(50.0, 30, 20, 70, 20), GearScore(50.0, 30, 20, 80, 90)),
            (GearScore(50.0, 30, 20, 70, 30), GearScore(50.0, 30, 20, 70, 20)),
        ],
    )
    def test_tie_breaks(self, better, worse):
        assert better.beats(worse)
        assert not worse.beats(better)

    def test_equal_scores_do_not_beat(self):
        score = GearScore(75.0, 10, 20, 30, 40)
        assert not score.beats(GearScore(*score))

    def test_from_result(self):
        result = SimulationResult(
            has_outcome=True,
            win_rate=64.0,
            mode_damage_taken=74,
            mode_damage_dealt=60,
            max_damage_taken=148,
            max_damage_dealt=70,
        )
        score = GearScore.from_result(result)
        assert score == (64.0, 74, 60, 148, 70)
        assert not score.is_perfect
        assert GearScore(100.0, 0, 0, 0, 0).is_perfect


# =============================================================================
# Loadout edits and candidates
# =============================================================================


class TestLoadoutEdits:

    def test_apply_selection_swaps_only_changed_slots(self, adventurer):
        strong = Item(KATANA_ID, xp=400)
        updated = apply_selection(adventurer, {"weapon": strong, "neck": Item()})
        assert updated.equipment.weapon == strong
        assert updated.equipment.neck.is_empty
        assert updated.health == adventurer.health
        assert apply_selection(adventurer, {"weapon": adventurer.equipment.weapon}) is adventurer

    def test_bag_returns_replaced_item(self, adventurer):
        strong = Item(KATANA_ID, xp=400)
        pendant = Item(PENDANT_ID, xp=9)
        bag = build_updated_bag(adventurer, [strong, pendant], {"weapon": strong})
        assert bag == [pendant, Item(KATANA_ID, xp=100)]

    def test_bag_filling_empty_slot(self, adventurer):
        pendant = Item(PENDANT_ID, xp=9)
        assert build_updated_bag(adventurer, [pendant, pendant], {"neck": pendant}) == [pendant]


class TestCandidates:

    def test_weapons_keep_only_best_damage(self, adventurer, blade_beast):
        bag = [Item(SHORT_SWORD_ID, xp=100), Item(KATANA_ID, xp=400)]
        candidates = build_candidates(adventurer, bag, blade_beast)
        assert candidates["weapon"] == [Item(KATANA_ID, xp=400)]

    def test_armor_keeps_best_piece_per_material(self, adventurer, blade_beast):
        bag = [
            Item(LEATHER_ARMOR_ID, xp=1),
            Item(DEMON_HUSK_ID, xp=100),
            Item(METAL_CHEST_ID, xp=1),
        ]
        candidates = build_candidates(adventurer, bag, blade_beast)
        # equipped (empty) first, then least damage taken: Demon Husk 2, metal 7
        assert candidates["chest"] == [Item(), Item(DEMON_HUSK_ID, xp=100), Item(METAL_CHEST_ID, xp=1)]
        assert candidates["head"] == [Item()]

    def test_jewelry_is_kept_whole(self, adventurer, blade_beast):
        bag = [Item(PENDANT_ID, xp=4), Item(PENDANT_ID, xp=4), Item(SILVER_RING_ID, xp=1)]
        candidates = build_candidates(adventurer, bag, blade_beast)
        assert candidates["neck"] == [Item(), Item(PENDANT_ID, xp=4)]
        assert candidates["ring"] == [Item(), Item(SILVER_RING_ID, xp=1)]

    def test_single_and_combined_selections(self, adventurer, blade_beast):
        bag = [Item(KATANA_ID, xp=400), Item(PENDANT_ID, xp=4)]
        candidates = build_candidates(adventurer, bag, blade_beast)
        singles = single_slot_selections(adventurer, candidates)
        assert singles == [{"weapon": Item(KATANA_ID, xp=400)}, {"neck": Item(PENDANT_ID, xp=4)}]
        loadouts = loadout_selections(adventurer, candidates)
        assert len(loadouts) == 3
        assert {"weapon": Item(KATANA_ID, xp=400), "neck": Item(PENDANT_ID, xp=4)} in loadouts
        assert all(loadouts)


# =============================================================================
# Scoring and suggestions
# =============================================================================


class TestEvaluateSelections:

    def test_prefers_fewer_changes_on_equal_scores(self, adventurer, blade_beast):
        flat = SimulationResult(has_outcome=True, win_rate=50.0)

        def scorer(adventurer, beast, initial_beast_strike):
            return flat

        one = {"neck": Item(PENDANT_ID, xp=4)}
        two = {"neck": Item(PENDANT_ID, xp=4), "ring": Item(SILVER_RING_ID, xp=1)}
        best = evaluate_selections(adventurer, blade_beast, [two, one], scorer=scorer)
        assert best.selection == one
        assert best.change_count == 1

    def test_candidates_are_scored_as_ambushes(self, adventurer, blade_beast):
        calls = []
        evaluate_selections(
            adventurer, blade_beast, [{"weapon": Item(KATANA_ID, xp=144)}], scorer=counting_scorer(calls)
        )
        assert [strike for _, strike in calls] == [True]

    def test_empty_selection_list(self, adventurer, blade_beast):
        assert evaluate_selections(adventurer, blade_beast, []) is None


class TestSuggestBestGear:

    def test_missing_inputs(self, adventurer, blade_beast):
        assert suggest_best_gear(None, [], blade_beast) is None
        assert suggest_best_gear(adventurer, None, blade_beast) is None
        assert suggest_best_gear(adventurer, [], None) is None

    def test_perfect_single_swap_stops_early(self, monkeypatch, blade_beast):
        def unexpected(*args, **kwargs):
            raise AssertionError("loadout search should be skipped")

        monkeypatch.setattr(gear, "loadout_selections", unexpected)
        calls = []
        strong = Item(KATANA_ID, xp=400)
        bag = [Item(PENDANT_ID, xp=4), strong, Item(SILVER_RING_ID, xp=1)]
        suggestion = suggest_best_gear(unarmed(), bag, blade_beast, scorer=counting_scorer(calls))

        # 75 per hit kills the 60 hp beast after a free strike of at most 74
        assert suggestion.score.win_rate == 100.0
        assert suggestion.changes == ["weapon"]
        assert suggestion.adventurer.equipment.weapon == strong
        assert suggestion.bag == [Item(PENDANT_ID, xp=4), Item(SILVER_RING_ID, xp=1)]
        # baseline plus the first single swap only
        assert [strike for _, strike in calls] == [False, True]

    def test_partial_improvement_runs_loadout_search(self, blade_beast):
        calls = []
        katana = Item(KATANA_ID, xp=144)
        suggestion = suggest_best_gear(unarmed(), [katana], blade_beast, scorer=counting_scorer(calls))

        # 35 per hit: survive the free strike and one reply unless either crits
        assert suggestion.score.win_rate == 64.0
        assert suggestion.changes == ["weapon"]
        assert suggestion.selection == {"weapon": katana}
        assert suggestion.bag == []
        assert len(calls) == 3

    def test_no_improvement(self, adventurer, blade_beast):
        assert suggest_best_gear(adventurer, [], blade_beast) is None
        assert suggest_best_gear(adventurer, [Item(SHORT_SWORD_ID, xp=100)], blade_beast) is None

    def test_without_greedy_phase(self, monkeypatch, blade_beast):
        def unexpected(*args, **kwargs):
            raise AssertionError("single-slot phase should be skipped")

        monkeypatch.setattr(gear, "single_slot_selections", unexpected)
        strong = Item(KATANA_ID, xp=400)
        suggestion = suggest_best_gear(unarmed(), [strong], blade_beast, greedy_first=False)
        assert suggestion.changes == ["weapon"]
        assert suggestion.score.is_perfect

    def test_merge_keeps_baseline_when_nothing_found(self):
        base = Evaluation(GearScore(10.0, 0, 0, 0, 0), None, 0)
        assert gear._merge(base, None) is base
