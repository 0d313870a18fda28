"""Pick the bag items that most improve the odds against the current beast.

Every candidate loadout is scored with a full fight prediction. Swapping gear
mid-fight hands the beast a free strike, so candidates are scored as ambushed
fights while the current loadout is scored as a plain one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from itertools import product
from typing import Callable, NamedTuple, Optional

from .api import simulate
from .data import ARMOR_TARGET_SLOTS, EQUIPMENT_SLOTS
from .models import Adventurer, Beast, Item, SimulationResult
from .rules import attack_damage, beast_damage_details, item_name, item_slot, item_tier, item_type

logger = logging.getLogger(__name__)

Selection = dict[str, Item]


class GearScore(NamedTuple):
    win_rate: float
    mode_damage_taken: int
    mode_damage_dealt: int
    max_damage_taken: int
    max_damage_dealt: int

    @classmethod
    def from_result(cls, result: SimulationResult) -> GearScore:
        return cls(
            result.win_rate,
            result.mode_damage_taken,
            result.mode_damage_dealt,
            result.max_damage_taken,
            result.max_damage_dealt,
        )

    @property
    def is_perfect(self) -> bool:
        return self.win_rate >= 100

    def beats(self, other: GearScore) -> bool:
        """Compare on win rate, then damage taken (lower), dealt (higher), and worst cases."""

        if self.win_rate != other.win_rate:
            return self.win_rate > other.win_rate
        if self.mode_damage_taken != other.mode_damage_taken:
            return self.mode_damage_taken < other.mode_damage_taken
        if self.mode_damage_dealt != other.mode_damage_dealt:
            return self.mode_damage_dealt > other.mode_damage_dealt
        if self.max_damage_taken != other.max_damage_taken:
            return self.max_damage_taken < other.max_damage_taken
        if self.max_damage_dealt != other.max_damage_dealt:
            return self.max_damage_dealt > other.max_damage_dealt
        return False


class Evaluation(NamedTuple):
    score: GearScore
    selection: Optional[Selection]
    change_count: int


@dataclass
class GearSuggestion:
    """Suggested loadout with the resulting adventurer and bag."""

    adventurer: Adventurer
    bag: list[Item]
    score: GearScore
    selection: Selection
    changes: list[str]


Scorer = Callable[[Adventurer, Beast, bool], SimulationResult]


def _default_scorer(adventurer: Adventurer, beast: Beast, initial_beast_strike: bool) -> SimulationResult:
    return simulate(adventurer, beast, initial_beast_strike=initial_beast_strike, seed=0)


def _improves(candidate: Evaluation, best: Optional[Evaluation]) -> bool:
    """A candidate wins on score, or ties it with fewer changes."""

    if best is None:
        return True
    if candidate.score.beats(best.score):
        return True
    return candidate.change_count < best.change_count and not best.score.beats(candidate.score)


# ---- Loadout edits ----------------------------------------------------------


def apply_selection(adventurer: Adventurer, selection: Mapping[str, Item]) -> Adventurer:
    changed = {
        slot: item
        for slot, item in selection.items()
        if slot in EQUIPMENT_SLOTS and item != adventurer.equipment.slot(slot)
    }
    if not changed:
        return adventurer
    return replace(adventurer, equipment=replace(adventurer.equipment, **changed))


def build_updated_bag(
    adventurer: Adventurer,
    bag: Sequence[Item],
    selection: Mapping[str, Item],
) -> list[Item]:
    """Remove equipped items from the bag once each and return the replaced ones to it."""

    updated = list(bag)
    for slot in EQUIPMENT_SLOTS:
        desired = selection.get(slot)
        current = adventurer.equipment.slot(slot)
        if desired is None or desired == current:
            continue
        if not desired.is_empty and desired in updated:
            updated.remove(desired)
        if not current.is_empty:
            updated.append(current)
    return updated


def selection_key(selection: Mapping[str, Item]) -> tuple[tuple[str, int, int], ...]:
    return tuple(sorted((slot, item.id, item.xp) for slot, item in selection.items()))


def describe_selection(selection: Mapping[str, Item]) -> list[str]:
    return [f"{slot}:{item_name(item.id)}#{item.id}" for slot, item in selection.items()]


# ---- Candidates -------------------------------------------------------------


def _slot_for(item: Item) -> str:
    slot = item_slot(item.id)
    return slot if slot in EQUIPMENT_SLOTS else "weapon"


def _unique(items: Iterable[Item]) -> list[Item]:
    seen: list[Item] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _ranking(slot: str, adventurer: Adventurer, beast: Beast) -> Callable[[Item], tuple]:
    """Sort key: the equipped item first, then best weapon damage or least damage taken."""

    current = adventurer.equipment.slot(slot)

    def key(item: Item) -> tuple:
        equipped_first = 0 if item == current else 1
        if slot == "weapon":
            return (equipped_first, -attack_damage(item, adventurer, beast).base_damage)
        if slot in ARMOR_TARGET_SLOTS:
            return (equipped_first, beast_damage_details(beast, adventurer, item).base_damage)
        return (equipped_first, -item_tier(item.id), -item.xp)

    return key


def build_candidates(
    adventurer: Adventurer,
    bag: Sequence[Item],
    beast: Beast,
) -> dict[str, list[Item]]:
    """Return the items worth trying in each slot, the equipped item included.

    Weapons keep only those with the best base damage. Armour keeps, per
    material, the piece that takes the least damage (higher tier number then
    more xp breaking ties). Jewellery keeps everything.
    """

    pools: dict[str, list[Item]] = {slot: [adventurer.equipment.slot(slot)] for slot in EQUIPMENT_SLOTS}
    for item in bag:
        pools[_slot_for(item)].append(item)

    candidates: dict[str, list[Item]] = {}
    for slot in EQUIPMENT_SLOTS:
        ranking = _ranking(slot, adventurer, beast)
        ordered = sorted(_unique(pools[slot]), key=ranking)

        if slot == "weapon":
            damages = [attack_damage(item, adventurer, beast).base_damage for item in ordered]
            best_damage = max(damages)
            candidates[slot] = [item for item, damage in zip(ordered, damages) if damage == best_damage]
            continue

        if slot in ARMOR_TARGET_SLOTS:
            best_by_type: dict[str, tuple[Item, int, int]] = {}
            for item in ordered:
                material = item_type(item.id)
                damage = beast_damage_details(beast, adventurer, item).base_damage
                tier = item_tier(item.id)
                held = best_by_type.get(material)
                if (
                    held is None
                    or damage < held[1]
                    or (damage == held[1] and (tier, item.xp) > (held[2], held[0].xp))
                ):
                    best_by_type[material] = (item, damage, tier)
            candidates[slot] = sorted((entry[0] for entry in best_by_type.values()), key=ranking)
            continue

        candidates[slot] = ordered

    return candidates


def single_slot_selections(adventurer: Adventurer, candidates: Mapping[str, Sequence[Item]]) -> list[Selection]:
    return [
        {slot: item}
        for slot in EQUIPMENT_SLOTS
        for item in candidates.get(slot, ())
        if item != adventurer.equipment.slot(slot)
    ]


def loadout_selections(adventurer: Adventurer, candidates: Mapping[str, Sequence[Item]]) -> list[Selection]:
    """Every combination of per-slot changes, fewest-first within each slot, without duplicates."""

    per_slot: list[list[Optional[Item]]] = []
    for slot in EQUIPMENT_SLOTS:
        current = adventurer.equipment.slot(slot)
        per_slot.append([None] + [item for item in candidates.get(slot, ()) if item != current])

    selections: list[Selection] = []
    seen: set[tuple[tuple[str, int, int], ...]] = set()
    for combination in product(*per_slot):
        selection = {slot: item for slot, item in zip(EQUIPMENT_SLOTS, combination) if item is not None}
        if not selection:
            continue
        key = selection_key(selection)
        if key in seen:
            continue
        seen.add(key)
        selections.append(selection)
    return selections


# ---- Scoring ----------------------------------------------------------------


def evaluate_selections(
    adventurer: Adventurer,
    beast: Beast,
    selections: Iterable[Selection],
    stop_on_perfect: bool = True,
    scorer: Scorer = _default_scorer,
) -> Optional[Evaluation]:
    """Score each selection as an ambushed fight and return the best one.

    With ``stop_on_perfect`` the scan ends at the first single-change
    selection that wins every fight.
    """

    best: Optional[Evaluation] = None
    for selection in selections:
        result = scorer(apply_selection(adventurer, selection), beast, True)
        candidate = Evaluation(GearScore.from_result(result), selection, len(selection))
        if _improves(candidate, best):
            best = candidate
            if stop_on_perfect and candidate.score.is_perfect and candidate.change_count == 1:
                break
    return best


def _merge(base: Evaluation, found: Optional[Evaluation]) -> Evaluation:
    if found is None or found.selection is None:
        return base
    return found if _improves(found, base) else base


def suggest_best_gear(
    adventurer: Optional[Adventurer],
    bag: Optional[Sequence[Item]],
    beast: Optional[Beast],
    greedy_first: bool = True,
    scorer: Scorer = _default_scorer,
) -> Optional[GearSuggestion]:
    """Suggest the loadout from equipped and bagged items that fares best against ``beast``.

    Parameters
    ----------
    adventurer, bag, beast:
        Current snapshot. Any missing input yields ``None``.
    greedy_first:
        Try every single-slot swap before the combinatorial search and stop
        there when one of them wins every fight.
    scorer:
        Fight predictor; defaults to a seeded :func:`simulate`.

    Returns
    -------
    GearSuggestion or None
        ``None`` when no loadout beats the current one.
    """

    if adventurer is None or bag is None or beast is None:
        logger.debug("Gear suggestion skipped: adventurer, bag or beast missing.")
        return None

    candidates = build_candidates(adventurer, bag, beast)
    logger.debug("Gear candidate pool sizes: %s", {slot: len(items) for slot, items in candidates.items()})

    best = Evaluation(GearScore.from_result(scorer(adventurer, beast, False)), None, 0)

    if greedy_first:
        singles = single_slot_selections(adventurer, candidates)
        best = _merge(best, evaluate_selections(adventurer, beast, singles, True, scorer))
        if best.selection is not None and best.score.is_perfect:
            logger.debug("Perfect single-slot swap found: %s", describe_selection(best.selection))
            return _suggestion(adventurer, bag, best)

    loadouts = loadout_selections(adventurer, candidates)
    logger.debug("Scoring %d gear loadouts.", len(loadouts))
    best = _merge(best, evaluate_selections(adventurer, beast, loadouts, True, scorer))

    if best.selection is None:
        logger.debug("No gear change beats the current loadout.")
        return None
    return _suggestion(adventurer, bag, best)


def _suggestion(adventurer: Adventurer, bag: Sequence[Item], best: Evaluation) -> GearSuggestion:
    selection = dict(best.selection or {})
    return GearSuggestion(
        adventurer=apply_selection(adventurer, selection),
        bag=build_updated_bag(adventurer, bag, selection),
        score=best.score,
        selection=selection,
        changes=list(selection),
    )
