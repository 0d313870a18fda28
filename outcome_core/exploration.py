"""Population-weighted damage risk for the next exploration step.

Instead of one known beast, every beast (or obstacle) id is swept across the
level band the adventurer can currently meet, and across every way a beast's
random name affixes can line up with the armour being hit. Each scenario
contributes weighted damage samples that are reduced by the same statistics
used for single fights.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

import numpy as np

from .data import (
    BEAST_ATTACK_TYPES,
    BEAST_IDS,
    BEAST_SPECIAL_NAME_LEVEL_UNLOCK,
    BEAST_SPECIAL_PREFIX_POOL,
    BEAST_SPECIAL_SUFFIX_POOL,
    BEAST_TIERS,
    DISCOVERY_GOLD_CHANCE,
    DISCOVERY_HEALTH_CHANCE,
    DISCOVERY_LOOT_CHANCE,
    ELEMENT_TYPES,
    ENCOUNTER_BASE_MIX,
    ENCOUNTER_LEVEL_OFFSETS,
    EXPLORATION_SLOT_ORDER,
    EXPLORATION_SWEEP_LIMIT,
    MIN_DAMAGE_FROM_BEASTS,
    MIN_DAMAGE_FROM_OBSTACLES,
    NECK_ARMOR_BONUS_PERCENT,
    OBSTACLE_IDS,
    OBSTACLE_TIERS,
    OBSTACLE_TYPES,
    STATS_MODE_DODGE,
    STATS_MODE_REDUCTION,
    TIER_LABELS,
)
from .errors import is_capacity_failure
from .models import (
    Adventurer,
    Beast,
    BeastRiskSummary,
    DiscoverySummary,
    EncounterDistribution,
    ExplorationInsights,
    GameSettings,
    Item,
    LevelRange,
    ObstacleRiskSummary,
    SlotDamageSummary,
    ValueRange,
    WeightedSample,
)
from .rules import (
    ItemSpecials,
    ability_based_damage_reduction,
    ability_based_percentage,
    beast_damage_details,
    clamp,
    elemental_adjusted_damage,
    encounter_critical_chance,
    item_name,
    item_specials,
    item_tier,
    item_type,
    neck_reinforces,
)
from .settings import get_exploration_sample_count
from .statistics import build_damage_distribution, lethal_chance, weighted_median

logger = logging.getLogger(__name__)


class AffixScenario(NamedTuple):
    prefix: bool
    suffix: bool
    probability: float


# ---- Shared helpers ---------------------------------------------------------


def encounter_level_range(adventurer_level: int) -> LevelRange:
    """Return the band of levels the next beast or obstacle can roll."""

    offset = 0
    for minimum_level, level_offset in ENCOUNTER_LEVEL_OFFSETS:
        if adventurer_level >= minimum_level:
            offset = level_offset
            break
    return LevelRange(1 + offset, max(1, adventurer_level * 3) + offset)


def apply_damage_reduction(damage: float, reduction_percent: float) -> int:
    if damage <= 0:
        return 0
    reduction = clamp(reduction_percent, 0, 100)
    if reduction <= 0:
        return max(0, round(damage))
    return max(0, math.floor(round(damage) * (100 - reduction) / 100))


def apply_neck_mitigation(damage: int, armor: Item, armor_base: int, neck: Item) -> int:
    """Reduce obstacle damage when the neck item matches the armour material."""

    if not armor_base or not neck_reinforces(armor, neck):
        return max(0, damage)
    bonus = armor_base * neck.level * NECK_ARMOR_BONUS_PERCENT // 100
    if damage > bonus + MIN_DAMAGE_FROM_OBSTACLES:
        return max(MIN_DAMAGE_FROM_OBSTACLES, damage - bonus)
    return MIN_DAMAGE_FROM_OBSTACLES


def population_percentages(
    ids: Iterable[int],
    tiers: dict[int, int],
    types: dict[int, str],
) -> tuple[dict[str, float], dict[str, float]]:
    """Return (tier, element) shares of a population, as percentages."""

    population = list(ids)
    tier_counts = Counter(f"T{tiers[entity]}" for entity in population)
    type_counts = Counter(types[entity] for entity in population)
    total = len(population) or 1
    tier_share = {label: round(tier_counts[label] / total * 100, 2) for label in TIER_LABELS}
    type_share = {element: round(type_counts[element] / total * 100, 2) for element in ELEMENT_TYPES}
    return tier_share, type_share


def affix_scenarios(specials: ItemSpecials, level: int) -> list[AffixScenario]:
    """Return the ways a beast of ``level`` can match the armour's name affixes.

    Beast affixes are uniform draws from fixed pools, so the chance of a
    prefix (suffix) match is one over the pool size, and only armour that
    carries that affix can be matched.
    """

    if level < BEAST_SPECIAL_NAME_LEVEL_UNLOCK:
        return [AffixScenario(False, False, 1.0)]

    prefix_chance = 1 / BEAST_SPECIAL_PREFIX_POOL if specials.prefix else 0.0
    suffix_chance = 1 / BEAST_SPECIAL_SUFFIX_POOL if specials.suffix else 0.0
    both = prefix_chance * suffix_chance
    scenarios = [
        AffixScenario(False, False, max(0.0, 1 - prefix_chance - suffix_chance + both)),
        AffixScenario(True, False, max(0.0, prefix_chance - both)),
        AffixScenario(False, True, max(0.0, suffix_chance - both)),
        AffixScenario(True, True, both),
    ]
    return [
        scenario
        for scenario in scenarios
        if scenario.probability > 0
        and (specials.prefix or not scenario.prefix)
        and (specials.suffix or not scenario.suffix)
    ]


class _DamageRange:
    """Running min/max that falls back to a floor value when nothing was seen."""

    def __init__(self) -> None:
        self.low = math.inf
        self.high = 0

    def add(self, value: int) -> None:
        self.low = min(self.low, value)
        self.high = max(self.high, value)

    def bounds(self, floor_value: int) -> tuple[int, int]:
        if not math.isfinite(self.low):
            return floor_value, floor_value
        return int(self.low), int(self.high)


def _slot_label(slot: str) -> str:
    return slot[:1].upper() + slot[1:]


def empty_slot_summary(slot: str) -> SlotDamageSummary:
    return SlotDamageSummary(slot=slot, slot_label=_slot_label(slot))


def fallback_slot_summary(slot: str, adventurer: Adventurer) -> SlotDamageSummary:
    """Slot summary carrying only the armour identity, without damage data."""

    summary = empty_slot_summary(slot)
    armor = adventurer.equipment.slot(slot)
    if not armor.is_empty:
        summary.armor_name = item_name(armor.id)
        summary.has_armor = True
    return summary


def _finish_slot(
    slot: str,
    adventurer: Adventurer,
    samples: list[WeightedSample],
    base_range: _DamageRange,
    crit_range: _DamageRange,
    floor_value: int,
) -> SlotDamageSummary:
    armor = adventurer.equipment.slot(slot)
    min_base, max_base = base_range.bounds(floor_value)
    min_crit, max_crit = crit_range.bounds(floor_value)
    return SlotDamageSummary(
        slot=slot,
        slot_label=_slot_label(slot),
        armor_name=item_name(armor.id) if not armor.is_empty else "None",
        has_armor=not armor.is_empty,
        min_base=min_base,
        max_base=max_base,
        min_crit=min_crit,
        max_crit=max_crit,
        distribution=build_damage_distribution(samples),
        lethal_chance=lethal_chance(samples, max(0, adventurer.health)),
    )


# ---- Beasts -----------------------------------------------------------------


@dataclass(frozen=True)
class AmbushModel:
    """How an ambushing beast's hits are softened or avoided."""

    crit_chance: float
    avoid_chance: float
    base_reduction: float
    stat_reduction: float

    @classmethod
    def build(cls, adventurer: Adventurer, settings: GameSettings, is_ambush: bool) -> AmbushModel:
        level = max(1, adventurer.level)
        wisdom = adventurer.stats.wisdom
        stat_reduction = 0.0
        avoid_chance = 0.0
        if is_ambush and settings.stats_mode == STATS_MODE_REDUCTION:
            stat_reduction = clamp(ability_based_damage_reduction(adventurer.xp, wisdom), 0, 100)
        if is_ambush and settings.stats_mode == STATS_MODE_DODGE:
            avoid_chance = clamp(ability_based_percentage(adventurer.xp, wisdom), 0, 100) / 100
        return cls(
            crit_chance=encounter_critical_chance(level, is_ambush),
            avoid_chance=avoid_chance,
            base_reduction=clamp(settings.base_damage_reduction, 0, 100) if is_ambush else 0.0,
            stat_reduction=stat_reduction,
        )

    def mitigate(self, damage: int) -> int:
        if self.base_reduction > 0:
            damage = apply_damage_reduction(damage, self.base_reduction)
        if self.stat_reduction > 0:
            damage = apply_damage_reduction(damage, self.stat_reduction)
        return damage


class _BeastStrikeCache:
    """Memoised (base, critical) damage of a synthetic beast against one armour piece."""

    def __init__(self, adventurer: Adventurer, armor: Item, specials: ItemSpecials, model: AmbushModel) -> None:
        self._adventurer = adventurer
        self._armor = armor
        self._specials = specials
        self._model = model
        self._cache: dict[tuple[int, int, bool, bool], tuple[int, int]] = {}

    def damage(self, beast_id: int, level: int, scenario: AffixScenario) -> tuple[int, int]:
        key = (beast_id, level, scenario.prefix, scenario.suffix)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        beast = Beast(
            id=beast_id,
            level=level,
            tier=BEAST_TIERS[beast_id],
            health=0,
            special_prefix=self._specials.prefix if scenario.prefix else None,
            special_suffix=self._specials.suffix if scenario.suffix else None,
        )
        details = beast_damage_details(beast, self._adventurer, self._armor)
        result = (
            self._model.mitigate(max(MIN_DAMAGE_FROM_BEASTS, details.base_damage)),
            self._model.mitigate(max(MIN_DAMAGE_FROM_BEASTS, details.critical_damage)),
        )
        self._cache[key] = result
        return result


def _armor_specials(adventurer: Adventurer, armor: Item) -> ItemSpecials:
    return item_specials(armor, adventurer.item_specials_seed)


def beast_slot_summary(
    slot: str,
    adventurer: Adventurer,
    level_range: LevelRange,
    model: AmbushModel,
) -> tuple[SlotDamageSummary, list[WeightedSample]]:
    """Sweep every beast, level and affix scenario against one armour slot."""

    armor = adventurer.equipment.slot(slot)
    specials = _armor_specials(adventurer, armor)
    strikes = _BeastStrikeCache(adventurer, armor, specials, model)
    level_weight = 1 / level_range.count
    hit_chance = 1 - model.avoid_chance
    samples: list[WeightedSample] = []
    base_range = _DamageRange()
    crit_range = _DamageRange()

    for level in range(level_range.min, level_range.max + 1):
        scenarios = affix_scenarios(specials, level)
        for beast_id in BEAST_IDS:
            for scenario in scenarios:
                scenario_weight = level_weight * scenario.probability
                if scenario_weight <= 0:
                    continue
                base_damage, crit_damage = strikes.damage(beast_id, level, scenario)
                base_weight = scenario_weight * hit_chance * (1 - model.crit_chance)
                crit_weight = scenario_weight * hit_chance * model.crit_chance
                if base_weight > 0:
                    samples.append(WeightedSample(base_damage, base_weight))
                    base_range.add(base_damage)
                if crit_weight > 0:
                    samples.append(WeightedSample(crit_damage, crit_weight))
                    crit_range.add(crit_damage)
                avoid_weight = scenario_weight * model.avoid_chance
                if avoid_weight > 0:
                    samples.append(WeightedSample(0, avoid_weight))

    summary = _finish_slot(slot, adventurer, samples, base_range, crit_range, MIN_DAMAGE_FROM_BEASTS)
    return summary, samples


def beast_slot_summary_monte_carlo(
    slot: str,
    adventurer: Adventurer,
    level_range: LevelRange,
    model: AmbushModel,
    sample_count: int,
    rng: np.random.Generator,
) -> tuple[SlotDamageSummary, list[WeightedSample]]:
    """Approximate :func:`beast_slot_summary` with ``sample_count`` random encounters."""

    if sample_count <= 0:
        return fallback_slot_summary(slot, adventurer), []

    armor = adventurer.equipment.slot(slot)
    specials = _armor_specials(adventurer, armor)
    strikes = _BeastStrikeCache(adventurer, armor, specials, model)
    sample_weight = 1 / sample_count

    beast_picks = rng.integers(0, len(BEAST_IDS), size=sample_count)
    level_picks = rng.integers(0, level_range.count, size=sample_count)
    scenario_rolls = rng.random(sample_count)
    avoid_rolls = rng.random(sample_count)
    crit_rolls = rng.random(sample_count)

    samples: list[WeightedSample] = []
    base_range = _DamageRange()
    crit_range = _DamageRange()

    for index in range(sample_count):
        beast_id = BEAST_IDS[int(beast_picks[index])]
        level = level_range.min + int(level_picks[index])
        scenarios = affix_scenarios(specials, level)
        scenario = scenarios[-1] if scenarios else AffixScenario(False, False, 1.0)
        roll = scenario_rolls[index] * sum(s.probability for s in scenarios)
        for candidate in scenarios:
            if roll <= candidate.probability:
                scenario = candidate
                break
            roll -= candidate.probability

        if model.avoid_chance > 0 and avoid_rolls[index] < model.avoid_chance:
            samples.append(WeightedSample(0, sample_weight))
            continue

        base_damage, crit_damage = strikes.damage(beast_id, level, scenario)
        if crit_rolls[index] < model.crit_chance:
            samples.append(WeightedSample(crit_damage, sample_weight))
            crit_range.add(crit_damage)
        else:
            samples.append(WeightedSample(base_damage, sample_weight))
            base_range.add(base_damage)

    summary = _finish_slot(slot, adventurer, samples, base_range, crit_range, MIN_DAMAGE_FROM_BEASTS)
    return summary, samples


SlotSweep = Callable[[str], tuple[SlotDamageSummary, list[WeightedSample]]]


def _beast_summary(
    adventurer: Adventurer,
    model: AmbushModel,
    is_ambush: bool,
    sweep: Optional[SlotSweep],
) -> BeastRiskSummary:
    tier_share, type_share = population_percentages(BEAST_IDS, BEAST_TIERS, BEAST_ATTACK_TYPES)
    ambush_chance = round(100 - model.avoid_chance * 100, 2) if is_ambush else 0.0
    summary = BeastRiskSummary(
        ambush_chance=ambush_chance,
        crit_chance=round(model.crit_chance * 100, 2),
        tier_distribution=tier_share,
        type_distribution=type_share,
    )

    if sweep is None:
        summary.slot_damages = [fallback_slot_summary(slot, adventurer) for slot in EXPLORATION_SLOT_ORDER]
        summary.median_damage = MIN_DAMAGE_FROM_BEASTS
        summary.overall_lethal_chance = math.nan
        return summary

    aggregated: list[WeightedSample] = []
    for slot in EXPLORATION_SLOT_ORDER:
        slot_summary, samples = sweep(slot)
        summary.slot_damages.append(slot_summary)
        aggregated.extend(samples)
    summary.damage_distribution = build_damage_distribution(aggregated)
    summary.median_damage = weighted_median(aggregated)
    summary.overall_lethal_chance = lethal_chance(aggregated, max(0, adventurer.health))
    return summary


def exploration_seed(adventurer: Adventurer, level_range: LevelRange, settings: GameSettings) -> int:
    """Seed that keeps the sampled sweep stable for identical inputs."""

    seed = (
        adventurer.xp
        + adventurer.health
        + adventurer.item_specials_seed
        + level_range.min
        + level_range.max
        + int(settings.base_damage_reduction)
    )
    return abs(int(seed))


def beast_sweep_size(level_range: LevelRange) -> int:
    return len(BEAST_IDS) * level_range.count * 4 * len(EXPLORATION_SLOT_ORDER)


def compute_beast_risk(
    adventurer: Adventurer,
    level_range: LevelRange,
    settings: GameSettings,
    is_ambush: bool = True,
) -> BeastRiskSummary:
    """Exact beast sweep over the whole population."""

    model = AmbushModel.build(adventurer, settings, is_ambush)
    return _beast_summary(
        adventurer,
        model,
        is_ambush,
        lambda slot: beast_slot_summary(slot, adventurer, level_range, model),
    )


def compute_beast_risk_monte_carlo(
    adventurer: Adventurer,
    level_range: LevelRange,
    settings: GameSettings,
    is_ambush: bool = True,
    sample_count: Optional[int] = None,
) -> BeastRiskSummary:
    """Seeded sampled beast sweep; reproducible for identical inputs."""

    model = AmbushModel.build(adventurer, settings, is_ambush)
    count = get_exploration_sample_count() if sample_count is None else sample_count
    rng = np.random.default_rng(exploration_seed(adventurer, level_range, settings))
    return _beast_summary(
        adventurer,
        model,
        is_ambush,
        lambda slot: beast_slot_summary_monte_carlo(slot, adventurer, level_range, model, count, rng),
    )


def minimal_beast_risk(
    adventurer: Adventurer,
    settings: GameSettings,
    is_ambush: bool = True,
) -> BeastRiskSummary:
    """Population statistics only; used when every damage sweep failed."""

    return _beast_summary(adventurer, AmbushModel.build(adventurer, settings, is_ambush), is_ambush, None)


def beast_risk_with_fallback(
    adventurer: Adventurer,
    level_range: LevelRange,
    settings: GameSettings,
    is_ambush: bool = True,
) -> BeastRiskSummary:
    """Exact sweep, downgraded to sampling and then to a minimal summary."""

    if beast_sweep_size(level_range) <= EXPLORATION_SWEEP_LIMIT:
        try:
            return compute_beast_risk(adventurer, level_range, settings, is_ambush)
        except Exception as error:
            if not is_capacity_failure(error):
                raise
            logger.warning(
                "Beast risk computation exceeded call stack; using Monte Carlo fallback summary: %s",
                error,
            )
    else:
        logger.info(
            "Beast risk sweep of %d scenarios exceeds %d; using Monte Carlo fallback summary.",
            beast_sweep_size(level_range),
            EXPLORATION_SWEEP_LIMIT,
        )

    try:
        return compute_beast_risk_monte_carlo(adventurer, level_range, settings, is_ambush)
    except Exception:
        logger.exception("Beast risk Monte Carlo fallback failed; using minimal summary.")
        return minimal_beast_risk(adventurer, settings, is_ambush)


# ---- Obstacles --------------------------------------------------------------


def obstacle_slot_summary(
    slot: str,
    adventurer: Adventurer,
    level_range: LevelRange,
    dodge_probability: float,
    settings: GameSettings,
) -> tuple[SlotDamageSummary, list[WeightedSample]]:
    """Sweep every obstacle and level against one armour slot."""

    armor = adventurer.equipment.slot(slot)
    armor_type = item_type(armor.id) if not armor.is_empty else "None"
    armor_base = armor.level * max(0, 6 - item_tier(armor.id)) if not armor.is_empty else 0
    neck = adventurer.equipment.neck

    crit_chance = encounter_critical_chance(max(1, adventurer.level), is_ambush=False)
    base_reduction = clamp(settings.base_damage_reduction, 0, 100)
    stat_reduction = 0.0
    if settings.stats_mode == STATS_MODE_REDUCTION:
        stat_reduction = clamp(
            ability_based_damage_reduction(adventurer.xp, adventurer.stats.intelligence), 0, 100
        )

    def finalise(raw: int) -> int:
        damage = apply_neck_mitigation(raw, armor, armor_base, neck)
        damage = apply_damage_reduction(max(MIN_DAMAGE_FROM_OBSTACLES, damage), base_reduction)
        if stat_reduction > 0:
            damage = apply_damage_reduction(damage, stat_reduction)
        return damage

    level_weight = 1 / level_range.count
    hit_weight = level_weight * (1 - dodge_probability)
    samples: list[WeightedSample] = []
    base_range = _DamageRange()
    crit_range = _DamageRange()

    for obstacle_id in OBSTACLE_IDS:
        attack_scale = max(0, 6 - OBSTACLE_TIERS[obstacle_id])
        element = OBSTACLE_TYPES[obstacle_id]
        for level in range(level_range.min, level_range.max + 1):
            elemental = elemental_adjusted_damage(level * attack_scale, element, armor_type)
            base_damage = finalise(max(MIN_DAMAGE_FROM_OBSTACLES, elemental - armor_base))
            crit_damage = finalise(max(MIN_DAMAGE_FROM_OBSTACLES, elemental * 2 - armor_base))

            if dodge_probability > 0:
                samples.append(WeightedSample(0, level_weight * dodge_probability))
            if hit_weight > 0:
                if 1 - crit_chance > 0:
                    samples.append(WeightedSample(base_damage, hit_weight * (1 - crit_chance)))
                if crit_chance > 0:
                    samples.append(WeightedSample(crit_damage, hit_weight * crit_chance))
                base_range.add(base_damage)
                crit_range.add(crit_damage)

    summary = _finish_slot(slot, adventurer, samples, base_range, crit_range, MIN_DAMAGE_FROM_OBSTACLES)
    return summary, samples


def compute_obstacle_risk(
    adventurer: Adventurer,
    level_range: LevelRange,
    settings: GameSettings,
) -> ObstacleRiskSummary:
    tier_share, type_share = population_percentages(OBSTACLE_IDS, OBSTACLE_TIERS, OBSTACLE_TYPES)
    dodge_percent = 0.0
    if settings.stats_mode == STATS_MODE_DODGE:
        dodge_percent = clamp(
            ability_based_percentage(adventurer.xp, adventurer.stats.intelligence), 0, 100
        )

    summary = ObstacleRiskSummary(
        dodge_chance=round(dodge_percent, 2),
        crit_chance=round(encounter_critical_chance(max(1, adventurer.level), False) * 100, 2),
        tier_distribution=tier_share,
        type_distribution=type_share,
    )
    aggregated: list[WeightedSample] = []
    for slot in EXPLORATION_SLOT_ORDER:
        slot_summary, samples = obstacle_slot_summary(
            slot, adventurer, level_range, dodge_percent / 100, settings
        )
        summary.slot_damages.append(slot_summary)
        aggregated.extend(samples)
    summary.damage_distribution = build_damage_distribution(aggregated)
    summary.median_damage = weighted_median(aggregated)
    summary.overall_lethal_chance = lethal_chance(aggregated, max(0, adventurer.health))
    return summary


# ---- Discoveries and encounter mix ------------------------------------------


def compute_discoveries(adventurer: Adventurer) -> DiscoverySummary:
    level = max(1, adventurer.level)
    return DiscoverySummary(
        gold_chance=DISCOVERY_GOLD_CHANCE,
        health_chance=DISCOVERY_HEALTH_CHANCE,
        loot_chance=DISCOVERY_LOOT_CHANCE,
        gold_range=ValueRange(1, level),
        health_range=ValueRange(2, level * 2),
    )


def compute_encounter_distribution() -> EncounterDistribution:
    beast_tiers, beast_types = population_percentages(BEAST_IDS, BEAST_TIERS, BEAST_ATTACK_TYPES)
    obstacle_tiers, obstacle_types = population_percentages(OBSTACLE_IDS, OBSTACLE_TIERS, OBSTACLE_TYPES)
    return EncounterDistribution(
        base_mix=dict(ENCOUNTER_BASE_MIX),
        beast_by_tier=beast_tiers,
        beast_by_type=beast_types,
        obstacle_by_tier=obstacle_tiers,
        obstacle_by_type=obstacle_types,
    )


def not_ready_insights() -> ExplorationInsights:
    """Zeroed insights returned before the adventurer or settings are known."""

    zero_tiers = {label: 0.0 for label in TIER_LABELS}
    zero_types = {element: 0.0 for element in ELEMENT_TYPES}
    return ExplorationInsights(
        ready=False,
        encounter_distribution=compute_encounter_distribution(),
        beasts=BeastRiskSummary(
            tier_distribution=dict(zero_tiers),
            type_distribution=dict(zero_types),
            slot_damages=[empty_slot_summary(slot) for slot in EXPLORATION_SLOT_ORDER],
        ),
        obstacles=ObstacleRiskSummary(
            tier_distribution=dict(zero_tiers),
            type_distribution=dict(zero_types),
            slot_damages=[empty_slot_summary(slot) for slot in EXPLORATION_SLOT_ORDER],
        ),
        discoveries=DiscoverySummary(),
    )


def exploration_insights(
    adventurer: Optional[Adventurer],
    settings: Optional[GameSettings],
) -> ExplorationInsights:
    """Return beast, obstacle and discovery outlook for the next explore action."""

    if adventurer is None or settings is None:
        return not_ready_insights()

    level_range = encounter_level_range(max(1, adventurer.level))
    return ExplorationInsights(
        ready=True,
        encounter_distribution=compute_encounter_distribution(),
        beasts=beast_risk_with_fallback(adventurer, level_range, settings, is_ambush=True),
        obstacles=compute_obstacle_risk(adventurer, level_range, settings),
        discoveries=compute_discoveries(adventurer),
    )


__all__ = [
    "AffixScenario",
    "AmbushModel",
    "affix_scenarios",
    "beast_risk_with_fallback",
    "compute_beast_risk",
    "compute_beast_risk_monte_carlo",
    "compute_discoveries",
    "compute_encounter_distribution",
    "compute_obstacle_risk",
    "encounter_level_range",
    "exploration_insights",
    "minimal_beast_risk",
    "not_ready_insights",
]
