"""Single-strike damage distributions for the adventurer and the beast."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from .data import ARMOR_TARGET_SLOTS, PROBABILITY_EPSILON, Distribution
from .models import Adventurer, Beast, DamageOption, SimulationContext
from .rules import StrikeDamage, attack_damage, beast_critical_chance, beast_damage_details, clamp


def add_probability(distribution: Distribution, value: int, probability: float) -> None:
    """Accumulate ``probability`` at ``value``, ignoring pruned mass."""

    if probability <= PROBABILITY_EPSILON:
        return
    distribution[value] = distribution.get(value, 0.0) + probability


def _to_options(distribution: Distribution) -> tuple[DamageOption, ...]:
    return tuple(DamageOption(damage, probability) for damage, probability in distribution.items())


def build_hero_damage_options(
    base_damage: int,
    critical_damage: int,
    crit_chance_percent: float,
) -> tuple[DamageOption, ...]:
    """Return the adventurer's strike distribution.

    Parameters
    ----------
    base_damage:
        Damage of an ordinary strike.
    critical_damage:
        Damage of a critical strike.
    crit_chance_percent:
        Critical chance on the 0-100 scale (the luck stat); clamped.
    """

    critical_chance = clamp(crit_chance_percent, 0, 100) / 100
    aggregated: Distribution = {}
    add_probability(aggregated, base_damage, 1 - critical_chance)
    add_probability(aggregated, critical_damage, critical_chance)
    if not aggregated:
        aggregated[base_damage] = 1.0
    return _to_options(aggregated)


def beast_damage_by_slot(adventurer: Adventurer, beast: Beast) -> dict[str, StrikeDamage]:
    """Return the beast's damage against every armour slot the adventurer can be hit in."""

    return {
        slot: beast_damage_details(beast, adventurer, adventurer.equipment.slot(slot))
        for slot in ARMOR_TARGET_SLOTS
    }


def build_beast_damage_options(
    adventurer: Adventurer,
    beast: Beast,
    critical_chance: float,
    slot_damage: Optional[Mapping[str, Optional[StrikeDamage]]] = None,
) -> tuple[DamageOption, ...]:
    """Return the beast's strike distribution across armour slots.

    Each slot with damage data is equally likely to be hit; every hit then
    splits into base and critical damage by ``critical_chance`` (0-1). When
    no slot data exists the chest piece serves as reference armour.
    """

    if slot_damage is None:
        slot_damage = beast_damage_by_slot(adventurer, beast)
    summaries = [slot_damage[slot] for slot in ARMOR_TARGET_SLOTS if slot_damage.get(slot)]

    if not summaries:
        fallback = beast_damage_details(beast, adventurer, adventurer.equipment.chest)
        return (DamageOption(fallback.base_damage, 1.0),)

    slot_probability = 1 / len(summaries)
    critical_chance = clamp(critical_chance, 0.0, 1.0)
    aggregated: Distribution = {}
    for summary in summaries:
        add_probability(aggregated, summary.base_damage, (1 - critical_chance) * slot_probability)
        add_probability(aggregated, summary.critical_damage, critical_chance * slot_probability)
    if not aggregated:
        aggregated[summaries[0].base_damage] = 1.0
    return _to_options(aggregated)


def min_positive_damage(options: Iterable[DamageOption]) -> int:
    """Return the smallest positive damage value, or 0 when there is none."""

    positive = [option.damage for option in options if option.damage > 0]
    return min(positive) if positive else 0


def total_probability(options: Iterable[DamageOption]) -> float:
    return sum(option.probability for option in options)


def build_simulation_context(
    adventurer: Optional[Adventurer],
    beast: Optional[Beast],
    initial_beast_strike: bool = False,
) -> Optional[SimulationContext]:
    """Assemble both strike distributions and starting health pools.

    Returns ``None`` when either combatant is missing or already defeated.
    """

    if adventurer is None or beast is None:
        return None
    if adventurer.health <= 0 or beast.health <= 0:
        return None

    weapon_damage = attack_damage(adventurer.equipment.weapon, adventurer, beast)
    hero_options = build_hero_damage_options(
        weapon_damage.base_damage,
        weapon_damage.critical_damage,
        adventurer.stats.luck,
    )
    beast_options = build_beast_damage_options(
        adventurer,
        beast,
        beast_critical_chance(adventurer.level),
    )

    starting_beast_hp = max(0, adventurer.beast_health)
    effective_beast_hp = starting_beast_hp if starting_beast_hp > 0 else beast.health

    return SimulationContext(
        hero_options=hero_options,
        beast_options=beast_options,
        initial_hero_hp=adventurer.health,
        effective_beast_hp=effective_beast_hp,
        initial_beast_strike=initial_beast_strike,
        min_hero_damage=min_positive_damage(hero_options),
        min_beast_damage=min_positive_damage(beast_options),
    )


def context_from_options(
    hero_options: Iterable[DamageOption],
    beast_options: Iterable[DamageOption],
    hero_hp: int,
    beast_hp: int,
    initial_beast_strike: bool = False,
) -> SimulationContext:
    """Build a context directly from strike distributions.

    Used by callers (and tests) that model damage outside the game rules.
    """

    hero = tuple(DamageOption(int(d), float(p)) for d, p in hero_options)
    beast = tuple(DamageOption(int(d), float(p)) for d, p in beast_options)
    if not hero or not beast:
        raise ValueError("Strike distributions must contain at least one option.")
    return SimulationContext(
        hero_options=hero,
        beast_options=beast,
        initial_hero_hp=hero_hp,
        effective_beast_hp=beast_hp,
        initial_beast_strike=initial_beast_strike,
        min_hero_damage=min_positive_damage(hero),
        min_beast_damage=min_positive_damage(beast),
    )
