"""Game-rule helpers: item lookups, special names, and per-strike damage formulas."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from .data import (
    BEAST_CRIT_MAX_PERCENT,
    BEAST_CRIT_MIN_PERCENT,
    CRITICAL_HIT_AMBUSH_MULTIPLIER,
    CRITICAL_HIT_LEVEL_MULTIPLIER,
    ELEMENTAL_MATCHUPS,
    ITEM_NAME_PREFIXES,
    ITEM_NAME_SUFFIXES,
    ITEM_NAMES,
    ITEM_SLOTS,
    ITEM_SPECIALS_UNLOCK_LEVEL,
    ITEM_TIERS,
    ITEM_TYPES,
    MIN_DAMAGE_FROM_BEASTS,
    MIN_DAMAGE_TO_BEASTS,
    NECK_ARMOR_BONUS_PERCENT,
    PLATINUM_RING_ID,
    RING_BONUS_PERCENT_PER_LEVEL,
    SPECIAL2_DAMAGE_MULTIPLIER,
    SPECIAL3_DAMAGE_MULTIPLIER,
    TITANIUM_RING_ID,
)
from .models import Adventurer, Beast, Item, level_from_xp

# armour type -> neck item that reinforces it
_NECK_FOR_ARMOR = {"Cloth": "Amulet", "Hide": "Pendant", "Metal": "Necklace"}

_REDUCTION_SCALE = 1_000_000


class ItemSpecials(NamedTuple):
    prefix: Optional[str]
    suffix: Optional[str]


class StrikeDamage(NamedTuple):
    base_damage: int
    critical_damage: int


NO_SPECIALS = ItemSpecials(None, None)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def item_name(item_id: int) -> str:
    if 0 <= item_id < len(ITEM_NAMES):
        return ITEM_NAMES[item_id]
    return "None"


def item_slot(item_id: int) -> str:
    return ITEM_SLOTS.get(item_id, "none")


def item_type(item_id: int) -> str:
    return ITEM_TYPES.get(item_id, "None")


def item_tier(item_id: int) -> int:
    return ITEM_TIERS.get(item_id, 5)


SpecialsRule = Callable[[int, int], tuple[int, int]]


def seeded_affix_indices(specials_seed: int, item_id: int) -> tuple[int, int]:
    """Default (prefix index, suffix index) derivation from the seed and item id.

    This is a deterministic stand-in; install the game's own derivation with
    :func:`set_item_specials_rule` when it is available.
    """

    mixed = specials_seed + item_id
    prefix_index = mixed % len(ITEM_NAME_PREFIXES)
    suffix_index = (mixed // len(ITEM_NAME_PREFIXES) + item_id) % len(ITEM_NAME_SUFFIXES)
    return prefix_index, suffix_index


_specials_rule: SpecialsRule = seeded_affix_indices


def set_item_specials_rule(rule: SpecialsRule) -> None:
    """Replace the (seed, item id) -> (prefix index, suffix index) derivation."""

    global _specials_rule
    if not callable(rule):
        raise ValueError("item specials rule must be callable")
    _specials_rule = rule


def reset_item_specials_rule() -> None:
    global _specials_rule
    _specials_rule = seeded_affix_indices


def item_specials(item: Item, specials_seed: int) -> ItemSpecials:
    """Return the name prefix and suffix rolled for ``item``.

    Names are fixed per (seed, item id) pair and only revealed once the item
    reaches the unlock level; a zero seed means specials are not yet known.
    """

    if item.is_empty or not specials_seed or item.level < ITEM_SPECIALS_UNLOCK_LEVEL:
        return NO_SPECIALS
    prefix_index, suffix_index = _specials_rule(specials_seed, item.id)
    return ItemSpecials(
        ITEM_NAME_PREFIXES[prefix_index % len(ITEM_NAME_PREFIXES)],
        ITEM_NAME_SUFFIXES[suffix_index % len(ITEM_NAME_SUFFIXES)],
    )


def beast_specials(beast: Beast) -> ItemSpecials:
    if not beast.specials_unlocked:
        return NO_SPECIALS
    return ItemSpecials(beast.special_prefix, beast.special_suffix)


def elemental_adjusted_damage(base_attack: int, attack_type: str, armor_type: str) -> int:
    """Apply the +/-50% elemental swing for strong and weak matchups."""

    elemental_effect = base_attack // 2
    strong_against, weak_against = ELEMENTAL_MATCHUPS.get(attack_type, (None, None))
    if armor_type == strong_against:
        return base_attack + elemental_effect
    if armor_type == weak_against:
        return base_attack - elemental_effect
    return base_attack


def _ring_bonus(amount: int, ring: Item, ring_id: int) -> int:
    if ring.id != ring_id or amount <= 0:
        return 0
    return (amount * RING_BONUS_PERCENT_PER_LEVEL * ring.level) // 100


def _weapon_special_bonus(
    weapon: Item,
    adventurer: Adventurer,
    beast: Beast,
    elemental_damage: int,
) -> int:
    beast_names = beast_specials(beast)
    if not beast_names.prefix and not beast_names.suffix:
        return 0
    weapon_names = item_specials(weapon, adventurer.item_specials_seed)
    bonus = 0
    if weapon_names.prefix and weapon_names.prefix == beast_names.prefix:
        bonus += elemental_damage * SPECIAL2_DAMAGE_MULTIPLIER
    if weapon_names.suffix and weapon_names.suffix == beast_names.suffix:
        bonus += elemental_damage * SPECIAL3_DAMAGE_MULTIPLIER
    return bonus + _ring_bonus(bonus, adventurer.equipment.ring, PLATINUM_RING_ID)


def attack_damage(weapon: Item, adventurer: Adventurer, beast: Optional[Beast]) -> StrikeDamage:
    """Return the adventurer's base and critical strike damage with ``weapon``.

    Parameters
    ----------
    weapon:
        Weapon used for the strike; an empty slot deals the minimum damage.
    adventurer:
        Attacker, supplying strength, ring and specials seed.
    beast:
        Defender. When omitted the raw (unarmoured) damage is returned.
    """

    if weapon.is_empty:
        return StrikeDamage(MIN_DAMAGE_TO_BEASTS, MIN_DAMAGE_TO_BEASTS)

    base_attack = weapon.level * (6 - item_tier(weapon.id))
    ring = adventurer.equipment.ring
    strength = adventurer.stats.strength

    if beast is None:
        strength_bonus = int(base_attack * strength / 10)
        ring_bonus = _ring_bonus(base_attack, ring, TITANIUM_RING_ID)
        return StrikeDamage(
            base_attack + strength_bonus,
            base_attack * 2 + strength_bonus + ring_bonus,
        )

    beast_armor = beast.level * (6 - beast.tier)
    elemental = elemental_adjusted_damage(base_attack, item_type(weapon.id), beast.armor_type)
    strength_bonus = (elemental * strength * 10) // 100 if strength > 0 else 0
    special_bonus = _weapon_special_bonus(weapon, adventurer, beast, elemental)

    attack_total = elemental + strength_bonus + special_bonus
    base_damage = max(MIN_DAMAGE_TO_BEASTS, attack_total - beast_armor)
    critical_damage = max(MIN_DAMAGE_TO_BEASTS, attack_total + elemental - beast_armor)
    critical_damage += _ring_bonus(elemental, ring, TITANIUM_RING_ID)
    return StrikeDamage(base_damage, critical_damage)


def neck_reinforces(armor: Item, neck: Item) -> bool:
    """Return True when the neck item boosts this armour piece."""

    if armor.is_empty or neck.is_empty:
        return False
    return _NECK_FOR_ARMOR.get(item_type(armor.id)) == item_name(neck.id)


def beast_damage_details(beast: Beast, adventurer: Adventurer, armor: Item) -> StrikeDamage:
    """Return the beast's base and critical damage against one armour slot."""

    base_attack = beast.level * (6 - beast.tier)

    if armor.is_empty:
        elemental = int(base_attack * 1.5)
        base_damage = max(MIN_DAMAGE_FROM_BEASTS, elemental)
        return StrikeDamage(base_damage, max(MIN_DAMAGE_FROM_BEASTS, base_damage + elemental))

    armor_tier = item_tier(armor.id)
    armor_value = armor.level * (6 - armor_tier)
    elemental = elemental_adjusted_damage(base_attack, beast.attack_type, item_type(armor.id))

    armor_names = item_specials(armor, adventurer.item_specials_seed)
    beast_names = beast_specials(beast)
    special_bonus = 0
    if beast_names.suffix and armor_names.suffix == beast_names.suffix:
        special_bonus += elemental * SPECIAL3_DAMAGE_MULTIPLIER
    if beast_names.prefix and armor_names.prefix == beast_names.prefix:
        special_bonus += elemental * SPECIAL2_DAMAGE_MULTIPLIER
    total_attack = elemental + special_bonus

    neck = adventurer.equipment.neck
    neck_bonus = 0
    if neck_reinforces(armor, neck):
        neck_bonus = (armor_value * neck.level * NECK_ARMOR_BONUS_PERCENT) // 100

    def reduce(raw: int) -> int:
        return max(MIN_DAMAGE_FROM_BEASTS, max(MIN_DAMAGE_FROM_BEASTS, raw - armor_value) - neck_bonus)

    return StrikeDamage(reduce(total_attack), reduce(total_attack + elemental))


def ability_based_percentage(xp: int, relevant_stat: int) -> int:
    """Return the percent chance a stat grants at the adventurer's level."""

    level = level_from_xp(xp)
    if relevant_stat >= level:
        return 100
    return int(relevant_stat / level * 100)


def ability_based_damage_reduction(xp: int, relevant_stat: int) -> int:
    """Return the smoothstep damage reduction percent for a stat."""

    level = level_from_xp(xp)
    ratio = min(_REDUCTION_SCALE * relevant_stat / level, _REDUCTION_SCALE)
    r2 = ratio * ratio / _REDUCTION_SCALE
    r3 = r2 * ratio / _REDUCTION_SCALE
    smooth = 3 * r2 - 2 * r3
    return int(100 * smooth / _REDUCTION_SCALE)


def beast_critical_chance(adventurer_level: int) -> float:
    """Critical chance of an ordinary beast strike during a fight."""

    percent = clamp(adventurer_level * 2, BEAST_CRIT_MIN_PERCENT, BEAST_CRIT_MAX_PERCENT)
    return percent / 100


def encounter_critical_chance(adventurer_level: int, is_ambush: bool) -> float:
    """Critical chance used when sweeping possible beast or obstacle encounters."""

    multiplier = CRITICAL_HIT_AMBUSH_MULTIPLIER if is_ambush else CRITICAL_HIT_LEVEL_MULTIPLIER
    return min(1.0, adventurer_level * multiplier / 100)
