"""Game constants, item/beast/obstacle lookup tables, and shared type aliases."""

from __future__ import annotations

from typing import Final

# ---- Engine limits ----------------------------------------------------------

MAX_ROUNDS_PER_FIGHT: Final[int] = 500
MAX_DETERMINISTIC_STATE_VISITS: Final[int] = 80_000
DEFAULT_MONTE_CARLO_SAMPLES: Final[int] = 10_000
EXPLORATION_MONTE_CARLO_SAMPLES: Final[int] = 2_000
# Branches at or below this mass are dropped to bound memory; rare tails vanish.
PROBABILITY_EPSILON: Final[float] = 1e-12

# ---- Combat rules -----------------------------------------------------------

MIN_DAMAGE_TO_BEASTS: Final[int] = 4
MIN_DAMAGE_FROM_BEASTS: Final[int] = 2
MIN_DAMAGE_FROM_OBSTACLES: Final[int] = 4
SPECIAL2_DAMAGE_MULTIPLIER: Final[int] = 8
SPECIAL3_DAMAGE_MULTIPLIER: Final[int] = 2
RING_BONUS_PERCENT_PER_LEVEL: Final[int] = 3
NECK_ARMOR_BONUS_PERCENT: Final[int] = 3
ITEM_SPECIALS_UNLOCK_LEVEL: Final[int] = 15
BEAST_SPECIAL_NAME_LEVEL_UNLOCK: Final[int] = 19
BEAST_CRIT_MIN_PERCENT: Final[int] = 5
BEAST_CRIT_MAX_PERCENT: Final[int] = 35
CRITICAL_HIT_LEVEL_MULTIPLIER: Final[int] = 1
CRITICAL_HIT_AMBUSH_MULTIPLIER: Final[int] = 1

ARMOR_TARGET_SLOTS: Final[tuple[str, ...]] = ("chest", "head", "waist", "foot", "hand")
EXPLORATION_SLOT_ORDER: Final[tuple[str, ...]] = ("hand", "head", "chest", "waist", "foot")
EQUIPMENT_SLOTS: Final[tuple[str, ...]] = (
    "weapon",
    "chest",
    "head",
    "waist",
    "foot",
    "hand",
    "neck",
    "ring",
)

STATS_MODE_DODGE: Final[str] = "Dodge"
STATS_MODE_REDUCTION: Final[str] = "Reduction"
STATS_MODES: Final[tuple[str, ...]] = (STATS_MODE_DODGE, STATS_MODE_REDUCTION)

ELEMENT_TYPES: Final[tuple[str, ...]] = ("Magic", "Blade", "Bludgeon")
ARMOR_TYPE_FOR_ATTACK: Final[dict[str, str]] = {
    "Magic": "Cloth",
    "Blade": "Hide",
    "Bludgeon": "Metal",
}
# attack type -> (armour it is strong against, armour it is weak against)
ELEMENTAL_MATCHUPS: Final[dict[str, tuple[str, str]]] = {
    "Magic": ("Metal", "Hide"),
    "Blade": ("Cloth", "Metal"),
    "Bludgeon": ("Hide", "Cloth"),
}
TIER_LABELS: Final[tuple[str, ...]] = ("T1", "T2", "T3", "T4", "T5")

# ---- Items ------------------------------------------------------------------

ITEM_NAMES: Final[tuple[str, ...]] = (
    "None",
    "Pendant", "Necklace", "Amulet", "Silver Ring", "Bronze Ring",
    "Platinum Ring", "Titanium Ring", "Gold Ring",
    "Ghost Wand", "Grave Wand", "Bone Wand", "Wand",
    "Grimoire", "Chronicle", "Tome", "Book",
    "Divine Robe", "Silk Robe", "Linen Robe", "Robe", "Shirt",
    "Crown", "Divine Hood", "Silk Hood", "Linen Hood", "Hood",
    "Brightsilk Sash", "Silk Sash", "Wool Sash", "Linen Sash", "Sash",
    "Divine Slippers", "Silk Slippers", "Wool Shoes", "Linen Shoes", "Shoes",
    "Divine Gloves", "Silk Gloves", "Wool Gloves", "Linen Gloves", "Gloves",
    "Katana", "Falchion", "Scimitar", "Long Sword", "Short Sword",
    "Demon Husk", "Dragonskin Armor", "Studded Leather Armor",
    "Hard Leather Armor", "Leather Armor",
    "Demon Crown", "Dragons Crown", "War Cap", "Leather Cap", "Cap",
    "Demonhide Belt", "Dragonskin Belt", "Studded Leather Belt",
    "Hard Leather Belt", "Leather Belt",
    "Demonhide Boots", "Dragonskin Boots", "Studded Leather Boots",
    "Hard Leather Boots", "Leather Boots",
    "Demons Hands", "Dragonskin Gloves", "Studded Leather Gloves",
    "Hard Leather Gloves", "Leather Gloves",
    "Warhammer", "Quarterstaff", "Maul", "Mace", "Club",
    "Holy Chestplate", "Ornate Chestplate", "Plate Mail", "Chain Mail", "Ring Mail",
    "Ancient Helm", "Ornate Helm", "Great Helm", "Full Helm", "Helm",
    "Ornate Belt", "War Belt", "Plated Belt", "Mesh Belt", "Heavy Belt",
    "Holy Greaves", "Ornate Greaves", "Greaves", "Chain Boots", "Heavy Boots",
    "Holy Gauntlets", "Ornate Gauntlets", "Gauntlets", "Chain Gloves", "Heavy Gloves",
)

MAX_ITEM_ID: Final[int] = len(ITEM_NAMES) - 1

PLATINUM_RING_ID: Final[int] = 6
TITANIUM_RING_ID: Final[int] = 7
GOLD_RING_ID: Final[int] = 8

# armour family -> (first item id, armour type)
_ARMOR_FAMILIES: Final[tuple[tuple[int, str], ...]] = ((17, "Cloth"), (47, "Hide"), (77, "Metal"))
_WEAPON_FAMILIES: Final[tuple[tuple[int, str], ...]] = ((42, "Blade"), (72, "Bludgeon"))
_JEWELRY_TIERS: Final[dict[int, int]] = {1: 1, 2: 1, 3: 1, 4: 2, 5: 3, 6: 1, 7: 1, 8: 1}
_MAGIC_WEAPON_TIERS: Final[dict[int, int]] = {
    9: 1, 10: 2, 11: 3, 12: 5, 13: 1, 14: 2, 15: 3, 16: 5,
}


def _build_item_tables() -> tuple[dict[int, str], dict[int, str], dict[int, int]]:
    """Return (slot, type, tier) lookups keyed by item id."""

    slots: dict[int, str] = {}
    types: dict[int, str] = {}
    tiers: dict[int, int] = {}
    for item_id, tier in _JEWELRY_TIERS.items():
        slots[item_id] = "neck" if item_id <= 3 else "ring"
        types[item_id] = "Necklace" if item_id <= 3 else "Ring"
        tiers[item_id] = tier
    for item_id, tier in _MAGIC_WEAPON_TIERS.items():
        slots[item_id] = "weapon"
        types[item_id] = "Magic"
        tiers[item_id] = tier
    for first_id, weapon_type in _WEAPON_FAMILIES:
        for offset in range(5):
            slots[first_id + offset] = "weapon"
            types[first_id + offset] = weapon_type
            tiers[first_id + offset] = offset + 1
    for first_id, armor_type in _ARMOR_FAMILIES:
        for slot_index, slot in enumerate(ARMOR_TARGET_SLOTS):
            for offset in range(5):
                item_id = first_id + slot_index * 5 + offset
                slots[item_id] = slot
                types[item_id] = armor_type
                tiers[item_id] = offset + 1
    return slots, types, tiers


ITEM_SLOTS, ITEM_TYPES, ITEM_TIERS = _build_item_tables()

# ---- Special names ----------------------------------------------------------

ITEM_NAME_PREFIXES: Final[tuple[str, ...]] = (
    "Agony", "Apocalypse", "Armageddon", "Beast", "Behemoth", "Blight", "Blood",
    "Bramble", "Brimstone", "Brood", "Carrion", "Cataclysm", "Chimeric", "Corpse",
    "Corruption", "Damnation", "Death", "Demon", "Dire", "Dragon", "Dread", "Doom",
    "Dusk", "Eagle", "Empyrean", "Fate", "Foe", "Gale", "Ghoul", "Gloom", "Glyph",
    "Golem", "Grim", "Hate", "Havoc", "Honour", "Horror", "Hypnotic", "Kraken",
    "Loath", "Maelstrom", "Mind", "Miracle", "Morbid", "Oblivion", "Onslaught",
    "Pain", "Pandemonium", "Phoenix", "Plague", "Rage", "Rapture", "Rune", "Skull",
    "Sol", "Soul", "Sorrow", "Spirit", "Storm", "Tempest", "Torment", "Vengeance",
    "Victory", "Viper", "Vortex", "Woe", "Wrath", "Lights", "Shimmering",
)
ITEM_NAME_SUFFIXES: Final[tuple[str, ...]] = (
    "Bane", "Root", "Bite", "Song", "Roar", "Grasp", "Instrument", "Glow", "Bender",
    "Shadow", "Whisper", "Shout", "Growl", "Tear", "Peak", "Form", "Sun", "Moon",
)
BEAST_SPECIAL_PREFIX_POOL: Final[int] = len(ITEM_NAME_PREFIXES)
BEAST_SPECIAL_SUFFIX_POOL: Final[int] = len(ITEM_NAME_SUFFIXES)

# ---- Beasts and obstacles ---------------------------------------------------

BEAST_NAMES: Final[tuple[str, ...]] = (
    "Warlock", "Typhon", "Jiangshi", "Anansi", "Basilisk",
    "Gorgon", "Kitsune", "Lich", "Chimera", "Wendigo",
    "Rakshasa", "Werewolf", "Banshee", "Draugr", "Vampire",
    "Goblin", "Ghoul", "Wraith", "Sprite", "Kappa",
    "Fairy", "Leprechaun", "Kelpie", "Pixie", "Gnome",
    "Griffin", "Manticore", "Phoenix", "Dragon", "Minotaur",
    "Qilin", "Ammit", "Nue", "Skinwalker", "Chupacabra",
    "Weretiger", "Wyvern", "Roc", "Harpy", "Pegasus",
    "Hippogriff", "Fenrir", "Jaguar", "Satori", "Direwolf",
    "Bear", "Wolf", "Mantis", "Spider", "Rat",
    "Kraken", "Colossus", "Balrog", "Leviathan", "Tarrasque",
    "Titan", "Nephilim", "Behemoth", "Hydra", "Juggernaut",
    "Oni", "Jotunn", "Ettin", "Cyclops", "Giant",
    "Nemean Lion", "Berserker", "Yeti", "Golem", "Ent",
    "Troll", "Bigfoot", "Ogre", "Orc", "Skeleton",
)
BEAST_IDS: Final[tuple[int, ...]] = tuple(range(1, len(BEAST_NAMES) + 1))
OBSTACLE_IDS: Final[tuple[int, ...]] = tuple(range(1, 76))


def _banded_type(entity_id: int) -> str:
    """Return the element for an id in the 1-25 / 26-50 / 51-75 bands."""

    if entity_id < 26:
        return "Magic"
    if entity_id < 51:
        return "Blade"
    return "Bludgeon"


def _banded_tier(entity_id: int) -> int:
    """Return the tier for an id; each band of 25 holds five ids per tier."""

    return ((entity_id - 1) % 25) // 5 + 1


BEAST_ATTACK_TYPES: Final[dict[int, str]] = {bid: _banded_type(bid) for bid in BEAST_IDS}
BEAST_TIERS: Final[dict[int, int]] = {bid: _banded_tier(bid) for bid in BEAST_IDS}
OBSTACLE_TYPES: Final[dict[int, str]] = {oid: _banded_type(oid) for oid in OBSTACLE_IDS}
OBSTACLE_TIERS: Final[dict[int, int]] = {oid: _banded_tier(oid) for oid in OBSTACLE_IDS}

# ---- Exploration ------------------------------------------------------------

ENCOUNTER_BASE_MIX: Final[dict[str, float]] = {
    "beast": 100 / 3,
    "obstacle": 100 / 3,
    "discovery": 100 - 2 * (100 / 3),
}
# (minimum adventurer level, level offset), checked highest first
ENCOUNTER_LEVEL_OFFSETS: Final[tuple[tuple[int, int], ...]] = (
    (50, 80),
    (40, 40),
    (30, 20),
    (20, 10),
)
DAMAGE_BUCKET_COUNT: Final[int] = 10
DAMAGE_OVERFLOW_THRESHOLD: Final[int] = 1024
# (beast, level, affix scenario, slot) evaluations before the sweep is sampled instead
EXPLORATION_SWEEP_LIMIT: Final[int] = 200_000
DISCOVERY_GOLD_CHANCE: Final[int] = 45
DISCOVERY_HEALTH_CHANCE: Final[int] = 45
DISCOVERY_LOOT_CHANCE: Final[int] = 10

Distribution = dict[int, float]
CountMap = dict[int, int]
