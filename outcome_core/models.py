"""Dataclasses shared across the damage, solver, simulation and exploration modules."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import NamedTuple, Optional

from .data import (
    ARMOR_TYPE_FOR_ATTACK,
    BEAST_ATTACK_TYPES,
    BEAST_NAMES,
    BEAST_SPECIAL_NAME_LEVEL_UNLOCK,
    STATS_MODE_DODGE,
    Distribution,
)


def level_from_xp(xp: int) -> int:
    """Return the level for an experience total (level 1 at zero xp)."""

    if xp <= 0:
        return 1
    return math.isqrt(xp)


# ---- Inputs supplied by the game client -------------------------------------


@dataclass(frozen=True)
class Item:
    """An equipped item; id 0 marks an empty slot."""

    id: int = 0
    xp: int = 0

    @property
    def level(self) -> int:
        return level_from_xp(self.xp)

    @property
    def is_empty(self) -> bool:
        return self.id == 0


EMPTY_ITEM = Item()


@dataclass(frozen=True)
class Equipment:
    weapon: Item = EMPTY_ITEM
    chest: Item = EMPTY_ITEM
    head: Item = EMPTY_ITEM
    waist: Item = EMPTY_ITEM
    foot: Item = EMPTY_ITEM
    hand: Item = EMPTY_ITEM
    neck: Item = EMPTY_ITEM
    ring: Item = EMPTY_ITEM

    def slot(self, name: str) -> Item:
        """Return the item in the named slot, or an empty item."""

        item = getattr(self, name, None)
        return item if isinstance(item, Item) else EMPTY_ITEM


@dataclass(frozen=True)
class Stats:
    strength: int = 0
    dexterity: int = 0
    vitality: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0
    luck: int = 0


@dataclass(frozen=True)
class Adventurer:
    """Adventurer snapshot consumed read-only by the engine.

    ``beast_health`` carries the health of the beast currently being fought;
    zero means the fight has not started and the beast's own health applies.
    """

    health: int
    xp: int = 0
    stats: Stats = field(default_factory=Stats)
    equipment: Equipment = field(default_factory=Equipment)
    item_specials_seed: int = 0
    beast_health: int = 0

    @property
    def level(self) -> int:
        return level_from_xp(self.xp)


@dataclass(frozen=True)
class Beast:
    """Beast snapshot; special names only apply once the beast is high enough level."""

    id: int
    level: int
    tier: int
    health: int
    special_prefix: Optional[str] = None
    special_suffix: Optional[str] = None

    @property
    def name(self) -> str:
        if 1 <= self.id <= len(BEAST_NAMES):
            return BEAST_NAMES[self.id - 1]
        return "Beast"

    @property
    def attack_type(self) -> str:
        return BEAST_ATTACK_TYPES.get(self.id, "Magic")

    @property
    def armor_type(self) -> str:
        return ARMOR_TYPE_FOR_ATTACK[self.attack_type]

    @property
    def specials_unlocked(self) -> bool:
        return self.level >= BEAST_SPECIAL_NAME_LEVEL_UNLOCK


@dataclass(frozen=True)
class GameSettings:
    stats_mode: str = STATS_MODE_DODGE
    base_damage_reduction: float = 0.0


# ---- Single fight -----------------------------------------------------------


class DamageOption(NamedTuple):
    """One atomic outcome of a single strike."""

    damage: int
    probability: float


class WeightedSample(NamedTuple):
    value: int
    weight: float


@dataclass(frozen=True)
class SimulationContext:
    """Strike distributions and starting health pools for one fight."""

    hero_options: tuple[DamageOption, ...]
    beast_options: tuple[DamageOption, ...]
    initial_hero_hp: int
    effective_beast_hp: int
    initial_beast_strike: bool
    min_hero_damage: int
    min_beast_damage: int


@dataclass
class StateOutcome:
    """Outcome mass conditioned on reaching a ``(hero_hp, beast_hp, rounds)`` state."""

    win_probability: float
    lethal_probability: float
    damage_dealt: Distribution
    damage_taken: Distribution
    rounds: Distribution


@dataclass(frozen=True)
class ComplexityEstimate:
    hero_states: int
    beast_states: int
    branching_factor: int
    estimated_transitions: int
    weighted_complexity: int


@dataclass(frozen=True)
class DistributionStats:
    min: int
    max: int
    mode: int


@dataclass(frozen=True)
class SimulationResult:
    """Summary numbers consumed by the combat UI.

    The plain class doubles as the "no outcome" sentinel; solved fights come
    back as :class:`ExactResult` or :class:`ApproximateResult`.
    """

    has_outcome: bool = False
    win_rate: float = 0.0
    otk_rate: float = 0.0
    mode_damage_dealt: int = 0
    mode_damage_taken: int = 0
    mode_rounds: int = 0
    min_damage_dealt: int = 0
    max_damage_dealt: int = 0
    min_damage_taken: int = 0
    max_damage_taken: int = 0
    min_rounds: int = 0
    max_rounds: int = 0
    computed_via: Optional[str] = None

    @property
    def is_exact(self) -> bool:
        return False

    def as_dict(self) -> dict[str, object]:
        """Return the camelCase field map used by the client."""

        return {_camel_case(key): value for key, value in asdict(self).items()}


@dataclass(frozen=True)
class ExactResult(SimulationResult):
    computed_via: Optional[str] = "deterministic"

    @property
    def is_exact(self) -> bool:
        return True


@dataclass(frozen=True)
class ApproximateResult(SimulationResult):
    computed_via: Optional[str] = "monteCarlo"
    sample_count: int = 0


NO_OUTCOME = SimulationResult()


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# ---- Exploration ------------------------------------------------------------


@dataclass(frozen=True)
class LevelRange:
    min: int
    max: int

    @property
    def count(self) -> int:
        return max(1, self.max - self.min + 1)


@dataclass(frozen=True)
class DamageBucket:
    start: int
    end: int
    percentage: float
    label: str


@dataclass
class SlotDamageSummary:
    slot: str
    slot_label: str
    armor_name: str = "None"
    has_armor: bool = False
    min_base: int = 0
    max_base: int = 0
    min_crit: int = 0
    max_crit: int = 0
    distribution: list[DamageBucket] = field(default_factory=list)
    lethal_chance: float = 0.0


@dataclass
class RiskSummary:
    """Population-level damage risk for one encounter category."""

    crit_chance: float = 0.0
    tier_distribution: dict[str, float] = field(default_factory=dict)
    type_distribution: dict[str, float] = field(default_factory=dict)
    slot_damages: list[SlotDamageSummary] = field(default_factory=list)
    damage_distribution: list[DamageBucket] = field(default_factory=list)
    median_damage: int = 0
    overall_lethal_chance: float = 0.0


@dataclass
class BeastRiskSummary(RiskSummary):
    ambush_chance: float = 0.0


@dataclass
class ObstacleRiskSummary(RiskSummary):
    dodge_chance: float = 0.0


@dataclass(frozen=True)
class ValueRange:
    min: int
    max: int


@dataclass(frozen=True)
class DiscoverySummary:
    gold_chance: float = 0.0
    health_chance: float = 0.0
    loot_chance: float = 0.0
    gold_range: ValueRange = ValueRange(0, 0)
    health_range: ValueRange = ValueRange(0, 0)


@dataclass(frozen=True)
class EncounterDistribution:
    base_mix: dict[str, float]
    beast_by_tier: dict[str, float]
    beast_by_type: dict[str, float]
    obstacle_by_tier: dict[str, float]
    obstacle_by_type: dict[str, float]


@dataclass
class ExplorationInsights:
    ready: bool
    encounter_distribution: EncounterDistribution
    beasts: BeastRiskSummary
    obstacles: ObstacleRiskSummary
    discoveries: DiscoverySummary
