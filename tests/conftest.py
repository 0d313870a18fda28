"""
Shared pytest fixtures for the outcome engine test suite.

Provides:
- Adventurer and beast snapshots with hand-checked damage numbers
- Strike-distribution contexts for solver and sampler tests
- Reset of the process-wide sample-count and item-name tunables
"""

import pytest

from outcome_core.damage import context_from_options
from outcome_core.models import Adventurer, Beast, Equipment, GameSettings, Item, Stats
from outcome_core.rules import reset_item_specials_rule
from outcome_core.settings import reset_sample_counts


KATANA_ID = 42
LEATHER_ARMOR_ID = 51


# =============================================================================
# Tunables
# =============================================================================


@pytest.fixture(autouse=True)
def restore_sample_counts():
    """Every test starts and ends with the built-in sample counts."""
    reset_sample_counts()
    yield
    reset_sample_counts()


@pytest.fixture(autouse=True)
def restore_item_specials_rule():
    reset_item_specials_rule()
    yield
    reset_item_specials_rule()


# =============================================================================
# Combatants
# =============================================================================


def make_adventurer(health=100, xp=100, **overrides):
    """Level 10 adventurer with a level 10 Katana and no armour."""
    equipment = overrides.pop("equipment", Equipment(weapon=Item(KATANA_ID, xp=100)))
    stats = overrides.pop("stats", Stats())
    return Adventurer(health=health, xp=xp, stats=stats, equipment=equipment, **overrides)


@pytest.fixture
def adventurer():
    return make_adventurer()


@pytest.fixture
def blade_beast():
    """Level 5 tier 1 Blade beast: takes 25 per Katana hit, deals 37 (74 crit)."""
    return Beast(id=30, level=5, tier=1, health=60)


@pytest.fixture
def settings():
    return GameSettings()


# =============================================================================
# Strike-distribution contexts
# =============================================================================


@pytest.fixture
def worked_example_context():
    """100 hp each side, hero always hits 34, beast always hits 40."""
    return context_from_options([(34, 1.0)], [(40, 1.0)], hero_hp=100, beast_hp=100)


@pytest.fixture
def mixed_context():
    """Two-outcome strikes on both sides; small enough to solve exactly."""
    return context_from_options(
        [(10, 0.5), (20, 0.5)],
        [(5, 0.5), (15, 0.5)],
        hero_hp=60,
        beast_hp=60,
    )
