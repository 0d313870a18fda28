"""Fight outcome and exploration risk engine."""

from .api import compute_exploration_insights, simulate, simulate_async
from .errors import DeterministicOverflowError, OutcomeEngineError, SimulationCapacityError
from .gear import GearScore, GearSuggestion, suggest_best_gear
from .loaders import load_adventurer, load_beast, load_game_settings
from .models import (
    Adventurer,
    ApproximateResult,
    Beast,
    Equipment,
    ExactResult,
    GameSettings,
    Item,
    SimulationResult,
    Stats,
)
from .settings import get_default_sample_count, set_default_sample_count

__all__ = [
    "Adventurer",
    "ApproximateResult",
    "Beast",
    "DeterministicOverflowError",
    "Equipment",
    "ExactResult",
    "GameSettings",
    "GearScore",
    "GearSuggestion",
    "Item",
    "OutcomeEngineError",
    "SimulationCapacityError",
    "SimulationResult",
    "Stats",
    "compute_exploration_insights",
    "get_default_sample_count",
    "load_adventurer",
    "load_beast",
    "load_game_settings",
    "set_default_sample_count",
    "simulate",
    "simulate_async",
    "suggest_best_gear",
]
