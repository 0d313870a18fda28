"""Cost estimate used to decide whether a fight can be solved exactly."""

from __future__ import annotations

import math
from enum import Enum

from .data import MAX_DETERMINISTIC_STATE_VISITS, MAX_ROUNDS_PER_FIGHT
from .models import ComplexityEstimate, SimulationContext


class Strategy(Enum):
    EXACT = "deterministic"
    MONTE_CARLO = "monteCarlo"


def estimate_complexity(context: SimulationContext) -> ComplexityEstimate:
    """Project the size of the exact state space for ``context``.

    Hero states count how many beast hits the adventurer can absorb (capped
    at the round limit); beast states count how many hero hits the beast can
    absorb. Both use the smallest positive strike on the opposing side.
    """

    min_beast_damage = max(1, context.min_beast_damage)
    min_hero_damage = max(1, context.min_hero_damage)

    hero_states = max(
        1, min(MAX_ROUNDS_PER_FIGHT, math.ceil(context.initial_hero_hp / min_beast_damage))
    )
    beast_states = max(1, math.ceil(context.effective_beast_hp / min_hero_damage))
    branching_factor = max(1, len(context.hero_options) * len(context.beast_options))
    estimated_transitions = hero_states * beast_states * branching_factor
    estimated_rounds = max(1, min(MAX_ROUNDS_PER_FIGHT, hero_states + beast_states))
    weighted_complexity = round(
        estimated_transitions * max(1.0, math.log2(estimated_rounds + 1))
    )

    return ComplexityEstimate(
        hero_states=hero_states,
        beast_states=beast_states,
        branching_factor=branching_factor,
        estimated_transitions=estimated_transitions,
        weighted_complexity=weighted_complexity,
    )


def should_skip_exact(
    estimate: ComplexityEstimate,
    limit: int = MAX_DETERMINISTIC_STATE_VISITS,
) -> bool:
    """Return True when the exact solver should not be attempted."""

    if estimate.weighted_complexity >= limit:
        return True
    if estimate.estimated_transitions >= limit:
        return True
    extreme_state_count = limit / 4
    return estimate.hero_states >= extreme_state_count or estimate.beast_states >= extreme_state_count


def choose_strategy(estimate: ComplexityEstimate) -> Strategy:
    return Strategy.MONTE_CARLO if should_skip_exact(estimate) else Strategy.EXACT
