"""High-level entry points used by the game client."""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Optional

from .complexity import Strategy, choose_strategy, estimate_complexity
from .damage import build_simulation_context
from .errors import is_capacity_failure
from .executor import InlineExecutor
from .exploration import exploration_insights
from .models import NO_OUTCOME, Adventurer, Beast, ExplorationInsights, GameSettings, SimulationResult
from .simulation import simulate_many
from .solver import solve_exact

logger = logging.getLogger(__name__)


def simulate(
    adventurer: Optional[Adventurer],
    beast: Optional[Beast],
    initial_beast_strike: bool = False,
    sample_count: Optional[int] = None,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Predict the outcome of a fight between ``adventurer`` and ``beast``.

    Parameters
    ----------
    adventurer, beast:
        Combatant snapshots. A missing or defeated combatant yields the
        no-outcome sentinel.
    initial_beast_strike:
        When True the beast strikes once before the adventurer acts.
    sample_count:
        Trials for the Monte Carlo fallback; defaults to the configured count.
    seed:
        Seed for the Monte Carlo fallback. ``None`` draws fresh entropy.

    Returns
    -------
    SimulationResult
        An :class:`ExactResult` when the state space is small enough to solve,
        otherwise an :class:`ApproximateResult`.
    """

    context = build_simulation_context(adventurer, beast, initial_beast_strike)
    if context is None:
        return NO_OUTCOME

    estimate = estimate_complexity(context)
    if choose_strategy(estimate) is Strategy.MONTE_CARLO:
        logger.info(
            "Skipping deterministic combat simulation (weighted complexity %d, transitions %d); "
            "using Monte Carlo fallback.",
            estimate.weighted_complexity,
            estimate.estimated_transitions,
        )
        return simulate_many(context, samples=sample_count, seed=seed)

    try:
        return solve_exact(context)
    except Exception as error:
        if not is_capacity_failure(error):
            raise
        logger.warning(
            "Deterministic combat simulation exceeded its capacity; using Monte Carlo fallback: %s",
            error,
        )
        return simulate_many(context, samples=sample_count, seed=seed)


def simulate_async(
    adventurer: Optional[Adventurer],
    beast: Optional[Beast],
    initial_beast_strike: bool = False,
    sample_count: Optional[int] = None,
    seed: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> Future[SimulationResult]:
    """Run :func:`simulate` through ``executor`` and return its future.

    Without an executor the computation runs inline. If the executor refuses
    the job (for example because it was shut down) the same computation runs
    inline instead.
    """

    target = executor if executor is not None else InlineExecutor()
    try:
        return target.submit(simulate, adventurer, beast, initial_beast_strike, sample_count, seed)
    except RuntimeError as error:
        logger.warning("Simulation executor unavailable; running inline: %s", error)
        return InlineExecutor().submit(
            simulate, adventurer, beast, initial_beast_strike, sample_count, seed
        )


def compute_exploration_insights(
    adventurer: Optional[Adventurer],
    game_settings: Optional[GameSettings],
) -> ExplorationInsights:
    """Return the risk outlook for the next explore action.

    Returns a zeroed ``ready=False`` sentinel when either input is missing.
    """

    return exploration_insights(adventurer, game_settings)
