"""Monte Carlo sampler used when an exact solve is too costly."""

from __future__ import annotations

import random
from bisect import bisect_left
from collections import Counter
from itertools import accumulate
from typing import NamedTuple, Optional

from .data import MAX_ROUNDS_PER_FIGHT
from .models import ApproximateResult, DamageOption, SimulationContext
from .settings import get_default_sample_count
from .statistics import distribution_stats, to_percent


class StrikeTable:
    """Cumulative-probability lookup for sampling one strike distribution."""

    def __init__(self, options: tuple[DamageOption, ...]) -> None:
        self.damages = tuple(option.damage for option in options)
        cumulative = list(accumulate(option.probability for option in options))
        if cumulative:
            cumulative[-1] = 1.0
        self.cumulative = tuple(cumulative)

    def sample(self, rng: random.Random) -> int:
        if len(self.damages) == 1:
            return self.damages[0]
        index = bisect_left(self.cumulative, rng.random())
        if index >= len(self.damages):
            index = len(self.damages) - 1
        return self.damages[index]


class TrialOutcome(NamedTuple):
    won: bool
    one_turn_kill: bool
    damage_dealt: int
    damage_taken: int
    rounds: int


def simulate_once(
    hero: StrikeTable,
    beast: StrikeTable,
    hero_hp: int,
    beast_hp: int,
    rng: random.Random,
    initial_beast_strike: bool = False,
    max_rounds: int = MAX_ROUNDS_PER_FIGHT,
) -> TrialOutcome:
    """Play out one fight with sampled strikes.

    Parameters
    ----------
    hero, beast:
        Strike tables for each side.
    hero_hp, beast_hp:
        Starting health pools.
    rng:
        Random number generator owned by the caller.
    initial_beast_strike:
        When True the beast strikes once before the first round.
    """

    rounds = 0
    dealt = 0
    taken = 0
    one_turn_kill = False

    if initial_beast_strike:
        damage = beast.sample(rng)
        taken += damage
        hero_hp -= damage
        if hero_hp <= 0:
            one_turn_kill = True

    while hero_hp > 0 and beast_hp > 0 and rounds < max_rounds:
        damage = hero.sample(rng)
        dealt += damage
        rounds += 1
        beast_hp -= damage
        if beast_hp <= 0:
            break

        damage = beast.sample(rng)
        taken += damage
        hero_hp -= damage
        if hero_hp <= 0:
            if rounds == 1:
                one_turn_kill = True
            break

    won = hero_hp > 0 and beast_hp <= 0
    return TrialOutcome(won, one_turn_kill and not won, dealt, taken, rounds)


def simulate_many(
    context: SimulationContext,
    samples: Optional[int] = None,
    seed: Optional[int] = None,
) -> ApproximateResult:
    """Estimate the fight outcome from repeated sampled trials.

    A trial that reaches the round cap counts as a loss. ``seed`` makes the
    run reproducible; ``None`` draws fresh entropy.
    """

    runs = max(1, int(samples if samples is not None else get_default_sample_count()))
    rng = random.Random(seed)
    hero = StrikeTable(context.hero_options)
    beast = StrikeTable(context.beast_options)

    wins = 0
    otk_losses = 0
    dealt_counts: Counter[int] = Counter()
    taken_counts: Counter[int] = Counter()
    rounds_counts: Counter[int] = Counter()

    for _ in range(runs):
        trial = simulate_once(
            hero,
            beast,
            context.initial_hero_hp,
            context.effective_beast_hp,
            rng,
            initial_beast_strike=context.initial_beast_strike,
        )
        if trial.won:
            wins += 1
        elif trial.one_turn_kill:
            otk_losses += 1
        dealt_counts[trial.damage_dealt] += 1
        taken_counts[trial.damage_taken] += 1
        rounds_counts[trial.rounds] += 1

    dealt = distribution_stats(dealt_counts)
    taken = distribution_stats(taken_counts)
    rounds = distribution_stats(rounds_counts)

    return ApproximateResult(
        has_outcome=True,
        win_rate=to_percent(wins, runs),
        otk_rate=to_percent(otk_losses, runs),
        mode_damage_dealt=dealt.mode,
        mode_damage_taken=taken.mode,
        mode_rounds=rounds.mode,
        min_damage_dealt=dealt.min,
        max_damage_dealt=dealt.max,
        min_damage_taken=taken.min,
        max_damage_taken=taken.max,
        min_rounds=rounds.min,
        max_rounds=rounds.max,
        sample_count=runs,
    )
