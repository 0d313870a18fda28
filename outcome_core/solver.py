"""Exact state-space solver for a single adventurer-versus-beast fight."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .data import (
    MAX_DETERMINISTIC_STATE_VISITS,
    MAX_ROUNDS_PER_FIGHT,
    PROBABILITY_EPSILON,
    Distribution,
)
from .damage import add_probability
from .errors import DeterministicOverflowError
from .models import DamageOption, ExactResult, SimulationContext, SimulationResult, StateOutcome, NO_OUTCOME
from .statistics import distribution_stats, to_percent

logger = logging.getLogger(__name__)

StateKey = tuple[int, int, int]


def _combine(target: Distribution, source: Distribution, offset: int, weight: float) -> None:
    """Fold ``source`` into ``target`` shifted by ``offset`` and scaled by ``weight``."""

    if weight <= PROBABILITY_EPSILON:
        return
    for value, probability in source.items():
        add_probability(target, value + offset, probability * weight)


def lethal_strike_chance(options: Sequence[DamageOption], hero_hp: int) -> float:
    """Return the chance a single strike from ``options`` deals at least ``hero_hp``."""

    return sum(
        probability
        for damage, probability in options
        if probability > PROBABILITY_EPSILON and damage >= hero_hp
    )


class DeterministicSolver:
    """Memoised solver over ``(hero_hp, beast_hp, rounds)`` states.

    States are filled with an explicit work stack rather than recursion, so
    solve depth is bounded by the state budget and not by the interpreter
    stack. Once the memo table reaches ``max_states`` entries a
    :class:`DeterministicOverflowError` is raised so callers can fall back to
    sampling.
    """

    def __init__(
        self,
        context: SimulationContext,
        max_states: int = MAX_DETERMINISTIC_STATE_VISITS,
        max_rounds: int = MAX_ROUNDS_PER_FIGHT,
    ) -> None:
        self.context = context
        self.max_states = max_states
        self.max_rounds = max_rounds
        self._hero = tuple(o for o in context.hero_options if o.probability > PROBABILITY_EPSILON)
        self._beast = tuple(o for o in context.beast_options if o.probability > PROBABILITY_EPSILON)
        self._memo: dict[StateKey, StateOutcome] = {}
        self._expanded: set[StateKey] = set()
        self._visited = 0

    @property
    def visited_states(self) -> int:
        return self._visited

    @property
    def memo_size(self) -> int:
        return len(self._memo)

    def _children(self, key: StateKey) -> list[StateKey]:
        hero_hp, beast_hp, rounds = key
        next_round = rounds + 1
        if next_round >= self.max_rounds:
            return []
        children: list[StateKey] = []
        for hero_damage, hero_probability in self._hero:
            remaining_beast = beast_hp - hero_damage
            if remaining_beast <= 0:
                continue
            for beast_damage, beast_probability in self._beast:
                if hero_probability * beast_probability <= PROBABILITY_EPSILON:
                    continue
                remaining_hero = hero_hp - beast_damage
                if remaining_hero > 0:
                    children.append((remaining_hero, remaining_beast, next_round))
        return children

    def _outcome(self, key: StateKey) -> StateOutcome:
        hero_hp, beast_hp, rounds = key
        next_round = rounds + 1
        win = 0.0
        lethal = 0.0
        dealt: Distribution = {}
        taken: Distribution = {}
        rounds_dist: Distribution = {}
        memo = self._memo

        for hero_damage, hero_probability in self._hero:
            remaining_beast = beast_hp - hero_damage
            if remaining_beast <= 0:
                win += hero_probability
                add_probability(dealt, hero_damage, hero_probability)
                add_probability(taken, 0, hero_probability)
                add_probability(rounds_dist, next_round, hero_probability)
                continue

            for beast_damage, beast_probability in self._beast:
                branch = hero_probability * beast_probability
                if branch <= PROBABILITY_EPSILON:
                    continue
                remaining_hero = hero_hp - beast_damage
                if remaining_hero <= 0 or next_round >= self.max_rounds:
                    lethal += branch
                    add_probability(dealt, hero_damage, branch)
                    add_probability(taken, beast_damage, branch)
                    add_probability(rounds_dist, next_round, branch)
                    continue

                child = memo[(remaining_hero, remaining_beast, next_round)]
                win += branch * child.win_probability
                lethal += branch * child.lethal_probability
                _combine(dealt, child.damage_dealt, hero_damage, branch)
                _combine(taken, child.damage_taken, beast_damage, branch)
                _combine(rounds_dist, child.rounds, 0, branch)

        return StateOutcome(win, lethal, dealt, taken, rounds_dist)

    def solve_state(self, hero_hp: int, beast_hp: int, rounds: int = 0) -> StateOutcome:
        """Return the outcome distribution conditioned on reaching the given state."""

        if hero_hp <= 0 or rounds >= self.max_rounds:
            return StateOutcome(0.0, 1.0, {0: 1.0}, {0: 1.0}, {0: 1.0})
        if beast_hp <= 0:
            return StateOutcome(1.0, 0.0, {0: 1.0}, {0: 1.0}, {0: 1.0})

        memo = self._memo
        stack: list[StateKey] = [(hero_hp, beast_hp, rounds)]
        while stack:
            key = stack[-1]
            if key in memo:
                stack.pop()
                continue

            if key not in self._expanded:
                if len(memo) >= self.max_states:
                    raise DeterministicOverflowError(
                        f"Combat simulation memo exceeded {self.max_states} states."
                    )
                self._visited += 1
                if self._visited > self.max_states:
                    raise DeterministicOverflowError(
                        f"Combat simulation visited more than {self.max_states} states."
                    )
                self._expanded.add(key)
                pending = [child for child in self._children(key) if child not in memo]
                if pending:
                    stack.extend(pending)
                    continue

            stack.pop()
            memo[key] = self._outcome(key)

        return memo[(hero_hp, beast_hp, rounds)]

    def _initial_strike_outcome(self) -> StateOutcome:
        """Outcome when the beast lands a free strike before round one."""

        context = self.context
        win = 0.0
        lethal = 0.0
        dealt: Distribution = {}
        taken: Distribution = {}
        rounds_dist: Distribution = {}

        for initial_damage, initial_probability in self._beast:
            remaining_hero = context.initial_hero_hp - initial_damage
            if remaining_hero <= 0:
                lethal += initial_probability
                add_probability(dealt, 0, initial_probability)
                add_probability(taken, initial_damage, initial_probability)
                add_probability(rounds_dist, 0, initial_probability)
                continue

            following = self.solve_state(remaining_hero, context.effective_beast_hp, 0)
            win += initial_probability * following.win_probability
            lethal += initial_probability * following.lethal_probability
            _combine(dealt, following.damage_dealt, 0, initial_probability)
            _combine(taken, following.damage_taken, initial_damage, initial_probability)
            _combine(rounds_dist, following.rounds, 0, initial_probability)

        return StateOutcome(win, lethal, dealt, taken, rounds_dist)

    def root_outcome(self) -> StateOutcome:
        context = self.context
        if context.initial_beast_strike:
            return self._initial_strike_outcome()
        return self.solve_state(context.initial_hero_hp, context.effective_beast_hp, 0)

    def otk_probability(self) -> float:
        """Return the first-exchange mutual-lethality probability.

        Without an ambush this is the chance the first hero strike leaves the
        beast standing and the reply alone kills the adventurer at full
        health. With an ambush it adds the chance the free strike kills
        outright, and measures the reply against the health left after it.
        """

        context = self.context
        beast_hp = context.effective_beast_hp

        if not context.initial_beast_strike:
            lethal = lethal_strike_chance(self._beast, context.initial_hero_hp)
            if lethal <= PROBABILITY_EPSILON:
                return 0.0
            return sum(
                hero_probability * lethal
                for hero_damage, hero_probability in self._hero
                if beast_hp - hero_damage > 0
            )

        probability = 0.0
        for initial_damage, initial_probability in self._beast:
            remaining_hero = context.initial_hero_hp - initial_damage
            if remaining_hero <= 0:
                probability += initial_probability
                continue
            lethal = lethal_strike_chance(self._beast, remaining_hero)
            if lethal <= PROBABILITY_EPSILON:
                continue
            for hero_damage, hero_probability in self._hero:
                if beast_hp - hero_damage > 0:
                    probability += initial_probability * hero_probability * lethal
        return probability

    def result(self) -> SimulationResult:
        """Solve the fight and summarise it as an :class:`ExactResult`."""

        root = self.root_outcome()
        total = root.win_probability + root.lethal_probability
        if total <= PROBABILITY_EPSILON:
            return NO_OUTCOME
        if abs(total - 1.0) > 1e-9:
            logger.debug("Exact solve retained %.12f of the probability mass.", total)

        dealt = distribution_stats(root.damage_dealt)
        taken = distribution_stats(root.damage_taken)
        rounds = distribution_stats(root.rounds)

        return ExactResult(
            has_outcome=True,
            win_rate=to_percent(root.win_probability, total),
            otk_rate=to_percent(self.otk_probability(), total),
            mode_damage_dealt=dealt.mode,
            mode_damage_taken=taken.mode,
            mode_rounds=rounds.mode,
            min_damage_dealt=dealt.min,
            max_damage_dealt=dealt.max,
            min_damage_taken=taken.min,
            max_damage_taken=taken.max,
            min_rounds=rounds.min,
            max_rounds=rounds.max,
        )


def solve_exact(context: SimulationContext) -> SimulationResult:
    """Run the exact solver on ``context``; may raise :class:`DeterministicOverflowError`."""

    return DeterministicSolver(context).result()
