"""Process-wide tunables for the sampling fallbacks."""

from __future__ import annotations

from typing import Final

from .data import DEFAULT_MONTE_CARLO_SAMPLES, EXPLORATION_MONTE_CARLO_SAMPLES

MIN_SAMPLE_COUNT: Final[int] = 1
MAX_SAMPLE_COUNT: Final[int] = 1_000_000

_DEFAULT_SAMPLE_COUNT: int = DEFAULT_MONTE_CARLO_SAMPLES
_EXPLORATION_SAMPLE_COUNT: int = EXPLORATION_MONTE_CARLO_SAMPLES


def _validated(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"Sample count must be an integer, received {count!r}.")
    if not MIN_SAMPLE_COUNT <= count <= MAX_SAMPLE_COUNT:
        raise ValueError(
            f"Sample count must be between {MIN_SAMPLE_COUNT} and {MAX_SAMPLE_COUNT}."
        )
    return count


def set_default_sample_count(count: int) -> None:
    """Update the number of Monte Carlo trials used for single fights.

    Raises
    ------
    ValueError
        If ``count`` is not an integer within the supported range.
    """

    global _DEFAULT_SAMPLE_COUNT
    _DEFAULT_SAMPLE_COUNT = _validated(count)


def get_default_sample_count() -> int:
    return _DEFAULT_SAMPLE_COUNT


def set_exploration_sample_count(count: int) -> None:
    """Update the per-slot sample count of the exploration Monte Carlo sweep."""

    global _EXPLORATION_SAMPLE_COUNT
    _EXPLORATION_SAMPLE_COUNT = _validated(count)


def get_exploration_sample_count() -> int:
    return _EXPLORATION_SAMPLE_COUNT


def reset_sample_counts() -> None:
    """Restore both sample counts to their built-in defaults."""

    global _DEFAULT_SAMPLE_COUNT, _EXPLORATION_SAMPLE_COUNT
    _DEFAULT_SAMPLE_COUNT = DEFAULT_MONTE_CARLO_SAMPLES
    _EXPLORATION_SAMPLE_COUNT = EXPLORATION_MONTE_CARLO_SAMPLES
