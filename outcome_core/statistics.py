"""Summary statistics and histogram bucketing for weighted value distributions."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np

from .data import DAMAGE_BUCKET_COUNT, DAMAGE_OVERFLOW_THRESHOLD, PROBABILITY_EPSILON
from .models import DamageBucket, DistributionStats, WeightedSample


def distribution_stats(distribution: Mapping[int, float]) -> DistributionStats:
    """Return min, max and mode of a value -> weight mapping in a single pass.

    Weights may be probabilities or counts. Values whose weight does not
    exceed ``PROBABILITY_EPSILON`` are ignored; mode ties prefer the smaller
    value. An empty mapping yields zeros.
    """

    min_value = math.inf
    max_value = 0
    mode_value = 0
    highest = 0.0

    for value, weight in distribution.items():
        if weight <= PROBABILITY_EPSILON:
            continue
        if value < min_value:
            min_value = value
        if value > max_value:
            max_value = value
        if weight > highest + PROBABILITY_EPSILON or (
            abs(weight - highest) <= PROBABILITY_EPSILON and value < mode_value
        ):
            highest = weight
            mode_value = value

    return DistributionStats(
        min=round(min_value) if math.isfinite(min_value) else 0,
        max=round(max_value),
        mode=round(mode_value) if highest > PROBABILITY_EPSILON else 0,
    )


def to_percent(part: float, whole: float, digits: int = 1) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, digits)


def total_weight(samples: Sequence[WeightedSample]) -> float:
    return sum(sample.weight for sample in samples)


def weighted_median(samples: Sequence[WeightedSample]) -> int:
    """Return the smallest value at which cumulative weight reaches half the total."""

    if not samples:
        return 0
    values = np.fromiter((s.value for s in samples), dtype=np.int64, count=len(samples))
    weights = np.fromiter((s.weight for s in samples), dtype=np.float64, count=len(samples))
    order = np.argsort(values, kind="stable")
    cumulative = np.cumsum(weights[order])
    index = int(np.searchsorted(cumulative, cumulative[-1] / 2, side="left"))
    index = min(index, len(order) - 1)
    return int(values[order[index]])


def lethal_chance(samples: Sequence[WeightedSample], health: int) -> float:
    """Return the percentage of weight at or above ``health`` (two decimals)."""

    if health <= 0:
        return 0.0
    weight = total_weight(samples)
    if weight <= 0:
        return 0.0
    lethal = sum(sample.weight for sample in samples if sample.value >= health)
    return to_percent(lethal, weight, digits=2)


def build_damage_distribution(samples: Sequence[WeightedSample]) -> list[DamageBucket]:
    """Bucket weighted damage samples into at most ten histogram bars.

    Values above 1024 collapse into a single ``">1024"`` bucket that uses one
    of the ten slots; the remaining range is split into equal-width buckets.
    A range wider than one value always fills every remaining slot, so a span
    narrower than the slot count ends in empty buckets at ``start == end == high``.
    """

    totals: dict[int, float] = {}
    weight_sum = 0.0
    for value, weight in samples:
        if weight <= 0:
            continue
        damage = max(0, round(value))
        totals[damage] = totals.get(damage, 0.0) + weight
        weight_sum += weight

    if weight_sum == 0 or not totals:
        return []

    damage_values = sorted(totals)
    overflow_values = [value for value in damage_values if value > DAMAGE_OVERFLOW_THRESHOLD]
    base_values = [value for value in damage_values if value <= DAMAGE_OVERFLOW_THRESHOLD]

    buckets: list[DamageBucket] = []
    remaining = DAMAGE_BUCKET_COUNT

    if overflow_values:
        overflow_weight = sum(totals[value] for value in overflow_values)
        buckets.append(
            DamageBucket(
                start=overflow_values[0],
                end=overflow_values[-1],
                percentage=to_percent(overflow_weight, weight_sum, digits=2),
                label=f">{DAMAGE_OVERFLOW_THRESHOLD}",
            )
        )
        remaining -= 1

    if base_values and remaining > 0:
        low, high = base_values[0], base_values[-1]
        if low == high:
            buckets.append(
                DamageBucket(low, high, to_percent(totals[low], weight_sum, digits=2), f"{low}")
            )
        else:
            bucket_size = max(1, math.ceil((high - low + 1) / remaining))
            bucket_weights = [0.0] * remaining
            for damage in base_values:
                index = min(remaining - 1, (damage - low) // bucket_size)
                bucket_weights[index] += totals[damage]
            for index, bucket_weight in enumerate(bucket_weights):
                start = min(high, low + index * bucket_size)
                end = min(high, start + bucket_size - 1)
                buckets.append(
                    DamageBucket(
                        start=start,
                        end=end,
                        percentage=to_percent(bucket_weight, weight_sum, digits=2),
                        label=f"{start}" if start == end else f"{start}-{end}",
                    )
                )

    buckets.sort(key=lambda bucket: bucket.start)
    return buckets
