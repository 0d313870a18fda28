"""
Tests for distribution summaries, weighted medians and damage histograms.
"""

import pytest

from outcome_core.models import WeightedSample
from outcome_core.statistics import (
    build_damage_distribution,
    distribution_stats,
    lethal_chance,
    to_percent,
    weighted_median,
)


class TestDistributionStats:

    def test_empty_mapping_is_all_zero(self):
        stats = distribution_stats({})
        assert (stats.min, stats.max, stats.mode) == (0, 0, 0)

    def test_min_max_mode(self):
        stats = distribution_stats({3: 0.2, 7: 0.5, 12: 0.3})
        assert (stats.min, stats.max, stats.mode) == (3, 12, 7)

    def test_mode_tie_prefers_smaller_value(self):
        assert distribution_stats({9: 0.5, 4: 0.5}).mode == 4
        assert distribution_stats({4: 0.5, 9: 0.5}).mode == 4

    def test_negligible_weights_ignored(self):
        stats = distribution_stats({1: 1e-15, 5: 1.0, 100: 0.0})
        assert (stats.min, stats.max, stats.mode) == (5, 5, 5)

    def test_counts_work_as_weights(self):
        assert distribution_stats({2: 10, 3: 40, 4: 40}).mode == 3


class TestPercentages:

    def test_to_percent_rounds_to_one_decimal(self):
        assert to_percent(1, 3) == 33.3
        assert to_percent(2, 3, digits=2) == 66.67

    def test_to_percent_guards_zero_total(self):
        assert to_percent(5, 0) == 0.0


class TestWeightedMedian:

    def test_empty(self):
        assert weighted_median([]) == 0

    def test_smallest_value_reaching_half(self):
        samples = [WeightedSample(9, 0.3), WeightedSample(1, 0.2), WeightedSample(5, 0.5)]
        assert weighted_median(samples) == 5

    def test_exact_half_stops_at_lower_value(self):
        samples = [WeightedSample(2, 0.5), WeightedSample(8, 0.5)]
        assert weighted_median(samples) == 2


class TestLethalChance:

    def test_weight_at_or_above_health(self):
        samples = [WeightedSample(10, 0.25), WeightedSample(50, 0.75)]
        assert lethal_chance(samples, 50) == 75.0
        assert lethal_chance(samples, 51) == 0.0

    def test_non_positive_health(self):
        assert lethal_chance([WeightedSample(10, 1.0)], 0) == 0.0

    def test_unnormalised_weights(self):
        samples = [WeightedSample(1, 3.0), WeightedSample(100, 1.0)]
        assert lethal_chance(samples, 100) == 25.0


class TestDamageDistribution:

    def test_empty_or_weightless(self):
        assert build_damage_distribution([]) == []
        assert build_damage_distribution([WeightedSample(5, 0.0)]) == []

    def test_single_value_bucket(self):
        buckets = build_damage_distribution([WeightedSample(7, 2.0)])
        assert len(buckets) == 1
        assert buckets[0].label == "7"
        assert buckets[0].percentage == 100.0

    def test_equal_width_buckets(self):
        samples = [WeightedSample(value, 1.0) for value in range(20)]
        buckets = build_damage_distribution(samples)
        assert len(buckets) == 10
        assert [bucket.label for bucket in buckets[:2]] == ["0-1", "2-3"]
        assert all(bucket.percentage == 10.0 for bucket in buckets)

    def test_overflow_bucket(self):
        samples = [WeightedSample(2000, 0.5), WeightedSample(3000, 0.25), WeightedSample(10, 0.25)]
        buckets = build_damage_distribution(samples)
        assert [bucket.label for bucket in buckets] == ["10", ">1024"]
        assert buckets[1].percentage == 75.0
        assert (buckets[1].start, buckets[1].end) == (2000, 3000)

    def test_at_most_ten_buckets(self):
        samples = [WeightedSample(value, 1.0) for value in range(0, 1500, 7)]
        buckets = build_damage_distribution(samples)
        assert len(buckets) <= 10
        assert sum(bucket.percentage for bucket in buckets) == pytest.approx(100.0, abs=0.1)

    def test_narrow_span_pads_with_empty_buckets(self):
        samples = [WeightedSample(value, 1.0) for value in range(5)]
        buckets = build_damage_distribution(samples)
        assert len(buckets) == 10
        assert [bucket.label for bucket in buckets[:5]] == ["0", "1", "2", "3", "4"]
        assert all(bucket.percentage == 20.0 for bucket in buckets[:5])
        for bucket in buckets[5:]:
            assert (bucket.start, bucket.end, bucket.label, bucket.percentage) == (4, 4, "4", 0.0)
