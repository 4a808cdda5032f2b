"""Tests for descriptive statistics and benchmark groups."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from fitdiag.analytics.benchmark import compute_benchmarks, summarize
from fitdiag.analytics.stats import linear_regression, mean, median, pearson, population_std
from fitdiag.core.types import MetricKey, RawMeasurement

MeasurementFactory = Callable[..., RawMeasurement]


class TestStats:
    """Tests for the statistics helpers."""

    def test_empty_inputs_are_zero(self) -> None:
        assert mean([]) == 0.0
        assert median([]) == 0.0
        assert population_std([]) == 0.0

    def test_even_median_averages_middle_pair(self) -> None:
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5

    def test_population_std_divides_by_n(self) -> None:
        assert population_std([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == 2.0

    def test_pearson_perfect_negative(self) -> None:
        assert pearson([1, 2, 3, 4], [4, 3, 2, 1]) == -1.0

    def test_pearson_degenerate_inputs(self) -> None:
        """Mismatched, empty or constant inputs should give 0."""
        assert pearson([1, 2, 3], [1, 2]) == 0.0
        assert pearson([], []) == 0.0
        assert pearson([1, 1, 1], [1, 2, 3]) == 0.0

    def test_linear_regression(self) -> None:
        slope, intercept = linear_regression([120.0, 130.0, 140.0], [140.0, 160.0, 180.0])

        assert slope == pytest.approx(2.0)
        assert intercept == pytest.approx(-100.0)

    def test_linear_regression_constant_x(self) -> None:
        """Zero variance in x should give a flat line through the mean."""
        assert linear_regression([1.0, 1.0], [2.0, 4.0]) == (0.0, 3.0)


class TestComputeBenchmarks:
    """Tests for grade x gender benchmarks."""

    def test_counts_cover_known_groups_only(
        self, measurement_factory: MeasurementFactory
    ) -> None:
        """Records with unknown grade or gender should belong to no group."""
        records = [
            measurement_factory(grade="4", gender="male"),
            measurement_factory(grade="4", gender="male"),
            measurement_factory(grade="1", gender="female"),
            measurement_factory(grade="7", gender="male"),
            measurement_factory(grade="k5", gender="other"),
        ]
        report = compute_benchmarks(records)

        assert set(report.groups) == {"4_male", "1_female"}
        assert report.grouped_count == 3
        assert report.total_measurements == 5

    def test_group_stats(self, measurement_factory: MeasurementFactory) -> None:
        records = [measurement_factory(grip=g) for g in (10.0, 20.0, 30.0)]
        stats = compute_benchmarks(records).groups["4_male"].stats[MetricKey.GRIP]

        assert stats.mean == 20.0
        assert stats.median == 20.0
        # sqrt(200 / 3)
        assert stats.std_dev == 8.16
        assert stats.min == 10.0
        assert stats.max == 30.0

    def test_metric_without_values_is_omitted(
        self, measurement_factory: MeasurementFactory
    ) -> None:
        report = compute_benchmarks([measurement_factory()])

        assert MetricKey.SQUAT not in report.groups["4_male"].stats
        assert MetricKey.JUMP in report.groups["4_male"].stats

    def test_empty_input(self) -> None:
        report = compute_benchmarks([])

        assert report.groups == {}
        assert report.grouped_count == 0

    def test_labels_match_case_insensitively(self) -> None:
        records = [
            RawMeasurement(grade="K5", gender="Female", jump=90.0),
            RawMeasurement.from_dict({"grade": " K5 ", "gender": "FEMALE", "jump": 100.0}),
        ]
        report = compute_benchmarks(records)

        assert set(report.groups) == {"k5_female"}
        assert report.groups["k5_female"].count == 2
        assert records[1].grade == "k5"
        assert records[1].gender == "female"

    def test_grip_uses_side_average(self) -> None:
        """Grip stats should use the mean of the recorded sides."""
        record = RawMeasurement(grade="2", gender="female", grip_right=12.0, grip_left=14.0)
        stats = compute_benchmarks([record]).groups["2_female"].stats[MetricKey.GRIP]

        assert stats.mean == 13.0

    def test_summarize_empty(self) -> None:
        assert summarize([]) is None
