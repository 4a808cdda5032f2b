"""Tests for store comparison, weakness distribution and archetype validation."""

from __future__ import annotations

import math

from fitdiag.analytics.summary import (
    analyze_weakness,
    compare_stores,
    rank_counts,
    validate_types,
)
from fitdiag.core.types import MetricKey, RawMeasurement, ResultRecord, Store


class TestCompareStores:
    """Tests for per-store means."""

    def test_means_and_differences(self) -> None:
        stores = [Store("a", "North"), Store("b", "South"), Store("c", "Empty")]
        records = [
            RawMeasurement(grade="4", gender="male", jump=100.0, store_id="a"),
            RawMeasurement(grade="4", gender="male", jump=120.0, store_id="a"),
            RawMeasurement(grade="4", gender="male", jump=140.0, store_id="b"),
        ]
        report = compare_stores(stores, records)

        assert report.overall_means[MetricKey.JUMP] == 120.0
        north, south, empty = report.stores
        assert north.measurement_count == 2
        assert north.stats[MetricKey.JUMP].mean == 110.0
        assert north.stats[MetricKey.JUMP].diff_from_overall == -10.0
        assert south.stats[MetricKey.JUMP].diff_from_overall == 20.0
        assert empty.measurement_count == 0
        assert empty.stats[MetricKey.JUMP].mean == 0.0
        assert empty.stats[MetricKey.JUMP].diff_from_overall == -120.0

    def test_population_split(
        self, stores: list[Store], population: list[RawMeasurement]
    ) -> None:
        report = compare_stores(stores, population)

        assert [s.store_name for s in report.stores] == ["North Gym", "South Gym"]
        assert sum(s.measurement_count for s in report.stores) == len(population)


class TestAnalyzeWeakness:
    """Tests for weakness and archetype distributions."""

    def test_ranking_and_percentages(self, results: list[ResultRecord]) -> None:
        report = analyze_weakness(results)

        assert report.total_samples == 3
        assert [(r.name, r.count) for r in report.weakness_ranking] == [
            ("Speed Class", 2),
            ("Power Class", 1),
        ]
        assert report.weakness_ranking[0].percentage == 66.67
        assert report.weakness_ranking[1].percentage == 33.33
        assert report.type_distribution[0].name == "Jump Elite"

    def test_ties_keep_first_seen_order(self) -> None:
        ranked = rank_counts(["b", "a", "a", "b", "c"], 5)

        assert [r.name for r in ranked] == ["b", "a", "c"]

    def test_missing_names_ignored(self) -> None:
        ranked = rank_counts(["a", None, ""], 3)

        assert [(r.name, r.count) for r in ranked] == [("a", 1)]

    def test_zero_total_percentage_is_nan(self) -> None:
        ranked = rank_counts(["a"], 0)

        assert math.isnan(ranked[0].percentage)

    def test_empty(self) -> None:
        report = analyze_weakness([])

        assert report.weakness_ranking == []
        assert report.total_samples == 0


class TestValidateTypes:
    """Tests for per-archetype average scores."""

    def test_zero_scores_counted_but_not_summed(self, results: list[ResultRecord]) -> None:
        report = validate_types(results)
        jump_elite = next(t for t in report.type_stats if t.type_name == "Jump Elite")

        assert jump_elite.count == 2
        assert jump_elite.average_scores[MetricKey.JUMP] == 8.5
        assert jump_elite.average_scores[MetricKey.GRIP] == 2.5
        assert jump_elite.average_scores[MetricKey.DASH] == 0.0

    def test_results_without_scores_skipped(self) -> None:
        results = [
            ResultRecord(grade="4", gender="male", type_name="Speed Star", scores=None),
            ResultRecord(grade="4", gender="male", type_name=None, scores={"dash": 9}),
        ]
        report = validate_types(results)

        assert report.type_stats == []
        assert report.total_samples == 2
