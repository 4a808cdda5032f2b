"""Store comparison, weakness/archetype distributions, and archetype validation.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from fitdiag.analytics.stats import mean, metric_values
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import MetricKey, RawMeasurement, ResultRecord, Store


@dataclass(frozen=True, slots=True)
class StoreMetricStats:
    mean: float
    diff_from_overall: float


@dataclass(slots=True)
class StoreStats:
    store_id: str
    store_name: str
    measurement_count: int
    stats: dict[MetricKey, StoreMetricStats] = field(default_factory=dict)


@dataclass
class StoreComparisonReport:
    overall_means: dict[MetricKey, float]
    stores: list[StoreStats]


def compare_stores(
    stores: Sequence[Store], records: Sequence[RawMeasurement]
) -> StoreComparisonReport:
    """Per-store metric means and their difference from the overall mean.

    Means are 0 when there are no values; everything is rounded to 2 decimals.
    """
    overall = {metric: mean(metric_values(records, metric)) for metric in MetricKey}

    store_stats = []
    for store in stores:
        members = [r for r in records if r.store_id == store.id]
        entry = StoreStats(
            store_id=store.id, store_name=store.name, measurement_count=len(members)
        )
        for metric in MetricKey:
            store_mean = mean(metric_values(members, metric))
            entry.stats[metric] = StoreMetricStats(
                mean=round_half_up(store_mean, 2),
                diff_from_overall=round_half_up(store_mean - overall[metric], 2),
            )
        store_stats.append(entry)

    return StoreComparisonReport(
        overall_means={m: round_half_up(v, 2) for m, v in overall.items()},
        stores=store_stats,
    )


@dataclass(frozen=True, slots=True)
class RankedCount:
    name: str
    count: int
    percentage: float


@dataclass
class WeaknessReport:
    weakness_ranking: list[RankedCount]
    type_distribution: list[RankedCount]
    total_samples: int


def _percentage(count: int, total: int) -> float:
    # TODO: confirm with product whether an empty sample should report 0 instead of NaN.
    if total == 0:
        return math.nan
    return round_half_up(count / total * 100, 2)


def rank_counts(names: Iterable[str | None], total: int) -> list[RankedCount]:
    """Count names, most frequent first; ties keep first-seen order."""
    counts = Counter(name for name in names if name)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedCount(name, count, _percentage(count, total)) for name, count in ranked]


def analyze_weakness(results: Sequence[ResultRecord]) -> WeaknessReport:
    """Rank weakness classes and archetypes by how often they were diagnosed."""
    total = len(results)
    return WeaknessReport(
        weakness_ranking=rank_counts((r.weakness_class for r in results), total),
        type_distribution=rank_counts((r.type_name for r in results), total),
        total_samples=total,
    )


@dataclass(slots=True)
class ArchetypeScores:
    """Average score vector of the subjects diagnosed with one archetype."""

    type_name: str
    count: int
    average_scores: dict[MetricKey, float]


@dataclass
class TypeValidationReport:
    type_stats: list[ArchetypeScores]
    total_samples: int


def validate_types(results: Sequence[ResultRecord]) -> TypeValidationReport:
    """Average each metric's score per archetype.

    Every result with an archetype and scores counts toward the archetype,
    but a missing or zero score adds nothing to the metric's sum.
    """
    sums: dict[str, dict[MetricKey, float]] = {}
    counts: dict[str, int] = {}

    for result in results:
        if not result.type_name or not result.scores:
            continue

        totals = sums.setdefault(result.type_name, {m: 0.0 for m in MetricKey})
        counts[result.type_name] = counts.get(result.type_name, 0) + 1
        for metric in MetricKey:
            score = result.scores.get(metric.value)
            if score:
                totals[metric] += score

    type_stats = [
        ArchetypeScores(
            type_name=name,
            count=counts[name],
            average_scores={
                m: round_half_up(total / counts[name], 1) for m, total in totals.items()
            },
        )
        for name, totals in sums.items()
    ]
    return TypeValidationReport(type_stats=type_stats, total_samples=len(results))
