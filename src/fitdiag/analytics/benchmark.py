"""Per grade x gender benchmark statistics.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from fitdiag.analytics.stats import mean, median, metric_values, population_std
from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import Gender, Grade, MetricKey, RawMeasurement, normalize_label

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MetricStats:
    """Summary statistics of one metric, rounded to 2 decimals."""

    mean: float
    median: float
    std_dev: float
    min: float
    max: float


@dataclass(slots=True)
class BenchmarkGroup:
    """Statistics for one grade and gender."""

    grade: Grade
    gender: Gender
    count: int
    stats: dict[MetricKey, MetricStats] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return group_key(self.grade, self.gender)


@dataclass(slots=True)
class BenchmarkReport:
    """All non-empty benchmark groups, keyed by ``"{grade}_{gender}"``."""

    groups: dict[str, BenchmarkGroup]
    total_measurements: int

    @property
    def grouped_count(self) -> int:
        """Number of records that fell into some group."""
        return sum(g.count for g in self.groups.values())


def group_key(grade: Grade, gender: Gender) -> str:
    return f"{grade.value}_{gender.value}"


def summarize(values: Sequence[float]) -> MetricStats | None:
    """Compute rounded summary statistics, or None for no values."""
    if not values:
        return None

    return MetricStats(
        mean=round_half_up(mean(values), 2),
        median=round_half_up(median(values), 2),
        std_dev=round_half_up(population_std(values), 2),
        min=round_half_up(min(values), 2),
        max=round_half_up(max(values), 2),
    )


def compute_benchmarks(records: Sequence[RawMeasurement]) -> BenchmarkReport:
    """Group records by grade and gender and summarize every metric.

    Empty groups are omitted, as are metrics with no values inside a group.
    Records with an unknown grade or gender belong to no group.
    """
    groups: dict[str, BenchmarkGroup] = {}

    for grade in Grade:
        for gender in Gender:
            members = [
                r
                for r in records
                if normalize_label(r.grade) == grade.value
                and normalize_label(r.gender) == gender.value
            ]
            if not members:
                continue

            group = BenchmarkGroup(grade=grade, gender=gender, count=len(members))
            for metric in MetricKey:
                stats = summarize(metric_values(members, metric))
                if stats is not None:
                    group.stats[metric] = stats

            groups[group.key] = group

    report = BenchmarkReport(groups=groups, total_measurements=len(records))
    logger.debug(
        "Benchmarked %d of %d records into %d groups",
        report.grouped_count,
        report.total_measurements,
        len(groups),
    )
    return report
