"""Time-bucketed metric trends with year-over-year comparison.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from fitdiag.analytics.stats import mean, metric_values
from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import MetricKey, Period, RawMeasurement

logger = get_logger(__name__)


@dataclass(slots=True)
class TrendBucket:
    """Per-metric means of the records in one period.

    A metric with no values in the period has mean 0.
    """

    period: str
    count: int
    means: dict[MetricKey, float] = field(default_factory=dict)


@dataclass
class TrendReport:
    period: Period
    buckets: list[TrendBucket]
    year_over_year: dict[str, dict[MetricKey, float]]


def bucket_key(timestamp: datetime, period: Period) -> str:
    """Format a timestamp as ``YYYY-MM``, ``YYYY-Qn`` or ``YYYY``."""
    if period is Period.YEAR:
        return f"{timestamp.year:04d}"
    if period is Period.QUARTER:
        quarter = (timestamp.month - 1) // 3 + 1
        return f"{timestamp.year:04d}-Q{quarter}"
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def previous_period_key(key: str, period: Period) -> str:
    """Same period one year earlier: only the year component changes."""
    year, sep, rest = key.partition("-")
    previous = f"{int(year) - 1:04d}"
    if period is Period.YEAR:
        return previous
    return f"{previous}{sep}{rest}"


def aggregate_trend(records: Sequence[RawMeasurement], period: Period) -> list[TrendBucket]:
    """Bucket dated records by period and average every metric.

    Undated records are skipped. Buckets are returned in chronological
    (lexicographic) order.
    """
    grouped: dict[str, list[RawMeasurement]] = defaultdict(list)
    for record in records:
        if record.measured_at is None:
            continue
        grouped[bucket_key(record.measured_at, period)].append(record)

    buckets = []
    for key in sorted(grouped):
        members = grouped[key]
        buckets.append(
            TrendBucket(
                period=key,
                count=len(members),
                means={
                    metric: round_half_up(mean(metric_values(members, metric)), 2)
                    for metric in MetricKey
                },
            )
        )
    return buckets


def year_over_year(
    buckets: Sequence[TrendBucket], period: Period
) -> dict[str, dict[MetricKey, float]]:
    """Percent change of each bucket against the same period a year earlier.

    The first bucket never has an entry. Buckets without a matching previous
    period are skipped, and so are metrics whose previous mean is 0.
    """
    by_key = {b.period: b for b in buckets}
    comparison: dict[str, dict[MetricKey, float]] = {}

    for current in buckets[1:]:
        previous = by_key.get(previous_period_key(current.period, period))
        if previous is None:
            continue

        changes: dict[MetricKey, float] = {}
        for metric in MetricKey:
            prev_val = previous.means[metric]
            if prev_val != 0:
                pct = (current.means[metric] - prev_val) / prev_val * 100
                changes[metric] = round_half_up(pct, 2)
        comparison[current.period] = changes

    return comparison


def analyze_trend(records: Sequence[RawMeasurement], period: Period = Period.MONTH) -> TrendReport:
    buckets = aggregate_trend(records, period)
    yoy = year_over_year(buckets, period)
    logger.debug("Trend over %d %s buckets, %d with YoY", len(buckets), period.value, len(yoy))
    return TrendReport(period=period, buckets=buckets, year_over_year=yoy)
