"""Inter-metric correlation, body-metric correlation, and scatter regression.

Correlations are reported in "better <-> better" orientation: a pair that
mixes a lower-is-better metric with a higher-is-better one has its sign
flipped. Regression lines are fitted on the raw values and are not flipped.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from fitdiag.analytics.stats import linear_regression, pearson
from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import BodyMetric, MetricKey, RawMeasurement

logger = get_logger(__name__)


def oriented(r: float, a: MetricKey, b: MetricKey) -> float:
    """Flip a correlation whose two metrics have opposite polarity.

    A self pair always has equal polarity, so it is never flipped.
    """
    return -r if a.higher_is_better != b.higher_is_better else r


def oriented_to_body(r: float, metric: MetricKey) -> float:
    """Flip a metric-vs-body correlation for lower-is-better metrics."""
    return r if metric.higher_is_better else -r


@dataclass(frozen=True, slots=True)
class CorrelationEntry:
    x: MetricKey
    y: MetricKey
    correlation: float


@dataclass(frozen=True)
class CorrelationMatrix:
    """Square correlation matrix over all metrics, keyed by (row, column)."""

    values: dict[tuple[MetricKey, MetricKey], float]

    def __getitem__(self, pair: tuple[MetricKey, MetricKey]) -> float:
        return self.values[pair]

    def __iter__(self) -> Iterator[CorrelationEntry]:
        """Iterate entries in row-major canonical order."""
        for x in MetricKey:
            for y in MetricKey:
                yield CorrelationEntry(x, y, self.values[(x, y)])

    def is_symmetric(self) -> bool:
        return all(self.values[(x, y)] == self.values[(y, x)] for x, y in self.values)


@dataclass(frozen=True, slots=True)
class BodyCorrelation:
    """Correlation of one metric with height, weight and BMI."""

    metric: MetricKey
    height: float
    weight: float
    bmi: float


@dataclass
class CorrelationReport:
    matrix: CorrelationMatrix
    body_correlations: list[BodyCorrelation]
    insights: list[str]
    sample_size: int


@dataclass(frozen=True, slots=True)
class ScatterPoint:
    x: float
    y: float
    grade: str
    gender: str


@dataclass(frozen=True, slots=True)
class Regression:
    slope: float
    intercept: float
    correlation: float


@dataclass
class ScatterReport:
    metric: MetricKey
    body_metric: BodyMetric
    points: list[ScatterPoint]
    regression: Regression
    sample_size: int


def _paired(
    records: Sequence[RawMeasurement], a: MetricKey, b: MetricKey
) -> tuple[list[float], list[float]]:
    xs: list[float] = []
    ys: list[float] = []
    for record in records:
        va = record.value(a)
        vb = record.value(b)
        if va is not None and vb is not None:
            xs.append(va)
            ys.append(vb)
    return xs, ys


def correlation_matrix(records: Sequence[RawMeasurement]) -> CorrelationMatrix:
    """Build the full metric x metric correlation matrix.

    Each cell uses the records where both metrics were recorded, and is
    rounded to 2 decimals.
    """
    values: dict[tuple[MetricKey, MetricKey], float] = {}
    for x in MetricKey:
        for y in MetricKey:
            r = pearson(*_paired(records, x, y))
            values[(x, y)] = round_half_up(oriented(r, x, y), 2)
    return CorrelationMatrix(values)


def body_correlations(records: Sequence[RawMeasurement]) -> list[BodyCorrelation]:
    """Correlate every metric with height, weight and BMI."""
    results = []
    for metric in MetricKey:
        valid = [
            r
            for r in records
            if r.value(metric) is not None and r.height and r.weight is not None
        ]
        values = [r.value(metric) for r in valid]
        heights = [r.height for r in valid]
        weights = [r.weight for r in valid]
        bmis = [r.bmi for r in valid]

        results.append(
            BodyCorrelation(
                metric=metric,
                height=round_half_up(oriented_to_body(pearson(values, heights), metric), 2),
                weight=round_half_up(oriented_to_body(pearson(values, weights), metric), 2),
                bmi=round_half_up(oriented_to_body(pearson(values, bmis), metric), 2),
            )
        )
    return results


def extract_insights(
    matrix: CorrelationMatrix,
    positive_threshold: float = 0.6,
    negative_threshold: float = -0.4,
) -> list[str]:
    """Describe strongly correlated metric pairs.

    Strong positive pairs are listed first, then negative pairs. Each
    unordered pair appears at most once.
    """
    entries = [e for e in matrix if e.x is not e.y]
    seen: set[tuple[str, str]] = set()
    insights: list[str] = []

    for entry in entries:
        if entry.correlation < positive_threshold:
            continue
        pair = tuple(sorted((entry.x.value, entry.y.value)))
        if pair not in seen:
            seen.add(pair)
            insights.append(
                f"Children who score high in {entry.x.value} also tend to score high "
                f"in {entry.y.value} (r = {entry.correlation})"
            )

    for entry in entries:
        if entry.correlation > negative_threshold:
            continue
        pair = tuple(sorted((entry.x.value, entry.y.value)))
        if pair not in seen:
            seen.add(pair)
            insights.append(
                f"{entry.x.value} and {entry.y.value} are negatively correlated "
                f"(r = {entry.correlation})"
            )

    return insights


def analyze_correlation(
    records: Sequence[RawMeasurement],
    positive_threshold: float = 0.6,
    negative_threshold: float = -0.4,
) -> CorrelationReport:
    """Matrix, body correlations and insights for a record set."""
    matrix = correlation_matrix(records)
    insights = extract_insights(matrix, positive_threshold, negative_threshold)
    logger.debug("Correlated %d records, %d insights", len(records), len(insights))

    return CorrelationReport(
        matrix=matrix,
        body_correlations=body_correlations(records),
        insights=insights,
        sample_size=len(records),
    )


def scatter_regression(
    records: Sequence[RawMeasurement],
    metric: MetricKey = MetricKey.JUMP,
    body_metric: BodyMetric = BodyMetric.HEIGHT,
) -> ScatterReport:
    """Plot points and a least-squares line of a metric against a body metric.

    The line is fitted on the raw points. Only the reported correlation is
    oriented, so for lower-is-better metrics its sign disagrees with the slope.
    """
    points = []
    for r in records:
        value = r.value(metric)
        if value is None:
            continue
        if body_metric is BodyMetric.BMI:
            if not (r.height and r.weight):
                continue
        elif not r.body_value(body_metric):
            continue

        points.append(
            ScatterPoint(
                x=round_half_up(r.body_value(body_metric), 1),
                y=value,
                grade=r.grade,
                gender=r.gender,
            )
        )

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    slope, intercept = linear_regression(xs, ys)
    correlation = oriented_to_body(pearson(xs, ys), metric)

    return ScatterReport(
        metric=metric,
        body_metric=body_metric,
        points=points,
        regression=Regression(
            slope=round_half_up(slope, 3),
            intercept=round_half_up(intercept, 2),
            correlation=round_half_up(correlation, 2),
        ),
        sample_size=len(points),
    )
