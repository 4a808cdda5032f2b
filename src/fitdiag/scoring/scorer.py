"""Deviation (T-score) scoring and the 10-point ability scale.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from fitdiag.core.config import ScoringSettings
from fitdiag.core.exceptions import InvalidMeasurementError
from fitdiag.core.logging import get_logger
from fitdiag.core.types import MetricKey, RawMeasurement, ScoreVector
from fitdiag.scoring.reference import ReferenceTable, default_reference_table

logger = get_logger(__name__)

# Metrics every measurement must carry; the rest are optional.
REQUIRED_METRICS = (MetricKey.GRIP, MetricKey.JUMP, MetricKey.DASH)

# (lower bound of deviation, score), checked top-down
_SCALE_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (70, 10),
    (65, 9),
    (60, 8),
    (55, 7),
    (50, 6),
    (45, 5),
    (40, 4),
    (35, 3),
    (30, 2),
)
_BUCKET_PRECISION = 6

_LETTER_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (8, "A"),
    (6, "B"),
    (5, "C"),
    (3, "D"),
)


def deviation(value: float, mean: float, std_dev: float, reversed: bool = False) -> float:
    """Compute a deviation score (mean 50, one standard deviation = 10).

    Args:
        value: Raw measured value
        mean: Reference mean
        std_dev: Reference standard deviation
        reversed: True for metrics where lower raw values are better

    Returns:
        Deviation score; 50 when ``std_dev`` is zero
    """
    if std_dev == 0:
        return 50.0

    diff = mean - value if reversed else value - mean
    return 50 + 10 * diff / std_dev


def scale_to_ten(deviation_score: float) -> int:
    """Bucket a deviation score into the 1-10 ability scale."""
    # A value exactly k stddevs from the mean must land on its boundary,
    # e.g. (3.3 - 3.04) / 0.26 evaluates just below 1.0.
    bucketed = round(deviation_score, _BUCKET_PRECISION)
    for lower, score in _SCALE_THRESHOLDS:
        if bucketed >= lower:
            return score
    return 1


def letter_grade(score: int) -> str:
    """Map a 1-10 score to a letter grade A-E."""
    for lower, letter in _LETTER_THRESHOLDS:
        if score >= lower:
            return letter
    return "E"


@dataclass(frozen=True)
class ScoringResult:
    """Deviations for the scored metrics and the complete score vector."""

    deviations: dict[MetricKey, float]
    scores: ScoreVector


class DeviationScorer:
    """Scores a measurement against its grade/gender reference baseline."""

    def __init__(
        self,
        reference: ReferenceTable | None = None,
        settings: ScoringSettings | None = None,
    ) -> None:
        self.reference = reference or default_reference_table()
        self.settings = settings or ScoringSettings()

    def score(self, measurement: RawMeasurement) -> ScoringResult:
        """Score every recorded metric of a normalized measurement.

        Optional metrics that were not recorded take the default score and
        have no deviation.

        Raises:
            MissingReferenceError: If no baseline exists for the grade/gender
            InvalidMeasurementError: If a required metric is missing
        """
        missing = [m.value for m in REQUIRED_METRICS if measurement.value(m) is None]
        if missing:
            raise InvalidMeasurementError(f"Missing required metrics: {', '.join(missing)}")

        baseline = self.reference.baseline(measurement.grade, measurement.gender)

        deviations: dict[MetricKey, float] = {}
        for metric in MetricKey:
            value = measurement.value(metric)
            if value is None:
                continue
            deviations[metric] = deviation(
                value,
                baseline.mean(metric),
                self.reference.std_dev(metric),
                reversed=not metric.higher_is_better,
            )

        scores = ScoreVector(
            {metric: scale_to_ten(dev) for metric, dev in deviations.items()},
            default=self.settings.default_score,
        )
        logger.debug("Scored %d metrics: %r", len(deviations), scores)

        return ScoringResult(deviations=deviations, scores=scores)


def score_measurement(
    measurement: RawMeasurement,
    reference: ReferenceTable | None = None,
) -> ScoringResult:
    """Pure function to score a measurement."""
    return DeviationScorer(reference).score(measurement)
