"""Longitudinal growth of subjects measured more than once.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import MetricKey, RawMeasurement, Subject, to_naive_utc

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CohortVisit:
    """One measurement session in a subject's growth series."""

    number: int
    date: datetime | None
    grip_avg: float
    jump: float | None
    dash: float | None
    doublejump: float | None
    squat: float | None
    sidestep: float | None
    throw: float | None
    motor_age: float | None = None

    @classmethod
    def from_measurement(cls, number: int, m: RawMeasurement) -> CohortVisit:
        # Missing grip sides count as 0 here, unlike the benchmark average.
        grip_avg = ((m.grip_right or 0) + (m.grip_left or 0)) / 2
        return cls(
            number=number,
            date=m.measured_at,
            grip_avg=round_half_up(grip_avg, 1),
            jump=m.jump,
            dash=m.dash,
            doublejump=m.doublejump,
            squat=m.squat,
            sidestep=m.sidestep,
            throw=m.throw,
            motor_age=m.motor_age,
        )

    def value(self, metric: MetricKey) -> float | None:
        if metric is MetricKey.GRIP:
            return self.grip_avg
        return getattr(self, metric.value)


@dataclass(slots=True)
class CohortEntry:
    """Growth series and first-to-last improvement of one subject."""

    subject_id: str
    name: str
    grade: str
    gender: str
    visits: list[CohortVisit]
    improvement: dict[MetricKey, float] = field(default_factory=dict)

    @property
    def measurement_count(self) -> int:
        return len(self.visits)


@dataclass
class CohortReport:
    """Cohort growth summary.

    Attributes:
        entries: Per-subject growth, truncated to the configured limit
        average_improvement: Mean improvement per metric over ALL subjects
        total_subjects: Number of subjects before truncation
    """

    entries: list[CohortEntry]
    average_improvement: dict[MetricKey, float]
    total_subjects: int


def improvement(first: CohortVisit, last: CohortVisit, metric: MetricKey) -> float | None:
    """Percent improvement from the first to the last visit.

    For lower-is-better metrics a decrease counts as improvement.

    Returns:
        Improvement rounded to 2 decimals, or None if the first value is
        missing or zero (or, for non-grip metrics, the last value is missing)
    """
    first_val = first.value(metric)
    last_val = last.value(metric)

    if not first_val or first_val <= 0:
        return None
    if metric is not MetricKey.GRIP and not last_val:
        return None

    if metric.higher_is_better:
        change = (last_val - first_val) / first_val
    else:
        change = (first_val - last_val) / first_val
    return round_half_up(change * 100, 2)


def analyze_subject(subject: Subject) -> CohortEntry:
    """Build the chronological growth series of one subject."""
    dated = sorted(
        (m for m in subject.measurements if m.measured_at is not None),
        key=lambda m: to_naive_utc(m.measured_at),
    )
    visits = [CohortVisit.from_measurement(i + 1, m) for i, m in enumerate(dated)]

    entry = CohortEntry(
        subject_id=subject.id,
        name=subject.name,
        grade=subject.grade,
        gender=subject.gender,
        visits=visits,
    )
    if visits:
        for metric in MetricKey:
            value = improvement(visits[0], visits[-1], metric)
            if value is not None:
                entry.improvement[metric] = value
    return entry


def is_tracked(subject: Subject) -> bool:
    """True if the subject has at least two dated measurements."""
    return sum(1 for m in subject.measurements if m.measured_at is not None) >= 2


def analyze_cohort(subjects: Sequence[Subject], limit: int = 50) -> CohortReport:
    """Track every subject measured at least twice.

    The average for each metric divides by the number of subjects with a
    valid improvement for that metric, not by the cohort size.
    """
    entries = [analyze_subject(s) for s in subjects if is_tracked(s)]

    totals = {metric: 0.0 for metric in MetricKey}
    counts = {metric: 0 for metric in MetricKey}
    for entry in entries:
        for metric, value in entry.improvement.items():
            if not math.isnan(value):
                totals[metric] += value
                counts[metric] += 1

    average = {
        metric: round_half_up(totals[metric] / counts[metric], 2) if counts[metric] else 0.0
        for metric in MetricKey
    }

    logger.debug(
        "Cohort of %d tracked subjects (returning %d)", len(entries), min(limit, len(entries))
    )
    return CohortReport(
        entries=entries[:limit], average_improvement=average, total_subjects=len(entries)
    )
