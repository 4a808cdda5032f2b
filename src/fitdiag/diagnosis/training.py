"""Remedial training selection and one-month goals.

This module is pure logic with NO I/O. The training catalog is supplied by
the caller.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import AgeBracket, Grade, MetricKey, RawMeasurement, ScoreVector


@dataclass(frozen=True, slots=True)
class TrainingItem:
    """An entry of the external training catalog."""

    ability_key: MetricKey
    age_group: AgeBracket
    name: str
    description: str = ""
    reps: str = ""
    effect: str = ""
    sort_order: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrainingItem:
        return cls(
            ability_key=MetricKey(data["ability_key"]),
            age_group=AgeBracket(data["age_group"]),
            name=str(data["name"]),
            description=data.get("description") or "",
            reps=data.get("reps") or "",
            effect=data.get("effect") or "",
            sort_order=int(data.get("sort_order") or 0),
        )


@dataclass(frozen=True, slots=True)
class TrainingRecommendation:
    """A training item selected for a subject."""

    name: str
    description: str
    reps: str
    effect: str
    category: str
    priority: str


@dataclass(frozen=True, slots=True)
class Goals:
    """One-month targets for the three core metrics."""

    grip: float
    jump: float
    dash: float


def select_trainings(
    scores: ScoreVector,
    grade: Grade,
    catalog: Sequence[TrainingItem],
    weak_count: int = 2,
    per_ability: int = 2,
) -> list[TrainingRecommendation]:
    """Pick catalog items for the weakest abilities.

    Args:
        scores: Subject's score vector
        grade: Subject's grade, which selects the age bracket
        catalog: Available training items
        weak_count: Number of weakest abilities to train
        per_ability: Maximum items per ability

    Returns:
        Recommendations; the first item of the weakest ability has priority
        "high", every other item "medium"
    """
    bracket = grade.age_bracket
    weakest = [metric for metric, _ in scores.ranked()[:weak_count]]

    selected: list[TrainingRecommendation] = []
    for rank, metric in enumerate(weakest):
        matching = sorted(
            (t for t in catalog if t.ability_key is metric and t.age_group is bracket),
            key=lambda t: t.sort_order,
        )
        for idx, item in enumerate(matching[:per_ability]):
            selected.append(
                TrainingRecommendation(
                    name=item.name,
                    description=item.description,
                    reps=item.reps,
                    effect=item.effect,
                    category=metric.label,
                    priority="high" if rank == 0 and idx == 0 else "medium",
                )
            )

    return selected


def monthly_goals(measurement: RawMeasurement) -> Goals:
    """Compute one-month targets: +5% grip, +3% jump, -3% dash time."""
    grip = measurement.grip_avg or 0.0
    jump = measurement.jump or 0.0
    dash = measurement.dash or 0.0
    return Goals(
        grip=round_half_up(grip * 1.05, 1),
        jump=round_half_up(jump * 1.03),
        dash=round_half_up(dash * 0.97, 2),
    )
