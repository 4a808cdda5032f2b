"""Core data types and structures."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class MetricKey(Enum):
    """The seven ability metrics, in canonical order."""

    GRIP = "grip"
    JUMP = "jump"
    DASH = "dash"
    DOUBLEJUMP = "doublejump"
    SQUAT = "squat"
    SIDESTEP = "sidestep"
    THROW = "throw"

    @property
    def higher_is_better(self) -> bool:
        """False for timed metrics, where a lower raw value is a better result."""
        return self is not MetricKey.DASH

    @property
    def label(self) -> str:
        """Ability category measured by this metric."""
        return _METRIC_LABELS[self]


_METRIC_LABELS = {
    MetricKey.GRIP: "strength",
    MetricKey.JUMP: "power",
    MetricKey.DASH: "speed",
    MetricKey.DOUBLEJUMP: "balance",
    MetricKey.SQUAT: "endurance",
    MetricKey.SIDESTEP: "agility",
    MetricKey.THROW: "throwing",
}


class AgeBracket(Enum):
    """Coarse age grouping used to select training content."""

    YOUNG = "young"
    OLD = "old"


class Grade(Enum):
    """School grade, from the final kindergarten year to sixth grade."""

    K5 = "k5"
    G1 = "1"
    G2 = "2"
    G3 = "3"
    G4 = "4"
    G5 = "5"
    G6 = "6"

    @classmethod
    def from_value(cls, value: str | int) -> Grade:
        """Parse a grade from its raw string or integer form."""
        return cls(normalize_label(value))

    @property
    def actual_age(self) -> int:
        """Typical chronological age for the grade."""
        return _GRADE_AGES[self]

    @property
    def age_bracket(self) -> AgeBracket:
        """Training age bracket for the grade."""
        if self in (Grade.K5, Grade.G1, Grade.G2):
            return AgeBracket.YOUNG
        return AgeBracket.OLD


_GRADE_AGES = {
    Grade.K5: 6,
    Grade.G1: 7,
    Grade.G2: 8,
    Grade.G3: 9,
    Grade.G4: 10,
    Grade.G5: 11,
    Grade.G6: 12,
}


class Gender(Enum):
    """Reference gender."""

    MALE = "male"
    FEMALE = "female"


class SkillClass(Enum):
    """Overall skill level derived from a score vector."""

    BEGINNER = "beginner"
    STANDARD = "standard"
    EXPERT = "expert"


class Period(Enum):
    """Time bucket granularity for trend aggregation."""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class BodyMetric(Enum):
    """Body measurement plotted against an ability metric."""

    HEIGHT = "height"
    WEIGHT = "weight"
    BMI = "bmi"


class AnalyticsType(Enum):
    """Population analytics available from the analytics service."""

    BENCHMARK = "benchmark"
    CORRELATION = "correlation"
    STORE_COMPARISON = "store-comparison"
    TREND = "trend"
    WEAKNESS = "weakness"
    SCATTER = "scatter"
    TYPE_VALIDATION = "type-validation"
    COHORT = "cohort"


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (or pass a datetime through)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive timestamps pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_label(value: Any) -> str:
    """Canonical form of a raw grade or gender label."""
    return str(value).strip().lower()


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(slots=True)
class RawMeasurement:
    """One subject's raw measurement session.

    Grade and gender are kept as raw strings: population aggregators drop
    records outside the known sets instead of failing on them.

    Attributes:
        grade: Raw grade value (k5, 1-6)
        gender: Raw gender value (male, female)
        height: Height in cm
        weight: Weight in kg
        grip_right: Right-hand grip strength in kg
        grip_left: Left-hand grip strength in kg
        jump: Standing long jump in cm
        dash: Sprint time in seconds over ``dash_distance_m``
        doublejump: Double standing long jump in cm
        squat: Squat repetitions
        sidestep: Side-step repetitions
        throw: Ball throw distance in m
        measured_at: Measurement timestamp
        store_id: Store that recorded the measurement
        subject_id: Measured child
        id: Measurement identifier
        dash_distance_m: Distance the sprint was run over (15 or 50)
        ball_diameter_cm: Diameter of the ball used for the throw
        ball_weight_g: Weight of the ball used for the throw
        motor_age: Motor age from a previous diagnosis of this measurement
    """

    grade: str
    gender: str
    height: float | None = None
    weight: float | None = None
    grip_right: float | None = None
    grip_left: float | None = None
    jump: float | None = None
    dash: float | None = None
    doublejump: float | None = None
    squat: float | None = None
    sidestep: float | None = None
    throw: float | None = None
    measured_at: datetime | None = None
    store_id: str | None = None
    subject_id: str | None = None
    id: str | None = None
    dash_distance_m: int = 15
    ball_diameter_cm: float | None = None
    ball_weight_g: float | None = None
    motor_age: float | None = None

    @property
    def grip_avg(self) -> float | None:
        """Mean of the recorded grip sides, or None if neither was recorded."""
        sides = [v for v in (self.grip_right, self.grip_left) if v is not None]
        if not sides:
            return None
        return sum(sides) / len(sides)

    @property
    def bmi(self) -> float | None:
        """Body mass index from height (cm) and weight (kg)."""
        if not self.height or self.weight is None:
            return None
        return self.weight / (self.height / 100) ** 2

    def value(self, metric: MetricKey) -> float | None:
        """Get the raw value for a metric (grip resolves to the side average)."""
        if metric is MetricKey.GRIP:
            return self.grip_avg
        return getattr(self, metric.value)

    def body_value(self, body_metric: BodyMetric) -> float | None:
        """Get a body measurement."""
        if body_metric is BodyMetric.BMI:
            return self.bmi
        return getattr(self, body_metric.value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawMeasurement:
        """Build a measurement from a collaborator record.

        Accepts either flat records or records with the child attributes
        nested under ``children``, and an optional ``results`` list carrying
        an earlier motor age.
        """
        child = data.get("children") or {}
        results = data.get("results") or []
        motor_age = data.get("motor_age")
        if motor_age is None and results:
            motor_age = results[0].get("motor_age")

        return cls(
            grade=normalize_label(child.get("grade", data.get("grade", ""))),
            gender=normalize_label(child.get("gender", data.get("gender", ""))),
            height=_optional_float(child.get("height", data.get("height"))),
            weight=_optional_float(child.get("weight", data.get("weight"))),
            grip_right=_optional_float(data.get("grip_right")),
            grip_left=_optional_float(data.get("grip_left")),
            jump=_optional_float(data.get("jump")),
            dash=_optional_float(data.get("dash")),
            doublejump=_optional_float(data.get("doublejump")),
            squat=_optional_float(data.get("squat")),
            sidestep=_optional_float(data.get("sidestep")),
            throw=_optional_float(data.get("throw")),
            measured_at=parse_datetime(data.get("measured_at")),
            store_id=data.get("store_id"),
            subject_id=data.get("subject_id", data.get("child_id")),
            id=data.get("id"),
            dash_distance_m=int(data.get("dash_distance_m") or 15),
            ball_diameter_cm=_optional_float(data.get("ball_diameter_cm", data.get("ball_type"))),
            ball_weight_g=_optional_float(data.get("ball_weight_g")),
            motor_age=_optional_float(motor_age),
        )


class ScoreVector(Mapping[MetricKey, int]):
    """Immutable mapping of every metric to a 1-10 ability score.

    Always holds exactly seven entries; metrics missing from the input take
    the scale midpoint.
    """

    __slots__ = ("_scores",)

    def __init__(self, scores: Mapping[MetricKey, int] | None = None, default: int = 5) -> None:
        given = scores or {}
        resolved: dict[MetricKey, int] = {}
        for metric in MetricKey:
            score = int(given.get(metric, default))
            if not 1 <= score <= 10:
                raise ValueError(f"Score for {metric.value} out of range: {score}")
            resolved[metric] = score
        self._scores = resolved

    def __getitem__(self, metric: MetricKey) -> int:
        return self._scores[metric]

    def __iter__(self) -> Iterator[MetricKey]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __repr__(self) -> str:
        inner = ", ".join(f"{m.value}={s}" for m, s in self._scores.items())
        return f"ScoreVector({inner})"

    @property
    def mean(self) -> float:
        """Arithmetic mean of all seven scores."""
        return sum(self._scores.values()) / len(self._scores)

    @property
    def minimum(self) -> int:
        return min(self._scores.values())

    @property
    def maximum(self) -> int:
        return max(self._scores.values())

    @property
    def spread(self) -> int:
        """Difference between the highest and lowest score."""
        return self.maximum - self.minimum

    @property
    def strongest(self) -> MetricKey:
        """Highest-scoring metric (first in canonical order on ties)."""
        return self.ranked(ascending=False)[0][0]

    @property
    def weakest(self) -> MetricKey:
        """Lowest-scoring metric (first in canonical order on ties)."""
        return self.ranked()[0][0]

    def ranked(self, ascending: bool = True) -> list[tuple[MetricKey, int]]:
        """Metrics sorted by score; ties keep canonical order."""
        return sorted(self._scores.items(), key=lambda item: item[1], reverse=not ascending)

    def to_dict(self) -> dict[str, int]:
        return {metric.value: score for metric, score in self._scores.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, int], default: int = 5) -> ScoreVector:
        """Build from a string-keyed score mapping, ignoring unknown keys."""
        known = {m.value: m for m in MetricKey}
        return cls({known[k]: v for k, v in data.items() if k in known}, default=default)


@dataclass(frozen=True, slots=True)
class Store:
    """A measuring location."""

    id: str
    name: str
    slug: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Store:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            slug=str(data.get("slug", "")),
        )


@dataclass(slots=True)
class ResultRecord:
    """A stored diagnosis, as consumed by the weakness and archetype summaries.

    Attributes:
        grade: Raw grade of the measured child
        gender: Raw gender of the measured child
        weakness_class: Name of the weakest-ability class
        type_name: Name of the archetype
        scores: Raw string-keyed score mapping
        motor_age: Diagnosed motor age
        store_id: Store that recorded the measurement
        measured_at: Measurement timestamp
        doublejump: Raw doublejump value (present only for full measurements)
    """

    grade: str
    gender: str
    weakness_class: str | None = None
    type_name: str | None = None
    scores: dict[str, int] | None = None
    motor_age: float | None = None
    store_id: str | None = None
    measured_at: datetime | None = None
    doublejump: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResultRecord:
        measurement = data.get("measurements") or {}
        child = measurement.get("children") or {}
        return cls(
            grade=normalize_label(child.get("grade", data.get("grade", ""))),
            gender=normalize_label(child.get("gender", data.get("gender", ""))),
            weakness_class=data.get("weakness_class"),
            type_name=data.get("type_name"),
            scores=data.get("scores"),
            motor_age=_optional_float(data.get("motor_age")),
            store_id=measurement.get("store_id", data.get("store_id")),
            measured_at=parse_datetime(measurement.get("measured_at", data.get("measured_at"))),
            doublejump=_optional_float(measurement.get("doublejump", data.get("doublejump"))),
        )


@dataclass(slots=True)
class Subject:
    """A measured child with all of their measurement sessions."""

    id: str
    name: str
    grade: str
    gender: str
    measurements: list[RawMeasurement] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Subject:
        subject_id = str(data["id"])
        measurements = []
        for item in data.get("measurements") or []:
            measurement = RawMeasurement.from_dict(
                {"grade": data.get("grade", ""), "gender": data.get("gender", ""), **item}
            )
            measurement.subject_id = subject_id
            measurements.append(measurement)
        return cls(
            id=subject_id,
            name=str(data.get("name", "")),
            grade=normalize_label(data.get("grade", "")),
            gender=normalize_label(data.get("gender", "")),
            measurements=measurements,
        )
