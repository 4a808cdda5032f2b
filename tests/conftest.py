"""Pytest fixtures for fitdiag tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from fitdiag.analytics.repository import InMemoryRecordSource
from fitdiag.core.config import AnalyticsSettings, DiagnosisSettings, ScoringSettings, Settings
from fitdiag.core.types import (
    AgeBracket,
    MetricKey,
    RawMeasurement,
    ResultRecord,
    ScoreVector,
    Store,
    Subject,
)
from fitdiag.diagnosis.training import TrainingItem


@pytest.fixture
def settings() -> Settings:
    """Create default settings, independent of the environment."""
    return Settings(
        scoring=ScoringSettings(),
        diagnosis=DiagnosisSettings(),
        analytics=AnalyticsSettings(),
    )


@pytest.fixture
def grade4_male() -> RawMeasurement:
    """Create a grade-4 boy one stddev above average in grip and dash."""
    return RawMeasurement(
        grade="4",
        gender="male",
        height=138.0,
        weight=32.0,
        grip_right=21.0,
        grip_left=21.0,
        jump=148.0,
        dash=3.04,
        measured_at=datetime(2024, 5, 10, 15, 0),
        store_id="store-a",
        subject_id="child-1",
    )


@pytest.fixture
def average_scores() -> ScoreVector:
    """Create a score vector at the scale midpoint."""
    return ScoreVector()


@pytest.fixture
def training_catalog() -> list[TrainingItem]:
    """Create a small training catalog covering both age brackets."""
    return [
        TrainingItem(MetricKey.GRIP, AgeBracket.YOUNG, "Hanging", sort_order=2),
        TrainingItem(MetricKey.GRIP, AgeBracket.YOUNG, "Monkey bars", sort_order=1),
        TrainingItem(MetricKey.GRIP, AgeBracket.YOUNG, "Towel wring", sort_order=3),
        TrainingItem(MetricKey.GRIP, AgeBracket.OLD, "Dead hang", sort_order=1),
        TrainingItem(MetricKey.SQUAT, AgeBracket.YOUNG, "Frog jumps", sort_order=1),
        TrainingItem(MetricKey.SQUAT, AgeBracket.OLD, "Wall sit", sort_order=1),
    ]


def make_measurement(
    grade: str = "4",
    gender: str = "male",
    grip: float | None = 20.0,
    jump: float | None = 150.0,
    dash: float | None = 3.3,
    **extra: object,
) -> RawMeasurement:
    """Create a measurement with equal grip on both sides."""
    return RawMeasurement(
        grade=grade,
        gender=gender,
        grip_right=grip,
        grip_left=grip,
        jump=jump,
        dash=dash,
        **extra,
    )


@pytest.fixture
def population() -> list[RawMeasurement]:
    """Create a small, fully measured population across two stores."""
    records = []
    for i in range(5):
        records.append(
            make_measurement(
                grip=10.0 + i,
                jump=100.0 + 5 * i,
                dash=4.0 - 0.1 * i,
                doublejump=200.0 + 10 * i,
                squat=[20.0, 25.0, 22.0, 30.0, 28.0][i],
                sidestep=[30.0, 28.0, 35.0, 33.0, 40.0][i],
                throw=[10.0, 14.0, 12.0, 18.0, 15.0][i],
                height=120.0 + 5 * i,
                weight=25.0 + 2 * i,
                measured_at=datetime(2024, 1 + i, 15),
                store_id="store-a" if i % 2 == 0 else "store-b",
            )
        )
    return records


@pytest.fixture
def stores() -> list[Store]:
    """Create two stores."""
    return [Store("store-a", "North Gym", "north"), Store("store-b", "South Gym", "south")]


@pytest.fixture
def results() -> list[ResultRecord]:
    """Create stored diagnoses for the weakness and archetype summaries."""
    return [
        ResultRecord(
            grade="4",
            gender="male",
            weakness_class="Speed Class",
            type_name="Jump Elite",
            scores={"jump": 9, "grip": 5},
            doublejump=250.0,
        ),
        ResultRecord(
            grade="4",
            gender="male",
            weakness_class="Speed Class",
            type_name="Jump Elite",
            scores={"jump": 8, "grip": 0},
            doublejump=260.0,
        ),
        ResultRecord(
            grade="2",
            gender="female",
            weakness_class="Power Class",
            type_name="Balanced Athlete",
            scores={"jump": 6, "grip": 6},
        ),
    ]


def make_subject(subject_id: str, jumps: list[float | None], year: int = 2024) -> Subject:
    """Create a subject measured once per month with the given jumps."""
    measurements = [
        make_measurement(
            jump=jump,
            measured_at=datetime(year, month + 1, 1),
            subject_id=subject_id,
        )
        for month, jump in enumerate(jumps)
    ]
    return Subject(subject_id, f"Child {subject_id}", "4", "male", measurements)


@pytest.fixture
def record_source(
    population: list[RawMeasurement],
    results: list[ResultRecord],
    stores: list[Store],
) -> InMemoryRecordSource:
    """Create an in-memory source over the sample population."""
    subjects = [make_subject("a", [100.0, 110.0]), make_subject("b", [100.0, 130.0])]
    return InMemoryRecordSource(population, results, stores, subjects)


@pytest.fixture
def measurement_factory() -> Callable[..., RawMeasurement]:
    """Provide the measurement builder to tests."""
    return make_measurement


@pytest.fixture
def subject_factory() -> Callable[..., Subject]:
    """Provide the subject builder to tests."""
    return make_subject
