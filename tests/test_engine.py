"""Tests for the single-subject diagnosis pipeline."""

from __future__ import annotations

import json

import pytest

from fitdiag.core.config import Settings
from fitdiag.core.exceptions import InvalidMeasurementError, MissingReferenceError
from fitdiag.core.serialization import to_jsonable
from fitdiag.core.types import Gender, Grade, MetricKey, RawMeasurement, SkillClass
from fitdiag.diagnosis.engine import DiagnosisEngine, run_diagnosis
from fitdiag.diagnosis.training import TrainingItem


class TestDiagnosisEngine:
    """Tests for the DiagnosisEngine class."""

    def test_grade4_male_profile(self, grade4_male: RawMeasurement, settings: Settings) -> None:
        """Should produce the full profile for a grade-4 boy."""
        result = DiagnosisEngine(settings=settings).diagnose(grade4_male)

        assert result.grade is Grade.G4
        assert result.gender is Gender.MALE
        assert result.scores[MetricKey.GRIP] == 8
        assert result.scores[MetricKey.JUMP] == 6
        assert result.scores[MetricKey.DASH] == 8
        # mean score 6.0 -> 10 + 1 * 0.8
        assert result.motor_age == 10.8
        assert result.motor_age_delta == 0.8
        assert result.archetype.name == "Power Fighter"
        assert result.skill_class is SkillClass.STANDARD
        assert result.weakness.metric is MetricKey.DOUBLEJUMP

    def test_sport_aptitude_and_tiers(
        self, grade4_male: RawMeasurement, settings: Settings
    ) -> None:
        """All sports should be ranked and the top six split into tiers."""
        result = DiagnosisEngine(settings=settings).diagnose(grade4_male)

        assert len(result.sport_aptitude) == 16
        assert result.aptitude_tiers.high == result.sport_aptitude[:3]
        assert result.aptitude_tiers.moderate == result.sport_aptitude[3:6]

    def test_letter_grades_and_estimate(
        self, grade4_male: RawMeasurement, settings: Settings
    ) -> None:
        result = DiagnosisEngine(settings=settings).diagnose(grade4_male)

        assert result.letter_grades[MetricKey.GRIP] == "A"
        assert result.letter_grades[MetricKey.JUMP] == "B"
        assert result.letter_grades[MetricKey.SQUAT] == "C"
        # 3 * 3.04 + 1.2 = 10.32
        assert result.estimated_50m_time == 10.3

    def test_trainings_from_catalog(
        self,
        grade4_male: RawMeasurement,
        training_catalog: list[TrainingItem],
        settings: Settings,
    ) -> None:
        """Trainings should come from the supplied catalog only."""
        engine = DiagnosisEngine(settings=settings)

        assert engine.diagnose(grade4_male).trainings == []

        grade4_male.squat = 5.0
        trainings = engine.diagnose(grade4_male, training_catalog).trainings
        assert [t.name for t in trainings] == ["Wall sit"]
        assert trainings[0].priority == "high"

    def test_normalizes_before_scoring(self, settings: Settings) -> None:
        """A 50m sprint should be converted before it is scored."""
        measurement = RawMeasurement(
            grade="4",
            gender="male",
            grip_right=17.5,
            grip_left=17.5,
            jump=148.0,
            dash=10.2,
            dash_distance_m=50,
        )
        result = DiagnosisEngine(settings=settings).diagnose(measurement)

        assert result.measurement.dash == 3.0
        assert result.measurement.dash_distance_m == 15
        assert result.scores[MetricKey.DASH] == 8

    def test_unknown_grade_raises(self, grade4_male: RawMeasurement) -> None:
        grade4_male.grade = "junior"

        with pytest.raises(MissingReferenceError):
            run_diagnosis(grade4_male)

    def test_missing_required_metric_raises(self, grade4_male: RawMeasurement) -> None:
        grade4_male.dash = None

        with pytest.raises(InvalidMeasurementError):
            run_diagnosis(grade4_male)

    def test_result_serializes(self, grade4_male: RawMeasurement, settings: Settings) -> None:
        """The result should convert to plain JSON."""
        result = DiagnosisEngine(settings=settings).diagnose(grade4_male)
        payload = to_jsonable(result)

        assert payload["scores"]["grip"] == 8
        assert payload["grade"] == "4"
        assert payload["skill_class"] == "standard"
        json.dumps(payload)
