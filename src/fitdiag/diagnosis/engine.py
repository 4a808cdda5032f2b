"""Single-subject diagnosis pipeline.

Normalizer -> scorer -> classification, aptitude and training selection.
This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fitdiag.core.config import Settings, get_settings
from fitdiag.core.exceptions import MissingReferenceError
from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import (
    Gender,
    Grade,
    MetricKey,
    RawMeasurement,
    ScoreVector,
    SkillClass,
    normalize_label,
)
from fitdiag.diagnosis.aptitude import AptitudeSplit, SportAptitude, rank_sports, split_aptitude
from fitdiag.diagnosis.classifier import (
    Archetype,
    DevelopmentAdvice,
    WeaknessClass,
    determine_archetype,
    determine_skill_class,
    development_advice,
    motor_age,
    weakness_class,
)
from fitdiag.diagnosis.training import (
    Goals,
    TrainingItem,
    TrainingRecommendation,
    monthly_goals,
    select_trainings,
)
from fitdiag.scoring.normalizer import MeasurementNormalizer, estimate_50m_time
from fitdiag.scoring.reference import ReferenceTable, default_reference_table
from fitdiag.scoring.scorer import DeviationScorer, letter_grade

logger = get_logger(__name__)


@dataclass
class DiagnosisResult:
    """Complete diagnostic profile of one measurement.

    Attributes:
        grade: Subject's grade
        gender: Subject's gender
        measurement: The normalized measurement that was scored
        scores: 1-10 score for every metric
        deviations: Deviation score of every recorded metric
        motor_age: Estimated developmental age
        motor_age_delta: Motor age minus chronological age
        archetype: Profile archetype
        skill_class: Overall skill level
        weakness: Remedial class for the weakest ability
        sport_aptitude: All sports ranked by fit
        aptitude_tiers: High and moderate aptitude sports
        trainings: Selected remedial trainings
        goals: One-month targets
        advice: Guidance for the subject's developmental stage
        letter_grades: Letter grade of every metric
        estimated_50m_time: Predicted 50m sprint time in seconds
    """

    grade: Grade
    gender: Gender
    measurement: RawMeasurement
    scores: ScoreVector
    deviations: dict[MetricKey, float]
    motor_age: float
    motor_age_delta: float
    archetype: Archetype
    skill_class: SkillClass
    weakness: WeaknessClass
    sport_aptitude: list[SportAptitude]
    aptitude_tiers: AptitudeSplit
    trainings: list[TrainingRecommendation]
    goals: Goals
    advice: DevelopmentAdvice
    letter_grades: dict[MetricKey, str]
    estimated_50m_time: float


class DiagnosisEngine:
    """Runs the full single-subject pipeline.

    Holds only configuration; every call recomputes from its inputs.
    """

    def __init__(
        self,
        reference: ReferenceTable | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            reference: Reference baselines (built-in table if None)
            settings: Package settings (cached defaults if None)
        """
        self.settings = settings or get_settings()
        self.reference = reference or default_reference_table()
        self.normalizer = MeasurementNormalizer()
        self.scorer = DeviationScorer(self.reference, self.settings.scoring)

    def diagnose(
        self,
        measurement: RawMeasurement,
        training_catalog: Sequence[TrainingItem] = (),
    ) -> DiagnosisResult:
        """Diagnose a raw measurement.

        Args:
            measurement: Raw measurement, possibly taken with non-standard equipment
            training_catalog: Training items to choose recommendations from

        Returns:
            Complete diagnosis

        Raises:
            MissingReferenceError: If no baseline exists for the grade/gender
            InvalidMeasurementError: If the measurement cannot be normalized or
                lacks a required metric
        """
        normalized = self.normalizer.normalize(measurement)
        scoring = self.scorer.score(normalized)
        grade, gender = _parse_subject(normalized)
        scores = scoring.scores

        age = motor_age(scores, grade, self.settings.scoring.motor_age_factor)
        ranked = rank_sports(scores)
        cfg = self.settings.diagnosis

        result = DiagnosisResult(
            grade=grade,
            gender=gender,
            measurement=normalized,
            scores=scores,
            deviations=scoring.deviations,
            motor_age=age,
            motor_age_delta=round_half_up(age - grade.actual_age, 1),
            archetype=determine_archetype(scores),
            skill_class=determine_skill_class(scores),
            weakness=weakness_class(scores),
            sport_aptitude=ranked,
            aptitude_tiers=split_aptitude(
                ranked, cfg.high_aptitude_count, cfg.moderate_aptitude_count
            ),
            trainings=select_trainings(
                scores,
                grade,
                training_catalog,
                weak_count=cfg.weak_ability_count,
                per_ability=cfg.trainings_per_ability,
            ),
            goals=monthly_goals(normalized),
            advice=development_advice(grade),
            letter_grades={metric: letter_grade(score) for metric, score in scores.items()},
            estimated_50m_time=estimate_50m_time(normalized.dash or 0.0),
        )

        logger.info(
            "Diagnosed grade=%s gender=%s: motor_age=%.1f archetype=%s class=%s",
            grade.value,
            gender.value,
            result.motor_age,
            result.archetype.name,
            result.skill_class.value,
        )
        return result


def _parse_subject(measurement: RawMeasurement) -> tuple[Grade, Gender]:
    try:
        return Grade.from_value(measurement.grade), Gender(normalize_label(measurement.gender))
    except ValueError as e:
        raise MissingReferenceError(
            f"No reference baseline for grade={measurement.grade} gender={measurement.gender}"
        ) from e


def run_diagnosis(
    measurement: RawMeasurement,
    training_catalog: Sequence[TrainingItem] = (),
    reference: ReferenceTable | None = None,
) -> DiagnosisResult:
    """Pure function to diagnose a measurement."""
    return DiagnosisEngine(reference).diagnose(measurement, training_catalog)
