"""Single-subject diagnosis: classification, sport aptitude, and training."""

from fitdiag.diagnosis.aptitude import SPORT_CATALOG, rank_sports, split_aptitude
from fitdiag.diagnosis.classifier import (
    determine_archetype,
    determine_skill_class,
    motor_age,
    weakness_class,
)
from fitdiag.diagnosis.engine import DiagnosisEngine, DiagnosisResult, run_diagnosis
from fitdiag.diagnosis.training import TrainingItem, select_trainings

__all__ = [
    "DiagnosisEngine",
    "DiagnosisResult",
    "run_diagnosis",
    "SPORT_CATALOG",
    "rank_sports",
    "split_aptitude",
    "determine_archetype",
    "determine_skill_class",
    "motor_age",
    "weakness_class",
    "TrainingItem",
    "select_trainings",
]
