"""Motor age, archetype, skill class, and weakness classification.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import Grade, MetricKey, ScoreVector, SkillClass

# Score at which a metric is considered average.
SCALE_MIDPOINT = 5


@dataclass(frozen=True, slots=True)
class Archetype:
    """Named summary of the shape of an ability profile."""

    name: str
    description: str


ALL_AROUND_ELITE = Archetype(
    "All-Around Elite",
    "Every ability is well developed and balanced. Has the makings to excel in any sport.",
)
BALANCED_ATHLETE = Archetype(
    "Balanced Athlete",
    "Abilities are evenly developed overall. A solid base for trying many different sports.",
)
GROWING_ATHLETE = Archetype(
    "Growing Athlete",
    "Currently in a growth phase. Regular exercise habits can raise every ability considerably.",
)
POTENTIAL_ATHLETE = Archetype(
    "Potential Athlete",
    "Has plenty of room to grow. A wide variety of movement experiences will bring abilities out.",
)

SPECIALIST_ARCHETYPES: dict[MetricKey, Archetype] = {
    MetricKey.GRIP: Archetype(
        "Power Fighter",
        "Strong muscles that show in power movements such as throwing, pushing and pulling.",
    ),
    MetricKey.SQUAT: Archetype(
        "Stamina Elite",
        "High muscular endurance; performance stays steady through long bouts of exercise.",
    ),
    MetricKey.SIDESTEP: Archetype(
        "Reaction Star",
        "Quick reactions and agility; good at fast decisions and fast movements.",
    ),
    MetricKey.DOUBLEJUMP: Archetype(
        "Balance Master",
        "Excellent balance; keeps control of the body even in unstable situations.",
    ),
    MetricKey.JUMP: Archetype(
        "Jump Elite",
        "Explosive lower body; an advantage in sports built on jumping.",
    ),
    MetricKey.DASH: Archetype(
        "Speed Star",
        "Quick and fast; good at sprints and rapid movements.",
    ),
    MetricKey.THROW: Archetype(
        "Throwing Ace",
        "Strong throwing ability; shines in sports that involve throwing.",
    ),
}

WEAKNESS_CLASS_NAMES: dict[MetricKey, str] = {
    MetricKey.GRIP: "Strength Class",
    MetricKey.JUMP: "Power Class",
    MetricKey.DASH: "Speed Class",
    MetricKey.DOUBLEJUMP: "Balance Class",
    MetricKey.SQUAT: "Endurance Class",
    MetricKey.SIDESTEP: "Agility Class",
    MetricKey.THROW: "Throwing Class",
}


@dataclass(frozen=True, slots=True)
class WeaknessClass:
    """Remedial class for the lowest-scoring ability."""

    metric: MetricKey
    name: str
    score: int


@dataclass(frozen=True, slots=True)
class DevelopmentAdvice:
    """Coaching guidance for a developmental stage."""

    stage: str
    focus: str
    key: str
    avoid: str


_PRE_GOLDEN_AGE = DevelopmentAdvice(
    stage="Pre-golden age (5-8 years)",
    focus="Peak of nervous system development. Experiencing many kinds of movement matters most.",
    key="Put fun first and keep the body moving through play.",
    avoid="Repeating one specific movement or fixating on winning does more harm than good.",
)

DEVELOPMENT_ADVICE: dict[Grade, DevelopmentAdvice] = {
    Grade.K5: _PRE_GOLDEN_AGE,
    Grade.G1: _PRE_GOLDEN_AGE,
    Grade.G2: _PRE_GOLDEN_AGE,
    Grade.G3: DevelopmentAdvice(
        stage="Golden age (9-12 years)",
        focus="Motor skills develop fastest. The best time to learn technique.",
        key="Teach correct form by showing it.",
        avoid="Too early for strength training. Prioritize technique and coordination.",
    ),
    Grade.G4: DevelopmentAdvice(
        stage="Golden age (9-12 years)",
        focus="Motor skills develop fastest. The best time to learn technique.",
        key="Skills can be picked up on the spot. Try a wide range of fundamentals.",
        avoid="Heavy strength training can hinder growth. Emphasize technique practice.",
    ),
    Grade.G5: DevelopmentAdvice(
        stage="Golden age (9-12 years)",
        focus="Motor skills develop fastest. What is learned now lasts a lifetime.",
        key="Complex movements can be learned. Sport-specific technique work is fine.",
        avoid="Beware of win-at-all-costs. Keep the balance with enjoyment.",
    ),
    Grade.G6: DevelopmentAdvice(
        stage="Late golden age",
        focus="Differences in build start to appear and cardiopulmonary function develops.",
        key="Endurance training can be introduced little by little.",
        avoid="Avoid sudden strength training; raise the load gradually.",
    ),
}


def motor_age(scores: ScoreVector, grade: Grade, factor: float = 0.8) -> float:
    """Estimate developmental age from the average score.

    Each point of average score above or below the midpoint shifts the
    chronological age by ``factor`` years.

    Returns:
        Motor age rounded to 1 decimal
    """
    return round_half_up(grade.actual_age + (scores.mean - SCALE_MIDPOINT) * factor, 1)


def determine_archetype(scores: ScoreVector) -> Archetype:
    """Classify the profile shape of a score vector.

    Rules, in order:
        average >= 8          -> All-Around Elite
        spread >= 3           -> specialist archetype of the top metric
        average >= 6          -> Balanced Athlete
        average >= 4          -> Growing Athlete
        otherwise             -> Potential Athlete
    """
    avg = scores.mean

    if avg >= 8:
        return ALL_AROUND_ELITE

    if scores.spread >= 3:
        return SPECIALIST_ARCHETYPES.get(scores.strongest, BALANCED_ATHLETE)

    if avg >= 6:
        return BALANCED_ATHLETE

    if avg >= 4:
        return GROWING_ATHLETE

    return POTENTIAL_ATHLETE


def determine_skill_class(scores: ScoreVector) -> SkillClass:
    """Classify overall skill level."""
    avg = scores.mean

    if avg >= 7 and scores.minimum >= 5:
        return SkillClass.EXPERT
    if avg >= 5:
        return SkillClass.STANDARD
    return SkillClass.BEGINNER


def weakness_class(scores: ScoreVector) -> WeaknessClass:
    """Get the remedial class for the lowest-scoring metric."""
    metric = scores.weakest
    return WeaknessClass(metric=metric, name=WEAKNESS_CLASS_NAMES[metric], score=scores[metric])


def development_advice(grade: Grade) -> DevelopmentAdvice:
    return DEVELOPMENT_ADVICE[grade]
