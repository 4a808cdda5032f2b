"""Sport aptitude ranking.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from fitdiag.core.types import MetricKey, ScoreVector

_M = MetricKey


@dataclass(frozen=True, slots=True)
class Sport:
    """A sport and the abilities it depends on."""

    name: str
    icon: str
    required: tuple[MetricKey, ...]


@dataclass(frozen=True, slots=True)
class SportAptitude:
    """How well a score vector fits a sport."""

    sport: Sport
    aptitude: float


@dataclass(frozen=True, slots=True)
class AptitudeSplit:
    """Ranked sports split into high and moderate aptitude tiers."""

    high: list[SportAptitude]
    moderate: list[SportAptitude]


SPORT_CATALOG: tuple[Sport, ...] = (
    Sport("Soccer", "⚽", (_M.DASH, _M.SQUAT, _M.SIDESTEP)),
    Sport("Baseball", "⚾", (_M.THROW, _M.GRIP, _M.SIDESTEP)),
    Sport("Basketball", "🏀", (_M.JUMP, _M.DASH, _M.SIDESTEP)),
    Sport("Volleyball", "🏐", (_M.JUMP, _M.SIDESTEP, _M.THROW)),
    Sport("Tennis", "🎾", (_M.SIDESTEP, _M.DASH, _M.GRIP)),
    Sport("Table Tennis", "🏓", (_M.SIDESTEP, _M.DASH)),
    Sport("Swimming", "🏊", (_M.SQUAT, _M.DOUBLEJUMP, _M.GRIP)),
    Sport("Sprinting", "🏃", (_M.DASH, _M.JUMP)),
    Sport("Distance Running", "🏃‍♂️", (_M.SQUAT, _M.DASH)),
    Sport("Gymnastics", "🤸", (_M.DOUBLEJUMP, _M.JUMP, _M.GRIP)),
    Sport("Dance", "💃", (_M.DOUBLEJUMP, _M.SIDESTEP, _M.JUMP)),
    Sport("Judo", "🥋", (_M.GRIP, _M.SQUAT, _M.DOUBLEJUMP)),
    Sport("Kendo", "⚔️", (_M.SIDESTEP, _M.GRIP, _M.SQUAT)),
    Sport("Badminton", "🏸", (_M.SIDESTEP, _M.JUMP, _M.DASH)),
    Sport("Rugby", "🏉", (_M.GRIP, _M.DASH, _M.SQUAT)),
    Sport("Handball", "🤾", (_M.THROW, _M.JUMP, _M.DASH)),
)


def rank_sports(
    scores: ScoreVector,
    catalog: Sequence[Sport] = SPORT_CATALOG,
) -> list[SportAptitude]:
    """Rank sports by the mean score over each sport's required metrics.

    Sorted descending; ties keep catalog order.
    """
    ranked = [
        SportAptitude(
            sport=sport,
            aptitude=sum(scores[m] for m in sport.required) / len(sport.required),
        )
        for sport in catalog
    ]
    return sorted(ranked, key=lambda a: a.aptitude, reverse=True)


def split_aptitude(
    ranked: Sequence[SportAptitude],
    high_count: int = 3,
    moderate_count: int = 3,
) -> AptitudeSplit:
    """Split a ranking into its top tier and the tier after it."""
    return AptitudeSplit(
        high=list(ranked[:high_count]),
        moderate=list(ranked[high_count : high_count + moderate_count]),
    )
