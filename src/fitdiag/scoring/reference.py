"""Reference baselines: per grade/gender means and per-metric standard deviations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from fitdiag.core.exceptions import MissingReferenceError
from fitdiag.core.logging import get_logger
from fitdiag.core.types import Gender, Grade, MetricKey, normalize_label

logger = get_logger(__name__)

_M = MetricKey

# Population means by grade and gender.
# fmt: off
AVERAGE_DATA: dict[Grade, dict[Gender, dict[MetricKey, float]]] = {
    Grade.K5: {
        Gender.MALE: {_M.GRIP: 9.5, _M.JUMP: 108, _M.DASH: 4.35, _M.DOUBLEJUMP: 200, _M.SQUAT: 18, _M.SIDESTEP: 26, _M.THROW: 8},
        Gender.FEMALE: {_M.GRIP: 8.5, _M.JUMP: 100, _M.DASH: 4.5, _M.DOUBLEJUMP: 185, _M.SQUAT: 16, _M.SIDESTEP: 24, _M.THROW: 5.5},
    },
    Grade.G1: {
        Gender.MALE: {_M.GRIP: 11, _M.JUMP: 118, _M.DASH: 4.05, _M.DOUBLEJUMP: 220, _M.SQUAT: 20, _M.SIDESTEP: 30, _M.THROW: 11},
        Gender.FEMALE: {_M.GRIP: 10.5, _M.JUMP: 110, _M.DASH: 4.2, _M.DOUBLEJUMP: 205, _M.SQUAT: 18, _M.SIDESTEP: 28, _M.THROW: 7.5},
    },
    Grade.G2: {
        Gender.MALE: {_M.GRIP: 13, _M.JUMP: 128, _M.DASH: 3.75, _M.DOUBLEJUMP: 240, _M.SQUAT: 22, _M.SIDESTEP: 34, _M.THROW: 14},
        Gender.FEMALE: {_M.GRIP: 12.5, _M.JUMP: 120, _M.DASH: 3.9, _M.DOUBLEJUMP: 225, _M.SQUAT: 20, _M.SIDESTEP: 32, _M.THROW: 9},
    },
    Grade.G3: {
        Gender.MALE: {_M.GRIP: 15, _M.JUMP: 138, _M.DASH: 3.53, _M.DOUBLEJUMP: 260, _M.SQUAT: 24, _M.SIDESTEP: 38, _M.THROW: 18},
        Gender.FEMALE: {_M.GRIP: 14.5, _M.JUMP: 130, _M.DASH: 3.68, _M.DOUBLEJUMP: 245, _M.SQUAT: 22, _M.SIDESTEP: 35, _M.THROW: 11},
    },
    Grade.G4: {
        Gender.MALE: {_M.GRIP: 17.5, _M.JUMP: 148, _M.DASH: 3.3, _M.DOUBLEJUMP: 280, _M.SQUAT: 26, _M.SIDESTEP: 42, _M.THROW: 22},
        Gender.FEMALE: {_M.GRIP: 17, _M.JUMP: 140, _M.DASH: 3.45, _M.DOUBLEJUMP: 265, _M.SQUAT: 24, _M.SIDESTEP: 39, _M.THROW: 14},
    },
    Grade.G5: {
        Gender.MALE: {_M.GRIP: 20.5, _M.JUMP: 158, _M.DASH: 3.08, _M.DOUBLEJUMP: 300, _M.SQUAT: 28, _M.SIDESTEP: 46, _M.THROW: 27},
        Gender.FEMALE: {_M.GRIP: 19.5, _M.JUMP: 148, _M.DASH: 3.23, _M.DOUBLEJUMP: 280, _M.SQUAT: 26, _M.SIDESTEP: 42, _M.THROW: 16},
    },
    Grade.G6: {
        Gender.MALE: {_M.GRIP: 24, _M.JUMP: 168, _M.DASH: 2.93, _M.DOUBLEJUMP: 320, _M.SQUAT: 30, _M.SIDESTEP: 50, _M.THROW: 32},
        Gender.FEMALE: {_M.GRIP: 22, _M.JUMP: 155, _M.DASH: 3.08, _M.DOUBLEJUMP: 295, _M.SQUAT: 28, _M.SIDESTEP: 45, _M.THROW: 19},
    },
}
# fmt: on

# Population standard deviation per metric, shared by all grades and genders.
STD_DEV: dict[MetricKey, float] = {
    _M.GRIP: 3.5,
    _M.JUMP: 12,
    _M.DASH: 0.26,
    _M.DOUBLEJUMP: 25,
    _M.SQUAT: 5,
    _M.SIDESTEP: 6,
    _M.THROW: 5,
}


@dataclass(frozen=True, slots=True)
class ReferenceBaseline:
    """Mean value of every metric for one grade and gender."""

    grade: Grade
    gender: Gender
    means: Mapping[MetricKey, float]

    def mean(self, metric: MetricKey) -> float:
        return self.means[metric]


class ReferenceTable:
    """Lookup of baselines by (grade, gender) plus the global std-dev table."""

    def __init__(
        self,
        averages: Mapping[Grade, Mapping[Gender, Mapping[MetricKey, float]]] | None = None,
        std_devs: Mapping[MetricKey, float] | None = None,
    ) -> None:
        """Initialize the table.

        Args:
            averages: Nested grade -> gender -> metric -> mean mapping
            std_devs: Metric -> standard deviation mapping
        """
        self._averages = averages if averages is not None else AVERAGE_DATA
        self._std_devs = std_devs if std_devs is not None else STD_DEV

    @classmethod
    def from_mapping(
        cls,
        averages: Mapping[str, Mapping[str, Mapping[str, float]]],
        std_devs: Mapping[str, float],
    ) -> ReferenceTable:
        """Build a table from string-keyed nested mappings.

        Raises:
            ValueError: If a grade, gender or metric key is unknown
        """
        parsed = {
            Grade.from_value(grade): {
                Gender(gender): {MetricKey(metric): float(v) for metric, v in metrics.items()}
                for gender, metrics in by_gender.items()
            }
            for grade, by_gender in averages.items()
        }
        return cls(parsed, {MetricKey(metric): float(v) for metric, v in std_devs.items()})

    def baseline(self, grade: Grade | str, gender: Gender | str) -> ReferenceBaseline:
        """Get the baseline for a grade and gender.

        Raises:
            MissingReferenceError: If no complete baseline exists for the pair
        """
        try:
            grade_key = grade if isinstance(grade, Grade) else Grade.from_value(grade)
            gender_key = gender if isinstance(gender, Gender) else Gender(normalize_label(gender))
            means = self._averages[grade_key][gender_key]
        except (KeyError, ValueError) as e:
            logger.warning("No reference baseline for grade=%s gender=%s", grade, gender)
            raise MissingReferenceError(
                f"No reference baseline for grade={grade!s} gender={gender!s}"
            ) from e

        missing = [m.value for m in MetricKey if m not in means]
        if missing:
            raise MissingReferenceError(
                f"Reference baseline for grade={grade_key.value} gender={gender_key.value} "
                f"lacks metrics: {', '.join(missing)}"
            )

        return ReferenceBaseline(grade=grade_key, gender=gender_key, means=means)

    def std_dev(self, metric: MetricKey) -> float:
        """Get the population standard deviation for a metric."""
        try:
            return self._std_devs[metric]
        except KeyError as e:
            raise MissingReferenceError(f"No standard deviation for {metric.value}") from e


def default_reference_table() -> ReferenceTable:
    """Get the built-in reference table."""
    return ReferenceTable()
