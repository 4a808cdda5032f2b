"""Equipment corrections applied to raw measurements before scoring.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

import dataclasses

from fitdiag.core.exceptions import InvalidMeasurementError
from fitdiag.core.logging import get_logger
from fitdiag.core.numeric import round_half_up
from fitdiag.core.types import Grade, RawMeasurement

logger = get_logger(__name__)

CANONICAL_DASH_DISTANCE_M = 15
LONG_DASH_DISTANCE_M = 50

# Ball diameter (cm) -> throw multiplier, relative to a 9cm softball.
# Larger balls are harder to grip and travel less far.
BALL_DIAMETER_FACTORS: dict[float, float] = {
    9: 1.00,  # softball
    16: 1.10,  # handball
    20: 1.18,  # futsal ball
    22: 1.22,  # volleyball
    24: 1.26,  # basketball
}

# Ball weight (g) -> throw multiplier, relative to a 150g ball.
BALL_WEIGHT_FACTORS: dict[float, float] = {
    150: 1.00,
    300: 1.04,
    450: 1.08,
    600: 1.12,
}

# 50m time ~= 3 * 15m time + acceleration offset (s). Younger children take
# longer to reach top speed, so the offset shrinks with grade.
_DASH_ACCELERATION_OFFSET: dict[Grade, float] = {
    Grade.K5: 1.50,
    Grade.G1: 1.45,
    Grade.G2: 1.40,
    Grade.G3: 1.30,
    Grade.G4: 1.20,
    Grade.G5: 1.15,
    Grade.G6: 1.10,
}
_DASH_SPEED_RATIO = 3.0
_DEFAULT_ACCELERATION_OFFSET = 1.2


def ball_diameter_factor(diameter_cm: float | None) -> float:
    """Get the throw correction for a ball diameter (1.0 when unknown)."""
    if diameter_cm is None:
        return 1.0
    try:
        return BALL_DIAMETER_FACTORS[diameter_cm]
    except KeyError as e:
        raise InvalidMeasurementError(f"Unsupported ball diameter: {diameter_cm}cm") from e


def ball_weight_factor(weight_g: float | None) -> float:
    """Get the throw correction for a ball weight (1.0 when unknown)."""
    if weight_g is None:
        return 1.0
    try:
        return BALL_WEIGHT_FACTORS[weight_g]
    except KeyError as e:
        raise InvalidMeasurementError(f"Unsupported ball weight: {weight_g}g") from e


def correct_throw(
    distance_m: float,
    diameter_cm: float | None = None,
    weight_g: float | None = None,
) -> float:
    """Convert a throw distance to its reference-ball equivalent.

    Args:
        distance_m: Measured throw distance
        diameter_cm: Diameter of the ball used
        weight_g: Weight of the ball used

    Returns:
        Corrected distance, rounded to 1 decimal
    """
    factor = ball_diameter_factor(diameter_cm) * ball_weight_factor(weight_g)
    return round_half_up(distance_m * factor, 1)


def convert_50m_to_15m(time_50m: float, grade: Grade | None) -> float:
    """Estimate a 15m sprint time from a 50m time.

    Inverts ``t50 = 3 * t15 + offset(grade)``, where the offset accounts for
    the acceleration phase.

    Returns:
        Estimated 15m time in seconds, rounded to 2 decimals
    """
    offset = _DASH_ACCELERATION_OFFSET.get(grade, _DEFAULT_ACCELERATION_OFFSET)
    return round_half_up((time_50m - offset) / _DASH_SPEED_RATIO, 2)


def estimate_50m_time(time_15m: float) -> float:
    """Predict a 50m time from a 15m time, rounded to 1 decimal."""
    return round_half_up(time_15m * _DASH_SPEED_RATIO + _DEFAULT_ACCELERATION_OFFSET, 1)


class MeasurementNormalizer:
    """Brings equipment-dependent raw inputs onto the canonical scale."""

    def normalize(self, measurement: RawMeasurement) -> RawMeasurement:
        """Return a copy with a 15m dash time and a reference-ball throw.

        The equipment fields of the copy are reset, so normalizing an already
        normalized measurement changes nothing.

        Raises:
            InvalidMeasurementError: For an unsupported sprint distance or ball
        """
        dash = measurement.dash
        if measurement.dash_distance_m == LONG_DASH_DISTANCE_M:
            if dash is not None:
                dash = convert_50m_to_15m(dash, _parse_grade(measurement.grade))
                logger.debug("Converted 50m time %.2fs to 15m time %.2fs", measurement.dash, dash)
        elif measurement.dash_distance_m != CANONICAL_DASH_DISTANCE_M:
            raise InvalidMeasurementError(
                f"Unsupported sprint distance: {measurement.dash_distance_m}m"
            )

        throw = measurement.throw
        if throw is not None:
            throw = correct_throw(throw, measurement.ball_diameter_cm, measurement.ball_weight_g)

        return dataclasses.replace(
            measurement,
            dash=dash,
            throw=throw,
            dash_distance_m=CANONICAL_DASH_DISTANCE_M,
            ball_diameter_cm=None,
            ball_weight_g=None,
        )


def _parse_grade(value: str) -> Grade | None:
    try:
        return Grade.from_value(value)
    except ValueError:
        return None


def normalize_measurement(measurement: RawMeasurement) -> RawMeasurement:
    """Pure function form of ``MeasurementNormalizer.normalize``."""
    return MeasurementNormalizer().normalize(measurement)
