"""Descriptive statistics, Pearson correlation, and least-squares regression.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from fitdiag.core.types import MetricKey, RawMeasurement


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def median(values: Sequence[float]) -> float:
    """Median (average of the middle pair for even counts); 0 when empty."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))


def population_std(values: Sequence[float]) -> float:
    """Standard deviation dividing by N; 0 when empty."""
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=np.float64), ddof=0))


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation coefficient.

    Returns:
        r in [-1, 1]; 0 when the lengths differ, the input is empty, or either
        side has zero variance
    """
    if len(x) != len(y) or len(x) == 0:
        return 0.0

    xa = np.asarray(x, dtype=np.float64)
    ya = np.asarray(y, dtype=np.float64)
    dx = xa - xa.mean()
    dy = ya - ya.mean()

    denom = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if denom == 0:
        return 0.0
    return float(np.sum(dx * dy) / denom)


def linear_regression(x: Sequence[float], y: Sequence[float]) -> tuple[float, float]:
    """Ordinary least squares fit of ``y = slope * x + intercept``.

    Returns:
        (slope, intercept); slope is 0 when x has no variance
    """
    if len(x) == 0:
        return 0.0, 0.0

    xa = np.asarray(x, dtype=np.float64)
    ya = np.asarray(y, dtype=np.float64)
    mean_x = xa.mean()
    mean_y = ya.mean()
    dx = xa - mean_x

    denom = np.sum(dx * dx)
    slope = float(np.sum(dx * (ya - mean_y)) / denom) if denom != 0 else 0.0
    intercept = float(mean_y - slope * mean_x)
    return slope, intercept


def metric_values(records: Iterable[RawMeasurement], metric: MetricKey) -> list[float]:
    """Collect the non-null values of a metric."""
    values = []
    for record in records:
        value = record.value(metric)
        if value is not None:
            values.append(value)
    return values
