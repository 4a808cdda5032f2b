"""Measurement normalization and ability scoring.

This package contains NO I/O operations.
"""

from fitdiag.scoring.normalizer import MeasurementNormalizer, correct_throw, convert_50m_to_15m
from fitdiag.scoring.reference import ReferenceBaseline, ReferenceTable, default_reference_table
from fitdiag.scoring.scorer import DeviationScorer, deviation, scale_to_ten

__all__ = [
    "MeasurementNormalizer",
    "correct_throw",
    "convert_50m_to_15m",
    "ReferenceBaseline",
    "ReferenceTable",
    "default_reference_table",
    "DeviationScorer",
    "deviation",
    "scale_to_ten",
]
