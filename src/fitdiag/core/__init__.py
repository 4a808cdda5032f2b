"""Core infrastructure: config, types, exceptions, and logging."""

from fitdiag.core.config import Settings, get_settings
from fitdiag.core.exceptions import (
    AnalyticsProcessingError,
    FitDiagError,
    InvalidMeasurementError,
    InvalidQueryError,
    MissingReferenceError,
)
from fitdiag.core.logging import get_logger, setup_logging
from fitdiag.core.types import (
    AgeBracket,
    AnalyticsType,
    BodyMetric,
    Gender,
    Grade,
    MetricKey,
    Period,
    RawMeasurement,
    ResultRecord,
    ScoreVector,
    SkillClass,
    Store,
    Subject,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "MetricKey",
    "Grade",
    "Gender",
    "AgeBracket",
    "SkillClass",
    "Period",
    "BodyMetric",
    "AnalyticsType",
    "RawMeasurement",
    "ResultRecord",
    "ScoreVector",
    "Store",
    "Subject",
    # Exceptions
    "FitDiagError",
    "MissingReferenceError",
    "InvalidMeasurementError",
    "InvalidQueryError",
    "AnalyticsProcessingError",
    # Logging
    "setup_logging",
    "get_logger",
]
