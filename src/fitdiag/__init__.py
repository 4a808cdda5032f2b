"""Children's fitness diagnosis and population analytics."""

from fitdiag.analytics.service import AnalyticsService
from fitdiag.diagnosis.engine import DiagnosisEngine, run_diagnosis

__version__ = "0.1.0"

__all__ = ["AnalyticsService", "DiagnosisEngine", "run_diagnosis", "__version__"]
