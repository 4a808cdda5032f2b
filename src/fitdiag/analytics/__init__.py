"""Population analytics: benchmarks, correlation, trends, and cohort growth.

Every aggregator is pure logic with NO I/O; only ``AnalyticsService`` talks
to a record source.
"""

from fitdiag.analytics.benchmark import compute_benchmarks
from fitdiag.analytics.cohort import analyze_cohort
from fitdiag.analytics.correlation import analyze_correlation, scatter_regression
from fitdiag.analytics.repository import InMemoryRecordSource, RecordFilter, RecordSource
from fitdiag.analytics.service import AnalyticsQuery, AnalyticsResult, AnalyticsService
from fitdiag.analytics.stats import pearson
from fitdiag.analytics.summary import analyze_weakness, compare_stores, validate_types
from fitdiag.analytics.trend import analyze_trend

__all__ = [
    "AnalyticsService",
    "AnalyticsQuery",
    "AnalyticsResult",
    "RecordSource",
    "RecordFilter",
    "InMemoryRecordSource",
    "compute_benchmarks",
    "analyze_correlation",
    "pearson",
    "scatter_regression",
    "analyze_trend",
    "analyze_cohort",
    "compare_stores",
    "analyze_weakness",
    "validate_types",
]
