"""Analytics entry point: validates a request, fetches records, dispatches.

Fetching is the only I/O. Independent reads are issued concurrently and
joined before any aggregation runs; every aggregation is pure.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from fitdiag.analytics.benchmark import compute_benchmarks
from fitdiag.analytics.cohort import analyze_cohort
from fitdiag.analytics.correlation import analyze_correlation, scatter_regression
from fitdiag.analytics.repository import RecordFilter, RecordSource
from fitdiag.analytics.summary import analyze_weakness, compare_stores, validate_types
from fitdiag.analytics.trend import analyze_trend
from fitdiag.core.config import Settings, get_settings
from fitdiag.core.exceptions import AnalyticsProcessingError, InvalidQueryError
from fitdiag.core.logging import get_logger
from fitdiag.core.types import (
    AnalyticsType,
    BodyMetric,
    MetricKey,
    Period,
    normalize_label,
    parse_datetime,
)

logger = get_logger(__name__)


class AnalyticsQuery(BaseModel):
    """Parameters of an analytics request.

    ``"all"`` or an empty value for grade, gender or store means no filter.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: AnalyticsType
    grade: str | None = None
    gender: str | None = None
    store_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    period: Period = Period.MONTH
    metric: MetricKey = MetricKey.JUMP
    body_metric: BodyMetric = BodyMetric.HEIGHT

    @field_validator("grade", "gender", "store_id", mode="before")
    @classmethod
    def _all_means_unfiltered(cls, value: Any) -> str | None:
        if value is None or str(value).strip().lower() in ("", "all"):
            return None
        return str(value)

    @field_validator("grade", "gender")
    @classmethod
    def _normalize_label(cls, value: str | None) -> str | None:
        return None if value is None else normalize_label(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime | None:
        return parse_datetime(value)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> AnalyticsQuery:
        """Build a query from raw request parameters.

        Raises:
            InvalidQueryError: If the type or any parameter is not recognized
        """
        cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
        try:
            return cls.model_validate(cleaned)
        except ValidationError as e:
            if any(err["loc"] and err["loc"][0] == "type" for err in e.errors()):
                raise InvalidQueryError("Invalid type parameter") from e
            raise InvalidQueryError(f"Invalid query parameters: {e}") from e


@dataclass
class AnalyticsResult:
    """Payload of one analytics request."""

    type: AnalyticsType
    data: Any


class AnalyticsService:
    """Runs population analytics over records from a ``RecordSource``.

    Holds no state between calls; every request is computed from a fresh
    fetch.
    """

    def __init__(self, source: RecordSource, settings: Settings | None = None) -> None:
        """Initialize the service.

        Args:
            source: Persistence collaborator supplying the records
            settings: Package settings (cached defaults if None)
        """
        self.source = source
        self.settings = settings or get_settings()
        self._handlers: dict[AnalyticsType, Callable[[AnalyticsQuery], Any]] = {
            AnalyticsType.BENCHMARK: self._benchmark,
            AnalyticsType.CORRELATION: self._correlation,
            AnalyticsType.STORE_COMPARISON: self._store_comparison,
            AnalyticsType.TREND: self._trend,
            AnalyticsType.WEAKNESS: self._weakness,
            AnalyticsType.SCATTER: self._scatter,
            AnalyticsType.TYPE_VALIDATION: self._type_validation,
            AnalyticsType.COHORT: self._cohort,
        }

    def run(self, query: AnalyticsQuery | Mapping[str, Any]) -> AnalyticsResult:
        """Validate and execute an analytics request.

        Args:
            query: Parsed query, or raw request parameters

        Returns:
            Result payload for the requested type

        Raises:
            InvalidQueryError: Before any fetch, if the request is malformed
            AnalyticsProcessingError: If fetching or processing fails; carries
                the original error message in ``details``
        """
        if not isinstance(query, AnalyticsQuery):
            query = AnalyticsQuery.from_params(query)

        logger.info(
            "Running %s analytics (grade=%s gender=%s store=%s)",
            query.type.value,
            query.grade or "all",
            query.gender or "all",
            query.store_id or "all",
        )

        try:
            data = self._handlers[query.type](query)
        except Exception as e:
            logger.exception("Analytics %s failed", query.type.value)
            raise AnalyticsProcessingError(details=str(e)) from e

        return AnalyticsResult(type=query.type, data=data)

    def _gather(self, *calls: Callable[[], Any]) -> list[Any]:
        """Run independent fetches concurrently and wait for all of them."""
        if len(calls) == 1:
            return [calls[0]()]

        workers = min(len(calls), self.settings.analytics.fetch_workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(call) for call in calls]
            return [f.result() for f in futures]

    def _measurements(self, filters: RecordFilter) -> list:
        return [m for m in self.source.fetch_measurements(filters) if filters.matches(m)]

    def _results(self, filters: RecordFilter) -> list:
        return [r for r in self.source.fetch_results(filters) if filters.matches_result(r)]

    def _benchmark(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(
            grade=q.grade,
            gender=q.gender,
            store_id=q.store_id,
            start=q.start_date,
            end=q.end_date,
        )
        return compute_benchmarks(self._measurements(filters))

    def _correlation(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(
            grade=q.grade, gender=q.gender, store_id=q.store_id, require_doublejump=True
        )
        cfg = self.settings.analytics
        return analyze_correlation(
            self._measurements(filters),
            positive_threshold=cfg.strong_positive_threshold,
            negative_threshold=cfg.negative_threshold,
        )

    def _store_comparison(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender, start=q.start_date, end=q.end_date)
        stores, measurements = self._gather(
            self.source.fetch_stores,
            lambda: self._measurements(filters),
        )
        return compare_stores(stores, measurements)

    def _trend(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender, store_id=q.store_id)
        return analyze_trend(self._measurements(filters), q.period)

    def _weakness(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender, store_id=q.store_id)
        return analyze_weakness(self._results(filters))

    def _scatter(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender)
        return scatter_regression(self._measurements(filters), q.metric, q.body_metric)

    def _type_validation(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender, require_doublejump=True)
        return validate_types(self._results(filters))

    def _cohort(self, q: AnalyticsQuery) -> Any:
        filters = RecordFilter(grade=q.grade, gender=q.gender)
        subjects = [s for s in self.source.fetch_subjects(filters) if filters.matches_subject(s)]
        return analyze_cohort(subjects, limit=self.settings.analytics.cohort_limit)


def run_analytics(source: RecordSource, params: Mapping[str, Any]) -> AnalyticsResult:
    """Run one analytics request against a record source."""
    return AnalyticsService(source).run(params)
