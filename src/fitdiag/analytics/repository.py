"""Record sources consumed by the analytics service.

The persistence layer is an external collaborator; it only has to satisfy
the ``RecordSource`` protocol. ``InMemoryRecordSource`` serves records that
were already loaded, e.g. from a JSON export.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from fitdiag.core.types import (
    RawMeasurement,
    ResultRecord,
    Store,
    Subject,
    normalize_label,
    to_naive_utc,
)


@dataclass(frozen=True, slots=True)
class RecordFilter:
    """Subset of records an analytics request applies to.

    None means "no restriction" for every field.
    """

    grade: str | None = None
    gender: str | None = None
    store_id: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    require_doublejump: bool = False

    def _matches_common(
        self,
        grade: str,
        gender: str,
        store_id: str | None,
        measured_at: datetime | None,
        doublejump: float | None,
    ) -> bool:
        if self.grade is not None and normalize_label(grade) != self.grade:
            return False
        if self.gender is not None and normalize_label(gender) != self.gender:
            return False
        if self.store_id is not None and store_id != self.store_id:
            return False
        if self.require_doublejump and doublejump is None:
            return False
        if self.start is not None or self.end is not None:
            if measured_at is None:
                return False
            ts = to_naive_utc(measured_at)
            if self.start is not None and ts < to_naive_utc(self.start):
                return False
            if self.end is not None and ts > to_naive_utc(self.end):
                return False
        return True

    def matches(self, record: RawMeasurement) -> bool:
        return self._matches_common(
            record.grade, record.gender, record.store_id, record.measured_at, record.doublejump
        )

    def matches_result(self, result: ResultRecord) -> bool:
        return self._matches_common(
            result.grade, result.gender, result.store_id, result.measured_at, result.doublejump
        )

    def matches_subject(self, subject: Subject) -> bool:
        if self.grade is not None and normalize_label(subject.grade) != self.grade:
            return False
        if self.gender is not None and normalize_label(subject.gender) != self.gender:
            return False
        return True


class RecordSource(Protocol):
    """Read access to stored records.

    Implementations may use the filter to narrow their query; the service
    re-applies it either way.
    """

    def fetch_measurements(self, filters: RecordFilter) -> list[RawMeasurement]: ...

    def fetch_results(self, filters: RecordFilter) -> list[ResultRecord]: ...

    def fetch_stores(self) -> list[Store]: ...

    def fetch_subjects(self, filters: RecordFilter) -> list[Subject]: ...


class InMemoryRecordSource:
    """Record source backed by lists held in memory."""

    def __init__(
        self,
        measurements: Sequence[RawMeasurement] = (),
        results: Sequence[ResultRecord] = (),
        stores: Sequence[Store] = (),
        subjects: Sequence[Subject] = (),
    ) -> None:
        self.measurements = list(measurements)
        self.results = list(results)
        self.stores = list(stores)
        self.subjects = list(subjects)

    def fetch_measurements(self, filters: RecordFilter) -> list[RawMeasurement]:
        return [m for m in self.measurements if filters.matches(m)]

    def fetch_results(self, filters: RecordFilter) -> list[ResultRecord]:
        return [r for r in self.results if filters.matches_result(r)]

    def fetch_stores(self) -> list[Store]:
        return list(self.stores)

    def fetch_subjects(self, filters: RecordFilter) -> list[Subject]:
        return [s for s in self.subjects if filters.matches_subject(s)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InMemoryRecordSource:
        """Build a source from a mapping with optional ``measurements``,
        ``results``, ``stores`` and ``subjects`` lists of records."""
        return cls(
            measurements=[RawMeasurement.from_dict(m) for m in data.get("measurements", [])],
            results=[ResultRecord.from_dict(r) for r in data.get("results", [])],
            stores=[Store.from_dict(s) for s in data.get("stores", [])],
            subjects=[Subject.from_dict(s) for s in data.get("subjects", [])],
        )

    @classmethod
    def from_json(cls, path: Path) -> InMemoryRecordSource:
        """Load a source from a JSON export."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
