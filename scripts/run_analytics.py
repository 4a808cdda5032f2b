#!/usr/bin/env python3
"""Run a diagnosis or a population analytics request from JSON exports.

Diagnosis reads one measurement record; analytics reads an export with
``measurements``, ``results``, ``stores`` and ``subjects`` lists. The result
is printed as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from fitdiag.analytics.repository import InMemoryRecordSource
from fitdiag.analytics.service import AnalyticsService
from fitdiag.core.config import get_settings
from fitdiag.core.exceptions import FitDiagError
from fitdiag.core.logging import get_logger, setup_logging
from fitdiag.core.serialization import to_jsonable
from fitdiag.core.types import AnalyticsType, RawMeasurement
from fitdiag.diagnosis.engine import DiagnosisEngine
from fitdiag.diagnosis.training import TrainingItem

logger = get_logger(__name__)


def load_json(path: Path) -> Any:
    """Load a JSON document from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def run_diagnose(args: argparse.Namespace) -> Any:
    """Diagnose the measurement in ``args.measurement``."""
    measurement = RawMeasurement.from_dict(load_json(args.measurement))

    catalog: list[TrainingItem] = []
    if args.trainings and args.trainings.exists():
        catalog = [TrainingItem.from_dict(item) for item in load_json(args.trainings)]
        logger.info("Loaded %d training items", len(catalog))

    return DiagnosisEngine().diagnose(measurement, catalog)


def run_analytics(args: argparse.Namespace) -> Any:
    """Run the analytics request described by ``args`` over an export."""
    source = InMemoryRecordSource.from_json(args.export)
    logger.info(
        "Loaded %d measurements, %d results, %d stores, %d subjects",
        len(source.measurements),
        len(source.results),
        len(source.stores),
        len(source.subjects),
    )

    params = {
        "type": args.type,
        "grade": args.grade,
        "gender": args.gender,
        "store_id": args.store,
        "start_date": args.start,
        "end_date": args.end,
        "period": args.period,
        "metric": args.metric,
        "body_metric": args.body_metric,
    }
    return AnalyticsService(source).run(params).data


def main() -> int:
    """Run the command line interface."""
    parser = argparse.ArgumentParser(description="Fitness diagnosis and analytics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    diagnose = subparsers.add_parser("diagnose", help="Diagnose one measurement")
    diagnose.add_argument("measurement", type=Path, help="Path to measurement JSON")
    diagnose.add_argument(
        "--trainings",
        "-t",
        type=Path,
        help="Path to training catalog JSON",
    )
    diagnose.set_defaults(handler=run_diagnose)

    analytics = subparsers.add_parser("analytics", help="Run population analytics")
    analytics.add_argument("export", type=Path, help="Path to records export JSON")
    analytics.add_argument(
        "--type",
        required=True,
        choices=[t.value for t in AnalyticsType],
        help="Analytics type",
    )
    analytics.add_argument("--grade", help="Grade filter (default: all)")
    analytics.add_argument("--gender", help="Gender filter (default: all)")
    analytics.add_argument("--store", help="Store filter (default: all)")
    analytics.add_argument("--start", help="Start of date range (ISO 8601)")
    analytics.add_argument("--end", help="End of date range (ISO 8601)")
    analytics.add_argument("--period", help="Trend bucket: month, quarter or year")
    analytics.add_argument("--metric", help="Scatter metric (default: jump)")
    analytics.add_argument("--body-metric", help="Scatter body metric (default: height)")
    analytics.set_defaults(handler=run_analytics)

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    try:
        result = args.handler(args)
    except FitDiagError as e:
        logger.error("%s", e)
        return 1

    print(json.dumps(to_jsonable(result), indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
