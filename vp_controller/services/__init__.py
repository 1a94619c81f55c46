"""Controller services: run storage, comparison and command orchestration."""

from vp_controller.services.comparator import ComparisonReport, MetricDelta, compare
from vp_controller.services.run_service import RunOutcome, RunService, SuiteListing
from vp_controller.services.run_store import RunStore

__all__ = [
    "ComparisonReport",
    "MetricDelta",
    "RunOutcome",
    "RunService",
    "RunStore",
    "SuiteListing",
    "compare",
]
