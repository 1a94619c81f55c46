"""Public API surface for vp_controller."""

from vp_controller.services.comparator import (
    DEFAULT_THRESHOLD_PERCENT,
    ComparisonReport,
    MetricDelta,
    compare,
)
from vp_controller.services.run_service import (
    BASELINE_ALIAS,
    BASELINE_INITIALIZED,
    BASELINE_MISSING,
    BASELINE_UNCHANGED,
    BASELINE_UPDATED,
    RunOutcome,
    RunService,
    SuiteListing,
)
from vp_controller.services.run_store import RunStore

__all__ = [
    "BASELINE_ALIAS",
    "BASELINE_INITIALIZED",
    "BASELINE_MISSING",
    "BASELINE_UNCHANGED",
    "BASELINE_UPDATED",
    "ComparisonReport",
    "DEFAULT_THRESHOLD_PERCENT",
    "MetricDelta",
    "RunOutcome",
    "RunService",
    "RunStore",
    "SuiteListing",
    "compare",
]
