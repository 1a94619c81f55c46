"""Delta and regression computation between two run records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from vp_runner.models import RunResult

DEFAULT_THRESHOLD_PERCENT = 5.0

MetricGetter = Callable[[RunResult], float]

# (display name, accessor); order is the report order.
METRICS: Tuple[Tuple[str, MetricGetter], ...] = (
    ("total_ms", lambda r: r.timings_ms.total_ms),
    ("analysis_ms", lambda r: r.timings_ms.stage("video_analysis")),
    ("detection_ms", lambda r: r.timings_ms.stage("video_detection")),
    ("ns/op", lambda r: r.bench.ns_per_op),
    ("B/op", lambda r: r.bench.bytes_per_op),
    ("allocs/op", lambda r: r.bench.allocs_per_op),
)


@dataclass(frozen=True)
class MetricDelta:
    """One compared metric. ``percent`` is None when neither side measured it."""

    name: str
    lhs: float
    rhs: float
    delta: float
    percent: Optional[float]
    regression: bool

    @property
    def applicable(self) -> bool:
        return self.percent is not None


@dataclass(frozen=True)
class ComparisonReport:
    lhs_label: str
    rhs_label: str
    threshold_percent: float
    metrics: List[MetricDelta] = field(default_factory=list)

    @property
    def regressions(self) -> List[MetricDelta]:
        return [m for m in self.metrics if m.regression]

    @property
    def has_regressions(self) -> bool:
        return any(m.regression for m in self.metrics)

    def metric(self, name: str) -> MetricDelta:
        for entry in self.metrics:
            if entry.name == name:
                return entry
        raise KeyError(name)


def compare_values(name: str, lhs: float, rhs: float, threshold_percent: float) -> MetricDelta:
    delta = rhs - lhs
    if lhs == 0 and rhs == 0:
        return MetricDelta(name, lhs, rhs, delta, None, False)
    percent = (delta / lhs) * 100.0 if lhs != 0 else 0.0
    return MetricDelta(name, lhs, rhs, delta, percent, percent > threshold_percent)


def compare(
    lhs_label: str,
    lhs: RunResult,
    rhs_label: str,
    rhs: RunResult,
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
) -> ComparisonReport:
    """Compare ``rhs`` against ``lhs``; increases above the threshold are regressions."""
    if threshold_percent < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold_percent}")
    return ComparisonReport(
        lhs_label=lhs_label,
        rhs_label=rhs_label,
        threshold_percent=threshold_percent,
        metrics=[
            compare_values(name, getter(lhs), getter(rhs), threshold_percent)
            for name, getter in METRICS
        ],
    )
