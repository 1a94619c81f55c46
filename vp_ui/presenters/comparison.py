"""Presenter for comparison reports."""

from __future__ import annotations

from vp_controller.api import ComparisonReport, MetricDelta
from vp_ui.ui.adapters import UIAdapter


def format_header(report: ComparisonReport) -> str:
    return (
        f"Compare {report.lhs_label} -> {report.rhs_label} "
        f"(threshold {report.threshold_percent:.1f}%)"
    )


def format_metric(metric: MetricDelta) -> str:
    if not metric.applicable:
        return f"- {metric.name:<20}: n/a"
    flag = "  REGRESSION" if metric.regression else ""
    return (
        f"- {metric.name:<20}: {metric.lhs:.0f} -> {metric.rhs:.0f}  "
        f"({metric.percent:+.1f}%){flag}"
    )


def render_comparison(ui: UIAdapter, report: ComparisonReport) -> None:
    ui.show_line("")
    ui.show_line(format_header(report))
    for metric in report.metrics:
        ui.show_line(format_metric(metric), style="regression" if metric.regression else None)
    regressions = report.regressions
    if regressions:
        names = ", ".join(m.name for m in regressions)
        ui.show_warning(
            f"{len(regressions)} metric(s) regressed beyond "
            f"{report.threshold_percent:.1f}%: {names}"
        )
