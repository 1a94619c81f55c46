"""Presenters for run outcomes and run listings."""

from __future__ import annotations

from typing import List

from vp_controller.api import (
    BASELINE_INITIALIZED,
    BASELINE_MISSING,
    BASELINE_UPDATED,
    RunOutcome,
    SuiteListing,
)
from vp_runner.models import RunResult
from vp_ui.presenters.comparison import render_comparison
from vp_ui.ui.adapters import UIAdapter
from vp_ui.ui.models import TableModel


def build_run_summary_table(result: RunResult) -> TableModel:
    rows: List[List[str]] = [
        ["Run ID", result.metadata.run_id],
        ["Suite", result.metadata.suite],
        ["Commit", result.metadata.commit_sha or "-"],
        ["Branch", result.metadata.branch or "-"],
        ["Detections", str(result.detections)],
        ["Total", f"{result.timings_ms.total_ms:.0f} ms"],
    ]
    for stage in sorted(result.timings_ms.stages_ms):
        rows.append([f"Stage {stage}", f"{result.timings_ms.stages_ms[stage]:.0f} ms"])
    rows.extend(
        [
            ["ns/op", f"{result.bench.ns_per_op:.0f}"],
            ["B/op", f"{result.bench.bytes_per_op:.0f}"],
            ["allocs/op", f"{result.bench.allocs_per_op:.0f}"],
        ]
    )
    return TableModel(title="Run Summary", columns=["Field", "Value"], rows=rows)


def render_run_outcome(ui: UIAdapter, outcome: RunOutcome) -> None:
    ui.show_table(build_run_summary_table(outcome.result))
    ui.show_success(f"Saved: {outcome.saved_path}")
    if outcome.comparison is not None:
        render_comparison(ui, outcome.comparison)

    if outcome.baseline_status == BASELINE_INITIALIZED:
        ui.show_success(f"Baseline initialized: {outcome.run_id}")
    elif outcome.baseline_status == BASELINE_UPDATED:
        ui.show_success(f"Baseline set to {outcome.run_id}")
    elif outcome.baseline_status == BASELINE_MISSING:
        ui.show_info("No baseline set; use set-baseline or --as-baseline to define one.")


def format_run_line(run_id: str, result: RunResult, baseline_id: str = "") -> str:
    mark = " *baseline" if baseline_id and run_id == baseline_id else ""
    return (
        f"{run_id}{mark}  total={result.timings_ms.total_ms:.0f}ms  "
        f"ns/op={result.bench.ns_per_op:.0f}  allocs/op={result.bench.allocs_per_op:.0f}"
    )


def render_listings(ui: UIAdapter, listings: List[SuiteListing], with_headers: bool) -> None:
    for listing in listings:
        if not listing.readable:
            ui.show_warning(f"cannot read suite {listing.suite}: no such suite directory")
            continue
        if with_headers:
            ui.show_rule(listing.suite)
        for run_id, result in listing.runs:
            ui.show_line(format_run_line(run_id, result, listing.baseline_id))
