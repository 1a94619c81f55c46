"""Tests for run/compare/list orchestration with a stand-in executor."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List

import pytest

from helpers.fakes import FakeExecutor, TickingClock
from vp_common.errors import BaselineNotSet, RunNotFound, SuiteNotFound
from vp_controller.services.run_service import (
    BASELINE_ALIAS,
    BASELINE_INITIALIZED,
    BASELINE_MISSING,
    BASELINE_UNCHANGED,
    BASELINE_UPDATED,
    RunService,
)
from vp_runner.settings import HarnessSettings
from vp_runner.suites import SuiteRegistry


pytestmark = pytest.mark.unit_controller

SUITES = {"full": "-i sample.mp4 -a -s 0.4 -o out", "smoke": "-i short.mp4 -o out"}


def _service(tmp_path: Path, totals: List[float], step=timedelta(minutes=1)):
    executor = FakeExecutor(totals)
    service = RunService(
        HarnessSettings(results_root=tmp_path / "perf-results"),
        executor=executor,
        registry_loader=lambda: SuiteRegistry(SUITES),
        clock=TickingClock(datetime(2024, 1, 1, 12, 0, 0), step),
    )
    return service, executor


def test_first_run_without_baseline(tmp_path: Path) -> None:
    service, executor = _service(tmp_path, [1000.0])

    outcome = service.run("full", label="first try")

    assert outcome.run_id == "20240101-120000_first-try"
    assert outcome.baseline_status == BASELINE_MISSING
    assert outcome.comparison is None
    assert outcome.saved_path.is_file()
    assert executor.calls[0][:4] == ("full", outcome.run_id, "first try", SUITES["full"])
    assert service.store.get_baseline("full") == ("", False)


def test_baseline_lifecycle(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1000.0, 1100.0, 1020.0])

    first = service.run("full", label="a", as_baseline=True)
    assert first.baseline_status == BASELINE_INITIALIZED
    assert first.comparison is None

    second = service.run("full", label="b")
    assert second.baseline_status == BASELINE_UNCHANGED
    assert second.comparison is not None
    assert second.comparison.lhs_label == BASELINE_ALIAS
    assert second.comparison.rhs_label == second.run_id
    assert second.comparison.metric("total_ms").regression
    assert service.store.get_baseline("full") == (first.run_id, True)

    third = service.run("full", label="c", as_baseline=True, threshold=50.0)
    assert third.baseline_status == BASELINE_UPDATED
    assert third.comparison.threshold_percent == 50.0
    assert not third.comparison.has_regressions
    assert service.store.get_baseline("full") == (third.run_id, True)


def test_unknown_suite_runs_nothing(tmp_path: Path) -> None:
    service, executor = _service(tmp_path, [1.0])
    with pytest.raises(SuiteNotFound, match="suite not found: nightly"):
        service.run("nightly")
    assert executor.calls == []


def test_same_second_rerun_overwrites_with_warning(tmp_path: Path, caplog) -> None:
    service, _ = _service(tmp_path, [1.0, 2.0], step=timedelta(0))
    service.run("full")
    with caplog.at_level(logging.WARNING, logger="vp_controller.services.run_service"):
        second = service.run("full")

    assert "already exists" in caplog.text
    assert service.store.run_ids("full") == [second.run_id]
    assert service.store.read("full", second.run_id).timings_ms.total_ms == 2.0


def test_dangling_baseline_fails_after_saving(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1.0])
    service.set_baseline("full", "20000101-000000_gone")
    with pytest.raises(RunNotFound):
        service.run("full")
    assert len(service.store.run_ids("full")) == 1


def test_compare_resolves_baseline_alias(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1000.0, 900.0])
    first = service.run("full", as_baseline=True)
    second = service.run("full")

    report = service.compare("full", BASELINE_ALIAS, second.run_id)
    assert report.lhs_label == first.run_id
    assert report.rhs_label == second.run_id
    assert report.metric("total_ms").delta == -100.0
    assert report.threshold_percent == 5.0

    flipped = service.compare("full", second.run_id, BASELINE_ALIAS, threshold=1.0)
    assert flipped.metric("total_ms").regression


def test_compare_without_baseline(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1.0])
    run = service.run("full")
    with pytest.raises(BaselineNotSet, match="no baseline set for suite full"):
        service.compare("full", BASELINE_ALIAS, run.run_id)


def test_compare_missing_run(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1.0])
    run = service.run("full")
    with pytest.raises(RunNotFound):
        service.compare("full", run.run_id, "nope")


def test_list_runs(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1.0, 2.0, 3.0])
    a = service.run("full", as_baseline=True)
    b = service.run("full")
    c = service.run("smoke")

    listings = service.list_runs()
    assert [entry.suite for entry in listings] == ["full", "smoke"]
    assert listings[0].baseline_id == a.run_id
    assert [run_id for run_id, _ in listings[0].runs] == [a.run_id, b.run_id]
    assert listings[1].baseline_id == ""
    assert [run_id for run_id, _ in listings[1].runs] == [c.run_id]

    single = service.list_runs("smoke")
    assert len(single) == 1 and single[0].readable


def test_list_missing_suite_is_unreadable(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [])
    assert service.list_runs() == []
    (listing,) = service.list_runs("ghost")
    assert not listing.readable
    assert listing.runs == []


def test_remove_keeps_baseline_pointer(tmp_path: Path) -> None:
    service, _ = _service(tmp_path, [1.0])
    run = service.run("full", as_baseline=True)
    service.remove("full", run.run_id)
    assert service.store.run_ids("full") == []
    assert service.store.get_baseline("full") == (run.run_id, True)


def test_threshold_falls_back_to_settings(tmp_path: Path) -> None:
    service = RunService(HarnessSettings(results_root=tmp_path, threshold_percent=2.5))
    assert service.threshold(None) == 2.5
    assert service.threshold(0.0) == 0.0
