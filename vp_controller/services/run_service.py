"""Command-level orchestration: run, compare, list, set-baseline, rm."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from vp_common.errors import BaselineNotSet
from vp_controller.services.comparator import ComparisonReport, compare
from vp_controller.services.run_store import RunStore
from vp_runner.args import make_run_id
from vp_runner.executor import RunExecutor, RunOptions
from vp_runner.models import RunResult
from vp_runner.settings import HarnessSettings
from vp_runner.suites import SuiteRegistry

logger = logging.getLogger(__name__)

BASELINE_ALIAS = "baseline"

BASELINE_INITIALIZED = "initialized"
BASELINE_UPDATED = "updated"
BASELINE_UNCHANGED = "unchanged"
BASELINE_MISSING = "missing"


@dataclass
class RunOutcome:
    """Everything the UI needs to report after `run`."""

    run_id: str
    result: RunResult
    saved_path: Path
    comparison: Optional[ComparisonReport]
    baseline_status: str


@dataclass
class SuiteListing:
    suite: str
    baseline_id: str = ""
    runs: List[Tuple[str, RunResult]] = field(default_factory=list)
    readable: bool = True


class RunService:
    """Glue between the suite registry, executor, store and comparator."""

    def __init__(
        self,
        settings: HarnessSettings,
        *,
        store: RunStore | None = None,
        executor: RunExecutor | None = None,
        registry_loader: Callable[[], SuiteRegistry] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.store = store or RunStore(settings.results_root)
        self._executor = executor
        self._registry_loader = registry_loader or (
            lambda: SuiteRegistry.load(settings.suites_candidates)
        )
        self.clock = clock

    @property
    def executor(self) -> RunExecutor:
        if self._executor is None:
            self._executor = RunExecutor(self.settings)
        return self._executor

    def load_registry(self) -> SuiteRegistry:
        return self._registry_loader()

    def threshold(self, override: Optional[float]) -> float:
        return self.settings.threshold_percent if override is None else override

    def run(
        self,
        suite: str,
        *,
        label: str = "run",
        as_baseline: bool = False,
        threshold: Optional[float] = None,
        options: RunOptions | None = None,
    ) -> RunOutcome:
        cli_args = self.load_registry().resolve(suite)
        run_id = make_run_id(label, self.clock())
        if self.store.exists(suite, run_id):
            logger.warning(
                "Run %s already exists in suite %s and will be overwritten", run_id, suite
            )

        result = self.executor.execute(suite, run_id, label, cli_args, options)
        saved_path = self.store.write(suite, run_id, result)

        comparison = None
        base_id, had_baseline = self.store.get_baseline(suite)
        if had_baseline:
            lhs = self.store.read(suite, base_id)
            comparison = compare(
                BASELINE_ALIAS, lhs, run_id, result, self.threshold(threshold)
            )

        if as_baseline:
            self.store.set_baseline(suite, run_id)
            status = BASELINE_UPDATED if had_baseline else BASELINE_INITIALIZED
        else:
            status = BASELINE_UNCHANGED if had_baseline else BASELINE_MISSING

        return RunOutcome(
            run_id=run_id,
            result=result,
            saved_path=saved_path,
            comparison=comparison,
            baseline_status=status,
        )

    def resolve_run_id(self, suite: str, run_id: str) -> str:
        """Map the ``baseline`` alias to the suite's baseline run id."""
        if run_id != BASELINE_ALIAS:
            return run_id
        base_id, ok = self.store.get_baseline(suite)
        if not ok:
            raise BaselineNotSet(
                f"no baseline set for suite {suite}", context={"suite": suite}
            )
        return base_id

    def compare(
        self,
        suite: str,
        lhs_id: str,
        rhs_id: str,
        threshold: Optional[float] = None,
    ) -> ComparisonReport:
        lhs = self.store.read(suite, self.resolve_run_id(suite, lhs_id))
        rhs = self.store.read(suite, self.resolve_run_id(suite, rhs_id))
        return compare(
            lhs.metadata.run_id,
            lhs,
            rhs.metadata.run_id,
            rhs,
            self.threshold(threshold),
        )

    def list_runs(self, suite: Optional[str] = None) -> List[SuiteListing]:
        suites = [suite] if suite else self.store.suites()
        listings: List[SuiteListing] = []
        for name in suites:
            if not self.store.suite_dir(name).is_dir():
                listings.append(SuiteListing(suite=name, readable=False))
                continue
            base_id, _ = self.store.get_baseline(name)
            listings.append(
                SuiteListing(suite=name, baseline_id=base_id, runs=self.store.list(name))
            )
        return listings

    def set_baseline(self, suite: str, run_id: str) -> Path:
        return self.store.set_baseline(suite, run_id)

    def remove(self, suite: str, run_id: str) -> Path:
        return self.store.remove(suite, run_id)
