"""Runner facade for vld-perf: suites, benchmark parsing and run execution."""

from vp_runner.api import (
    BenchStats,
    HarnessSettings,
    RunExecutor,
    RunMetadata,
    RunOptions,
    RunResult,
    SuiteRegistry,
    TimingReport,
)

__all__ = [
    "BenchStats",
    "HarnessSettings",
    "RunExecutor",
    "RunMetadata",
    "RunOptions",
    "RunResult",
    "SuiteRegistry",
    "TimingReport",
]
