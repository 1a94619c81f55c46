"""Stable runner API surface."""

from vp_runner.args import make_run_id, sanitize_label
from vp_runner.bench_parser import BenchParser, parse_bench_output
from vp_runner.executor import RunExecutor, RunOptions
from vp_runner.metadata import (
    CommandMetadataProvider,
    MetadataProvider,
    StaticMetadataProvider,
)
from vp_runner.models import BenchStats, RunMetadata, RunResult, TimingReport
from vp_runner.process import CapturedOutput, ProcessLauncher
from vp_runner.settings import DetectorFlags, HarnessSettings
from vp_runner.stop_token import StopToken
from vp_runner.suites import SuiteRegistry

__all__ = [
    "BenchParser",
    "BenchStats",
    "CapturedOutput",
    "CommandMetadataProvider",
    "DetectorFlags",
    "HarnessSettings",
    "MetadataProvider",
    "ProcessLauncher",
    "RunExecutor",
    "RunMetadata",
    "RunOptions",
    "RunResult",
    "StaticMetadataProvider",
    "StopToken",
    "SuiteRegistry",
    "TimingReport",
    "make_run_id",
    "parse_bench_output",
    "sanitize_label",
]
