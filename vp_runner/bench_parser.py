"""Extract per-operation stats from benchmark facility output."""

from __future__ import annotations

import logging
import re

from vp_runner.models import BenchStats

logger = logging.getLogger(__name__)

_NUMBER = r"([0-9][0-9.eE+\-]*)"


def _compile(benchmark_name: str | None) -> re.Pattern[str]:
    name = re.escape(benchmark_name) if benchmark_name else r"Benchmark"
    return re.compile(
        rf"^{name}\S*\s+\d+\s+{_NUMBER}\s+ns/op"
        rf"(?:\s+{_NUMBER}\s+B/op)?"
        rf"(?:\s+{_NUMBER}\s+allocs/op)?\s*$",
        re.MULTILINE,
    )


def _to_float(raw: str | None) -> float:
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        return 0.0


class BenchParser:
    """Pick the last summary line of a benchmark and turn it into BenchStats."""

    def __init__(self, benchmark_name: str | None = None) -> None:
        self.benchmark_name = benchmark_name
        self._pattern = _compile(benchmark_name)

    def parse(self, raw_text: str) -> BenchStats:
        matches = self._pattern.findall(raw_text)
        if not matches:
            logger.debug(
                "No benchmark summary line found for %s",
                self.benchmark_name or "any benchmark",
            )
            return BenchStats()
        ns, bytes_per_op, allocs = matches[-1]
        return BenchStats(
            ns_per_op=_to_float(ns),
            bytes_per_op=_to_float(bytes_per_op or None),
            allocs_per_op=_to_float(allocs or None),
        )


def parse_bench_output(raw_text: str, benchmark_name: str | None = None) -> BenchStats:
    """Parse benchmark output with a one-off parser."""
    return BenchParser(benchmark_name).parse(raw_text)
