"""Tests for benchmark output parsing."""

from __future__ import annotations

import pytest

from vp_runner.bench_parser import BenchParser, parse_bench_output
from vp_runner.models import BenchStats
from vp_runner.settings import DEFAULT_BENCH_NAME


pytestmark = pytest.mark.unit_runner

GO_OUTPUT = f"""goos: linux
goarch: amd64
pkg: github.com/Krzysztofz01/video-lightning-detector
cpu: AMD Ryzen 7 5800X 8-Core Processor
{DEFAULT_BENCH_NAME}
{DEFAULT_BENCH_NAME}-16   \t       1\t1523456789 ns/op\t 98765432 B/op\t  123456 allocs/op
PASS
ok  \tgithub.com/Krzysztofz01/video-lightning-detector\t1.612s
"""


def test_single_line_with_all_groups() -> None:
    stats = parse_bench_output("BenchmarkX 100 123.0 ns/op 45 B/op 2 allocs/op\n")
    assert stats == BenchStats(ns_per_op=123.0, bytes_per_op=45.0, allocs_per_op=2.0)


def test_last_matching_line_wins() -> None:
    text = (
        "BenchmarkX 10 999.0 ns/op 1 B/op 1 allocs/op\n"
        "some noise\n"
        "BenchmarkX 100 123.0 ns/op 45 B/op 2 allocs/op\n"
    )
    stats = parse_bench_output(text)
    assert stats.ns_per_op == 123.0
    assert stats.bytes_per_op == 45.0
    assert stats.allocs_per_op == 2.0


def test_no_match_returns_zero_stats() -> None:
    assert parse_bench_output("FAIL\nno benchmarks here\n") == BenchStats()
    assert parse_bench_output("") == BenchStats()


def test_missing_optional_groups_default_to_zero() -> None:
    stats = parse_bench_output("BenchmarkX-8 5 1.5e+06 ns/op\n")
    assert stats == BenchStats(ns_per_op=1.5e6, bytes_per_op=0.0, allocs_per_op=0.0)


def test_unparsable_number_is_zero() -> None:
    stats = parse_bench_output("BenchmarkX 5 1.2.3 ns/op 45 B/op 2 allocs/op\n")
    assert stats.ns_per_op == 0.0
    assert stats.bytes_per_op == 45.0


def test_named_parser_reads_go_test_output() -> None:
    stats = BenchParser(DEFAULT_BENCH_NAME).parse(GO_OUTPUT)
    assert stats.ns_per_op == 1523456789.0
    assert stats.bytes_per_op == 98765432.0
    assert stats.allocs_per_op == 123456.0


def test_named_parser_ignores_other_benchmarks() -> None:
    text = "BenchmarkScaleImage_640x360_05-8 1000 1200 ns/op 0 B/op 0 allocs/op\n"
    assert BenchParser(DEFAULT_BENCH_NAME).parse(text) == BenchStats()
    assert BenchParser().parse(text).ns_per_op == 1200.0
