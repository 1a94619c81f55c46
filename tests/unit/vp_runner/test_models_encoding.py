"""Tests for the on-disk encoding of run records."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from vp_runner.models import RunResult, TimingReport


pytestmark = pytest.mark.unit_runner


def test_encoding_uses_declared_key_order_and_four_space_indent(result_factory) -> None:
    raw = result_factory().to_json()
    payload = json.loads(raw)

    assert list(payload) == ["metadata", "timings_ms", "bench", "detections"]
    assert list(payload["metadata"]) == [
        "run_id",
        "suite",
        "label",
        "commit_sha",
        "branch",
        "toolchain_version",
        "tool_version",
        "os",
        "arch",
        "cli_args",
        "timestamp_iso",
    ]
    assert list(payload["bench"]) == ["ns_per_op", "bytes_per_op", "allocs_per_op"]
    assert raw.startswith('{\n    "metadata": {\n        "run_id"')
    assert raw.endswith("}\n")


def test_optional_fields_are_omitted_when_absent(result_factory) -> None:
    payload = json.loads(result_factory(tool_version=None, notes=None).to_json())
    assert "tool_version" not in payload["metadata"]
    assert "notes" not in payload


def test_notes_are_kept_when_present(result_factory) -> None:
    payload = json.loads(result_factory(notes="cold cache").to_json())
    assert payload["notes"] == "cold cache"


def test_stage_keys_are_sorted_on_encoding(result_factory) -> None:
    result = result_factory(stages={"video_detection": 1.0, "a_stage": 2.0, "video_analysis": 3.0})
    payload = json.loads(result.to_json())
    assert list(payload["timings_ms"]["stages_ms"]) == ["a_stage", "video_analysis", "video_detection"]


def test_decode_preserves_zero_and_empty_values(result_factory) -> None:
    original = result_factory(total_ms=0.0, stages={}, ns=0.0, allocs=0.0, detections=0)
    decoded = RunResult.from_json(original.to_json())
    assert decoded == original
    assert decoded.metadata.tool_version == "ffmpeg version 6.1"


def test_timing_artifact_accepts_null_stages() -> None:
    report = TimingReport.model_validate({"total_ms": 12.5, "stages_ms": None})
    assert report.stages_ms == {}
    assert report.stage("video_analysis") == 0.0


def test_timing_artifact_ignores_unknown_keys() -> None:
    report = TimingReport.model_validate(
        {"total_ms": 10, "stages_ms": {"video_analysis": 4}, "frames": 300}
    )
    assert report.total_ms == 10.0
    assert report.stage("video_analysis") == 4.0


def test_negative_detections_rejected(result_factory) -> None:
    payload = json.loads(result_factory().to_json())
    payload["detections"] = -1
    with pytest.raises(ValidationError):
        RunResult.model_validate(payload)
