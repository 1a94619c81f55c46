"""Tests for harness settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from vp_runner.settings import DEFAULT_BENCH_NAME, HarnessSettings


pytestmark = pytest.mark.unit_runner


def test_defaults_match_detector_contract() -> None:
    settings = HarnessSettings()
    assert settings.results_root == Path("perf-results")
    assert settings.threshold_percent == 5.0
    assert settings.bench_args_env == "VLD_CLI_ARGS"
    assert settings.bench_command[:2] == ["go", "test"]
    assert DEFAULT_BENCH_NAME in settings.bench_command
    assert settings.detector_command[0].endswith("video-lightning-detector")
    assert settings.flags.output_directory == ["-o", "--output-directory-path"]


def test_from_env_applies_overrides() -> None:
    env = {
        "VP_RESULTS_ROOT": "/tmp/results",
        "VP_DETECTOR_BIN": "/opt/vld",
        "VP_THRESHOLD": "2.5",
    }
    settings = HarnessSettings.from_env(env)
    assert settings.results_root == Path("/tmp/results")
    assert settings.detector_command == ["/opt/vld"]
    assert settings.threshold_percent == 2.5


def test_from_env_ignores_invalid_threshold() -> None:
    assert HarnessSettings.from_env({"VP_THRESHOLD": "lots"}).threshold_percent == 5.0
    assert HarnessSettings.from_env({"VP_THRESHOLD": "-1"}).threshold_percent == 5.0


def test_explicit_overrides_win_over_env() -> None:
    settings = HarnessSettings.from_env(
        {"VP_RESULTS_ROOT": "/tmp/env"}, results_root=Path("/tmp/cli"), threshold_percent=None
    )
    assert settings.results_root == Path("/tmp/cli")
    assert settings.threshold_percent == 5.0


def test_negative_threshold_rejected() -> None:
    with pytest.raises(ValidationError):
        HarnessSettings(threshold_percent=-0.1)
