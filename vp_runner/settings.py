"""Harness settings (results root, external commands, detector contract)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from vp_common.config.env import parse_float_env, parse_path_env

DEFAULT_BENCH_NAME = "BenchmarkVideoLightningDetectorFromEnvArgs"


class DetectorFlags(BaseModel):
    """Flag spellings of the detector CLI the executor relies on."""

    export_timings: List[str] = Field(default_factory=lambda: ["--export-timings"])
    verbose: List[str] = Field(default_factory=lambda: ["-v", "--verbose"])
    skip_frames_export: List[str] = Field(
        default_factory=lambda: ["-f", "--skip-frames-export"]
    )
    output_directory: List[str] = Field(
        default_factory=lambda: ["-o", "--output-directory-path"]
    )


class HarnessSettings(BaseModel):
    """Main configuration for the regression harness."""

    results_root: Path = Field(
        default=Path("perf-results"),
        description="Root holding the suite configuration and per-suite run records",
    )
    detector_command: List[str] = Field(
        default_factory=lambda: [os.path.join(".", "bin", "video-lightning-detector")],
        description="Command prefix used to launch the detector",
    )
    bench_command: List[str] = Field(
        default_factory=lambda: [
            "go",
            "test",
            "-v",
            "-run",
            "^$",
            "-bench",
            DEFAULT_BENCH_NAME,
            "-benchmem",
            "-count",
            "1",
        ],
        description="Command running the benchmark facility once",
    )
    bench_name: Optional[str] = Field(
        default=DEFAULT_BENCH_NAME,
        description="Benchmark whose summary line is parsed (None matches any)",
    )
    bench_args_env: str = Field(
        default="VLD_CLI_ARGS",
        description="Environment variable carrying the suite arguments to the benchmark",
    )
    detection_sentinel: str = Field(
        default="Frame meets the threshold requirements.",
        description="Detector stdout substring marking one positive detection",
    )
    timings_filename: str = Field(default="timings.json")
    threshold_percent: float = Field(
        default=5.0, ge=0, description="Regression threshold in percent"
    )
    flags: DetectorFlags = Field(default_factory=DetectorFlags)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "HarnessSettings":
        """Build settings from defaults, ``VP_*`` variables and explicit overrides."""
        env = os.environ if environ is None else environ
        data: dict[str, object] = {}

        results_root = parse_path_env(env.get("VP_RESULTS_ROOT"))
        if results_root:
            data["results_root"] = Path(results_root)
        detector_bin = parse_path_env(env.get("VP_DETECTOR_BIN"))
        if detector_bin:
            data["detector_command"] = [detector_bin]
        threshold = parse_float_env(env.get("VP_THRESHOLD"))
        if threshold is not None and threshold >= 0:
            data["threshold_percent"] = threshold

        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(data)

    @property
    def suites_candidates(self) -> List[Path]:
        return [
            self.results_root / name
            for name in ("suites.yaml", "suites.yml", "suites.json")
        ]
