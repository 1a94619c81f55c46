"""Run record models (metadata, timings, benchmark stats)."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class RunMetadata(BaseModel):
    """Descriptive metadata identifying one executed run."""

    model_config = ConfigDict(frozen=True)

    run_id: str = Field(description="Timestamp plus sanitized label, unique per suite")
    suite: str = Field(description="Suite name the run was executed for")
    label: str = Field(default="", description="Human label given on the command line")
    commit_sha: str = Field(default="", description="Short source-control revision")
    branch: str = Field(default="", description="Source-control branch name")
    toolchain_version: str = Field(default="", description="Toolchain version string")
    tool_version: Optional[str] = Field(
        default=None, description="External tool version (first line), if available"
    )
    os: str = Field(default="", description="Operating system of the host")
    arch: str = Field(default="", description="CPU architecture of the host")
    cli_args: str = Field(default="", description="Raw detector argument string of the suite")
    timestamp_iso: str = Field(default="", description="ISO-8601 execution timestamp")


class TimingReport(BaseModel):
    """Timing artifact written by the detector: total and per-stage milliseconds."""

    total_ms: float = Field(default=0.0)
    stages_ms: Dict[str, float] = Field(default_factory=dict)

    @field_validator("stages_ms", mode="before")
    @classmethod
    def _null_stages_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_serializer("stages_ms")
    def _sorted_stages(self, stages: Dict[str, float]) -> Dict[str, float]:
        return {name: stages[name] for name in sorted(stages)}

    def stage(self, name: str) -> float:
        """Return the elapsed milliseconds of a stage, 0 when it was not reported."""
        return self.stages_ms.get(name, 0.0)


class BenchStats(BaseModel):
    """Per-operation figures reported by the benchmark facility."""

    ns_per_op: float = Field(default=0.0)
    bytes_per_op: float = Field(default=0.0)
    allocs_per_op: float = Field(default=0.0)


class RunResult(BaseModel):
    """The unit of persistence for one run."""

    metadata: RunMetadata
    timings_ms: TimingReport = Field(default_factory=TimingReport)
    bench: BenchStats = Field(default_factory=BenchStats)
    detections: int = Field(default=0, ge=0)
    notes: Optional[str] = Field(default=None)

    def to_json(self) -> str:
        """Render the stable on-disk encoding (declared field order, 4-space indent)."""
        payload = self.model_dump(mode="json", exclude_none=True)
        return json.dumps(payload, indent=4) + "\n"

    @classmethod
    def from_json(cls, raw: str | bytes) -> "RunResult":
        return cls.model_validate_json(raw)
