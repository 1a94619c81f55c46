"""Public API surface for vp_common."""

from vp_common.errors import (
    ArtifactError,
    BaselineNotSet,
    BenchmarkFailed,
    ConfigMalformed,
    ConfigUnreadable,
    ConfigurationError,
    DetectorFailed,
    ExecutionError,
    InvalidRecordName,
    OutputDirectoryNotFound,
    PerfError,
    ProcessLaunchError,
    ResultPersistenceError,
    RunInterrupted,
    RunNotFound,
    RunRecordMalformed,
    SuiteNotFound,
    TimingArtifactError,
    error_to_payload,
    wrap_error,
)
from vp_common.logging import configure_logging

__all__ = [
    "ArtifactError",
    "BaselineNotSet",
    "BenchmarkFailed",
    "ConfigMalformed",
    "ConfigUnreadable",
    "ConfigurationError",
    "DetectorFailed",
    "ExecutionError",
    "InvalidRecordName",
    "OutputDirectoryNotFound",
    "PerfError",
    "ProcessLaunchError",
    "ResultPersistenceError",
    "RunInterrupted",
    "RunNotFound",
    "RunRecordMalformed",
    "SuiteNotFound",
    "TimingArtifactError",
    "configure_logging",
    "error_to_payload",
    "wrap_error",
]
