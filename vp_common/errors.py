"""Shared error taxonomy for vld-perf."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class PerfError(Exception):
    """Base error type for fatal harness failures."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(PerfError):
    """Failure due to missing or invalid configuration."""


class ConfigUnreadable(ConfigurationError):
    """The suite configuration artifact is missing or cannot be read."""


class ConfigMalformed(ConfigurationError):
    """The suite configuration artifact is not a mapping of strings."""


class SuiteNotFound(ConfigurationError):
    """The requested suite is not declared in the configuration."""


class ExecutionError(PerfError):
    """Failure while launching or running an external process."""

    @property
    def output(self) -> str:
        """Captured process output attached for diagnostics, if any."""
        value = self.context.get("output")
        return value if isinstance(value, str) else ""


class ProcessLaunchError(ExecutionError):
    """The subprocess could not be started."""


class BenchmarkFailed(ExecutionError):
    """The benchmark facility exited with a non-zero status."""


class DetectorFailed(ExecutionError):
    """The detector exited with a non-zero status."""


class RunInterrupted(ExecutionError):
    """The run was aborted by SIGINT/SIGTERM."""


class ArtifactError(PerfError):
    """Failure locating or decoding an artifact produced by the detector."""


class OutputDirectoryNotFound(ArtifactError):
    """The detector arguments do not name an output directory."""


class TimingArtifactError(ArtifactError):
    """The timing artifact is missing or malformed."""


class ResultPersistenceError(PerfError):
    """Failure persisting or loading run records."""


class RunNotFound(ResultPersistenceError):
    """No record exists for the requested run id."""


class RunRecordMalformed(ResultPersistenceError):
    """A persisted run record cannot be decoded."""


class InvalidRecordName(ResultPersistenceError):
    """A suite name or run id is not a plain file name below the results root."""


class BaselineNotSet(PerfError):
    """A baseline was requested for a suite that has none."""


T = TypeVar("T", bound=PerfError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed PerfError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: PerfError) -> dict[str, Any]:
    """Convert a PerfError to a structured log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
