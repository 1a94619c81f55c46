"""Durable storage for run records and per-suite baseline pointers.

Layout under the results root::

    <root>/<suite>/<run_id>.json     one RunResult per run
    <root>/<suite>/baseline.json     {"run_id": "..."} when a baseline is set
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Tuple

from pydantic import ValidationError

from vp_common.errors import (
    InvalidRecordName,
    ResultPersistenceError,
    RunNotFound,
    RunRecordMalformed,
    wrap_error,
)
from vp_runner.models import RunResult

logger = logging.getLogger(__name__)

BASELINE_FILENAME = "baseline.json"
RECORD_SUFFIX = ".json"


def _write_atomic(path: Path, text: str) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(text)
    tmp_path.replace(path)


def _checked_name(kind: str, value: str) -> str:
    """Reject names that would leave their directory once joined to a path."""
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if value in ("", ".", "..") or any(sep in value for sep in separators):
        raise InvalidRecordName(
            f"invalid {kind} {value!r}: must be a plain name without path separators",
            context={kind.replace(" ", "_"): value},
        )
    return value


class RunStore:
    """Owns every run record and baseline pointer below ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def suite_dir(self, suite: str) -> Path:
        return self.root / _checked_name("suite name", suite)

    def record_path(self, suite: str, run_id: str) -> Path:
        filename = f"{_checked_name('run id', run_id)}{RECORD_SUFFIX}"
        if filename == BASELINE_FILENAME:
            raise InvalidRecordName(
                f"invalid run id {run_id!r}: reserved for the baseline pointer",
                context={"run_id": run_id},
            )
        return self.suite_dir(suite) / filename

    def exists(self, suite: str, run_id: str) -> bool:
        return self.record_path(suite, run_id).is_file()

    def write(self, suite: str, run_id: str, result: RunResult) -> Path:
        """Persist ``result``; an existing record with the same id is replaced."""
        path = self.record_path(suite, run_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, result.to_json())
        except (OSError, TypeError, ValueError) as exc:
            raise wrap_error(
                ResultPersistenceError,
                f"failed to write run file {path}: {exc}",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        logger.info("Saved run %s to %s", run_id, path)
        return path

    def read(self, suite: str, run_id: str) -> RunResult:
        path = self.record_path(suite, run_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise RunNotFound(
                f"failed to read {path}: run not found",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise wrap_error(
                ResultPersistenceError,
                f"failed to read {path}: {exc}",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        try:
            return RunResult.from_json(raw)
        except (ValidationError, UnicodeDecodeError) as exc:
            raise RunRecordMalformed(
                f"failed to decode {path}: {exc}",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc

    def run_ids(self, suite: str) -> List[str]:
        """Run ids of a suite sorted by name; empty when the suite has no directory."""
        suite_dir = self.suite_dir(suite)
        try:
            entries = sorted(suite_dir.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.warning("Cannot read suite %s: %s", suite, exc)
            return []
        return [
            entry.name[: -len(RECORD_SUFFIX)]
            for entry in entries
            if entry.is_file()
            and entry.name.endswith(RECORD_SUFFIX)
            and entry.name != BASELINE_FILENAME
        ]

    def list(self, suite: str) -> List[Tuple[str, RunResult]]:
        """Every persisted record of ``suite`` as ``(run_id, result)`` pairs."""
        return [(run_id, self.read(suite, run_id)) for run_id in self.run_ids(suite)]

    def suites(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(entry.name for entry in self.root.iterdir() if entry.is_dir())

    def remove(self, suite: str, run_id: str) -> Path:
        path = self.record_path(suite, run_id)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise RunNotFound(
                f"failed to remove {path}: run not found",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise wrap_error(
                ResultPersistenceError,
                f"failed to remove {path}: {exc}",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        logger.info("Removed run %s from suite %s", run_id, suite)
        return path

    def get_baseline(self, suite: str) -> Tuple[str, bool]:
        """Return ``(run_id, True)`` when a baseline is set, else ``("", False)``."""
        path = self.suite_dir(suite) / BASELINE_FILENAME
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError):
            return "", False
        run_id = data.get("run_id") if isinstance(data, dict) else None
        if not isinstance(run_id, str) or not run_id:
            return "", False
        return run_id, True

    def set_baseline(self, suite: str, run_id: str) -> Path:
        """Point the suite baseline at ``run_id`` without checking that it exists."""
        _checked_name("run id", run_id)
        path = self.suite_dir(suite) / BASELINE_FILENAME
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, json.dumps({"run_id": run_id}) + "\n")
        except OSError as exc:
            raise wrap_error(
                ResultPersistenceError,
                f"failed to write baseline file {path}: {exc}",
                context={"suite": suite, "run_id": run_id, "path": path},
                cause=exc,
            ) from exc
        logger.info("Baseline of suite %s set to %s", suite, run_id)
        return path
