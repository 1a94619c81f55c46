"""Run executor: benchmark facility, detector run, artifacts -> RunResult.

The run is a fixed pipeline of stages, each a method so tests can replace any
one of them:

    collect_metadata -> run_benchmark -> augment_detector_args
        -> run_detector -> locate_output_dir -> read_timings
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO, Callable, List, Optional, Protocol, Sequence

from pydantic import ValidationError

from vp_common.errors import (
    BenchmarkFailed,
    DetectorFailed,
    OutputDirectoryNotFound,
    RunInterrupted,
    TimingArtifactError,
)
from vp_runner import metadata as md
from vp_runner.args import augment_detector_args, find_flag_value, split_args
from vp_runner.bench_parser import BenchParser
from vp_runner.models import BenchStats, RunMetadata, RunResult, TimingReport
from vp_runner.process import CapturedOutput, ProcessLauncher
from vp_runner.settings import HarnessSettings
from vp_runner.stop_token import StopToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    """Console behaviour of a run."""

    echo: bool = True
    verbose: bool = False
    stream: bool = True


class Launcher(Protocol):
    def capture(
        self, cmd: Sequence[str], env: Optional[dict[str, str]] = None
    ) -> CapturedOutput: ...

    def stream(
        self,
        cmd: Sequence[str],
        on_line: Callable[[str], None],
        env: Optional[dict[str, str]] = None,
    ) -> int: ...

    def terminate(self) -> None: ...


def _local_now() -> datetime:
    return datetime.now().astimezone()


class RunExecutor:
    """Execute one suite run and assemble its RunResult."""

    def __init__(
        self,
        settings: HarnessSettings,
        *,
        metadata: md.MetadataProvider | None = None,
        launcher: Launcher | None = None,
        parser: BenchParser | None = None,
        clock: Callable[[], datetime] = _local_now,
        stream: IO[str] | None = None,
        handle_signals: bool = True,
    ) -> None:
        self.settings = settings
        self.metadata = metadata or md.CommandMetadataProvider()
        self.launcher = launcher or ProcessLauncher()
        self.parser = parser or BenchParser(settings.bench_name)
        self.clock = clock
        self.handle_signals = handle_signals
        self._stream = stream
        self._token: StopToken | None = None

    def _write(self, text: str) -> None:
        out = self._stream or sys.stdout
        out.write(text)
        out.flush()

    def _check_interrupted(self, what: str) -> None:
        if self._token is not None and self._token.should_stop():
            raise RunInterrupted(f"run interrupted while {what}", context={"stage": what})

    def execute(
        self,
        suite: str,
        run_id: str,
        label: str,
        cli_args: str,
        options: RunOptions | None = None,
    ) -> RunResult:
        opts = options or RunOptions()
        with StopToken(
            enable_signals=self.handle_signals, on_stop=self.launcher.terminate
        ) as token:
            self._token = token
            try:
                meta = self.collect_metadata(suite, run_id, label, cli_args)
                bench = self.run_benchmark(cli_args, opts)
                args = self.augment_detector_args(cli_args)
                detections = self.run_detector(args, opts)
                out_dir = self.locate_output_dir(args)
                timings = self.read_timings(out_dir)
            finally:
                self._token = None

        logger.info(
            "Run %s finished: total=%.0fms detections=%d", run_id, timings.total_ms, detections
        )
        return RunResult(
            metadata=meta,
            timings_ms=timings,
            bench=bench,
            detections=detections,
        )

    def collect_metadata(
        self, suite: str, run_id: str, label: str, cli_args: str
    ) -> RunMetadata:
        tool_version = self.metadata.get(md.TOOL_VERSION)
        return RunMetadata(
            run_id=run_id,
            suite=suite,
            label=label,
            commit_sha=self.metadata.get(md.COMMIT_SHA),
            branch=self.metadata.get(md.BRANCH),
            toolchain_version=self.metadata.get(md.TOOLCHAIN_VERSION),
            tool_version=tool_version or None,
            os=self.metadata.get(md.OS) or md.host_os(),
            arch=self.metadata.get(md.ARCH) or md.host_arch(),
            cli_args=cli_args,
            timestamp_iso=self.clock().isoformat(timespec="seconds"),
        )

    def run_benchmark(self, cli_args: str, options: RunOptions) -> BenchStats:
        cmd = list(self.settings.bench_command)
        env_name = self.settings.bench_args_env
        if options.echo:
            self._write(f"bench> {' '.join(cmd)}\n")
            if options.verbose:
                self._write(f"env> {env_name}={cli_args}\n")

        env = dict(os.environ)
        env[env_name] = cli_args
        captured = self.launcher.capture(cmd, env=env)
        self._check_interrupted("running the benchmark")
        if captured.returncode != 0:
            raise BenchmarkFailed(
                f"{cmd[0]} bench failed: exit status {captured.returncode}\n{captured.output}",
                context={
                    "command": cmd,
                    "returncode": captured.returncode,
                    "output": captured.output,
                },
            )
        if options.echo:
            self._write(captured.output)
        return self.parser.parse(captured.output)

    def augment_detector_args(self, cli_args: str) -> List[str]:
        return augment_detector_args(split_args(cli_args), self.settings.flags)

    def run_detector(self, args: Sequence[str], options: RunOptions) -> int:
        cmd = [*self.settings.detector_command, *args]
        if options.echo:
            self._write(f"detector> {' '.join(cmd)}\n")

        sentinel = self.settings.detection_sentinel
        detections = 0

        def on_line(line: str) -> None:
            nonlocal detections
            if options.stream:
                self._write(line)
            if sentinel in line:
                detections += 1

        returncode = self.launcher.stream(cmd, on_line)
        self._check_interrupted("running the detector")
        if returncode != 0:
            raise DetectorFailed(
                f"detector failed: exit status {returncode}",
                context={"command": cmd, "returncode": returncode},
            )
        return detections

    def locate_output_dir(self, args: Sequence[str]) -> Path:
        value = find_flag_value(args, self.settings.flags.output_directory)
        if not value:
            raise OutputDirectoryNotFound(
                "could not determine output directory from CLI args",
                context={"args": list(args), "flags": self.settings.flags.output_directory},
            )
        return Path(value)

    def read_timings(self, output_dir: Path) -> TimingReport:
        path = output_dir / self.settings.timings_filename
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise TimingArtifactError(
                f"failed to open {path}: {exc}", context={"path": path}, cause=exc
            ) from exc
        try:
            return TimingReport.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            raise TimingArtifactError(
                f"failed to decode {path}: {exc}", context={"path": path}, cause=exc
            ) from exc
