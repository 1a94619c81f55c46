"""Subprocess launching with captured or streamed output."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from vp_common.errors import ProcessLaunchError

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"


@dataclass(frozen=True)
class CapturedOutput:
    returncode: int
    output: str


class ProcessLauncher:
    """Start children in their own process group so a stop can terminate them."""

    def __init__(self) -> None:
        self._active: Optional[subprocess.Popen[str]] = None

    def terminate(self) -> None:
        """Terminate the active child and its process group, if any."""
        proc = self._active
        if proc is None or proc.poll() is not None:
            return
        logger.info("Terminating process group of pid %s", proc.pid)
        if _POSIX:
            try:
                os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
            except ProcessLookupError:
                return
        else:
            proc.terminate()

    def _popen(
        self,
        cmd: Sequence[str],
        env: Mapping[str, str] | None,
        stderr: int | None,
    ) -> subprocess.Popen[str]:
        logger.debug("Executing command: %s", " ".join(cmd))
        try:
            proc = subprocess.Popen(
                list(cmd),
                env=dict(env) if env is not None else None,
                stdout=subprocess.PIPE,
                stderr=stderr,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                start_new_session=_POSIX,
            )
        except OSError as exc:
            raise ProcessLaunchError(
                f"failed to start {cmd[0]}: {exc}",
                context={"command": list(cmd)},
                cause=exc,
            ) from exc
        self._active = proc
        return proc

    def capture(
        self, cmd: Sequence[str], env: Mapping[str, str] | None = None
    ) -> CapturedOutput:
        """Run to completion, returning combined stdout/stderr."""
        proc = self._popen(cmd, env, stderr=subprocess.STDOUT)
        try:
            output, _ = proc.communicate()
        finally:
            self._active = None
        return CapturedOutput(returncode=proc.returncode, output=output or "")

    def stream(
        self,
        cmd: Sequence[str],
        on_line: Callable[[str], None],
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Feed stdout to ``on_line`` as it arrives; stderr goes to our stderr.

        The exit status is collected only once stdout is drained.
        """
        proc = self._popen(cmd, env, stderr=None)
        try:
            assert proc.stdout is not None
            with proc.stdout:
                for line in proc.stdout:
                    on_line(line)
            return proc.wait()
        finally:
            self._active = None
