"""Best-effort descriptive metadata about the environment a run executes in.

Every value is optional: a provider returns an empty string for any key it
cannot resolve, and callers never treat that as an error.
"""

from __future__ import annotations

import logging
import platform
import subprocess
from typing import Dict, Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)

COMMIT_SHA = "commit_sha"
BRANCH = "branch"
TOOLCHAIN_VERSION = "toolchain_version"
TOOL_VERSION = "tool_version"
OS = "os"
ARCH = "arch"

METADATA_KEYS = (COMMIT_SHA, BRANCH, TOOLCHAIN_VERSION, TOOL_VERSION, OS, ARCH)

DEFAULT_QUERIES: Dict[str, Sequence[str]] = {
    COMMIT_SHA: ("git", "rev-parse", "--short", "HEAD"),
    BRANCH: ("git", "rev-parse", "--abbrev-ref", "HEAD"),
    TOOLCHAIN_VERSION: ("go", "version"),
    TOOL_VERSION: ("ffmpeg", "-version"),
}

_FIRST_LINE_ONLY = {TOOL_VERSION}


class MetadataProvider(Protocol):
    def get(self, key: str) -> str:
        """Return the value for ``key`` or an empty string when unavailable."""
        ...


def _run(cmd: Sequence[str], timeout: float = 10.0) -> str:
    """Run a command safely, returning stdout or empty string on failure."""
    try:
        result = subprocess.run(
            list(cmd),
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Metadata query %s failed: %s", cmd[0], exc)
        return ""
    if result.returncode != 0:
        logger.debug("Metadata query %s exited with %s", cmd[0], result.returncode)
        return ""
    return result.stdout


def host_os() -> str:
    return platform.system().lower()


def host_arch() -> str:
    machine = platform.machine().lower()
    return {"x86_64": "amd64", "aarch64": "arm64"}.get(machine, machine)


class CommandMetadataProvider:
    """Resolve metadata by running external commands (git, toolchain, ffmpeg)."""

    def __init__(
        self,
        queries: Mapping[str, Sequence[str]] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.queries = dict(DEFAULT_QUERIES if queries is None else queries)
        self.timeout = timeout

    def get(self, key: str) -> str:
        if key == OS:
            return host_os()
        if key == ARCH:
            return host_arch()
        cmd = self.queries.get(key)
        if not cmd:
            return ""
        out = _run(cmd, timeout=self.timeout)
        if key in _FIRST_LINE_ONLY:
            out = out.split("\n", 1)[0]
        return out.strip()


class StaticMetadataProvider:
    """Fixed values, for tests and for callers that already know the metadata."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self.values = dict(values or {})

    def get(self, key: str) -> str:
        return self.values.get(key, "")
