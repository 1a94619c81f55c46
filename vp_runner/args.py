"""Detector argument helpers and run identifiers."""

from __future__ import annotations

import re
import shlex
from datetime import datetime
from typing import List, Optional, Sequence

from vp_runner.settings import DetectorFlags

RUN_ID_TIME_FORMAT = "%Y%m%d-%H%M%S"

_UNSAFE_LABEL_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def split_args(raw: str) -> List[str]:
    """Split a suite argument string shell-style, honouring quotes."""
    return shlex.split(raw)


def has_any(args: Sequence[str], keys: Sequence[str]) -> bool:
    return any(arg in keys for arg in args)


def ensure_flag(args: Sequence[str], keys: Sequence[str]) -> List[str]:
    """Append ``keys[0]`` unless any spelling in ``keys`` is already present."""
    out = list(args)
    if not has_any(out, keys):
        out.append(keys[0])
    return out


def augment_detector_args(args: Sequence[str], flags: DetectorFlags) -> List[str]:
    """Force timing export, verbose detection reports and skipped frame exports."""
    out = ensure_flag(args, flags.export_timings)
    out = ensure_flag(out, flags.verbose)
    return ensure_flag(out, flags.skip_frames_export)


def find_flag_value(args: Sequence[str], keys: Sequence[str]) -> Optional[str]:
    """Return the value of the first occurrence of a flag, if any.

    Both ``-o DIR`` and ``--output-directory-path=DIR`` forms are recognised.
    """
    for idx, arg in enumerate(args):
        if arg in keys:
            if idx + 1 < len(args):
                return args[idx + 1]
            return None
        for key in keys:
            if key.startswith("--") and arg.startswith(key + "="):
                return arg[len(key) + 1 :]
    return None


def sanitize_label(label: str) -> str:
    """Keep alphanumerics, dashes and underscores; anything else becomes a dash."""
    out = _UNSAFE_LABEL_CHARS.sub("-", label or "").strip("-")
    return out or "run"


def make_run_id(label: str, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime(RUN_ID_TIME_FORMAT)
    return f"{stamp}_{sanitize_label(label)}"
