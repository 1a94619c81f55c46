"""Stop token helpers for aborting a run on SIGINT/SIGTERM."""

from __future__ import annotations

import logging
import signal
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class StopToken:
    """
    Lightweight cooperative stop controller.

    It is tripped by SIGINT/SIGTERM while installed. The ``on_stop`` callback
    runs once, typically to terminate the process group of the active child;
    consumers check `should_stop()` after the child exits to tell an
    interruption apart from an ordinary failure.
    """

    def __init__(
        self,
        enable_signals: bool = True,
        on_stop: Optional[Callable[[], None]] = None,
    ) -> None:
        self._on_stop = on_stop
        self._stop_requested = False
        self._prev_handlers: Dict[int, Callable] = {}
        if enable_signals:
            self._install_signal_handlers()

    def _install_signal_handlers(self) -> None:
        """Capture SIGINT/SIGTERM and mark the token as stopped."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                self._prev_handlers[sig] = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)  # type: ignore[arg-type]
            except (ValueError, OSError):
                # Not on the main thread; run without signal handling.
                continue

    def _handle_signal(self, signum: int, frame) -> None:  # type: ignore[override]
        logger.warning("Received signal %s, stopping run", signum)
        self.request_stop()

    def request_stop(self) -> None:
        """Mark the token as stopped and trigger callback once."""
        if self._stop_requested:
            return
        self._stop_requested = True
        if self._on_stop:
            try:
                self._on_stop()
            except OSError as exc:
                logger.debug("Stop callback failed: %s", exc)

    def should_stop(self) -> bool:
        return self._stop_requested

    def restore(self) -> None:
        """Restore original signal handlers."""
        for sig, handler in self._prev_handlers.items():
            try:
                signal.signal(sig, handler)  # type: ignore[arg-type]
            except (ValueError, OSError, TypeError):
                continue
        self._prev_handlers.clear()

    def __enter__(self) -> "StopToken":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
