"""Shared helpers for vld-perf."""

from vp_common.api import PerfError, configure_logging, error_to_payload

__all__ = ["configure_logging", "error_to_payload", "PerfError"]
