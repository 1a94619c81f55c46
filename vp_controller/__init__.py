"""Controller layer: persists runs, tracks baselines and compares results."""

from vp_controller.api import ComparisonReport, RunService, RunStore, compare

__all__ = ["ComparisonReport", "RunService", "RunStore", "compare"]
