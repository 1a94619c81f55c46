from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from vp_controller.api import RunService
from vp_runner.settings import HarnessSettings
from vp_ui.ui.adapters import UIAdapter, create_ui


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False
    results_root: Optional[Path] = None

    _ui: Optional[UIAdapter] = None
    _settings: Optional[HarnessSettings] = None
    _service: Optional[RunService] = None
    _service_injected: bool = False

    @property
    def ui(self) -> UIAdapter:
        if self._ui is None:
            self._ui = create_ui(self.headless)
        return self._ui

    @ui.setter
    def ui(self, value: Optional[UIAdapter]) -> None:
        self._ui = value

    @property
    def settings(self) -> HarnessSettings:
        if self._settings is None:
            self._settings = HarnessSettings.from_env(results_root=self.results_root)
        return self._settings

    @settings.setter
    def settings(self, value: Optional[HarnessSettings]) -> None:
        self._settings = value

    @property
    def service(self) -> RunService:
        if self._service is None:
            self._service = RunService(self.settings)
        return self._service

    @service.setter
    def service(self, value: Optional[RunService]) -> None:
        self._service = value
        self._service_injected = value is not None

    def reset(self, headless: bool, results_root: Optional[Path]) -> None:
        """Re-initialise per invocation; injected overrides survive."""
        if headless != self.headless:
            self._ui = None
        self.headless = headless
        if results_root != self.results_root and not self._service_injected:
            self._settings = None
            self._service = None
        self.results_root = results_root
