"""Public API surface for vp_ui."""

from vp_ui.cli import app, ctx_store, main
from vp_ui.ui import ConsoleUIAdapter, HeadlessUIAdapter, TableModel, UIAdapter

__all__ = [
    "ConsoleUIAdapter",
    "HeadlessUIAdapter",
    "TableModel",
    "UIAdapter",
    "app",
    "ctx_store",
    "main",
]
