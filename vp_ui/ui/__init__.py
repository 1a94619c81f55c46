"""Output adapters and view models for the CLI."""

from vp_ui.ui.adapters import ConsoleUIAdapter, HeadlessUIAdapter, UIAdapter, create_ui
from vp_ui.ui.models import TableModel

__all__ = ["ConsoleUIAdapter", "HeadlessUIAdapter", "TableModel", "UIAdapter", "create_ui"]
