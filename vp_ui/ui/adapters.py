"""Console (Rich) and headless output adapters.

Report lines go to stdout; warnings and errors go to stderr.
"""

from __future__ import annotations

import sys
from typing import IO, Protocol

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from vp_ui.ui.models import TableModel
from vp_ui.ui.utils import format_table

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "success": "green",
        "regression": "bold red",
        "accent": "#3ea6ff",
    }
)


class UIAdapter(Protocol):
    def show_line(self, message: str, style: str | None = None) -> None: ...

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_success(self, message: str) -> None: ...

    def show_rule(self, title: str) -> None: ...

    def show_table(self, table: TableModel) -> None: ...


class ConsoleUIAdapter:
    """ANSI-friendly output with Rich styles and tables."""

    def __init__(self, stream: IO[str] | None = None, err_stream: IO[str] | None = None):
        # Without an explicit file Rich resolves sys.stdout/sys.stderr per write.
        self.console = Console(theme=THEME, file=stream, highlight=False, soft_wrap=True)
        self.err_console = Console(
            theme=THEME,
            file=err_stream,
            stderr=err_stream is None,
            highlight=False,
            soft_wrap=True,
        )

    def show_line(self, message: str, style: str | None = None) -> None:
        self.console.print(message, style=style, markup=False)

    def show_info(self, message: str) -> None:
        self.console.print(message, style="info", markup=False)

    def show_warning(self, message: str) -> None:
        self.err_console.print(message, style="warning", markup=False)

    def show_error(self, message: str) -> None:
        self.err_console.print(message, style="error", markup=False)

    def show_success(self, message: str) -> None:
        self.console.print(message, style="success", markup=False)

    def show_rule(self, title: str) -> None:
        self.console.rule(f"[b]{title}[/b]", style="accent")

    def show_table(self, table: TableModel) -> None:
        rich_table = Table(
            title=f"[b]{table.title}[/b]",
            border_style="accent",
            header_style="bold white",
            row_styles=("", "dim"),
        )
        for column in table.columns:
            rich_table.add_column(column, overflow="fold")
        for row in table.rows:
            rich_table.add_row(*[str(cell) for cell in row])
        self.console.print(rich_table)


class HeadlessUIAdapter:
    """A deterministic, print-based adapter suitable for CI logs and tests."""

    def __init__(self, stream: IO[str] | None = None, err_stream: IO[str] | None = None):
        self._stream = stream
        self._err_stream = err_stream

    def _write(self, text: str, err: bool = False) -> None:
        if err:
            out = self._err_stream or sys.stderr
        else:
            out = self._stream or sys.stdout
        out.write(text + "\n")
        out.flush()

    def show_line(self, message: str, style: str | None = None) -> None:
        self._write(message)

    def show_info(self, message: str) -> None:
        self._write(message)

    def show_warning(self, message: str) -> None:
        self._write(f"[WARN] {message}", err=True)

    def show_error(self, message: str) -> None:
        self._write(f"[ERROR] {message}", err=True)

    def show_success(self, message: str) -> None:
        self._write(message)

    def show_rule(self, title: str) -> None:
        self._write(f"--- {title} ---")

    def show_table(self, table: TableModel) -> None:
        self._write(format_table(table.title, table.columns, table.rows))


def create_ui(headless: bool = False) -> UIAdapter:
    if headless:
        return HeadlessUIAdapter()
    return ConsoleUIAdapter()

