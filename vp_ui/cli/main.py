"""
Command-line interface for vld-perf.

Runs benchmark suites against the detector, stores the results per suite and
compares runs against each other or against the suite baseline.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from vp_common.api import ExecutionError, PerfError, configure_logging, error_to_payload
from vp_runner.executor import RunOptions
from vp_ui.cli.context import UIContext
from vp_ui.presenters.comparison import render_comparison
from vp_ui.presenters.runs import render_listings, render_run_outcome

logger = logging.getLogger(__name__)

ctx_store = UIContext()

app = typer.Typer(
    help="Run detector benchmark suites, store the results and flag regressions.",
    no_args_is_help=True,
)


@contextmanager
def _fatal_errors(command: str) -> Iterator[None]:
    """Report harness failures on stderr and exit with status 1."""
    try:
        yield
    except PerfError as exc:
        logger.debug("%s failed: %s", command, error_to_payload(exc))
        ctx_store.ui.show_error(f"{command} failed: {exc}")
        if isinstance(exc, ExecutionError) and exc.output and exc.output not in str(exc):
            ctx_store.ui.show_error(exc.output)
        raise typer.Exit(1)


@app.callback()
def entry(
    results_root: Optional[Path] = typer.Option(
        None,
        "--results-root",
        "-r",
        help="Directory holding suites.json and per-suite run records (default: perf-results).",
    ),
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Plain, uncoloured output (useful in CI).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr."),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug)
    ctx_store.reset(headless=headless, results_root=results_root)


@app.command("run")
def run_suite(
    suite: str = typer.Argument(..., help="Suite name from suites.json."),
    label: str = typer.Option("run", "--label", "-l", help="Label appended to the run id."),
    as_baseline: bool = typer.Option(
        False, "--as-baseline", help="Make this run the suite baseline."
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        min=0.0,
        help="Regression threshold in percent (default 5.0 or VP_THRESHOLD).",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Also echo the benchmark environment."),
    quiet: bool = typer.Option(False, "--quiet", help="Do not echo commands and benchmark output."),
    no_stream: bool = typer.Option(
        False, "--no-stream", help="Do not stream detector output while it runs."
    ),
) -> None:
    """Execute a suite, save the run and compare it with the baseline."""
    options = RunOptions(echo=not quiet, verbose=verbose, stream=not no_stream)
    with _fatal_errors("run"):
        outcome = ctx_store.service.run(
            suite,
            label=label,
            as_baseline=as_baseline,
            threshold=threshold,
            options=options,
        )
    render_run_outcome(ctx_store.ui, outcome)


@app.command("compare")
def compare_runs(
    suite: str = typer.Argument(..., help="Suite name."),
    lhs: str = typer.Argument(..., help="Reference run id, or 'baseline'."),
    rhs: str = typer.Argument(..., help="Run id to compare against the reference."),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        min=0.0,
        help="Regression threshold in percent (default 5.0 or VP_THRESHOLD).",
    ),
) -> None:
    """Compare two stored runs of a suite."""
    with _fatal_errors("compare"):
        report = ctx_store.service.compare(suite, lhs, rhs, threshold=threshold)
    render_comparison(ctx_store.ui, report)


@app.command("list")
def list_runs(
    suite: Optional[str] = typer.Argument(None, help="Suite name; all suites when omitted."),
) -> None:
    """List stored runs, marking the baseline."""
    with _fatal_errors("list"):
        listings = ctx_store.service.list_runs(suite)
    if not listings:
        ctx_store.ui.show_warning(f"No suites found under {ctx_store.service.settings.results_root}")
        return
    render_listings(ctx_store.ui, listings, with_headers=suite is None)


@app.command("set-baseline")
def set_baseline(
    suite: str = typer.Argument(..., help="Suite name."),
    run_id: str = typer.Argument(..., help="Run id to use as the baseline."),
) -> None:
    """Point the suite baseline at a run id."""
    with _fatal_errors("set-baseline"):
        ctx_store.service.set_baseline(suite, run_id)
    ctx_store.ui.show_success(f"Baseline set to {run_id}")


@app.command("rm")
def remove_run(
    suite: str = typer.Argument(..., help="Suite name."),
    run_id: str = typer.Argument(..., help="Run id to delete."),
) -> None:
    """Delete a stored run."""
    with _fatal_errors("rm"):
        path = ctx_store.service.remove(suite, run_id)
    ctx_store.ui.show_success(f"Removed {path}")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
