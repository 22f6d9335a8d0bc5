"""Command line interface (Typer).

`closing-demo` with no subcommand runs the routines enabled in settings,
like `closing-demo run`.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_outcomes_json
from cli.doctor import run as doctor_run
from cli.ui_components import (
    build_routines_table,
    build_summary_table,
    emit_line,
    print_failure,
    print_header,
)
from core.config import AppSettings
from core.domain.models import RoutineName
from core.resources_loader import write_greeting_fixture
from core.services.demo_routines import CATALOG, DemoContext, DemoRoutine
from core.services.driver import run_routines

app = typer.Typer(
    help="Manual try / finally cleanup versus the with statement, side by side.",
    add_completion=False,
)

_console = Console()


def _emit(text: str) -> None:
    emit_line(_console, text)


def _run_demo(
    *,
    routines: Optional[List[RoutineName]] = None,
    run_all: bool = False,
    width: Optional[int] = None,
    show_chain: bool = False,
    json_output: Optional[Path] = None,
    summary: bool = False,
    fail_on_error: bool = False,
) -> None:
    settings = AppSettings()

    if run_all:
        names = list(RoutineName)
    else:
        names = list(routines) if routines else list(settings.enabled_routines)

    header_width = width or settings.header_width
    chained = show_chain or settings.show_exception_chain

    def on_failure(routine: DemoRoutine, exc: BaseException) -> None:
        print_failure(_console, exc, chained=chained)

    ctx = DemoContext(
        settings=settings,
        echo=_emit,
        notice=_emit,
        header=lambda title: print_header(_console, title, header_width),
    )
    outcomes = run_routines(names, ctx, on_failure=on_failure)

    if summary:
        _console.print(build_summary_table(outcomes))

    if json_output is not None:
        path = export_outcomes_json(outcomes=outcomes, output_path=json_output)
        _console.print(f"[green]Saved run report to:[/green] {path}")

    if fail_on_error and any(not o.succeeded for o in outcomes):
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the enabled routines when no subcommand is given."""

    if ctx.invoked_subcommand is None:
        _run_demo()


@app.command(name="run")
def run_command(
    routines: Optional[List[RoutineName]] = typer.Option(
        None,
        "--routine",
        "-r",
        help="Routine to run (repeatable). Defaults to the enabled routines.",
    ),
    run_all: bool = typer.Option(False, "--all", help="Run every routine in catalog order."),
    width: Optional[int] = typer.Option(None, "--width", min=1, help="Header width."),
    show_chain: bool = typer.Option(
        False,
        "--show-chain",
        help="Also render the exceptions a failure was raised while handling.",
    ),
    json_output: Optional[Path] = typer.Option(
        None,
        "--json-output",
        help="Write routine outcomes as JSON to this path.",
    ),
    summary: bool = typer.Option(False, "--summary", help="Print a summary table after the run."),
    fail_on_error: bool = typer.Option(
        False,
        "--fail-on-error",
        help="Exit with status 1 when any routine failed.",
    ),
) -> None:
    """Run demonstration routines in order, reporting failures and continuing."""

    if run_all and routines:
        raise typer.BadParameter("--all and --routine are mutually exclusive")

    _run_demo(
        routines=routines,
        run_all=run_all,
        width=width,
        show_chain=show_chain,
        json_output=json_output,
        summary=summary,
        fail_on_error=fail_on_error,
    )


@app.command(name="list")
def list_routines() -> None:
    """List the routines and which ones run by default."""

    settings = AppSettings()
    _console.print(build_routines_table(CATALOG.values(), settings.enabled_routines))


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing greeting file."),
) -> None:
    """Write the default greeting fixture."""

    settings = AppSettings()
    path = settings.greeting_path
    if write_greeting_fixture(path, force=force, encoding=settings.encoding):
        _console.print(f"[green]Wrote greeting fixture:[/green] {path}")
    else:
        _console.print(f"[yellow]Greeting fixture already exists:[/yellow] {path} (use --force)")


app.command(name="doctor")(doctor_run)


def run() -> None:
    app()
