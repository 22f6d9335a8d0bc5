"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Headers, tables and failure panels are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table
from rich.traceback import Traceback

from core.domain.models import RoutineName, RoutineOutcome
from core.services.demo_routines import DemoRoutine


def format_header(title: str, width: int) -> list[str]:
    """Lines of a routine header: blank, rule, centred title, rule.

    Extra padding goes to the right when it cannot be split evenly.
    """

    bar = "-" * width
    left = max(width - len(title), 0) // 2
    centred = (" " * left + title).ljust(width)
    return ["", bar, centred, bar]


def emit_line(console: Console, text: str) -> None:
    """Write one raw line: no markup, no wrapping, no highlighting."""

    console.out(text, highlight=False)


def print_header(console: Console, title: str, width: int) -> None:
    for line in format_header(title, width):
        emit_line(console, line)


def print_failure(console: Console, exc: BaseException, *, chained: bool = False) -> None:
    """Render the traceback of an escaped exception.

    Unless `chained` is set only the escaped exception is shown, not the
    exceptions it was raised while handling.
    """

    trace = Traceback.extract(type(exc), exc, exc.__traceback__)
    if not chained:
        trace.stacks = trace.stacks[:1]
    console.print(Traceback(trace, extra_lines=1, word_wrap=True))


def build_routines_table(routines: Iterable[DemoRoutine], enabled: Sequence[RoutineName]) -> Table:
    table = Table(title="Demo routines")
    table.add_column("Routine", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Cleanup", style="magenta")
    table.add_column("Enabled", style="green")
    for routine in routines:
        table.add_row(
            routine.name.value,
            routine.title,
            routine.discipline.label(),
            "yes" if routine.name in enabled else "",
        )
    return table


def build_summary_table(outcomes: Sequence[RoutineOutcome]) -> Table:
    table = Table(title="Run summary")
    table.add_column("Routine", style="cyan", no_wrap=True)
    table.add_column("Lines", justify="right")
    table.add_column("Closures", justify="right")
    table.add_column("Result", style="white")
    table.add_column("Masked", style="red")
    for o in outcomes:
        result = "OK" if o.succeeded else f"{o.error_type}: {o.error_message}"
        table.add_row(o.name.value, str(len(o.lines)), str(len(o.closures)), result, o.masked_error_type or "")
    return table
