"""Routine driver.

Runs the selected routines in order. Each escaped exception is caught here,
recorded in a `RoutineOutcome`, handed to `on_failure` and the run moves on
to the next routine. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Iterator

from core.domain.models import RoutineName, RoutineOutcome
from core.services.demo_routines import DemoContext, DemoRoutine, get_routine

FailureHook = Callable[[DemoRoutine, BaseException], None]


def _masked_type(exc: BaseException) -> str | None:
    """Type name of the error `exc` replaced while it was being handled."""

    context = exc.__context__
    if context is None or exc.__cause__ is not None or exc.__suppress_context__:
        return None
    return type(context).__name__


def run_routine(
    routine: DemoRoutine,
    ctx: DemoContext,
    *,
    on_failure: FailureHook | None = None,
) -> RoutineOutcome:
    lines: list[str] = []
    closures: list[str] = []

    def echo(line: str) -> None:
        lines.append(line)
        ctx.echo(line)

    def notice(text: str) -> None:
        closures.append(text)
        ctx.notice(text)

    recording = replace(ctx, echo=echo, notice=notice)
    recording.header(routine.title)

    outcome = RoutineOutcome(name=routine.name, title=routine.title, discipline=routine.discipline)
    try:
        routine.run(recording)
    except Exception as exc:
        outcome.succeeded = False
        outcome.error_type = type(exc).__name__
        outcome.error_message = str(exc)
        outcome.masked_error_type = _masked_type(exc)
        if on_failure is not None:
            on_failure(routine, exc)

    outcome.lines = lines
    outcome.closures = closures
    return outcome


def iter_routines(
    names: Iterable[RoutineName | str],
    ctx: DemoContext,
    *,
    on_failure: FailureHook | None = None,
) -> Iterator[RoutineOutcome]:
    for name in names:
        yield run_routine(get_routine(name), ctx, on_failure=on_failure)


def run_routines(
    names: Iterable[RoutineName | str],
    ctx: DemoContext,
    *,
    on_failure: FailureHook | None = None,
) -> list[RoutineOutcome]:
    """Run routines in order and return one outcome per routine."""

    return list(iter_routines(names, ctx, on_failure=on_failure))
