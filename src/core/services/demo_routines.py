"""Demonstration routines and their catalog.

Each routine opens a buffered reader (and, for copies, a buffered writer),
echoes every line it reads, and releases what it opened using one of three
disciplines:

- manual, unguarded: `finally` calls `close()` on variables that may still be
  `None`. When opening fails the cleanup raises `AttributeError`, which is
  what escapes; the open failure survives only as implicit `__context__`.
  Kept on purpose as the anti-pattern under demonstration.
- manual, guarded: `finally` closes only handles that were assigned.
- scoped: the `with` statement opens in declared order and closes the
  already-opened handles in reverse order on every exit path.

Routines never recover from errors and never print: output goes through the
callables of `DemoContext`, which keeps side-effects in the CLI layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from adapters.closing_streams import (
    LoggingBufferedReader,
    LoggingBufferedWriter,
    LoggingFileReader,
    LoggingFileWriter,
)
from core.config import AppSettings
from core.domain.discipline import Discipline
from core.domain.models import RoutineName
from core.interfaces.stream import Closable, LineReader, LineWriter

Sink = Callable[[str], None]
T = TypeVar("T")


def _discard(_: str) -> None:
    return None


@dataclass
class DemoContext:
    """What a routine needs: settings plus output sinks.

    `echo` receives every line read, `notice` every closure notice and
    `header` the routine title. The CLI points all three at the console.
    """

    settings: AppSettings
    echo: Sink = _discard
    notice: Sink = _discard
    header: Sink = _discard


@dataclass(frozen=True)
class DemoRoutine:
    name: RoutineName
    title: str
    discipline: Discipline
    run: Callable[[DemoContext], list[str]]


def _buffered(inner: Closable, wrap: Callable[[], T]) -> T:
    """Build the buffered wrapper, closing the already-open `inner` if that fails."""

    try:
        return wrap()
    except BaseException:
        inner.close()
        raise


def open_reader(ctx: DemoContext, path: Path) -> LineReader:
    settings = ctx.settings
    inner = LoggingFileReader(path, encoding=settings.encoding, on_close=ctx.notice)
    return _buffered(
        inner,
        lambda: LoggingBufferedReader(inner, buffer_size=settings.buffer_size, on_close=ctx.notice),
    )


def open_writer(ctx: DemoContext, path: Path) -> LineWriter:
    settings = ctx.settings
    inner = LoggingFileWriter(path, encoding=settings.encoding, on_close=ctx.notice)
    return _buffered(
        inner,
        lambda: LoggingBufferedWriter(inner, buffer_size=settings.buffer_size, on_close=ctx.notice),
    )


def _echo(ctx: DemoContext, lines: list[str], line: str) -> None:
    ctx.echo(line)
    lines.append(line)


# --- read -----------------------------------------------------------------


def read_manual_unguarded(ctx: DemoContext, path: Path) -> list[str]:
    lines: list[str] = []
    reader: LineReader | None = None
    try:
        reader = open_reader(ctx, path)
        while (line := reader.read_line()) is not None:
            _echo(ctx, lines, line)
    finally:
        # `reader` is still None when opening failed.
        reader.close()
    return lines


def read_manual_guarded(ctx: DemoContext, path: Path) -> list[str]:
    lines: list[str] = []
    reader: LineReader | None = None
    try:
        reader = open_reader(ctx, path)
        while (line := reader.read_line()) is not None:
            _echo(ctx, lines, line)
    finally:
        if reader is not None:
            reader.close()
    return lines


def read_scoped(ctx: DemoContext, path: Path) -> list[str]:
    lines: list[str] = []
    with open_reader(ctx, path) as reader:
        while (line := reader.read_line()) is not None:
            _echo(ctx, lines, line)
    return lines


# --- copy -----------------------------------------------------------------


def copy_manual_unguarded(ctx: DemoContext, source: Path, target: Path) -> list[str]:
    lines: list[str] = []
    reader: LineReader | None = None
    writer: LineWriter | None = None
    try:
        reader = open_reader(ctx, source)
        try:
            writer = open_writer(ctx, target)
            while (line := reader.read_line(keepends=True)) is not None:
                _echo(ctx, lines, line.rstrip("\r\n"))
                writer.write(line)
        finally:
            writer.close()
    finally:
        reader.close()
    return lines


def copy_manual_guarded(ctx: DemoContext, source: Path, target: Path) -> list[str]:
    lines: list[str] = []
    reader: LineReader | None = None
    writer: LineWriter | None = None
    try:
        reader = open_reader(ctx, source)
        try:
            writer = open_writer(ctx, target)
            while (line := reader.read_line(keepends=True)) is not None:
                _echo(ctx, lines, line.rstrip("\r\n"))
                writer.write(line)
        finally:
            if writer is not None:
                writer.close()
    finally:
        if reader is not None:
            reader.close()
    return lines


def copy_scoped(ctx: DemoContext, source: Path, target: Path) -> list[str]:
    lines: list[str] = []
    with open_reader(ctx, source) as reader, open_writer(ctx, target) as writer:
        while (line := reader.read_line(keepends=True)) is not None:
            _echo(ctx, lines, line.rstrip("\r\n"))
            writer.write(line)
    return lines


# --- catalog --------------------------------------------------------------


def _greeting(read: Callable[[DemoContext, Path], list[str]]) -> Callable[[DemoContext], list[str]]:
    return lambda ctx: read(ctx, ctx.settings.greeting_path)


def _missing(read: Callable[[DemoContext, Path], list[str]]) -> Callable[[DemoContext], list[str]]:
    return lambda ctx: read(ctx, ctx.settings.missing_path)


def _copy(
    copy: Callable[[DemoContext, Path, Path], list[str]],
) -> Callable[[DemoContext], list[str]]:
    return lambda ctx: copy(ctx, ctx.settings.greeting_path, ctx.settings.copy_path)


_ROUTINES: tuple[DemoRoutine, ...] = (
    DemoRoutine(
        RoutineName.READ_GREETING,
        "Read Greeting (try / finally)",
        Discipline.MANUAL_UNGUARDED,
        _greeting(read_manual_unguarded),
    ),
    DemoRoutine(
        RoutineName.READ_GREETING_SCOPED,
        "Read Greeting (with statement)",
        Discipline.SCOPED,
        _greeting(read_scoped),
    ),
    DemoRoutine(
        RoutineName.READ_MISSING,
        "Greeting Missing (try / finally)",
        Discipline.MANUAL_UNGUARDED,
        _missing(read_manual_unguarded),
    ),
    DemoRoutine(
        RoutineName.READ_MISSING_GUARDED,
        "Greeting Missing (guarded try / finally)",
        Discipline.MANUAL_GUARDED,
        _missing(read_manual_guarded),
    ),
    DemoRoutine(
        RoutineName.READ_MISSING_SCOPED,
        "Greeting Missing (with statement)",
        Discipline.SCOPED,
        _missing(read_scoped),
    ),
    DemoRoutine(
        RoutineName.COPY_LINE_BY_LINE,
        "Copy Line By Line (try / finally)",
        Discipline.MANUAL_UNGUARDED,
        _copy(copy_manual_unguarded),
    ),
    DemoRoutine(
        RoutineName.COPY_LINE_BY_LINE_GUARDED,
        "Copy Line By Line (guarded try / finally)",
        Discipline.MANUAL_GUARDED,
        _copy(copy_manual_guarded),
    ),
    DemoRoutine(
        RoutineName.COPY_LINE_BY_LINE_SCOPED,
        "Copy Line By Line (with statement)",
        Discipline.SCOPED,
        _copy(copy_scoped),
    ),
)

CATALOG: dict[RoutineName, DemoRoutine] = {r.name: r for r in _ROUTINES}


def get_routine(name: RoutineName | str) -> DemoRoutine:
    """Look up a routine by enum member or by its string key."""

    try:
        return CATALOG[RoutineName(name)]
    except ValueError:
        raise KeyError(f"Unknown routine: {name!r}") from None
