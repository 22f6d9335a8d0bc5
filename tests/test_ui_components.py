from __future__ import annotations

import io

import pytest
from rich.console import Console

from cli.ui_components import format_header, print_failure, print_header
from core.domain.models import RoutineName
from core.services.demo_routines import get_routine


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_header_has_blank_line_rules_and_centred_title():
    lines = format_header("Read", 10)
    assert lines == ["", "-" * 10, "   Read   ", "-" * 10]


def test_header_puts_odd_padding_on_the_right():
    assert format_header("abc", 6)[2] == " abc  "


def test_header_title_longer_than_width_is_not_cut():
    assert format_header("a long title", 4)[2] == "a long title"


def test_print_header_writes_raw_lines():
    console = _console()
    print_header(console, "[bold]Copy[/bold]", 86)
    out = console.file.getvalue().splitlines()
    assert out[0] == ""
    assert out[1] == "-" * 86
    assert out[2].strip() == "[bold]Copy[/bold]"
    assert out[3] == "-" * 86


def _raise_from(name: RoutineName, settings, recorder) -> BaseException:
    try:
        get_routine(name).run(recorder.context(settings))
    except Exception as exc:
        return exc
    pytest.fail(f"{name} did not fail")


def test_failure_shows_only_the_cleanup_error_by_default(settings, recorder):
    exc = _raise_from(RoutineName.READ_MISSING, settings, recorder)
    console = _console()
    print_failure(console, exc)
    out = console.file.getvalue()
    assert "AttributeError" in out
    assert "FileNotFoundError" not in out


def test_failure_with_chain_reveals_the_masked_error(settings, recorder):
    exc = _raise_from(RoutineName.READ_MISSING, settings, recorder)
    console = _console()
    print_failure(console, exc, chained=True)
    out = console.file.getvalue()
    assert "AttributeError" in out
    assert "FileNotFoundError" in out


def test_scoped_failure_shows_the_open_error(settings, recorder):
    exc = _raise_from(RoutineName.READ_MISSING_SCOPED, settings, recorder)
    console = _console()
    print_failure(console, exc)
    out = console.file.getvalue()
    assert "FileNotFoundError" in out
    assert "AttributeError" not in out
