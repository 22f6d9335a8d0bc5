"""Doctor command for fixture diagnostics."""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from core.config import AppSettings

_console = Console()


def _check_greeting(path: Path, encoding: str) -> tuple[str, str]:
    if path.is_file():
        try:
            with open(path, "r", encoding=encoding, newline="") as fh:
                count = sum(1 for _ in fh)
        except (OSError, UnicodeDecodeError) as exc:
            return "FAIL", str(exc)
        return "OK", f"{count} line(s)"
    return "FAIL", "Missing -> run `closing-demo init`"


def _check_missing(path: Path) -> tuple[str, str]:
    if path.exists():
        return "FAIL", "Exists, so the open-failure routines will not fail"
    return "OK", "Absent as expected"


def _check_copy_target(path: Path) -> tuple[str, str]:
    directory = path.parent
    if not directory.is_dir():
        return "FAIL", f"Directory {directory} does not exist"
    if not os.access(directory, os.W_OK):
        return "FAIL", f"Directory {directory} is not writable"
    if path.exists():
        return "OK", "Will be overwritten"
    return "OK", "Will be created"


def run() -> None:
    """Check the fixtures the routines rely on."""

    settings = AppSettings()

    table = Table(title="closing-demo doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Path", style="white")
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    checks = [
        ("Greeting fixture", settings.greeting_path, _check_greeting(settings.greeting_path, settings.encoding)),
        ("Missing path", settings.missing_path, _check_missing(settings.missing_path)),
        ("Copy destination", settings.copy_path, _check_copy_target(settings.copy_path)),
    ]
    for name, path, (status, detail) in checks:
        table.add_row(name, str(path), status, detail)

    _console.print(table)

    if any(status == "FAIL" for _, _, (status, _) in checks):
        _console.print("\n[yellow]Note:[/yellow] routines depending on a failed check will report errors.")
