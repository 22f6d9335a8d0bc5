"""Fixture loader.

This module lives in `core/` because it owns the fixture *content* the
routines read, without coupling it to the CLI.

The repo ships `greeting.txt` at the project root; `init` recreates it
anywhere else.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_GREETING = (
    "Hello there!\n"
    "Welcome to the resource cleanup demo.\n"
    "Every handle opened here is closed exactly once.\n"
    "Goodbye.\n"
)


def write_greeting_fixture(path: Path, *, force: bool = False, encoding: str = "utf-8") -> bool:
    """Write the default greeting to `path`.

    Returns False (and leaves the file alone) when it exists and `force` is
    not set.
    """

    if path.exists() and not force:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding=encoding, newline="") as fh:
        fh.write(DEFAULT_GREETING)
    return True
