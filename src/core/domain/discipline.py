"""Cleanup disciplines demonstrated by the routines.

Lives in the domain layer so the routine catalog, the driver and the CLI
share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Discipline(str, Enum):
    """How a routine releases the handles it opened."""

    MANUAL_UNGUARDED = "manual_unguarded"
    MANUAL_GUARDED = "manual_guarded"
    SCOPED = "scoped"

    def label(self) -> str:
        """Human readable label for tables and reports."""

        if self is Discipline.MANUAL_UNGUARDED:
            return "try / finally"
        if self is Discipline.MANUAL_GUARDED:
            return "guarded try / finally"
        return "with statement"
