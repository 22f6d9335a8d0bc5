"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to any I/O library.
- Outcomes serialize directly for the JSON export.

Note:
- These models describe *what* happened in a run, not *how* it was printed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from core.domain.discipline import Discipline


class RoutineName(str, Enum):
    """Catalog keys of the demonstration routines."""

    READ_GREETING = "read-greeting"
    READ_GREETING_SCOPED = "read-greeting-scoped"
    READ_MISSING = "read-missing"
    READ_MISSING_GUARDED = "read-missing-guarded"
    READ_MISSING_SCOPED = "read-missing-scoped"
    COPY_LINE_BY_LINE = "copy-line-by-line"
    COPY_LINE_BY_LINE_GUARDED = "copy-line-by-line-guarded"
    COPY_LINE_BY_LINE_SCOPED = "copy-line-by-line-scoped"


class HandleState(str, Enum):
    """Lifecycle of a reader/writer wrapper.

    A handle that fails to open raises from its constructor, so it never
    becomes an object and can never be closed.
    """

    OPEN = "open"
    CLOSED = "closed"


class RoutineOutcome(BaseModel):
    """Result of running one demonstration routine through the driver."""

    name: RoutineName = Field(
        ...,
        description="Catalog key of the routine.",
    )
    title: str = Field(
        ...,
        min_length=1,
        description="Title printed in the routine header.",
    )
    discipline: Discipline = Field(
        ...,
        description="Cleanup discipline the routine demonstrates.",
    )
    lines: list[str] = Field(
        default_factory=list,
        description="Lines read (and, for copies, written) before the routine ended.",
    )
    closures: list[str] = Field(
        default_factory=list,
        description="Closure notices in the order they were emitted.",
    )
    succeeded: bool = Field(
        default=True,
        description="False when an exception escaped the routine.",
    )
    error_type: str | None = Field(
        default=None,
        description="Type name of the escaped exception.",
    )
    error_message: str | None = Field(
        default=None,
        description="Message of the escaped exception.",
    )
    masked_error_type: str | None = Field(
        default=None,
        description="Type name of an earlier error the escaped one replaced (implicit context).",
    )
    finished_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the routine finished (UTC).",
    )

    @property
    def masked(self) -> bool:
        return self.masked_error_type is not None
