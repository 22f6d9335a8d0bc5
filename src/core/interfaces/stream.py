"""Line-oriented stream contracts.

Why Protocol:
- Structural contracts (duck typing) instead of a rigid hierarchy.
- Routines are written against these shapes, not against the concrete
  logging wrappers, so any closable reader/writer pair can be swapped in.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Closable(Protocol):
    """Anything that owns a resource released by `close`.

    Usable in a `with` statement: leaving the block closes it.
    """

    @property
    def closed(self) -> bool: ...

    def close(self) -> None:
        """Release the resource. Calling it again is a no-op."""

        ...

    def __enter__(self): ...

    def __exit__(self, *args): ...


@runtime_checkable
class LineReader(Closable, Protocol):
    """Reads text one line at a time."""

    def read_line(self, keepends: bool = False) -> str | None:
        """Return the next line, or `None` at end of input."""

        ...


@runtime_checkable
class LineWriter(Closable, Protocol):
    """Writes text, possibly buffered."""

    def write(self, text: str) -> None: ...

    def flush(self) -> None: ...
