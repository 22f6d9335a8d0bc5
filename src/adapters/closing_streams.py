"""Reader/writer wrappers that announce their own closure.

Why composition instead of subclassing `io` classes:
- Each wrapper owns exactly one resource (an open file, or an inner wrapper)
  and delegates to it, so the closing order is explicit and observable.
- `close` releases the owned resource first and only then emits
  "<ClassName> closing ...", so a failing release produces no notice.

Two wrappers per direction exist: a file wrapper owning the OS handle and a
buffered wrapper owning a file wrapper.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterator

from core.domain.models import HandleState

CloseSink = Callable[[str], None]

DEFAULT_BUFFER_SIZE = 8192


def _discard(_: str) -> None:
    return None


class ClosingStream(ABC):
    """Base for wrappers that own a resource released by `close`."""

    def __init__(self, *, on_close: CloseSink | None = None) -> None:
        self._on_close = on_close or _discard
        self._state = HandleState.OPEN

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is HandleState.CLOSED

    @property
    def closing_notice(self) -> str:
        return f"{type(self).__name__} closing ..."

    @abstractmethod
    def _release(self) -> None:
        """Release the owned resource; exceptions propagate out of `close`."""

    def close(self) -> None:
        if self.closed:
            return
        self._release()
        self._state = HandleState.CLOSED
        self._on_close(self.closing_notice)

    def _ensure_open(self) -> None:
        if self.closed:
            raise ValueError(f"I/O operation on closed {type(self).__name__}")

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class LoggingFileReader(ClosingStream):
    """Owns an OS file opened for text reading.

    The file is opened in the constructor: a missing path raises
    `FileNotFoundError` and no wrapper object comes into existence.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        encoding: str = "utf-8",
        on_close: CloseSink | None = None,
    ) -> None:
        self.path = Path(path)
        self._file = open(self.path, "r", encoding=encoding, newline="")
        super().__init__(on_close=on_close)

    def read(self, size: int = -1) -> str:
        self._ensure_open()
        return self._file.read(size)

    def _release(self) -> None:
        self._file.close()


class LoggingBufferedReader(ClosingStream):
    """Buffers an inner `LoggingFileReader` and splits it into lines.

    Only the current chunk is kept; `_pos` marks how much of it has been
    consumed, so every character is scanned once.
    """

    def __init__(
        self,
        inner: LoggingFileReader,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_close: CloseSink | None = None,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self._inner = inner
        self._buffer_size = buffer_size
        self._buffer = ""
        self._pos = 0
        self._eof = False
        super().__init__(on_close=on_close)

    @property
    def inner(self) -> LoggingFileReader:
        return self._inner

    def _fill(self) -> bool:
        """Replace the consumed chunk with the next one."""

        if self._eof:
            return False
        chunk = self._inner.read(self._buffer_size)
        if not chunk:
            self._eof = True
            return False
        self._buffer, self._pos = chunk, 0
        return True

    def read_line(self, keepends: bool = False) -> str | None:
        self._ensure_open()
        parts: list[str] = []
        while True:
            if self._pos >= len(self._buffer) and not self._fill():
                break
            buf, start = self._buffer, self._pos
            nl = buf.find("\n", start)
            cr = buf.find("\r", start, nl if nl != -1 else len(buf))
            if cr == -1 and nl == -1:
                parts.append(buf[start:])
                self._pos = len(buf)
                continue
            if cr == -1:
                end = nl + 1
            elif cr + 1 < len(buf):
                end = cr + 2 if buf[cr + 1] == "\n" else cr + 1
            else:
                # "\r" ends the chunk: the "\n" of a "\r\n" may start the next one.
                parts.append(buf[start:])
                self._pos = len(buf)
                if self._fill() and self._buffer.startswith("\n"):
                    parts.append("\n")
                    self._pos = 1
                break
            parts.append(buf[start:end])
            self._pos = end
            break
        if not parts:
            return None
        line = "".join(parts)
        return line if keepends else line.rstrip("\r\n")

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line

    def _release(self) -> None:
        self._buffer, self._pos = "", 0
        self._inner.close()


class LoggingFileWriter(ClosingStream):
    """Owns an OS file opened (and truncated) for text writing."""

    def __init__(
        self,
        path: str | Path,
        *,
        encoding: str = "utf-8",
        on_close: CloseSink | None = None,
    ) -> None:
        self.path = Path(path)
        self._file = open(self.path, "w", encoding=encoding, newline="")
        super().__init__(on_close=on_close)

    def write(self, text: str) -> None:
        self._ensure_open()
        self._file.write(text)

    def flush(self) -> None:
        self._ensure_open()
        self._file.flush()

    def _release(self) -> None:
        self._file.close()


class LoggingBufferedWriter(ClosingStream):
    """Buffers writes to an inner `LoggingFileWriter`.

    Closing flushes the pending buffer before closing the inner writer.
    """

    def __init__(
        self,
        inner: LoggingFileWriter,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_close: CloseSink | None = None,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self._inner = inner
        self._buffer_size = buffer_size
        self._pending: list[str] = []
        self._pending_size = 0
        super().__init__(on_close=on_close)

    @property
    def inner(self) -> LoggingFileWriter:
        return self._inner

    def write(self, text: str) -> None:
        self._ensure_open()
        self._pending.append(text)
        self._pending_size += len(text)
        if self._pending_size >= self._buffer_size:
            self._flush_pending()

    def _flush_pending(self) -> None:
        if self._pending:
            self._inner.write("".join(self._pending))
        self._pending = []
        self._pending_size = 0

    def flush(self) -> None:
        self._ensure_open()
        self._flush_pending()
        self._inner.flush()

    def _release(self) -> None:
        try:
            self._flush_pending()
        finally:
            self._inner.close()
