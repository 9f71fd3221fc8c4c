"""In-memory file buffers with a byte-offset line index.

A buffer owns one file's bytes plus a trailing NUL sentinel, the offsets of
every line start, and the index of the line drawn at the top of the viewport.
Loading never raises for I/O problems: the buffer holds a diagnostic instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .diagnostics import DEFAULT_PROGRAM_NAME, format_diagnostic, os_reason

SENTINEL = b"\0"
NEWLINE = 0x0A


@dataclass(frozen=True)
class Move:
    """Outcome of a scroll or buffer-change request.

    ``target`` is the position that was requested. Truthy only when accepted.
    """

    accepted: bool
    target: int

    def __bool__(self) -> bool:
        return self.accepted


def index_line_starts(text: bytes) -> list[int]:
    """Return offsets of every line start in ``text`` (sentinel included).

    Offset 0 starts the first line and each offset after a newline starts
    another, except the one that lands on the sentinel.
    """
    length = len(text) - 1 if text.endswith(SENTINEL) else len(text)
    if length <= 0:
        return []
    starts = [0]
    pos = text.find(b"\n", 0, length)
    while pos != -1:
        if pos + 1 < length:
            starts.append(pos + 1)
        pos = text.find(b"\n", pos + 1, length)
    return starts


@dataclass
class Buffer:
    path: str
    text: bytes
    line_starts: list[int] = field(default_factory=list)
    top: int = 0
    error: str | None = None

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> Buffer:
        text = bytes(data) + SENTINEL
        return cls(path=path, text=text, line_starts=index_line_starts(text))

    @classmethod
    def from_error(cls, path: str, message: str) -> Buffer:
        buffer = cls.from_bytes(path, message.encode("utf-8", errors="surrogateescape"))
        buffer.error = message
        return buffer

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def length(self) -> int:
        """Byte length of the contents, sentinel excluded."""
        return len(self.text) - 1

    def line_count(self) -> int:
        return len(self.line_starts)

    def line_slice(self, index: int) -> tuple[int, int]:
        """Return ``(start, end)`` offsets of line ``index``.

        The range includes the terminating newline when present; the last line
        ends at the sentinel, exclusive.
        """
        start = self.line_starts[index]
        if index + 1 < len(self.line_starts):
            return start, self.line_starts[index + 1]
        return start, self.length

    def line_bytes(self, index: int) -> bytes:
        start, end = self.line_slice(index)
        return self.text[start:end]

    def visible_lines(self, rows: int) -> int:
        """Number of lines drawn above the status bar for a ``rows``-high terminal."""
        if rows < 2:
            return 0
        return min(self.line_count(), rows - 1)

    def max_top_bound(self, rows: int) -> int:
        """Exclusive upper bound for ``top``."""
        return max(1, self.line_count() - rows + 2)

    def scroll(self, delta: int, rows: int) -> Move:
        new_top = self.top + delta
        if rows < 2:
            return Move(False, new_top)
        if new_top < 0 or new_top >= self.max_top_bound(rows):
            return Move(False, new_top)
        self.top = new_top
        return Move(True, new_top)

    def scroll_to_top(self) -> None:
        self.top = 0

    def scroll_to_bottom(self, rows: int) -> None:
        if rows < 2:
            self.top = 0
            return
        self.top = max(0, self.line_count() - rows + 1)

    def clamp_top(self, rows: int) -> None:
        """Pull ``top`` back in range after the terminal grew."""
        if rows < 2:
            return
        self.top = min(self.top, max(0, self.line_count() - rows + 1))


def _error_buffer(path: str, program_name: str, action: str, reason: str) -> Buffer:
    return Buffer.from_error(path, format_diagnostic(program_name, f"cannot {action}", path, reason))


def load_buffer(path: str | os.PathLike[str], program_name: str = DEFAULT_PROGRAM_NAME) -> Buffer:
    """Read ``path`` fully into a new buffer.

    Open, seek, size and read failures produce an error buffer whose contents
    are the diagnostic line. ``MemoryError`` is left to the caller, which
    treats it as fatal.
    """
    path_text = os.fsdecode(path)
    try:
        handle = open(path, "rb")
    except OSError as exc:
        return _error_buffer(path_text, program_name, "open", os_reason(exc))

    with handle:
        try:
            handle.seek(0, os.SEEK_END)
        except OSError as exc:
            return _error_buffer(path_text, program_name, "seek", os_reason(exc))
        try:
            size = handle.tell()
            handle.seek(0)
        except OSError as exc:
            return _error_buffer(path_text, program_name, "size", os_reason(exc))
        try:
            data = handle.read(size)
        except OSError as exc:
            return _error_buffer(path_text, program_name, "read", os_reason(exc))

    if len(data) != size:
        return _error_buffer(path_text, program_name, "read", "short read")
    return Buffer.from_bytes(path_text, data)
