"""Ordered buffer collection with a current-buffer cursor."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .buffer import Buffer, Move


class BufferList:
    def __init__(self, buffers: Sequence[Buffer], current: int = 0) -> None:
        if not buffers:
            raise ValueError("BufferList needs at least one buffer")
        self._buffers = list(buffers)
        self.current = 0
        self.change(current)

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[Buffer]:
        return iter(self._buffers)

    def __getitem__(self, index: int) -> Buffer:
        return self._buffers[index]

    @property
    def buffer(self) -> Buffer:
        """Buffer currently shown to the user."""
        return self._buffers[self.current]

    def change(self, new_index: int) -> Move:
        """Make ``new_index`` current when it is in range; otherwise leave state alone."""
        if 0 <= new_index < len(self._buffers):
            self.current = new_index
            return Move(True, new_index)
        return Move(False, new_index)

    def first(self) -> Move:
        return self.change(0)

    def last(self) -> Move:
        return self.change(len(self._buffers) - 1)

    def prev(self) -> Move:
        return self.change(self.current - 1)

    def next(self) -> Move:
        return self.change(self.current + 1)
