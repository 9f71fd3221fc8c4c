from __future__ import annotations

from dataclasses import dataclass, field

from .buffer_list import BufferList
from .config import Flags, Settings

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass
class PagerState:
    """Everything the pager components share for one run."""

    program_name: str
    buffers: BufferList
    flags: Flags
    settings: Settings = field(default_factory=Settings)
    rows: int = -1
    columns: int = 80
    dirty: bool = True
    drawn: bool = False
    exit_status: int | None = None

    @property
    def buffer(self):
        return self.buffers.buffer

    def request_exit(self, status: int) -> None:
        self.exit_status = status
