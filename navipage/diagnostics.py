"""Error types and standard-error diagnostics.

Every user-facing message has the shape ``<prog>: <action> <subject>: <reason>``.
Nothing here touches the terminal; callers decide when stderr is safe to use.
"""

from __future__ import annotations

import sys
from typing import TextIO

DEFAULT_PROGRAM_NAME = "navipage"


class NavipageError(Exception):
    """Base class for fatal navipage errors."""


class TerminalError(NavipageError):
    """Controlling terminal could not be opened or configured."""


def os_reason(exc: OSError) -> str:
    """Return the system error string carried by ``exc``."""
    return exc.strerror or str(exc)


def format_diagnostic(program_name: str, action: str, subject: str, reason: str | None = None) -> str:
    """Build one newline-terminated diagnostic line."""
    message = f"{program_name}: {action} {subject}"
    if reason:
        message += f": {reason}"
    return message + "\n"


def warn(message: str, stream: TextIO | None = None) -> None:
    """Write an already formatted diagnostic to standard error."""
    out = stream if stream is not None else sys.stderr
    if not message.endswith("\n"):
        message += "\n"
    out.write(message)
    out.flush()


def out_of_memory(program_name: str, stream: TextIO | None = None) -> None:
    warn(f"{program_name}: error: out of memory", stream)


def debug_dump(state, stream: TextIO | None = None) -> None:
    """Write the ``-d`` startup dump: files, buffer sizes, and terminal rows."""
    out = stream if stream is not None else sys.stderr
    buffers = state.buffers
    out.write(f"amt: {len(buffers)}\n")
    out.write(f"rows: {state.rows}\n")
    out.write(f"numbers: {int(state.flags.numbers)}\n")
    for index, buffer in enumerate(buffers):
        status = "error" if buffer.is_error else "ok"
        out.write(
            f"[{index}] {buffer.path} length: {buffer.length} "
            f"lines: {buffer.line_count()} {status}\n"
        )
    out.flush()
