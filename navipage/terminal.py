"""Terminal control helpers for the pager session.

Owns the controlling-terminal descriptor, raw-mode lifecycle, cursor and
color escape sequences, key and line reads, and the shell escape.
Keystrokes come from the controlling terminal so stdin redirection is harmless.
"""

from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import sys
import termios
from enum import IntEnum
from typing import BinaryIO

from .diagnostics import TerminalError, os_reason

CONTROLLING_TERMINAL = "/dev/tty"
DEFAULT_COLUMNS = 80

# termios.tcgetattr list index of the local-mode flags.
_LFLAG = 3

# Keyboard signals the foreground child should receive instead of the pager.
CHILD_KEYBOARD_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def _ignore_while_child_runs(_signum: int, _frame) -> None:
    return None


@contextlib.contextmanager
def foreground_child():
    """Let a child program own Ctrl-C and Ctrl-\\ while it runs.

    Installs a no-op Python handler; the exec'd child keeps default dispositions.
    """
    previous = {signum: signal.signal(signum, _ignore_while_child_runs) for signum in CHILD_KEYBOARD_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            if handler is not None:
                signal.signal(signum, handler)


class Color(IntEnum):
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


class TerminalController:
    """Manage terminal mode transitions and screen output for the pager."""

    def __init__(self, tty_fd: int, out: BinaryIO, *, owns_fd: bool = False) -> None:
        """Capture tty state of ``tty_fd`` and bind the output stream."""
        self.tty_fd = tty_fd
        self.out = out
        self._owns_fd = owns_fd
        try:
            self.saved_mode = termios.tcgetattr(tty_fd)
        except termios.error as exc:
            raise TerminalError(f"cannot tcgetattr {CONTROLLING_TERMINAL}: {exc}") from exc
        self.active_mode = self._build_active_mode(self.saved_mode)
        self._raw = False

    @classmethod
    def open(cls, device: str = CONTROLLING_TERMINAL, out: BinaryIO | None = None) -> TerminalController:
        """Open the controlling terminal device and wrap it."""
        try:
            fd = os.open(device, os.O_RDWR | os.O_NOCTTY)
        except OSError as exc:
            raise TerminalError(f"cannot open {device}: {os_reason(exc)}") from exc
        stream = out if out is not None else sys.stdout.buffer
        try:
            return cls(fd, stream, owns_fd=True)
        except TerminalError:
            os.close(fd)
            raise

    @staticmethod
    def _build_active_mode(saved_mode: list) -> list:
        mode = list(saved_mode)
        mode[_LFLAG] = mode[_LFLAG] & ~(termios.ECHO | termios.ICANON)
        return mode

    @property
    def is_raw(self) -> bool:
        return self._raw

    def enter_raw(self) -> None:
        """Install the attribute set with echo and canonical mode cleared."""
        try:
            termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self.active_mode)
        except termios.error as exc:
            raise TerminalError(f"cannot tcsetattr {CONTROLLING_TERMINAL}: {exc}") from exc
        self._raw = True

    def leave_raw(self) -> None:
        """Reinstall the saved attribute set for cooked-mode child programs."""
        try:
            termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self.saved_mode)
        except termios.error as exc:
            raise TerminalError(f"cannot tcsetattr {CONTROLLING_TERMINAL}: {exc}") from exc
        self._raw = False

    def restore(self) -> None:
        """Reinstall the saved attributes; safe to call repeatedly and during exit."""
        with contextlib.suppress(termios.error, OSError):
            termios.tcsetattr(self.tty_fd, termios.TCSANOW, self.saved_mode)
        self._raw = False

    def close(self) -> None:
        if self._owns_fd:
            with contextlib.suppress(OSError):
                os.close(self.tty_fd)
            self._owns_fd = False

    @contextlib.contextmanager
    def cooked_mode(self):
        """Temporarily hand the terminal back to line-oriented programs."""
        self.leave_raw()
        self.show_cursor()
        self.flush()
        try:
            yield
        finally:
            self.enter_raw()
            self.hide_cursor()
            self.reset_color()

    def rows(self) -> int:
        """Return terminal height, or ``-1`` when it cannot be queried."""
        try:
            return os.get_terminal_size(self.tty_fd).lines
        except OSError:
            return -1

    def columns(self) -> int:
        try:
            return os.get_terminal_size(self.tty_fd).columns
        except OSError:
            return DEFAULT_COLUMNS

    def write(self, data: bytes) -> None:
        self.out.write(data)

    def flush(self) -> None:
        self.out.flush()

    def clear_screen(self) -> None:
        self.write(b"\x1b[2J")

    def move_cursor(self, col: int, row: int) -> None:
        self.write(f"\x1b[{max(1, row)};{max(1, col)}H".encode("ascii"))

    def clear_line(self) -> None:
        self.write(b"\x1b[2K")

    def set_color(self, fg: Color, bg: Color | None = None) -> None:
        codes = [str(30 + int(fg))]
        if bg is not None:
            codes.append(str(40 + int(bg)))
        self.write(f"\x1b[{';'.join(codes)}m".encode("ascii"))

    def reset_color(self) -> None:
        self.write(b"\x1b[0m")

    def hide_cursor(self) -> None:
        self.write(b"\x1b[?25l")

    def show_cursor(self) -> None:
        self.write(b"\x1b[?25h")

    def read_key(self) -> int:
        """Block for one byte from the terminal; ``-1`` at end of input."""
        ch = os.read(self.tty_fd, 1)
        if not ch:
            return -1
        return ch[0]

    def read_line(self, prompt: bytes = b"") -> str | None:
        """Read one line in cooked mode; ``None`` when input ended first."""
        if prompt:
            self.write(prompt)
            self.flush()
        chunks: list[bytes] = []
        while True:
            chunk = os.read(self.tty_fd, 1024)
            if not chunk:
                if not chunks:
                    return None
                break
            chunks.append(chunk)
            if chunk.endswith(b"\n"):
                break
        line = b"".join(chunks).rstrip(b"\r\n")
        return os.fsdecode(line)

    def run_shell(self, command: str) -> int:
        """Run ``command`` through the platform shell and return its exit status."""
        self.flush()
        with foreground_child():
            completed = subprocess.run(command, shell=True, check=False)
        return completed.returncode
