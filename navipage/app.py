"""Pager lifecycle: signals, terminal setup and teardown, buffer loading.

Builds the shared state, enters raw mode, paints the first buffer, and runs
the key loop. Every exit path, including fatal signals, goes through
terminal restoration.
"""

from __future__ import annotations

import atexit
import contextlib
import signal
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from .buffer import Buffer, load_buffer
from .buffer_list import BufferList
from .config import Flags, Settings, load_settings
from .diagnostics import TerminalError, debug_dump, out_of_memory, warn
from .loop import run_main_loop
from .state import EXIT_FAILURE, EXIT_SUCCESS, PagerState
from .terminal import TerminalController

SIGNAL_EXIT_STATUS: dict[int, int] = {
    signal.SIGINT: EXIT_SUCCESS,
    signal.SIGTERM: EXIT_SUCCESS,
    signal.SIGQUIT: EXIT_SUCCESS,
    signal.SIGHUP: EXIT_FAILURE,
}


class SignalExit(SystemExit):
    """Raised from a signal handler so ``finally`` blocks restore the terminal."""

    def __init__(self, signum: int) -> None:
        super().__init__(SIGNAL_EXIT_STATUS.get(signum, EXIT_FAILURE))
        self.signum = signum


def _handle_signal(signum: int, _frame) -> None:
    raise SignalExit(signum)


def install_signal_handlers() -> dict[int, object]:
    """Route interrupt, terminate, quit and hangup through ``SignalExit``.

    Returns the previous handlers so callers can reinstate them.
    """
    previous: dict[int, object] = {}
    for signum in SIGNAL_EXIT_STATUS:
        previous[signum] = signal.signal(signum, _handle_signal)
    return previous


def restore_signal_handlers(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


class ExitHooks:
    """Terminal teardown shared by ``atexit`` and the normal return path.

    Runs once. The trailing newline is only printed after something was drawn,
    so the shell prompt starts on a fresh line below the status bar.
    """

    def __init__(self, terminal: TerminalController, state: PagerState | None = None) -> None:
        self.terminal = terminal
        self.state = state
        self._done = False

    def __call__(self) -> None:
        if self._done:
            return
        self._done = True
        try:
            if self.state is not None and self.state.drawn:
                with contextlib.suppress(OSError, ValueError):
                    self.terminal.reset_color()
                    self.terminal.show_cursor()
                    self.terminal.write(b"\n")
                    self.terminal.flush()
        finally:
            self.terminal.restore()


def load_buffers(paths: Sequence[str], program_name: str) -> BufferList:
    buffers: list[Buffer] = [load_buffer(path, program_name) for path in paths]
    return BufferList(buffers)


def run_pager(
    paths: Sequence[str],
    flags: Flags,
    program_name: str = "navipage",
    settings: Settings | None = None,
    open_terminal: Callable[[], TerminalController] = TerminalController.open,
    stderr: TextIO | None = None,
) -> int:
    """Page ``paths`` interactively and return the process exit status."""
    err = stderr if stderr is not None else sys.stderr
    if not paths:
        return EXIT_FAILURE
    if settings is None:
        settings = load_settings()
    if settings.numbers:
        flags.numbers = True

    previous_handlers = install_signal_handlers()
    try:
        try:
            terminal = open_terminal()
        except TerminalError as exc:
            warn(f"{program_name}: {exc}", err)
            return EXIT_FAILURE

        hooks = ExitHooks(terminal)
        atexit.register(hooks)
        try:
            try:
                terminal.enter_raw()
            except TerminalError as exc:
                warn(f"{program_name}: {exc}", err)
                return EXIT_FAILURE

            try:
                buffers = load_buffers(paths, program_name)
            except MemoryError:
                out_of_memory(program_name, err)
                return EXIT_FAILURE

            state = PagerState(
                program_name=program_name,
                buffers=buffers,
                flags=flags,
                settings=settings,
                rows=terminal.rows(),
                columns=terminal.columns(),
            )
            hooks.state = state
            if flags.debug:
                debug_dump(state, err)

            terminal.hide_cursor()
            terminal.clear_screen()
            return run_main_loop(state, terminal)
        finally:
            hooks()
            atexit.unregister(hooks)
            terminal.close()
    finally:
        restore_signal_handlers(previous_handlers)
