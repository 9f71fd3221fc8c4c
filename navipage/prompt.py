"""Shell-escape prompt run from the ``!`` key.

Leaves raw mode while the user types and the command runs, then waits for a
keypress so the command's output can be read before the pager repaints.
"""

from __future__ import annotations

from .render import draw_status_message
from .state import PagerState
from .terminal import Color, TerminalController

PROMPT = "!"
RETURN_MESSAGE = "navipage: press any key to return."


def run_command_prompt(state: PagerState, terminal: TerminalController) -> int | None:
    """Read a command line, run it through the shell, and wait for a key.

    Returns the shell's exit status, or ``None`` when nothing was run. The
    status is informational only; the pager never acts on it.
    """
    status_row = max(1, state.rows)
    terminal.move_cursor(1, status_row)
    terminal.clear_line()
    terminal.leave_raw()
    terminal.show_cursor()

    terminal.set_color(Color.YELLOW)
    command = terminal.read_line(PROMPT.encode("ascii"))
    terminal.reset_color()

    exit_status: int | None = None
    if command:
        try:
            exit_status = terminal.run_shell(command)
        except OSError as exc:
            terminal.write(f"{state.program_name}: cannot run shell: {exc.strerror or exc}\n".encode("utf-8"))

    terminal.enter_raw()
    draw_status_message(terminal, state.rows, RETURN_MESSAGE, Color.YELLOW)
    terminal.read_key()

    terminal.hide_cursor()
    terminal.reset_color()
    state.dirty = True
    return exit_status
