"""Help launcher for the ``i`` key.

Tries each configured help command in order while the terminal is in cooked
mode, stopping at the first one that runs and exits cleanly.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from .render import draw, draw_status_message
from .state import PagerState
from .terminal import Color, TerminalController, foreground_child


def help_online_message(url: str) -> str:
    return f"Find help online at {url}."


def run_help_command(argv: Sequence[str]) -> bool:
    """Run one help command; ``True`` when it launched and exited with 0."""
    try:
        with foreground_child():
            completed = subprocess.run(list(argv), check=False)
    except OSError:
        return False
    return completed.returncode == 0


def show_help(state: PagerState, terminal: TerminalController) -> bool:
    """Page the manual or README; fall back to printing the help URL.

    Returns ``True`` when one of the help commands succeeded.
    """
    shown = False
    with terminal.cooked_mode():
        for argv in state.settings.help_commands:
            if run_help_command(argv):
                shown = True
                break

    state.dirty = True
    if shown:
        return True

    draw(state, terminal)
    state.dirty = False
    draw_status_message(terminal, state.rows, help_online_message(state.settings.help_url), Color.YELLOW)
    return False
