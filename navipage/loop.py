"""Main interactive loop: repaint when dirty, read one key, dispatch it."""

from __future__ import annotations

from .keys import KeyRegistry, build_key_registry
from .render import draw
from .state import EXIT_FAILURE, PagerState
from .terminal import TerminalController


def run_main_loop(
    state: PagerState,
    terminal: TerminalController,
    registry: KeyRegistry | None = None,
) -> int:
    """Run until a key requests exit; return the process exit status.

    Each keystroke causes at most one state change and at most one repaint.
    End of input on the controlling terminal ends the loop with failure.
    """
    keys = registry if registry is not None else build_key_registry(state, terminal)
    while True:
        if state.dirty:
            draw(state, terminal)
            state.dirty = False

        key = terminal.read_key()
        if key < 0:
            state.request_exit(EXIT_FAILURE)
        else:
            keys.dispatch(key)

        if state.exit_status is not None:
            return state.exit_status
