"""Single-keystroke dispatch for the pager.

Each binding maps one or more key codes to an action. Actions mutate the
shared state and set ``state.dirty`` when a repaint is needed; rejected
moves leave it untouched so boundary keys stay silent.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .help import show_help
from .prompt import run_command_prompt
from .state import EXIT_SUCCESS, PagerState
from .terminal import TerminalController

CTRL_E = 0x05
CTRL_Y = 0x19


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key codes to a single action callback."""

    keys: tuple[int, ...]
    handler: Callable[[], bool | None]


class KeyRegistry:
    """Small key-dispatch table keyed by raw byte values."""

    def __init__(self) -> None:
        self._handlers: dict[int, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyBinding) -> KeyRegistry:
        """Register one binding, overwriting existing handlers for the same keys."""
        for key in binding.keys:
            self._handlers[key] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def bound_keys(self) -> set[int]:
        return set(self._handlers)

    def dispatch(self, key: int) -> bool | None:
        """Invoke the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


def _keys(*chars: str | int) -> tuple[int, ...]:
    return tuple(ord(ch) if isinstance(ch, str) else ch for ch in chars)


def build_key_registry(state: PagerState, terminal: TerminalController) -> KeyRegistry:
    """Bind every pager key to its action over ``state`` and ``terminal``."""

    def mark_dirty_if(accepted) -> bool:
        if accepted:
            state.dirty = True
        return False

    def scroll(delta: int) -> bool:
        return mark_dirty_if(state.buffer.scroll(delta, state.rows))

    def scroll_to_top() -> bool:
        state.buffer.scroll_to_top()
        state.dirty = True
        return False

    def scroll_to_bottom() -> bool:
        state.buffer.scroll_to_bottom(state.rows)
        state.dirty = True
        return False

    def toggle_numbers() -> bool:
        state.flags.numbers = not state.flags.numbers
        state.dirty = True
        return False

    def refresh() -> bool:
        state.rows = terminal.rows()
        state.columns = terminal.columns()
        for buffer in state.buffers:
            buffer.clamp_top(state.rows)
        state.dirty = True
        return False

    def quit_pager() -> bool:
        state.request_exit(EXIT_SUCCESS)
        return True

    def open_help() -> bool:
        show_help(state, terminal)
        return False

    def command_prompt() -> bool:
        run_command_prompt(state, terminal)
        return False

    buffers = state.buffers
    return KeyRegistry().register_bindings(
        KeyBinding(_keys("g"), scroll_to_top),
        KeyBinding(_keys("G"), scroll_to_bottom),
        KeyBinding(_keys("h"), lambda: mark_dirty_if(buffers.prev())),
        KeyBinding(_keys("H"), lambda: mark_dirty_if(buffers.first())),
        KeyBinding(_keys("j", CTRL_E), lambda: scroll(1)),
        KeyBinding(_keys("k", CTRL_Y), lambda: scroll(-1)),
        KeyBinding(_keys("l"), lambda: mark_dirty_if(buffers.next())),
        KeyBinding(_keys("L"), lambda: mark_dirty_if(buffers.last())),
        KeyBinding(_keys("N"), toggle_numbers),
        KeyBinding(_keys("q"), quit_pager),
        KeyBinding(_keys("r"), refresh),
        KeyBinding(_keys("i"), open_help),
        KeyBinding(_keys("!"), command_prompt),
    )
