"""Full-screen painting of the current buffer and the status bar.

Every state change repaints the whole viewport; there are no partial updates.
"""

from __future__ import annotations

import unicodedata

from .state import PagerState
from .terminal import Color, TerminalController

HELP_HINT = "Press 'i' for help."
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def clip_line(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)


def build_status_line(current: int, total: int, path: str, width: int, show_hint: bool = True) -> str:
    """Compose ``#<n>/<N> <path>`` plus the optional hint, clipped to ``width``.

    The last column is left empty so the terminal never wraps the status row.
    """
    text = f"#{current + 1}/{total} {path}"
    if show_hint:
        text += f"  {HELP_HINT}"
    return clip_line(text, max(1, width - 1))


def line_number_prefix(index: int) -> bytes:
    return b"%3d " % (index + 1)


def draw_status_message(terminal: TerminalController, rows: int, message: str, color: Color | None = None) -> None:
    """Replace the status row with ``message``, optionally colored."""
    terminal.move_cursor(1, max(1, rows))
    terminal.clear_line()
    if color is not None:
        terminal.set_color(color)
    terminal.write(clip_line(message, max(1, terminal.columns() - 1)).encode("utf-8", errors="surrogateescape"))
    if color is not None:
        terminal.reset_color()
    terminal.flush()


def draw(state: PagerState, terminal: TerminalController) -> None:
    """Paint the visible window of the current buffer and the status bar."""
    buffer = state.buffer
    rows = state.rows
    terminal.reset_color()
    terminal.move_cursor(1, 1)

    shown = min(buffer.visible_lines(rows), max(0, buffer.line_count() - buffer.top))
    for row in range(shown):
        index = buffer.top + row
        line = buffer.line_bytes(index)
        terminal.clear_line()
        if state.flags.numbers:
            terminal.write(line_number_prefix(index))
        terminal.write(line)
        if not line.endswith(b"\n") and row < rows - 2:
            terminal.write(b"\n")

    # Clear rows left over from a longer buffer or an earlier scroll position.
    for row in range(shown + 1, rows):
        terminal.move_cursor(1, row)
        terminal.clear_line()

    terminal.move_cursor(1, max(1, rows))
    terminal.clear_line()
    status = build_status_line(
        state.buffers.current,
        len(state.buffers),
        buffer.path,
        state.columns,
        show_hint=state.settings.show_hint,
    )
    terminal.write(status.encode("utf-8", errors="surrogateescape"))
    terminal.flush()
    state.drawn = True
