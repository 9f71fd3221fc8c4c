"""Rendering and status-line tests.

Replays renderer output on an emulated screen and checks the visible window,
the line-number prefix, and status-bar composition and clipping.
"""

from __future__ import annotations

import unittest

from fake_terminal import FakeTerminal
from navipage.buffer import Buffer
from navipage.buffer_list import BufferList
from navipage.config import Flags, Settings
from navipage.render import HELP_HINT, build_status_line, clip_line, draw, line_number_prefix
from navipage.state import PagerState


def _state(buffers: list[Buffer], rows: int = 24, columns: int = 80, **flag_values) -> PagerState:
    return PagerState(
        program_name="navipage",
        buffers=BufferList(buffers),
        flags=Flags(**flag_values),
        settings=Settings(),
        rows=rows,
        columns=columns,
    )


class StatusLineTests(unittest.TestCase):
    def test_status_line_with_hint(self) -> None:
        self.assertEqual(
            build_status_line(0, 3, "A", 80),
            "#1/3 A  Press 'i' for help.",
        )

    def test_status_line_without_hint(self) -> None:
        self.assertEqual(build_status_line(1, 2, "/tmp/20211104", 80, show_hint=False), "#2/2 /tmp/20211104")

    def test_status_line_is_clipped_before_the_last_column(self) -> None:
        status = build_status_line(0, 1, "a-rather-long-path-name", 12)
        self.assertEqual(status, "#1/1 a-rath")
        self.assertEqual(len(status), 11)

    def test_clip_line_counts_wide_characters_twice(self) -> None:
        self.assertEqual(clip_line("日本語", 5), "日本")
        self.assertEqual(clip_line("abc", 0), "")

    def test_line_number_prefix_is_three_wide(self) -> None:
        self.assertEqual(line_number_prefix(0), b"  1 ")
        self.assertEqual(line_number_prefix(99), b"100 ")
        self.assertEqual(line_number_prefix(1233), b"1234 ")


class DrawTests(unittest.TestCase):
    def test_draws_lines_and_status_on_last_row(self) -> None:
        terminal = FakeTerminal(rows=24)
        state = _state([Buffer.from_bytes("notes", b"a\nb\nc\n")])

        draw(state, terminal)

        screen = terminal.screen()
        self.assertEqual(screen[:4], ["a", "b", "c", ""])
        self.assertEqual(screen[23], f"#1/1 notes  {HELP_HINT}")
        self.assertTrue(state.drawn)

    def test_draws_line_numbers_when_enabled(self) -> None:
        terminal = FakeTerminal(rows=24)
        state = _state([Buffer.from_bytes("notes", b"a\nb\nc\n")], numbers=True)

        draw(state, terminal)

        self.assertEqual(terminal.screen()[:3], ["  1 a", "  2 b", "  3 c"])

    def test_last_line_without_newline_is_drawn_fully(self) -> None:
        terminal = FakeTerminal(rows=24)
        state = _state([Buffer.from_bytes("one", b"single line")])

        draw(state, terminal)

        screen = terminal.screen()
        self.assertEqual(screen[0], "single line")
        self.assertNotIn(b"\0", terminal.output())

    def test_window_starts_at_top_and_fills_all_but_status_row(self) -> None:
        data = "\n".join(str(n) for n in range(100)).encode("ascii")
        terminal = FakeTerminal(rows=10)
        state = _state([Buffer.from_bytes("hundred", data)], rows=10)
        state.buffer.scroll_to_bottom(10)

        draw(state, terminal)

        screen = terminal.screen()
        self.assertEqual(screen[:9], [str(n) for n in range(91, 100)])
        self.assertTrue(screen[9].startswith("#1/1 hundred"))

    def test_switching_to_shorter_buffer_clears_leftover_rows(self) -> None:
        terminal = FakeTerminal(rows=6)
        state = _state(
            [Buffer.from_bytes("long", b"1\n2\n3\n4\n5\n"), Buffer.from_bytes("short", b"x\n")],
            rows=6,
        )
        draw(state, terminal)
        state.buffers.next()
        draw(state, terminal)

        self.assertEqual(terminal.screen(), ["x", "", "", "", "", f"#2/2 short  {HELP_HINT}"])

    def test_unknown_height_draws_only_the_status_bar(self) -> None:
        terminal = FakeTerminal(rows=3)
        state = _state([Buffer.from_bytes("notes", b"a\nb\n")], rows=-1)

        draw(state, terminal)

        self.assertEqual(terminal.screen()[0], f"#1/1 notes  {HELP_HINT}")

    def test_draw_resets_color_before_painting(self) -> None:
        terminal = FakeTerminal(rows=5)
        state = _state([Buffer.from_bytes("notes", b"a\n")], rows=5)

        draw(state, terminal)

        self.assertTrue(terminal.output().startswith(b"\x1b[0m\x1b[1;1H"))

    def test_error_buffer_renders_its_diagnostic(self) -> None:
        terminal = FakeTerminal(rows=5)
        buffer = Buffer.from_error("gone", "navipage: cannot open gone: No such file or directory\n")
        state = _state([buffer], rows=5)

        draw(state, terminal)

        self.assertEqual(terminal.screen()[0], "navipage: cannot open gone: No such file or directory")


if __name__ == "__main__":
    unittest.main()
