"""Tests for in-place rendering (infra/render_surface.py).

The surface writes to a rich console forced into terminal mode over an
``io.StringIO`` buffer (see the ``terminal_console`` fixture), so the
exact control sequences can be asserted.
"""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from selectkit.core.frames import Frame
from selectkit.infra.render_surface import ERASE_BELOW, RenderSurface

HIDE = "\x1b[?25l"
SHOW = "\x1b[?25h"
COLUMN_ZERO = "\x1b[1G"
ERASE_LINE = "\x1b[0K"

FRAME: Frame = (
    (("? ", "bold"), ("Pick", "")),
    (("> ", ""), ("1. One", "")),
)


class TestCursorVisibility:
    def test_enter_hides_exit_shows(self, terminal_console: Console, buffer: io.StringIO) -> None:
        with RenderSurface(terminal_console):
            assert buffer.getvalue() == HIDE
        assert buffer.getvalue().endswith(SHOW)

    def test_cursor_shown_after_exception(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        with pytest.raises(RuntimeError):
            with RenderSurface(terminal_console):
                raise RuntimeError("boom")
        assert buffer.getvalue().endswith(SHOW)


class TestAnchor:
    def test_lines_are_counted(self, terminal_console: Console) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.paint(FRAME)
        assert surface.rows_since_anchor == 2

    def test_wrapped_line_counts_every_row(self, terminal_console: Console) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.write_line((("x" * 100, ""),))
        assert surface.rows_since_anchor == 2

    def test_restore_moves_up_by_rows_written(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.paint(FRAME)
        buffer.truncate(0)
        buffer.seek(0)

        surface.restore_to_anchor()
        assert buffer.getvalue() == COLUMN_ZERO + "\x1b[2A"
        assert surface.rows_since_anchor == 0

    def test_restore_at_anchor_only_returns_to_column_zero(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.restore_to_anchor()
        assert buffer.getvalue() == COLUMN_ZERO


class TestPaint:
    def test_first_paint(self, terminal_console: Console, buffer: io.StringIO) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.paint(FRAME)
        assert buffer.getvalue() == (
            COLUMN_ZERO
            + ERASE_BELOW
            + COLUMN_ZERO + ERASE_LINE + "? Pick\n"
            + COLUMN_ZERO + ERASE_LINE + "> 1. One\n"
        )

    def test_repaint_restores_and_clears_first(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.paint(FRAME)
        buffer.truncate(0)
        buffer.seek(0)

        surface.paint(FRAME[:1])
        out = buffer.getvalue()
        assert out.startswith(COLUMN_ZERO + "\x1b[2A" + ERASE_BELOW)
        assert out.endswith("? Pick\n")
        assert surface.rows_since_anchor == 1

    def test_erase_leaves_cursor_at_anchor(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        surface = RenderSurface(terminal_console)
        surface.save_anchor()
        surface.paint(FRAME)
        buffer.truncate(0)
        buffer.seek(0)

        surface.erase()
        assert buffer.getvalue() == COLUMN_ZERO + "\x1b[2A" + ERASE_BELOW
        assert surface.rows_since_anchor == 0

    def test_markup_in_labels_is_not_interpreted(
        self, terminal_console: Console, buffer: io.StringIO,
    ) -> None:
        surface = RenderSurface(terminal_console)
        surface.write_line((("[x] [bold]done[/bold]", ""),))
        assert "[x] [bold]done[/bold]\n" in buffer.getvalue()

    def test_styles_emit_sgr_when_colour_enabled(self, buffer: io.StringIO) -> None:
        console = Console(file=buffer, force_terminal=True, color_system="standard", width=80)
        RenderSurface(console).write_line((("Pick", "bold"),))
        assert "\x1b[1mPick\x1b[0m" in buffer.getvalue()
