"""Tests for the prompt orchestration (core/prompt_service.py).

The service is driven by :class:`RecordingTerminal`, a stub provider
that replays key events, records every surface call, and can be told
to fail raw-mode acquisition.  No real terminal is involved.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from selectkit.core.frames import Frame, StyledLine, plain_text
from selectkit.core.keys import KeyEvent, Keys
from selectkit.core.models import Option, PromptSpec, SelectionMode
from selectkit.core.prompt_service import PromptService
from selectkit.exceptions import (
    CancelledError,
    DecodeError,
    NotATTYError,
    TerminalStateError,
)


# ---------------------------------------------------------------------------
# Stub terminal
# ---------------------------------------------------------------------------

class RecordingSurface:
    def __init__(self, calls: list[str]) -> None:
        self.calls = calls
        self.frames: list[list[str]] = []

    def __enter__(self) -> RecordingSurface:
        self.calls.append("surface.enter")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.calls.append("surface.exit")

    def save_anchor(self) -> None:
        self.calls.append("save_anchor")

    def restore_to_anchor(self) -> None:
        self.calls.append("restore_to_anchor")

    def clear_from_anchor_to_end(self) -> None:
        self.calls.append("clear")

    def write_line(self, line: StyledLine) -> None:
        self.calls.append("write_line")

    def paint(self, frame: Frame) -> None:
        self.calls.append("paint")
        self.frames.append([plain_text(line) for line in frame])

    def erase(self) -> None:
        self.calls.append("erase")


class ScriptedKeys:
    def __init__(self, events: Iterable[KeyEvent | Exception]) -> None:
        self._events = list(events)

    def read_key(self) -> KeyEvent:
        if not self._events:
            raise DecodeError("Input ended while waiting for a key press.")
        event = self._events.pop(0)
        if isinstance(event, Exception):
            raise event
        return event


class RecordingTerminal:
    """Stub :class:`TerminalProvider` that logs every call it receives."""

    def __init__(
        self,
        *,
        interactive: bool = True,
        keys: Iterable[KeyEvent | Exception] = (),
        answers: Iterable[str] = (),
        raw_error: Exception | None = None,
        line_io_factory: Any = None,
    ) -> None:
        self.interactive = interactive
        self.keys = ScriptedKeys(keys)
        self.raw_error = raw_error
        self.calls: list[str] = []
        self.surface = RecordingSurface(self.calls)
        self._answers = list(answers)
        self._line_io_factory = line_io_factory

    def is_interactive(self) -> bool:
        self.calls.append("is_interactive")
        return self.interactive

    def enable_raw_mode(self) -> Any:
        self.calls.append("enable_raw_mode")
        if self.raw_error is not None:
            raise self.raw_error
        return self._guard()

    @contextmanager
    def _guard(self) -> Iterator[None]:
        self.calls.append("raw.enter")
        try:
            yield
        finally:
            self.calls.append("raw.exit")

    def render_surface(self) -> RecordingSurface:
        self.calls.append("render_surface")
        return self.surface

    def key_source(self) -> ScriptedKeys:
        self.calls.append("key_source")
        return self.keys

    def line_io(self) -> Any:
        self.calls.append("line_io")
        return self._line_io_factory(*self._answers)


FRUIT = ("apple", "banana", "cherry")


def _spec(
    default: str | None = None,
    mode: SelectionMode = SelectionMode.SINGLE,
    options: tuple[str, ...] = FRUIT,
    **kwargs: Any,
) -> PromptSpec:
    return PromptSpec("Fruit", options, default=default, mode=mode, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Interactive path
# ---------------------------------------------------------------------------

class TestInteractive:
    def test_down_enter_from_default(self) -> None:
        """Default 'banana', Down, Enter confirms 'cherry'."""
        terminal = RecordingTerminal(keys=[Keys.DOWN, Keys.ENTER])
        assert PromptService(terminal).run(_spec(default="banana")) == "cherry"
        assert terminal.surface.frames[0][2] == "> 2. banana"
        assert terminal.surface.frames[1][3] == "> 3. cherry"

    def test_multi_space_down_space_enter(self) -> None:
        """Multi over a, b, c: Space, Down, Space, Enter confirms 'a,b'."""
        terminal = RecordingTerminal(keys=[Keys.SPACE, Keys.DOWN, Keys.SPACE, Keys.ENTER])
        spec = _spec(mode=SelectionMode.MULTI, options=("a", "b", "c"))
        assert PromptService(terminal).run(spec) == "a,b"

    def test_session_order(self) -> None:
        terminal = RecordingTerminal(keys=[Keys.ENTER])
        PromptService(terminal).run(_spec())
        assert terminal.calls == [
            "is_interactive",
            "enable_raw_mode",
            "raw.enter",
            "key_source",
            "render_surface",
            "surface.enter",
            "save_anchor",
            "paint",
            "paint",
            "surface.exit",
            "raw.exit",
        ]

    def test_confirm_leaves_summary_line(self) -> None:
        terminal = RecordingTerminal(keys=[KeyEvent.printable("2")])
        assert PromptService(terminal).run(_spec()) == "banana"
        assert terminal.surface.frames[-1] == ["? Fruit: banana"]

    def test_multi_summary_lists_labels(self) -> None:
        options = (Option("Red", value="r"), Option("Blue", value="b"))
        terminal = RecordingTerminal(keys=[KeyEvent.printable("2"), KeyEvent.printable("1"), Keys.ENTER])
        spec = PromptSpec("Colours", options, mode=SelectionMode.MULTI)
        assert PromptService(terminal).run(spec) == "r,b"
        assert terminal.surface.frames[-1] == ["? Colours: Red, Blue"]

    def test_ignored_keys_do_not_repaint(self) -> None:
        terminal = RecordingTerminal(keys=[KeyEvent.printable("x"), Keys.TAB, Keys.ENTER])
        PromptService(terminal).run(_spec())
        assert terminal.calls.count("paint") == 2

    def test_empty_multi_enter_shows_notice(self) -> None:
        terminal = RecordingTerminal(keys=[Keys.ENTER, Keys.SPACE, Keys.ENTER])
        spec = _spec(mode=SelectionMode.MULTI)
        assert PromptService(terminal).run(spec) == "apple"
        assert "! Please select at least one option" in terminal.surface.frames[1]
        assert "! Please select at least one option" not in terminal.surface.frames[2]

    def test_page_size_applies_when_spec_has_none(self) -> None:
        terminal = RecordingTerminal(keys=[Keys.ENTER])
        PromptService(terminal, page_size=2).run(_spec())
        assert len(terminal.surface.frames[0]) == 1 + 2 + 1


class TestInteractiveExits:
    @pytest.mark.parametrize("key", [Keys.ESCAPE, Keys.CTRL_C])
    def test_cancel_keys(self, key: KeyEvent) -> None:
        terminal = RecordingTerminal(keys=[Keys.DOWN, key])
        with pytest.raises(CancelledError):
            PromptService(terminal).run(_spec())
        assert terminal.calls[-3:] == ["erase", "surface.exit", "raw.exit"]

    def test_cancel_in_multi_mode(self) -> None:
        terminal = RecordingTerminal(keys=[Keys.SPACE, Keys.ESCAPE])
        with pytest.raises(CancelledError):
            PromptService(terminal).run(_spec(mode=SelectionMode.MULTI))

    def test_decode_error_still_releases(self) -> None:
        terminal = RecordingTerminal(keys=[Keys.DOWN, DecodeError("bad byte")])
        with pytest.raises(DecodeError, match="bad byte"):
            PromptService(terminal).run(_spec())
        assert terminal.calls[-2:] == ["surface.exit", "raw.exit"]

    def test_end_of_input_releases(self) -> None:
        terminal = RecordingTerminal(keys=[])
        with pytest.raises(DecodeError):
            PromptService(terminal).run(_spec())
        assert "raw.exit" in terminal.calls

    def test_cancellation_token(self) -> None:
        cancel = threading.Event()

        class CancellingKeys(ScriptedKeys):
            def read_key(self) -> KeyEvent:
                cancel.set()
                return Keys.DOWN

        terminal = RecordingTerminal()
        terminal.keys = CancellingKeys([])
        with pytest.raises(CancelledError):
            PromptService(terminal).run(_spec(), cancel=cancel)
        assert terminal.calls[-3:] == ["erase", "surface.exit", "raw.exit"]

    def test_preset_token_cancels_before_first_read(self) -> None:
        cancel = threading.Event()
        cancel.set()
        terminal = RecordingTerminal(keys=[Keys.ENTER])
        with pytest.raises(CancelledError):
            PromptService(terminal).run(_spec(), cancel=cancel)
        assert terminal.keys.read_key() == Keys.ENTER


# ---------------------------------------------------------------------------
# Fallback routing
# ---------------------------------------------------------------------------

class TestFallback:
    def test_non_tty_never_touches_raw_mode_or_surface(self, scripted_io: Any) -> None:
        """A piped '2' resolves to 'banana' without raw mode."""
        terminal = RecordingTerminal(interactive=False, answers=["2"], line_io_factory=scripted_io)
        assert PromptService(terminal).run(_spec()) == "banana"
        assert terminal.calls == ["is_interactive", "line_io"]

    @pytest.mark.parametrize(
        "error",
        [NotATTYError("not a terminal"), TerminalStateError("tcgetattr failed")],
    )
    def test_acquisition_failure_falls_back(
        self, scripted_io: Any, error: Exception, caplog: pytest.LogCaptureFixture,
    ) -> None:
        terminal = RecordingTerminal(raw_error=error, answers=["cherry"], line_io_factory=scripted_io)
        with caplog.at_level("INFO", logger="selectkit"):
            assert PromptService(terminal).run(_spec()) == "cherry"
        assert "render_surface" not in terminal.calls
        assert terminal.calls[-1] == "line_io"
        assert "line mode" in caplog.text

    def test_multi_fallback(self, scripted_io: Any) -> None:
        terminal = RecordingTerminal(interactive=False, answers=["1,3", "done"], line_io_factory=scripted_io)
        spec = _spec(mode=SelectionMode.MULTI, options=("a", "b", "c"))
        assert PromptService(terminal).run(spec) == "a,c"
