"""Tests for the POSIX terminal provider and line I/O (infra/terminal.py, infra/line_io.py)."""

from __future__ import annotations

import io
import os
import re
import threading
from collections.abc import Iterator

import pytest
from rich.console import Console

from selectkit.core.models import PromptSpec
from selectkit.core.prompt_service import PromptService
from selectkit.exceptions import DecodeError, NotATTYError
from selectkit.infra.line_io import StreamLineIO
from selectkit.infra.terminal import PosixTerminal
from selectkit.settings import EngineSettings


class _FdStream:
    """Minimal stream exposing only ``fileno()``."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    def fileno(self) -> int:
        return self._fd


@pytest.fixture()
def pty_pair() -> Iterator[tuple[int, int]]:
    pytest.importorskip("termios")
    if not hasattr(os, "openpty"):
        pytest.skip("os.openpty is unavailable")
    leader, follower = os.openpty()
    yield leader, follower
    os.close(follower)
    os.close(leader)


# ---------------------------------------------------------------------------
# StreamLineIO
# ---------------------------------------------------------------------------

class TestStreamLineIO:
    def test_reads_lines_without_terminator(self, terminal_console: Console) -> None:
        line_io = StreamLineIO(io.StringIO("one\r\ntwo\n"), terminal_console)
        assert line_io.read_line() == "one"
        assert line_io.read_line() == "two"
        assert line_io.read_line() is None

    def test_last_line_without_newline(self, terminal_console: Console) -> None:
        line_io = StreamLineIO(io.StringIO("last"), terminal_console)
        assert line_io.read_line() == "last"

    def test_binary_stream_decoded(self, terminal_console: Console) -> None:
        line_io = StreamLineIO(io.BytesIO("café\n".encode()), terminal_console)
        assert line_io.read_line() == "café"

    def test_undecodable_bytes(self, terminal_console: Console) -> None:
        line_io = StreamLineIO(io.BytesIO(b"\xff\xfe\n"), terminal_console)
        with pytest.raises(DecodeError, match="UTF-8"):
            line_io.read_line()

    def test_closed_stream(self, terminal_console: Console) -> None:
        stream = io.StringIO("x\n")
        stream.close()
        with pytest.raises(DecodeError):
            StreamLineIO(stream, terminal_console).read_line()

    def test_writes(self, terminal_console: Console, buffer: io.StringIO) -> None:
        line_io = StreamLineIO(io.StringIO(), terminal_console)
        line_io.write_line((("? ", "bold"), ("Pick", "")))
        line_io.write_prompt("> ")
        assert buffer.getvalue() == "? Pick\n> "


# ---------------------------------------------------------------------------
# PosixTerminal
# ---------------------------------------------------------------------------

class TestPosixTerminal:
    def test_string_io_is_not_interactive(self) -> None:
        terminal = PosixTerminal(io.StringIO(), io.StringIO())
        assert not terminal.is_interactive()

    def test_stream_without_fileno_cannot_enter_raw_mode(self) -> None:
        terminal = PosixTerminal(object(), io.StringIO())  # type: ignore[arg-type]
        assert not terminal.is_interactive()
        with pytest.raises(NotATTYError):
            terminal.enable_raw_mode()

    def test_pipe_is_not_interactive(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            assert not PosixTerminal(_FdStream(read_fd), io.StringIO()).is_interactive()  # type: ignore[arg-type]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_pty_is_interactive(self, pty_pair: tuple[int, int]) -> None:
        _, follower = pty_pair
        assert PosixTerminal(_FdStream(follower), io.StringIO()).is_interactive()  # type: ignore[arg-type]

    def test_line_mode_end_to_end(self) -> None:
        output = io.StringIO()
        terminal = PosixTerminal(io.StringIO("2\n"), output)
        spec = PromptSpec("Fruit", ("apple", "banana", "cherry"))  # type: ignore[arg-type]
        assert PromptService(terminal).run(spec) == "banana"
        assert "2. banana" in output.getvalue()
        assert "\x1b[" not in output.getvalue()

    def test_interactive_end_to_end(self, pty_pair: tuple[int, int]) -> None:
        leader, follower = pty_pair
        output = io.StringIO()
        terminal = PosixTerminal(
            _FdStream(follower),  # type: ignore[arg-type]
            output,
            EngineSettings(escape_timeout=0.2),
        )
        spec = PromptSpec("Fruit", ("apple", "banana", "cherry"), default="banana")  # type: ignore[arg-type]

        # Type after raw mode is on so the bytes skip canonical processing.
        typist = threading.Timer(0.2, os.write, (leader, b"\x1b[B\r"))
        typist.start()
        try:
            assert PromptService(terminal).run(spec) == "cherry"
        finally:
            typist.cancel()

        rendered = re.sub(r"\x1b\[[0-9;]*m", "", output.getvalue())
        assert rendered.startswith("\x1b[?25l")
        assert rendered.endswith("? Fruit: cherry\n\x1b[?25h")
