"""Protocols (interfaces) consumed by the core layer.

These define the contracts the terminal adapters in ``infra`` must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so the prompt service can be driven by a recording
stub in tests.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from selectkit.core.frames import Frame, StyledLine
from selectkit.core.keys import KeyEvent


class CancellationToken(Protocol):
    """Anything with ``is_set()``, e.g. :class:`threading.Event`."""

    def is_set(self) -> bool: ...  # pragma: no cover


class KeySource(Protocol):
    """Produces one decoded key per call, blocking until it is available."""

    def read_key(self) -> KeyEvent:
        """Return the next key event.

        Raises
        ------
        DecodeError
            On malformed input, a failed read, or end of input.
        """
        ...  # pragma: no cover


class Surface(Protocol):
    """In-place rendering primitives for one widget session.

    Entering the context hides the cursor; leaving it shows the cursor
    again, whatever the exit path.
    """

    def __enter__(self) -> Surface: ...  # pragma: no cover

    def __exit__(self, *exc_info: object) -> None: ...  # pragma: no cover

    def save_anchor(self) -> None: ...  # pragma: no cover

    def restore_to_anchor(self) -> None: ...  # pragma: no cover

    def clear_from_anchor_to_end(self) -> None: ...  # pragma: no cover

    def write_line(self, line: StyledLine) -> None: ...  # pragma: no cover

    def paint(self, frame: Frame) -> None:
        """Restore to the anchor, clear below it, then write ``frame``."""
        ...  # pragma: no cover

    def erase(self) -> None:
        """Remove everything drawn since the anchor."""
        ...  # pragma: no cover


class LineIO(Protocol):
    """Whole-line input and styled output for line mode."""

    def write_line(self, line: StyledLine) -> None: ...  # pragma: no cover

    def write_prompt(self, text: str) -> None: ...  # pragma: no cover

    def read_line(self) -> str | None:
        """Return one line without its terminator, or ``None`` at EOF.

        Raises
        ------
        DecodeError
            When the underlying read fails or yields undecodable bytes.
        """
        ...  # pragma: no cover


class TerminalProvider(Protocol):
    """Access to the input/output streams of one prompt call."""

    def is_interactive(self) -> bool:
        """Whether the input stream is a terminal."""
        ...  # pragma: no cover

    def enable_raw_mode(self) -> AbstractContextManager[object]:
        """Put the input terminal in raw mode.

        The returned guard restores the original mode when its ``with``
        block exits.

        Raises
        ------
        NotATTYError
            If the input is not a terminal.
        TerminalStateError
            If the terminal attributes cannot be read or changed.
        """
        ...  # pragma: no cover

    def render_surface(self) -> Surface: ...  # pragma: no cover

    def key_source(self) -> KeySource: ...  # pragma: no cover

    def line_io(self) -> LineIO: ...  # pragma: no cover
