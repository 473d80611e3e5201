"""POSIX terminal provider — wires the infra adapters to real streams.

A :class:`PosixTerminal` is created per prompt call.  It owns nothing
long-lived: the raw-mode guard, the render surface and the key decoder
it hands out are all scoped to the call.
"""

from __future__ import annotations

import os
from typing import IO, Any

from rich.console import Console

from selectkit.exceptions import NotATTYError
from selectkit.infra.byte_reader import FdByteReader
from selectkit.infra.key_decoder import KeyDecoder
from selectkit.infra.line_io import StreamLineIO
from selectkit.infra.raw_mode import RawModeController, RawModeHandle
from selectkit.infra.render_surface import RenderSurface
from selectkit.settings import EngineSettings


def _fileno(stream: IO[Any]) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


class PosixTerminal:
    """Satisfies :class:`~selectkit.core.protocols.TerminalProvider`.

    Parameters
    ----------
    stdin:
        Stream the answers are read from.
    output:
        Stream the widget is drawn on.
    settings:
        Escape timeout and colour preferences.
    """

    def __init__(
        self,
        stdin: IO[Any],
        output: IO[str],
        settings: EngineSettings | None = None,
        *,
        controller: RawModeController | None = None,
    ) -> None:
        self._stdin = stdin
        self._output = output
        self._settings: EngineSettings = settings or EngineSettings()
        self._controller: RawModeController = controller or RawModeController()

    def _console(self, *, force_terminal: bool | None) -> Console:
        return Console(
            file=self._output,
            force_terminal=force_terminal,
            no_color=self._settings.no_color,
            highlight=False,
        )

    def _stdin_fd(self) -> int:
        fd = _fileno(self._stdin)
        if fd is None:
            raise NotATTYError("Input stream has no file descriptor.")
        return fd

    # ------------------------------------------------------------------
    # TerminalProvider
    # ------------------------------------------------------------------

    def is_interactive(self) -> bool:
        fd = _fileno(self._stdin)
        if fd is None:
            return False
        try:
            return os.isatty(fd)
        except OSError:
            return False

    def enable_raw_mode(self) -> RawModeHandle:
        return self._controller.enable(self._stdin_fd())

    def render_surface(self) -> RenderSurface:
        return RenderSurface(self._console(force_terminal=True))

    def key_source(self) -> KeyDecoder:
        return KeyDecoder(
            FdByteReader(self._stdin_fd()),
            escape_timeout=self._settings.escape_timeout,
        )

    def line_io(self) -> StreamLineIO:
        return StreamLineIO(self._stdin, self._console(force_terminal=None))
