"""Whole-line input and styled output for the line-mode fallback."""

from __future__ import annotations

from typing import IO, AnyStr

from rich.console import Console
from rich.text import Text

from selectkit.core.frames import StyledLine
from selectkit.exceptions import DecodeError


class StreamLineIO:
    """Read answers from ``stream`` and write lines to ``console``.

    ``stream`` may be a text or a binary file object; bytes are decoded
    as UTF-8.
    """

    def __init__(self, stream: IO[AnyStr], console: Console) -> None:
        self._stream = stream
        self._console: Console = console

    def write_line(self, line: StyledLine) -> None:
        self._console.print(Text.assemble(*line), soft_wrap=True, highlight=False)

    def write_prompt(self, text: str) -> None:
        self._console.print(Text(text), end="", soft_wrap=True, highlight=False)

    def read_line(self) -> str | None:
        try:
            raw = self._stream.readline()
        except (OSError, ValueError) as exc:
            raise DecodeError(f"Failed to read from input: {exc}") from exc

        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise DecodeError("Input line is not valid UTF-8.") from exc

        if not raw:
            return None
        return raw.rstrip("\r\n")
