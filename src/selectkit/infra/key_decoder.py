"""Translate raw terminal bytes into :class:`~selectkit.core.keys.KeyEvent`.

The decoder is an explicit loop over a bounded buffer.  An ``ESC`` byte
opens a lookahead window of ``escape_timeout`` seconds: if nothing
follows, the user pressed Escape; otherwise the bytes are collected
until the CSI/SS3 sequence completes, stalls, or grows past
``max_sequence`` bytes.

Recognised sequences
--------------------
``ESC [ A..D H F``       arrows, Home, End (modifiers ignored)
``ESC [ n ~``            Home/End (1, 7 / 4, 8), F1-F12 (11-24)
``ESC [ [ A..E``         F1-F5 on the Linux console
``ESC O A..D H F P..S``  SS3 arrows, Home, End, F1-F4

Any other complete CSI or SS3 sequence (PgUp, Shift+Tab, ...) decodes to
``UNKNOWN`` rather than Escape, so such keys never cancel a prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol

from selectkit.core.keys import KeyEvent, Keys
from selectkit.core.protocols import CancellationToken
from selectkit.exceptions import CancelledError, DecodeError

logger = logging.getLogger(__name__)

ESC = 0x1B
DEFAULT_ESCAPE_TIMEOUT = 0.05
DEFAULT_MAX_SEQUENCE = 16

_SINGLE_BYTES: dict[int, KeyEvent] = {
    0x03: Keys.CTRL_C,
    0x08: Keys.BACKSPACE,
    0x09: Keys.TAB,
    0x0A: Keys.ENTER,
    0x0D: Keys.ENTER,
    0x20: Keys.SPACE,
    0x7F: Keys.BACKSPACE,
}

_FINALS: dict[str, KeyEvent] = {
    "A": Keys.UP,
    "B": Keys.DOWN,
    "C": Keys.RIGHT,
    "D": Keys.LEFT,
    "H": Keys.HOME,
    "F": Keys.END,
}

_SS3_FUNCTION_KEYS: dict[str, int] = {"P": 1, "Q": 2, "R": 3, "S": 4}

_TILDE_KEYS: dict[int, KeyEvent] = {
    1: Keys.HOME,
    7: Keys.HOME,
    4: Keys.END,
    8: Keys.END,
    11: KeyEvent.function(1),
    12: KeyEvent.function(2),
    13: KeyEvent.function(3),
    14: KeyEvent.function(4),
    15: KeyEvent.function(5),
    17: KeyEvent.function(6),
    18: KeyEvent.function(7),
    19: KeyEvent.function(8),
    20: KeyEvent.function(9),
    21: KeyEvent.function(10),
    23: KeyEvent.function(11),
    24: KeyEvent.function(12),
}


class ByteReader(Protocol):
    """Source of single bytes; see :class:`~selectkit.infra.byte_reader.FdByteReader`."""

    def read(self, timeout: float | None = None) -> bytes | None: ...  # pragma: no cover


def _utf8_length(lead: int) -> int:
    """Total length of the UTF-8 sequence starting with ``lead`` (0 if invalid)."""
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _parse_csi(body: str) -> KeyEvent:
    """Map the bytes after ``ESC [`` (final byte included) to an event."""
    final = body[-1]
    params = body[:-1]

    if params.startswith("["):
        # Linux console: ESC [ [ A .. E
        if len(body) == 2 and "A" <= final <= "E":
            return KeyEvent.function(ord(final) - ord("A") + 1)
        return Keys.UNKNOWN

    if final in _FINALS:
        return _FINALS[final]

    if final == "~":
        first = params.split(";", 1)[0]
        if first.isdigit():
            return _TILDE_KEYS.get(int(first), Keys.UNKNOWN)
    return Keys.UNKNOWN


def _parse_ss3(final: str) -> KeyEvent:
    if final in _FINALS:
        return _FINALS[final]
    if final in _SS3_FUNCTION_KEYS:
        return KeyEvent.function(_SS3_FUNCTION_KEYS[final])
    return Keys.UNKNOWN


class KeyDecoder:
    """Pull bytes from ``reader`` and produce one key event per call.

    Parameters
    ----------
    reader:
        Object with ``read(timeout) -> bytes | None``.
    escape_timeout:
        Seconds to wait after ``ESC`` (and between the bytes of a
        sequence) before giving up on a longer sequence.
    max_sequence:
        Upper bound on the bytes buffered for one escape sequence.
    """

    def __init__(
        self,
        reader: ByteReader,
        *,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT,
        max_sequence: int = DEFAULT_MAX_SEQUENCE,
    ) -> None:
        self._reader: ByteReader = reader
        self._escape_timeout: float = escape_timeout
        self._max_sequence: int = max_sequence
        self._pending: bytearray = bytearray()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read_key(self) -> KeyEvent:
        """Block until one complete key event is decoded.

        Raises
        ------
        DecodeError
            On malformed UTF-8, a failed read, or end of input.
        """
        byte = self._next(None)
        if byte is None:
            raise DecodeError("Input reader returned no data on a blocking read.")
        if byte == ESC:
            return self._escape()
        if byte in _SINGLE_BYTES:
            return _SINGLE_BYTES[byte]
        if 0x21 <= byte <= 0x7E:
            return KeyEvent.printable(chr(byte))
        if byte >= 0x80:
            return self._utf8(byte)
        return Keys.UNKNOWN

    def events(self, cancel: CancellationToken | None = None) -> Iterator[KeyEvent]:
        """Yield key events until ``cancel`` is set.

        Raises
        ------
        CancelledError
            When ``cancel`` is found set before a read.
        """
        while True:
            if cancel is not None and cancel.is_set():
                raise CancelledError("Prompt cancelled.")
            yield self.read_key()

    # ------------------------------------------------------------------
    # Byte access
    # ------------------------------------------------------------------

    def _next(self, timeout: float | None) -> int | None:
        """Return the next byte value, or ``None`` on timeout."""
        if self._pending:
            return self._pending.pop(0)
        data = self._reader.read(timeout)
        if data is None:
            return None
        if not data:
            raise DecodeError(
                "Input ended while waiting for a key press.",
                hint="The terminal was closed or standard input reached end of file.",
            )
        return data[0]

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _escape(self) -> KeyEvent:
        introducer = self._next(self._escape_timeout)
        if introducer is None:
            return Keys.ESCAPE
        if introducer == ord("["):
            return self._csi()
        if introducer == ord("O"):
            return self._ss3()
        # Alt+key, or Escape typed just before another key.
        self._pending.append(introducer)
        return Keys.ESCAPE

    def _csi(self) -> KeyEvent:
        body = bytearray()
        while len(body) + 2 < self._max_sequence:
            byte = self._next(self._escape_timeout)
            if byte is None:
                logger.debug("escape sequence stalled after %r", bytes(body))
                return Keys.ESCAPE
            body.append(byte)
            # '[' opens the Linux console form ESC [ [ X; it is not a final here.
            if len(body) == 1 and byte == ord("["):
                continue
            if 0x40 <= byte <= 0x7E:
                return _parse_csi(body.decode("latin-1"))

        logger.debug("escape sequence longer than %d bytes", self._max_sequence)
        return Keys.UNKNOWN

    def _ss3(self) -> KeyEvent:
        final = self._next(self._escape_timeout)
        if final is None:
            return Keys.ESCAPE
        return _parse_ss3(chr(final))

    def _utf8(self, lead: int) -> KeyEvent:
        length = _utf8_length(lead)
        if not length:
            raise DecodeError(f"Invalid UTF-8 lead byte 0x{lead:02x} in input.")

        raw = bytearray([lead])
        while len(raw) < length:
            byte = self._next(self._escape_timeout)
            if byte is None:
                raise DecodeError("Truncated UTF-8 sequence in input.")
            raw.append(byte)

        try:
            char = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Malformed UTF-8 sequence {bytes(raw)!r} in input.") from exc

        if char.isprintable():
            return KeyEvent.printable(char)
        return Keys.UNKNOWN
