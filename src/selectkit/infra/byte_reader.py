"""Timeout-bounded single-byte reads from a file descriptor.

The key decoder needs to ask "is another byte coming within N ms?" to
tell a lone Escape from the start of an escape sequence.  That wait is
done with ``select`` on the calling thread; there is no reader thread.
"""

from __future__ import annotations

import os
import select

from selectkit.exceptions import DecodeError


class FdByteReader:
    """Read one byte at a time from ``fd`` without any buffering.

    Unbuffered reads matter: a buffered stream could swallow the tail
    of an escape sequence that ``select`` would then never report.
    """

    def __init__(self, fd: int) -> None:
        self._fd: int = fd

    @property
    def fd(self) -> int:
        return self._fd

    def read(self, timeout: float | None = None) -> bytes | None:
        """Return one byte, ``None`` on timeout, or ``b""`` at end of stream.

        ``timeout=None`` blocks until a byte is available.

        Raises
        ------
        DecodeError
            When ``select`` or ``read`` fails.
        """
        try:
            if timeout is not None:
                ready, _, _ = select.select([self._fd], [], [], timeout)
                if not ready:
                    return None
            return os.read(self._fd, 1)
        except (OSError, ValueError) as exc:
            raise DecodeError(f"Failed to read from input: {exc}") from exc
