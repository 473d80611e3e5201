"""Raw terminal mode with guaranteed restoration.

:meth:`RawModeController.enable` snapshots the terminal attributes of a
descriptor, switches it to a byte-at-a-time mode and returns a
:class:`RawModeHandle`.  Leaving the handle's ``with`` block (or calling
:meth:`RawModeHandle.restore`) puts the snapshot back verbatim.

Only POSIX terminals are supported.  On other platforms every
acquisition raises :class:`~selectkit.exceptions.NotATTYError`, which
callers treat as "use line mode".
"""

from __future__ import annotations

import copy
import logging
import os
import signal
import threading
from typing import Any

from selectkit.exceptions import NotATTYError, TerminalStateError, TerminatedError

if os.name == "posix":
    import termios
else:  # pragma: no cover - exercised on Windows only
    termios = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_active_fds: set[int] = set()
_registry_lock = threading.Lock()

# Their default action kills the process without unwinding `with` blocks.
TRAPPED_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


def raw_mode_supported() -> bool:
    """Whether this platform can switch a terminal to raw mode."""
    return termios is not None


def make_raw_attributes(attrs: list[Any]) -> list[Any]:
    """Return a raw-mode copy of a ``tcgetattr`` attribute list.

    Clears canonical mode, echo, extended input processing and signal
    generation (Ctrl+C arrives as byte ``0x03``), disables XON/XOFF and
    CR/NL translation on input, and asks for one byte per read with no
    inter-byte timer.  Output post-processing is left alone so ``\\n``
    still returns the carriage.
    """
    new = copy.deepcopy(attrs)
    new[0] &= ~(
        termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR
    )
    new[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN | termios.ISIG)
    new[6][termios.VMIN] = 1
    new[6][termios.VTIME] = 0
    return new


def _raise_terminated(signum: int, frame: object) -> None:
    name = signal.Signals(signum).name
    raise TerminatedError(f"Received {name}.", signum=signum)


def _trap_signals() -> dict[int, Any]:
    """Install :func:`_raise_terminated` and return the handlers it replaced.

    Only the main thread may change signal handlers; elsewhere nothing
    is installed and an empty mapping is returned.
    """
    if threading.current_thread() is not threading.main_thread():
        return {}
    previous: dict[int, Any] = {}
    for signum in TRAPPED_SIGNALS:
        previous[signum] = signal.getsignal(signum)
        signal.signal(signum, _raise_terminated)
    return previous


def _untrap_signals(previous: dict[int, Any]) -> None:
    for signum, handler in previous.items():
        # getsignal() gives None for handlers not installed from Python.
        signal.signal(signum, signal.SIG_DFL if handler is None else handler)


class RawModeHandle:
    """Proof that ``fd`` is in raw mode.  Restores it exactly once.

    While the handle is live, SIGTERM and SIGHUP raise
    :class:`~selectkit.exceptions.TerminatedError` instead of killing the
    process, so the enclosing ``with`` blocks still run.
    """

    def __init__(
        self,
        fd: int,
        saved: list[Any],
        previous_handlers: dict[int, Any] | None = None,
    ) -> None:
        self._fd: int = fd
        self._saved: list[Any] = saved
        self._previous_handlers: dict[int, Any] = previous_handlers or {}
        self._released: bool = False

    @property
    def fd(self) -> int:
        return self._fd

    @property
    def released(self) -> bool:
        return self._released

    def restore(self) -> None:
        """Put the original attributes back.  Safe to call repeatedly.

        Raises
        ------
        TerminalStateError
            If ``tcsetattr`` fails.  The descriptor is released from the
            registry regardless.
        """
        if self._released:
            return
        self._released = True
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved)
        except (termios.error, OSError) as exc:
            raise TerminalStateError(
                f"Could not restore terminal mode on fd {self._fd}: {exc}",
                hint="Run 'stty sane' to reset the terminal.",
            ) from exc
        finally:
            _untrap_signals(self._previous_handlers)
            with _registry_lock:
                _active_fds.discard(self._fd)
            logger.debug("raw mode released on fd %d", self._fd)

    def __enter__(self) -> RawModeHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.restore()


class RawModeController:
    """Acquire raw mode on terminal descriptors."""

    def enable(self, fd: int) -> RawModeHandle:
        """Switch ``fd`` to raw mode.

        Raises
        ------
        NotATTYError
            If ``fd`` is not a terminal or the platform lacks ``termios``.
        TerminalStateError
            If ``fd`` is already in raw mode through another handle, or
            the attributes cannot be read or written.
        """
        if not raw_mode_supported():
            raise NotATTYError("Raw terminal mode is not supported on this platform.")
        try:
            is_tty = os.isatty(fd)
        except OSError as exc:
            raise NotATTYError(f"fd {fd} is not usable: {exc}") from exc
        if not is_tty:
            raise NotATTYError(f"fd {fd} is not a terminal.")

        with _registry_lock:
            if fd in _active_fds:
                raise TerminalStateError(f"fd {fd} is already in raw mode.")
            _active_fds.add(fd)

        try:
            saved = termios.tcgetattr(fd)
            termios.tcsetattr(fd, termios.TCSANOW, make_raw_attributes(saved))
        except (termios.error, OSError) as exc:
            with _registry_lock:
                _active_fds.discard(fd)
            raise TerminalStateError(
                f"Could not switch fd {fd} to raw mode: {exc}",
            ) from exc

        logger.debug("raw mode acquired on fd %d", fd)
        return RawModeHandle(fd, saved, _trap_signals())
