"""Infrastructure layer — terminal and operating-system integration.

This layer wraps all interaction with ``termios``, file descriptors and
the rich console.  Every raw OS exception (``termios.error``,
``OSError``, ``UnicodeDecodeError``) must be caught here and re-raised
as a :class:`~selectkit.exceptions.EngineError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing messages; only the frames handed in by the core layer
  are drawn.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from selectkit.infra.byte_reader import FdByteReader
from selectkit.infra.key_decoder import KeyDecoder
from selectkit.infra.line_io import StreamLineIO
from selectkit.infra.raw_mode import RawModeController, RawModeHandle, raw_mode_supported
from selectkit.infra.render_surface import RenderSurface
from selectkit.infra.terminal import PosixTerminal

__all__: list[str] = [
    "FdByteReader",
    "KeyDecoder",
    "PosixTerminal",
    "RawModeController",
    "RawModeHandle",
    "RenderSurface",
    "StreamLineIO",
    "raw_mode_supported",
]
