"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — a selection was made or a confirm was answered yes."""

GENERAL_ERROR: int = 1
"""A known SelectKitError was caught, or a confirm was answered no."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

CANCELLED: int = KEYBOARD_INTERRUPT
"""User dismissed a prompt with Escape or Ctrl+C inside the widget."""

DECLINED: int = 1
"""``selectkit confirm`` was answered no."""


def terminated_by(signum: int) -> int:
    """Exit code of a run stopped by signal ``signum`` (128 + signum)."""
    return 128 + signum
