"""Logical key events produced by the key decoder.

A :class:`KeyEvent` is ephemeral: the decoder creates it from one or
more input bytes and a state machine consumes it immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyKind(Enum):
    """Tag of a :class:`KeyEvent`."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    ESCAPE = "escape"
    CTRL_C = "ctrl_c"
    SPACE = "space"
    TAB = "tab"
    BACKSPACE = "backspace"
    PRINTABLE = "printable"
    FUNCTION = "function"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A decoded key press."""

    kind: KeyKind
    char: str = ""
    """The typed character, for :attr:`KeyKind.PRINTABLE` only."""

    number: int = 0
    """Function key number (1-12), for :attr:`KeyKind.FUNCTION` only."""

    @classmethod
    def printable(cls, char: str) -> KeyEvent:
        return cls(KeyKind.PRINTABLE, char=char)

    @classmethod
    def function(cls, number: int) -> KeyEvent:
        return cls(KeyKind.FUNCTION, number=number)

    @property
    def digit(self) -> int | None:
        """Return 1-9 when this is a quick-jump digit, else ``None``."""
        if self.kind is KeyKind.PRINTABLE and len(self.char) == 1 and self.char in "123456789":
            return int(self.char)
        return None

    @property
    def cancels(self) -> bool:
        return self.kind in (KeyKind.ESCAPE, KeyKind.CTRL_C)


class Keys:
    """Shared instances for the argument-free key kinds."""

    UP = KeyEvent(KeyKind.UP)
    DOWN = KeyEvent(KeyKind.DOWN)
    LEFT = KeyEvent(KeyKind.LEFT)
    RIGHT = KeyEvent(KeyKind.RIGHT)
    HOME = KeyEvent(KeyKind.HOME)
    END = KeyEvent(KeyKind.END)
    ENTER = KeyEvent(KeyKind.ENTER)
    ESCAPE = KeyEvent(KeyKind.ESCAPE)
    CTRL_C = KeyEvent(KeyKind.CTRL_C)
    SPACE = KeyEvent(KeyKind.SPACE)
    TAB = KeyEvent(KeyKind.TAB)
    BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
    UNKNOWN = KeyEvent(KeyKind.UNKNOWN)
