"""Single-choice selection state machine.

The machine is pure: it consumes :class:`~selectkit.core.keys.KeyEvent`
values and reports a :class:`Transition` telling the caller whether to
redraw, finish, or do nothing.  It never touches the terminal.

States
------
``Active`` → ``Confirmed(value)`` | ``Cancelled`` (both terminal).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from selectkit.core.keys import KeyEvent, KeyKind
from selectkit.core.matching import default_index
from selectkit.core.models import Option


class Outcome(Enum):
    """What a state machine asks of its driver after one event."""

    IGNORED = "ignored"
    REDRAW = "redraw"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Transition:
    outcome: Outcome
    value: str | None = None


IGNORED = Transition(Outcome.IGNORED)
REDRAW = Transition(Outcome.REDRAW)
CANCELLED = Transition(Outcome.CANCELLED)


# ---------------------------------------------------------------------------
# Shared navigation
# ---------------------------------------------------------------------------

class NavigableState:
    """Cursor bookkeeping shared by the single and multi widgets.

    Invariant: ``0 <= cursor < len(options)``.  Up/Down wrap around
    instead of clamping at either end.
    """

    def __init__(self, options: tuple[Option, ...], cursor: int = 0) -> None:
        if not options:
            raise ValueError("a selection needs at least one option")
        self.options: tuple[Option, ...] = options
        self.cursor: int = cursor % len(options)
        self.cancelled: bool = False
        self.value: str | None = None

    @property
    def active(self) -> bool:
        return not self.cancelled and self.value is None

    def _navigate(self, event: KeyEvent) -> bool:
        """Apply a navigation key.  Returns ``True`` when it was one."""
        n = len(self.options)
        if event.kind is KeyKind.UP:
            self.cursor = (self.cursor - 1 + n) % n
        elif event.kind is KeyKind.DOWN:
            self.cursor = (self.cursor + 1) % n
        elif event.kind is KeyKind.HOME:
            self.cursor = 0
        elif event.kind is KeyKind.END:
            self.cursor = n - 1
        else:
            return False
        return True

    def _cancel(self) -> Transition:
        self.cancelled = True
        return CANCELLED

    def _confirm(self, value: str) -> Transition:
        self.value = value
        return Transition(Outcome.CONFIRMED, value)


# ---------------------------------------------------------------------------
# Single select
# ---------------------------------------------------------------------------

class SelectionState(NavigableState):
    """State of a single-choice list."""

    @classmethod
    def from_default(
        cls,
        options: tuple[Option, ...],
        default: str | int | None = None,
    ) -> SelectionState:
        """Start with the cursor on the option matching ``default``."""
        index = default_index(options, default)
        return cls(options, cursor=index if index is not None else 0)

    def handle(self, event: KeyEvent) -> Transition:
        if not self.active:
            return IGNORED
        if self._navigate(event):
            return REDRAW
        if event.cancels:
            return self._cancel()
        if event.kind is KeyKind.ENTER:
            return self._confirm(self.options[self.cursor].value)

        digit = event.digit
        if digit is not None and digit - 1 < len(self.options):
            self.cursor = digit - 1
            return self._confirm(self.options[self.cursor].value)
        return IGNORED
