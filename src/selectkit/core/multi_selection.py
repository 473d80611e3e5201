"""Multi-choice selection state machine.

Navigation is shared with :mod:`selectkit.core.selection`.  On top of
it the machine keeps a ``chosen`` set of option indices and refuses to
confirm while that set is empty.
"""

from __future__ import annotations

from selectkit.core.keys import KeyEvent, KeyKind
from selectkit.core.matching import default_chosen, join_values
from selectkit.core.models import Option
from selectkit.core.selection import IGNORED, REDRAW, NavigableState, Transition
from selectkit.exceptions import EmptySelectionError

EMPTY_SELECTION_NOTICE = "Please select at least one option"


class MultiSelectionState(NavigableState):
    """State of a multi-choice list.

    Invariant: ``chosen`` only ever holds indices in
    ``range(len(options))``.
    """

    def __init__(
        self,
        options: tuple[Option, ...],
        cursor: int = 0,
        chosen: set[int] | None = None,
    ) -> None:
        super().__init__(options, cursor)
        self.chosen: set[int] = {i for i in (chosen or ()) if 0 <= i < len(options)}
        self.notice: str | None = None
        """Message shown under the list until the next key press."""

    @classmethod
    def from_default(
        cls,
        options: tuple[Option, ...],
        default: str | int | None = None,
    ) -> MultiSelectionState:
        """Seed ``chosen`` from ``default`` and park the cursor on the first pick."""
        chosen = default_chosen(options, default)
        cursor = min(chosen) if chosen else 0
        return cls(options, cursor=cursor, chosen=chosen)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def toggle(self, index: int) -> None:
        if not 0 <= index < len(self.options):
            raise IndexError(index)
        if index in self.chosen:
            self.chosen.discard(index)
        else:
            self.chosen.add(index)

    def commit(self) -> str:
        """Return the comma-joined chosen values.

        Raises
        ------
        EmptySelectionError
            If nothing is chosen yet.
        """
        if not self.chosen:
            raise EmptySelectionError(EMPTY_SELECTION_NOTICE)
        return join_values(self.options, self.chosen)

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def handle(self, event: KeyEvent) -> Transition:
        if not self.active:
            return IGNORED

        had_notice = self.notice is not None
        self.notice = None

        if self._navigate(event):
            return REDRAW
        if event.cancels:
            return self._cancel()
        if event.kind is KeyKind.SPACE:
            self.toggle(self.cursor)
            return REDRAW
        if event.kind is KeyKind.ENTER:
            try:
                return self._confirm(self.commit())
            except EmptySelectionError as exc:
                self.notice = str(exc)
                return REDRAW

        digit = event.digit
        if digit is not None and digit - 1 < len(self.options):
            self.cursor = digit - 1
            self.toggle(self.cursor)
            return REDRAW
        return REDRAW if had_notice else IGNORED
