"""Prompt service — drives one selection prompt from start to finish.

The service picks between the two interaction paths:

* **Interactive** — raw mode on, keys decoded one at a time, the widget
  repainted in place through a :class:`~selectkit.core.protocols.Surface`.
* **Line mode** — used when the input is not a terminal, or when raw
  mode cannot be acquired.

Guarantees
----------
* The terminal mode acquired here is restored on every exit path,
  including cancellation and :class:`~selectkit.exceptions.DecodeError`.
* The cursor is shown again on every exit path.
* Only :class:`~selectkit.exceptions.SelectKitError` subclasses escape.
"""

from __future__ import annotations

import logging

from selectkit.core.frames import (
    Frame,
    answer_labels,
    multi_select_frame,
    select_frame,
    summary_line,
)
from selectkit.core.line_mode import run_line_mode
from selectkit.core.models import PromptSpec
from selectkit.core.multi_selection import MultiSelectionState
from selectkit.core.protocols import CancellationToken, Surface, TerminalProvider
from selectkit.core.selection import Outcome, SelectionState
from selectkit.exceptions import CancelledError, NotATTYError, TerminalStateError

logger = logging.getLogger(__name__)


class PromptService:
    """Run selection prompts against a terminal provider.

    Parameters
    ----------
    terminal:
        Any object satisfying the :class:`TerminalProvider` protocol.
    page_size:
        Viewport height used when a prompt does not set its own.
        ``None`` draws every option.
    """

    def __init__(self, terminal: TerminalProvider, *, page_size: int | None = None) -> None:
        self._terminal: TerminalProvider = terminal
        self._page_size: int | None = page_size

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, spec: PromptSpec, *, cancel: CancellationToken | None = None) -> str:
        """Display ``spec`` and return the chosen value.

        Multi-select answers are the chosen values joined by commas, in
        option order.

        Raises
        ------
        CancelledError
            When the user presses Escape or Ctrl+C, or ``cancel`` is set.
            A SIGTERM or SIGHUP during the interactive widget surfaces as
            the :class:`~selectkit.exceptions.TerminatedError` subclass.
        DecodeError
            When the input is malformed, fails, or ends early.
        """
        if not self._terminal.is_interactive():
            logger.debug("input is not a terminal; using line mode")
            return run_line_mode(spec, self._terminal.line_io(), cancel=cancel)

        try:
            guard = self._terminal.enable_raw_mode()
        except (NotATTYError, TerminalStateError) as exc:
            logger.info("raw mode unavailable (%s); using line mode", exc)
            return run_line_mode(spec, self._terminal.line_io(), cancel=cancel)

        with guard:
            return self._run_interactive(spec, cancel)

    # ------------------------------------------------------------------
    # Interactive loop
    # ------------------------------------------------------------------

    def _frame(self, spec: PromptSpec, state: SelectionState | MultiSelectionState) -> Frame:
        if isinstance(state, MultiSelectionState):
            return multi_select_frame(spec, state, self._page_size)
        return select_frame(spec, state, self._page_size)

    def _run_interactive(self, spec: PromptSpec, cancel: CancellationToken | None) -> str:
        state: SelectionState | MultiSelectionState
        if spec.is_multi:
            state = MultiSelectionState.from_default(spec.options, spec.default)
        else:
            state = SelectionState.from_default(spec.options, spec.default)

        keys = self._terminal.key_source()
        with self._terminal.render_surface() as surface:
            surface.save_anchor()
            surface.paint(self._frame(spec, state))

            while True:
                if cancel is not None and cancel.is_set():
                    surface.erase()
                    raise CancelledError("Prompt cancelled.")

                event = keys.read_key()
                transition = state.handle(event)
                logger.debug("key %s -> %s", event, transition.outcome.value)

                if transition.outcome is Outcome.REDRAW:
                    surface.paint(self._frame(spec, state))
                elif transition.outcome is Outcome.CONFIRMED:
                    self._finish(surface, spec, state)
                    return transition.value or ""
                elif transition.outcome is Outcome.CANCELLED:
                    surface.erase()
                    raise CancelledError("Prompt cancelled.")

    @staticmethod
    def _finish(
        surface: Surface,
        spec: PromptSpec,
        state: SelectionState | MultiSelectionState,
    ) -> None:
        """Collapse the widget into its one-line summary."""
        if isinstance(state, MultiSelectionState):
            picked = state.chosen
        else:
            picked = {state.cursor}
        surface.paint((summary_line(spec, answer_labels(spec, picked)),))
