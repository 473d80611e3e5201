"""Line-mode fallback for non-interactive input.

When the input stream is not a terminal (a pipe, a file, a CI runner)
the widgets degrade to a numbered list and whole-line answers.  This
path never touches raw mode or cursor control: all I/O goes through a
:class:`~selectkit.core.protocols.LineIO`.
"""

from __future__ import annotations

import logging

from selectkit.core.frames import Frame, error_line, listing_frame
from selectkit.core.matching import (
    default_chosen,
    default_index,
    find_casefold,
    match_option,
    parse_ordinal,
    split_tokens,
)
from selectkit.core.models import PromptSpec
from selectkit.core.multi_selection import MultiSelectionState
from selectkit.core.protocols import CancellationToken, LineIO
from selectkit.exceptions import CancelledError, DecodeError, EmptySelectionError

logger = logging.getLogger(__name__)

COMMIT_WORDS = frozenset({"done", "finish", "q"})
INPUT_PROMPT = "> "


def run_line_mode(
    spec: PromptSpec,
    io: LineIO,
    *,
    cancel: CancellationToken | None = None,
) -> str:
    """Run the fallback protocol for ``spec`` and return the answer."""
    if spec.is_multi:
        return _multi(spec, io, cancel)
    return _single(spec, io, cancel)


def _read(io: LineIO, cancel: CancellationToken | None) -> str:
    if cancel is not None and cancel.is_set():
        raise CancelledError("Prompt cancelled.")
    io.write_prompt(INPUT_PROMPT)
    line = io.read_line()
    if line is None:
        raise DecodeError(
            "Input ended before a selection was made.",
            hint="Provide one answer per line on standard input.",
        )
    return line.strip()


def _write_lines(io: LineIO, frame: Frame) -> None:
    for line in frame:
        io.write_line(line)


# ---------------------------------------------------------------------------
# Single select
# ---------------------------------------------------------------------------

def _single(spec: PromptSpec, io: LineIO, cancel: CancellationToken | None) -> str:
    default = default_index(spec.options, spec.default)
    fallback = default if default is not None else 0
    _write_lines(io, listing_frame(spec, pointed=fallback))

    while True:
        answer = _read(io, cancel)
        if not answer:
            logger.debug("line mode: empty answer, using option %d", fallback)
            return spec.options[fallback].value

        index = match_option(spec.options, answer)
        if index is not None:
            logger.debug("line mode: %r resolved to option %d", answer, index)
            return spec.options[index].value

        io.write_line(
            error_line(
                spec.theme,
                f"No option matches {answer!r}. Enter a number from 1 to {len(spec.options)}.",
            ),
        )


# ---------------------------------------------------------------------------
# Multi select
# ---------------------------------------------------------------------------

def _resolve_tokens(spec: PromptSpec, answer: str) -> list[int] | None:
    """Map one answer line to the indices it toggles.

    A line naming a whole value/label counts as one token even when it
    contains spaces.  Returns ``None`` if any token is unknown.
    """
    whole = find_casefold(spec.options, answer)
    if whole is not None:
        return [whole]

    indices: list[int] = []
    for token in split_tokens(answer):
        index = parse_ordinal(token, len(spec.options))
        if index is None:
            index = find_casefold(spec.options, token)
        if index is None:
            return None
        indices.append(index)
    return indices


def _multi(spec: PromptSpec, io: LineIO, cancel: CancellationToken | None) -> str:
    state = MultiSelectionState(
        spec.options,
        chosen=default_chosen(spec.options, spec.default),
    )
    _write_lines(io, listing_frame(spec, chosen=state.chosen))

    while True:
        answer = _read(io, cancel)

        if not answer or answer.casefold() in COMMIT_WORDS:
            try:
                return state.commit()
            except EmptySelectionError as exc:
                io.write_line(error_line(spec.theme, str(exc)))
                continue

        indices = _resolve_tokens(spec, answer)
        if indices is None:
            io.write_line(
                error_line(
                    spec.theme,
                    "Invalid selection. Enter option numbers (e.g. 1,2,3) or 'done'.",
                ),
            )
            continue

        for index in indices:
            state.toggle(index)
        logger.debug("line mode: chosen is now %s", sorted(state.chosen))
        _write_lines(io, listing_frame(spec, chosen=state.chosen))
