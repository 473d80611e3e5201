"""Frame builders — turn widget state into styled lines.

This is the one rendering contract shared by both state machines and
the line-mode fallback.  A frame is a tuple of lines; a line is a tuple
of ``(text, style)`` segments where ``style`` is a rich style string
taken from the :class:`~selectkit.core.models.Theme` (``""`` = unstyled).

Everything here is pure: no terminal access, no rich import.
"""

from __future__ import annotations

from collections.abc import Collection

from selectkit.core.models import PromptSpec, Theme
from selectkit.core.multi_selection import MultiSelectionState
from selectkit.core.selection import SelectionState

Segment = tuple[str, str]
StyledLine = tuple[Segment, ...]
Frame = tuple[StyledLine, ...]

SINGLE_HINT = "↑/↓ move · 1-9 choose · enter select · esc cancel"
MULTI_HINT = "↑/↓ move · space toggle · enter {action} · esc cancel"


# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

def visible_window(cursor: int, count: int, page_size: int | None) -> range:
    """Return the option indices to draw so that ``cursor`` stays visible.

    The window keeps a constant height of ``min(page_size, count)`` rows
    and is centred on the cursor where possible.
    """
    if page_size is None or page_size >= count:
        return range(count)
    start = cursor - page_size // 2
    start = max(0, min(start, count - page_size))
    return range(start, start + page_size)


def effective_page_size(spec: PromptSpec, fallback: int | None) -> int | None:
    return spec.page_size if spec.page_size is not None else fallback


# ---------------------------------------------------------------------------
# Line builders
# ---------------------------------------------------------------------------

def plain_text(line: StyledLine) -> str:
    """Concatenate the text of a line, dropping styles."""
    return "".join(text for text, _ in line)


def header_line(spec: PromptSpec, position: str = "") -> StyledLine:
    theme = spec.theme
    line: list[Segment] = [
        (theme.prefix, theme.prefix_style),
        (spec.label, theme.label_style),
    ]
    if position:
        line.append((f" ({position})", theme.hint_style))
    return tuple(line)


def option_line(
    spec: PromptSpec,
    index: int,
    *,
    pointed: bool,
    checked: bool | None = None,
) -> StyledLine:
    """Draw one option row.

    ``checked`` is ``None`` for single-select rows, which have no
    checkbox column.
    """
    theme = spec.theme
    opt = spec.options[index]
    marker = theme.cursor if pointed else " " * len(theme.cursor)
    line: list[Segment] = [(marker, theme.cursor_style if pointed else ""), (" ", "")]

    if checked is not None:
        box = theme.checked if checked else theme.unchecked
        line.append((box, theme.checked_style if checked else ""))
        line.append((" ", ""))

    label_style = theme.cursor_style if pointed else ""
    line.append((f"{index + 1}. {opt.label}", label_style))
    if opt.description:
        line.append((f" - {opt.description}", theme.description_style))
    return tuple(line)


def hint_line(theme: Theme, default_hint: str) -> StyledLine:
    return ((theme.hint or default_hint, theme.hint_style),)


def error_line(theme: Theme, message: str) -> StyledLine:
    return ((theme.error, theme.error_style), (message, theme.error_style))


def summary_line(spec: PromptSpec, answer: str) -> StyledLine:
    """The single line left on screen once a prompt is confirmed."""
    theme = spec.theme
    return (
        (theme.prefix, theme.prefix_style),
        (spec.label, theme.label_style),
        (": ", ""),
        (answer, theme.checked_style),
    )


def _position(cursor: int, count: int, window: range) -> str:
    if len(window) == count:
        return ""
    return f"{cursor + 1}/{count}"


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def select_frame(
    spec: PromptSpec,
    state: SelectionState,
    page_size: int | None = None,
) -> Frame:
    count = len(spec.options)
    window = visible_window(state.cursor, count, effective_page_size(spec, page_size))
    lines: list[StyledLine] = [header_line(spec, _position(state.cursor, count, window))]
    lines.extend(option_line(spec, i, pointed=i == state.cursor) for i in window)
    lines.append(hint_line(spec.theme, SINGLE_HINT))
    return tuple(lines)


def multi_select_frame(
    spec: PromptSpec,
    state: MultiSelectionState,
    page_size: int | None = None,
) -> Frame:
    count = len(spec.options)
    window = visible_window(state.cursor, count, effective_page_size(spec, page_size))
    lines: list[StyledLine] = [header_line(spec, _position(state.cursor, count, window))]
    lines.extend(
        option_line(spec, i, pointed=i == state.cursor, checked=i in state.chosen)
        for i in window
    )
    if state.notice:
        lines.append(error_line(spec.theme, state.notice))
    lines.append(
        hint_line(spec.theme, MULTI_HINT.format(action=spec.continue_text.lower())),
    )
    return tuple(lines)


def listing_frame(
    spec: PromptSpec,
    *,
    pointed: int | None = None,
    chosen: Collection[int] | None = None,
) -> Frame:
    """Full numbered list used by line mode (no viewport, no hint)."""
    lines: list[StyledLine] = [header_line(spec)]
    for i in range(len(spec.options)):
        checked = None if chosen is None else i in chosen
        lines.append(option_line(spec, i, pointed=i == pointed, checked=checked))
    return tuple(lines)


def answer_labels(spec: PromptSpec, indices: Collection[int]) -> str:
    """Labels of the picked options, in option order, for the summary line."""
    return ", ".join(opt.label for i, opt in enumerate(spec.options) if i in indices)
