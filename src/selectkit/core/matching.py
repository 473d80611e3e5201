"""Pure option-matching helpers shared by the widgets and line mode.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Index arguments and return values are 0-based; user-facing ordinals
(typed digits, ``"1,3"`` defaults) are 1-based and converted here.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence

from selectkit.core.models import Option

_SEPARATORS = re.compile(r"[,\s]+")


# ---------------------------------------------------------------------------
# Ordinals
# ---------------------------------------------------------------------------

def parse_ordinal(text: str, count: int) -> int | None:
    """Convert a 1-based ordinal to a 0-based index within ``count``."""
    stripped = text.strip()
    if not stripped.isdigit():
        return None
    index = int(stripped) - 1
    if 0 <= index < count:
        return index
    return None


def split_tokens(text: str) -> list[str]:
    """Split on commas and whitespace, dropping empty pieces."""
    return [token for token in _SEPARATORS.split(text.strip()) if token]


# ---------------------------------------------------------------------------
# Value / label lookup
# ---------------------------------------------------------------------------

def find_exact(options: Sequence[Option], text: str) -> int | None:
    """Return the first option whose value, then label, equals ``text``."""
    for i, opt in enumerate(options):
        if opt.value == text:
            return i
    for i, opt in enumerate(options):
        if opt.label == text:
            return i
    return None


def find_casefold(options: Sequence[Option], text: str) -> int | None:
    """Case-insensitive variant of :func:`find_exact`."""
    folded = text.casefold()
    for i, opt in enumerate(options):
        if opt.value.casefold() == folded or opt.label.casefold() == folded:
            return i
    return None


def find_prefix(options: Sequence[Option], text: str) -> int | None:
    """Return the first option whose label starts with ``text``.

    Matching ignores case.  When several labels share the prefix the
    earliest registered option wins.
    """
    folded = text.casefold()
    if not folded:
        return None
    for i, opt in enumerate(options):
        if opt.label.casefold().startswith(folded):
            return i
    return None


def match_option(options: Sequence[Option], text: str) -> int | None:
    """Resolve one line of user input to an option index.

    Precedence: 1-based ordinal → exact value/label → case-insensitive
    value/label → case-insensitive label prefix.
    """
    stripped = text.strip()
    if not stripped:
        return None

    index = parse_ordinal(stripped, len(options))
    if index is None:
        index = find_exact(options, stripped)
    if index is None:
        index = find_casefold(options, stripped)
    if index is None:
        index = find_prefix(options, stripped)
    return index


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

def default_index(options: Sequence[Option], default: str | int | None) -> int | None:
    """Locate a single-select default by value, label, or 1-based ordinal."""
    if default is None or default == "":
        return None
    if isinstance(default, int):
        return parse_ordinal(str(default), len(options))
    index = find_exact(options, default)
    if index is not None:
        return index
    return parse_ordinal(default, len(options))


def default_chosen(options: Sequence[Option], default: str | int | None) -> set[int]:
    """Seed a multi-select ``chosen`` set from a default.

    The default is split on commas.  A piece naming a value or label is
    taken whole, so labels may contain spaces; any other piece is split
    on whitespace and each token is resolved like a single-select
    default (value or label first, then 1-based ordinal).  Unknown
    tokens are skipped.
    """
    if default is None or default == "":
        return set()
    if isinstance(default, int):
        index = parse_ordinal(str(default), len(options))
        return set() if index is None else {index}

    chosen: set[int] = set()
    for piece in default.split(","):
        index = find_exact(options, piece.strip())
        if index is not None:
            chosen.add(index)
            continue
        for token in split_tokens(piece):
            index = default_index(options, token)
            if index is not None:
                chosen.add(index)
    return chosen


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

def join_values(options: Sequence[Option], chosen: Collection[int]) -> str:
    """Comma-join the values of ``chosen`` in option order."""
    return ",".join(opt.value for i, opt in enumerate(options) if i in chosen)
