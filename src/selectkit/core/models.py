"""Domain models for selectkit.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction-time validation.  They
carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from selectkit.exceptions import InvalidPromptError


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Option:
    """A single selectable entry supplied by the caller."""

    label: str
    """Text shown to the user."""

    value: str = ""
    """Value returned when chosen.  Defaults to :attr:`label` when empty."""

    description: str = ""
    """Optional dimmed text shown after the label."""

    def __post_init__(self) -> None:
        if not self.value:
            object.__setattr__(self, "value", self.label)


def coerce_options(options: Iterable[Option | str]) -> tuple[Option, ...]:
    """Normalise a mix of :class:`Option` objects and plain labels."""
    return tuple(
        opt if isinstance(opt, Option) else Option(label=str(opt))
        for opt in options
    )


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Theme:
    """Markers and rich style strings used when drawing a prompt.

    A theme only changes how things look; it never changes how keys or
    input lines are interpreted.
    """

    prefix: str = "? "
    hint: str = ""
    error: str = "! "
    cursor: str = ">"
    checked: str = "[x]"
    unchecked: str = "[ ]"

    prefix_style: str = "bold green"
    label_style: str = "bold"
    hint_style: str = "dim"
    cursor_style: str = "bold cyan"
    checked_style: str = "green"
    description_style: str = "dim"
    error_style: str = "bold red"

    @classmethod
    def plain(cls) -> Theme:
        """Return a theme with every style removed."""
        return cls(
            prefix_style="",
            label_style="",
            hint_style="",
            cursor_style="",
            checked_style="",
            description_style="",
            error_style="",
        )


# ---------------------------------------------------------------------------
# Prompt specification
# ---------------------------------------------------------------------------

class SelectionMode(str, Enum):
    """Which widget a :class:`PromptSpec` asks for."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True, slots=True)
class PromptSpec:
    """Everything needed to display one selection prompt.

    ``default`` accepts a value, a label, or a 1-based ordinal (``int``
    or digit string); a value or label wins over an ordinal.  In multi
    mode it may list several of them, separated by commas or spaces.
    Labels containing spaces must be separated by commas.
    """

    label: str
    options: tuple[Option, ...]
    default: str | int | None = None
    mode: SelectionMode = SelectionMode.SINGLE
    theme: Theme = field(default_factory=Theme)
    continue_text: str = "Continue"
    page_size: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", coerce_options(self.options))
        if not self.options:
            raise InvalidPromptError(
                f"Prompt {self.label!r} has no options.",
                hint="Pass at least one option to choose from.",
            )
        if self.page_size is not None and self.page_size < 1:
            raise InvalidPromptError(
                f"Invalid page size: {self.page_size}",
                hint="Page size must be a positive number of rows.",
            )

    @property
    def is_multi(self) -> bool:
        return self.mode is SelectionMode.MULTI
