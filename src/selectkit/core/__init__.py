"""Core layer — pure selection logic and frame building.

Rules
-----
* No terminal access and no ``print()`` calls.
* No imports from ``cli`` or ``infra``.
* Everything that touches a stream goes through the protocols in
  :mod:`selectkit.core.protocols`.
"""

from selectkit.core.keys import KeyEvent, KeyKind, Keys
from selectkit.core.line_mode import run_line_mode
from selectkit.core.models import Option, PromptSpec, SelectionMode, Theme
from selectkit.core.multi_selection import MultiSelectionState
from selectkit.core.prompt_service import PromptService
from selectkit.core.protocols import (
    CancellationToken,
    KeySource,
    LineIO,
    Surface,
    TerminalProvider,
)
from selectkit.core.selection import Outcome, SelectionState, Transition

__all__: list[str] = [
    "CancellationToken",
    "KeyEvent",
    "KeyKind",
    "KeySource",
    "Keys",
    "LineIO",
    "MultiSelectionState",
    "Option",
    "Outcome",
    "PromptService",
    "PromptSpec",
    "SelectionMode",
    "SelectionState",
    "Surface",
    "TerminalProvider",
    "Theme",
    "Transition",
    "run_line_mode",
]
