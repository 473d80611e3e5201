"""Free-text and yes/no prompts for the ``ask`` and ``confirm`` commands.

Selection widgets are drawn by selectkit itself; plain text entry is
delegated to questionary, imported lazily so the selection commands
keep working when it is missing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from selectkit.exceptions import CancelledError, DependencyError


def _import_questionary() -> Any:
    """Import questionary lazily for text entry."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "questionary is not installed.",
            hint="Install with: pip install questionary",
        ) from exc
    return questionary


def prompt_text(
    label: str,
    *,
    default: str = "",
    required: bool = False,
    validate: Callable[[str], bool | str] | None = None,
) -> str:
    """Ask for one line of text.

    Parameters
    ----------
    label:
        Question shown to the user.
    default:
        Pre-filled answer.
    required:
        Refuse empty answers.
    validate:
        Extra check; return ``True`` to accept or a message to reject.

    Raises
    ------
    CancelledError
        If the user presses Ctrl+C or Esc (questionary returns ``None``).
    """
    questionary = _import_questionary()

    def _check(text: str) -> bool | str:
        if required and not text.strip():
            return "A value is required."
        if validate is not None:
            return validate(text)
        return True

    answer: str | None = questionary.text(label, default=default, validate=_check).ask()
    if answer is None:
        raise CancelledError("Prompt cancelled.")
    return answer


def prompt_confirm(label: str, *, default: bool = True) -> bool:
    """Ask a yes/no question.

    Raises
    ------
    CancelledError
        If the user presses Ctrl+C or Esc.
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(label, default=default).ask()
    if answer is None:
        raise CancelledError("Prompt cancelled.")
    return answer
