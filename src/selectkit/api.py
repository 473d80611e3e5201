"""Public convenience functions.

These wire a :class:`~selectkit.infra.terminal.PosixTerminal` to a
:class:`~selectkit.core.prompt_service.PromptService` for one call.
Widgets are drawn on stderr by default so that stdout stays free for
the caller's own output.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import IO, Any

from selectkit.core.models import Option, PromptSpec, SelectionMode, Theme
from selectkit.core.prompt_service import PromptService
from selectkit.core.protocols import CancellationToken
from selectkit.infra.terminal import PosixTerminal
from selectkit.settings import EngineSettings, load_settings


def prompt(
    spec: PromptSpec,
    *,
    stdin: IO[Any] | None = None,
    output: IO[str] | None = None,
    settings: EngineSettings | None = None,
    cancel: CancellationToken | None = None,
) -> str:
    """Display ``spec`` and return the chosen value.

    Parameters
    ----------
    spec:
        What to ask.
    stdin:
        Input stream; defaults to ``sys.stdin``.  A non-terminal stream
        switches to line mode.
    output:
        Stream the widget is drawn on; defaults to ``sys.stderr``.
    settings:
        Engine settings; loaded from the environment when omitted.
    cancel:
        Optional token; once ``cancel.is_set()`` is true the prompt
        stops before its next read.

    Raises
    ------
    CancelledError
        When the user cancels.
    EngineError
        When the terminal or the input fails.
    """
    if settings is None:
        settings = load_settings()
    terminal = PosixTerminal(
        stdin if stdin is not None else sys.stdin,
        output if output is not None else sys.stderr,
        settings,
    )
    service = PromptService(terminal, page_size=settings.page_size)
    return service.run(spec, cancel=cancel)


def select(
    label: str,
    options: Iterable[Option | str],
    *,
    default: str | int | None = None,
    theme: Theme | None = None,
    page_size: int | None = None,
    **kwargs: Any,
) -> str:
    """Ask for exactly one of ``options`` and return its value.

    Extra keyword arguments are passed on to :func:`prompt`.
    """
    spec = PromptSpec(
        label=label,
        options=tuple(options),  # type: ignore[arg-type]
        default=default,
        mode=SelectionMode.SINGLE,
        theme=theme or Theme(),
        page_size=page_size,
    )
    return prompt(spec, **kwargs)


def multi_select(
    label: str,
    options: Iterable[Option | str],
    *,
    default: str | int | None = None,
    theme: Theme | None = None,
    continue_text: str = "Continue",
    page_size: int | None = None,
    **kwargs: Any,
) -> str:
    """Ask for one or more of ``options``.

    Returns the chosen values joined by commas, in option order.
    """
    spec = PromptSpec(
        label=label,
        options=tuple(options),  # type: ignore[arg-type]
        default=default,
        mode=SelectionMode.MULTI,
        theme=theme or Theme(),
        continue_text=continue_text,
        page_size=page_size,
    )
    return prompt(spec, **kwargs)
