"""Shared pytest fixtures and configuration for the selectkit test suite.

Guidelines
----------
* No test needs a real terminal: state machines are pure, the decoder
  reads scripted bytes or OS pipes, and rendering goes to ``io.StringIO``.
* Raw-mode tests use a pseudo-terminal and skip where none exists.
* Tests must not depend on the caller's environment variables.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable, Iterator

import pytest
from rich.console import Console

from selectkit.core.frames import StyledLine, plain_text


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give rich a capable TERM and clear selectkit's own variables."""
    monkeypatch.setenv("TERM", "xterm-256color")
    for name in ("NO_COLOR", "FORCE_COLOR", "SELECTKIT_ESCAPE_TIMEOUT_MS", "SELECTKIT_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_selectkit_logger() -> Iterator[None]:
    """Undo handlers installed by the CLI's ``--verbose`` setup."""
    logger = logging.getLogger("selectkit")
    level, propagate, handlers = logger.level, logger.propagate, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.propagate = propagate
    logger.handlers[:] = handlers


# ---------------------------------------------------------------------------
# Line I/O double
# ---------------------------------------------------------------------------

class ScriptedLineIO:
    """Feeds prepared answers to line mode and records what it printed."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers: list[str] = list(answers)
        self.lines: list[str] = []
        self.prompts: int = 0

    def write_line(self, line: StyledLine) -> None:
        self.lines.append(plain_text(line))

    def write_prompt(self, text: str) -> None:
        self.prompts += 1

    def read_line(self) -> str | None:
        if not self.answers:
            return None
        return self.answers.pop(0)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture()
def scripted_io() -> Callable[..., ScriptedLineIO]:
    """Factory: ``scripted_io("1", "done")``."""

    def _make(*answers: str) -> ScriptedLineIO:
        return ScriptedLineIO(answers)

    return _make


# ---------------------------------------------------------------------------
# Rich console writing to memory
# ---------------------------------------------------------------------------

@pytest.fixture()
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def terminal_console(buffer: io.StringIO) -> Console:
    """A console that believes it drives a terminal but writes to ``buffer``."""
    return Console(
        file=buffer,
        force_terminal=True,
        color_system=None,
        width=80,
        highlight=False,
    )
