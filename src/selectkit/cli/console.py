"""Rich console helpers for the CLI layer.

Messages go to stderr; stdout is reserved for the selected values so
that ``selectkit select ...`` can be used in ``$(...)``.
"""

from __future__ import annotations

from rich.console import Console


def get_rich_console(*, stderr: bool = True) -> Console:
    """Create a Rich console targeting stderr (or stdout).

    Rich honours ``NO_COLOR`` on its own.
    """
    return Console(stderr=stderr, highlight=False)


class _ConsoleProxy:
    """``print``-compatible proxy that resolves the console on each call.

    Resolving late keeps ``capsys``/``monkeypatch`` replacements of
    ``sys.stderr`` effective in tests.
    """

    def print(self, *objects: object) -> None:
        get_rich_console().print(*objects)


console = _ConsoleProxy()
