"""Logging configuration for the ``selectkit`` command.

The library itself only creates loggers.  The command installs a
handler when ``--verbose`` is given so engine decisions (raw mode,
fallback, key events) show up on stderr next to the widget.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from selectkit.cli.console import get_rich_console

LOGGER_NAME = "selectkit"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a :class:`RichHandler` to the ``selectkit`` logger.

    Without ``verbose`` only warnings are shown.  Calling this twice
    replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=get_rich_console(),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
