"""``selectkit doctor`` — terminal diagnostics command.

Gathers information about the streams, the terminal and the installed
libraries, and renders a Rich table telling whether prompts will run
as interactive widgets or fall back to line mode.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It only collects and displays
diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from importlib import metadata

from rich.markup import escape
from rich.table import Table

from selectkit.cli import exit_codes
from selectkit.cli.console import console
from selectkit.exceptions import ConfigurationError
from selectkit.infra.raw_mode import raw_mode_supported
from selectkit.settings import load_settings
from selectkit.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _selectkit_version_check() -> Check:
    return "selectkit", __version__, OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _stream_check(label: str, stream: object) -> Check:
    """Return the row telling whether ``stream`` is a terminal."""
    try:
        is_tty = os.isatty(stream.fileno())  # type: ignore[attr-defined]
    except (AttributeError, OSError, ValueError):
        is_tty = False
    if is_tty:
        return label, "terminal", OK
    return label, "not a terminal (line mode)", WARN


def _term_check() -> Check:
    term = os.environ.get("TERM", "")
    if not term:
        return "TERM", "unset", WARN
    if term.lower() in ("dumb", "unknown"):
        return "TERM", term, WARN
    return "TERM", term, OK


def _raw_mode_check() -> Check:
    if raw_mode_supported():
        return "Raw mode", "termios available", OK
    return "Raw mode", "unsupported platform (line mode)", WARN


def _package_check(label: str, dist: str, *, required: bool) -> Check:
    try:
        return label, metadata.version(dist), OK
    except metadata.PackageNotFoundError:
        return label, "NOT INSTALLED", FAIL if required else WARN


def _settings_checks() -> list[Check]:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        return [("Settings", str(exc), FAIL)]
    page_size = str(settings.page_size) if settings.page_size is not None else "all"
    return [
        ("Escape timeout", f"{settings.escape_timeout * 1000:.0f} ms", OK),
        ("Page size", page_size, OK),
        ("Colour", "off (NO_COLOR)" if settings.no_color else "on", OK),
    ]


def collect_checks() -> list[Check]:
    """Run every collector and return the table rows in display order."""
    return [
        _selectkit_version_check(),
        _python_version_check(),
        _stream_check("stdin", sys.stdin),
        _stream_check("stderr", sys.stderr),
        _term_check(),
        _raw_mode_check(),
        _package_check("rich", "rich", required=True),
        _package_check("questionary", "questionary", required=False),
        *_settings_checks(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings only mean
        that prompts will use line mode.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="selectkit doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
